"""
InfluxDB V3 provider.

Reads the provider configuration (falling back to INFLUXDB3_* environment
variables), validates it, builds the management API client and hands it to
the resources and data sources.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from common.config.config import (
    ENV_ACCOUNT_ID,
    ENV_CLUSTER_ID,
    ENV_TOKEN,
    ENV_URL,
    HTTP_TIMEOUT_SECONDS,
    INFLUXDB3_DEFAULT_URL,
)
from common.constants import PROVIDER_TYPE_NAME
from common.exception.exceptions import InfluxDB3Error
from common.utils.log_masking import get_masking_filter
from common.utils.validation import parse_uuid
from influxdb3_provider.base import BaseDataSource, BaseResource
from influxdb3_provider.data_sources import (
    new_database_data_source,
    new_databases_data_source,
    new_token_data_source,
    new_tokens_data_source,
)
from influxdb3_provider.diagnostics import Diagnostics
from influxdb3_provider.provider_data import ProviderData
from influxdb3_provider.resources import new_database_resource, new_token_resource
from influxdb3_provider.schema import UNKNOWN, Attribute, Schema
from influxdb3_provider.services.influxdb3.client import InfluxDB3Client
from influxdb3_provider.services.influxdb3.config import ClientConfig
from influxdb3_provider.services.influxdb3.retry import RetryPolicy

logger = logging.getLogger(__name__)


# (attribute, environment variable, label used in messages)
_SETTINGS = [
    ("account_id", ENV_ACCOUNT_ID, "Account ID"),
    ("cluster_id", ENV_CLUSTER_ID, "Cluster ID"),
    ("token", ENV_TOKEN, "Management Token"),
]


@dataclass
class ConfigureResponse:
    provider_data: Optional[ProviderData] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class InfluxDBProvider:
    """Provider to deploy and manage resources supported by InfluxDB V3."""

    def __init__(
        self,
        version: str = "dev",
        http_client: Optional[httpx.AsyncClient] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ):
        """Initialize the provider.

        Args:
            version: Provider version; "dev" for local builds, "test" in tests
            http_client: HTTP client handed to the management API client
            retry_policy: Retry behaviour for API requests
            timeout: Request timeout in seconds when no http_client is given
        """
        self.version = version
        self.http_client = http_client
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout = timeout
        self.provider_data: Optional[ProviderData] = None
        # Clients from earlier configure calls; components may still hold them
        self._superseded_clients: List[InfluxDB3Client] = []

    def metadata(self) -> Tuple[str, str]:
        """Return the provider type name and version."""
        return PROVIDER_TYPE_NAME, self.version

    def schema(self) -> Schema:
        return Schema(
            description="InfluxDB provider to deploy and manage resources supported by InfluxDB V3.",
            attributes={
                "account_id": Attribute(
                    optional=True,
                    sensitive=True,
                    description="The ID of the account that the cluster belongs to",
                ),
                "cluster_id": Attribute(
                    optional=True,
                    sensitive=True,
                    description="The ID of the cluster that you want to manage",
                ),
                "token": Attribute(
                    optional=True,
                    sensitive=True,
                    description="The InfluxDB management token",
                ),
                "url": Attribute(
                    optional=True,
                    description=f"The InfluxDB V3 management API host. Defaults to {INFLUXDB3_DEFAULT_URL}",
                ),
            },
        )

    def configure(self, config: Optional[Dict[str, Any]] = None) -> ConfigureResponse:
        """Build the management API client from configuration and environment.

        Explicit configuration values win over environment variables.

        Args:
            config: Provider configuration; values may be None or UNKNOWN

        Returns:
            ConfigureResponse with provider data, or diagnostics explaining why
            no client could be built
        """
        config = config or {}
        response = ConfigureResponse()
        diagnostics = response.diagnostics

        for attribute, env_var, label in _SETTINGS:
            if config.get(attribute) is UNKNOWN:
                diagnostics.add_attribute_error(
                    attribute,
                    f"Unknown InfluxDB V3 {label}",
                    f"The provider cannot create the InfluxDB client as there is an unknown "
                    f"configuration value for the InfluxDB V3 {label}. Either target apply "
                    f"the source of the value first, set the value statically in the "
                    f"configuration, or use the {env_var} environment variable.",
                )
        if config.get("url") is UNKNOWN:
            diagnostics.add_attribute_error(
                "url",
                "Unknown InfluxDB V3 URL",
                "The provider cannot create the InfluxDB client as there is an unknown "
                "configuration value for the InfluxDB V3 URL. Set the value statically "
                f"in the configuration, or use the {ENV_URL} environment variable.",
            )
        if diagnostics.has_error():
            return response

        values = {}
        for attribute, env_var, label in _SETTINGS:
            value = config.get(attribute)
            if value is None:
                value = os.getenv(env_var, "")
            values[attribute] = value
            if value == "":
                diagnostics.add_attribute_error(
                    attribute,
                    f"Missing InfluxDB V3 {label}",
                    f"The provider cannot create the InfluxDB client as there is a missing "
                    f"or empty value for the InfluxDB V3 {label}. Set the {label} value in "
                    f"the configuration or use the {env_var} environment variable. If either "
                    f"is already set, ensure the value is not empty.",
                )
        url = config.get("url") or os.getenv(ENV_URL) or INFLUXDB3_DEFAULT_URL
        if diagnostics.has_error():
            return response

        uuids = {}
        for attribute, env_var, label in _SETTINGS[:2]:
            try:
                uuids[attribute] = parse_uuid(values[attribute])
            except ValueError:
                diagnostics.add_attribute_error(
                    attribute,
                    f"Invalid InfluxDB V3 {label}",
                    f"The provider cannot create the InfluxDB client as there is an incorrect "
                    f"value for the InfluxDB V3 {label}. Set the {label} value in the "
                    f"configuration or use the {env_var} environment variable. If either is "
                    f"already set, ensure the value is in UUID format.",
                )
        if diagnostics.has_error():
            return response

        token = values["token"]
        masking = get_masking_filter()
        masking.add_secret(token)
        logger.debug(
            masking.mask(
                f"Creating InfluxDB V3 client ({ENV_ACCOUNT_ID}={values['account_id']}, "
                f"{ENV_CLUSTER_ID}={values['cluster_id']}, {ENV_URL}={url}, "
                f"{ENV_TOKEN}={token})"
            )
        )

        try:
            client = InfluxDB3Client(
                ClientConfig(
                    account_id=str(uuids["account_id"]),
                    cluster_id=str(uuids["cluster_id"]),
                    token=token,
                    host=url,
                    http_client=self.http_client,
                    timeout=self.timeout,
                    retry_policy=self.retry_policy,
                )
            )
        except InfluxDB3Error as e:
            diagnostics.add_error(
                "Unable to Create InfluxDB V3 Client",
                "An unexpected error occurred when creating the InfluxDB V3 client. "
                "If the error is not clear, please contact the provider developers.\n\n"
                f"InfluxDB V3 Client Error: {e}",
            )
            return response

        if self.provider_data is not None:
            self._superseded_clients.append(self.provider_data.client)
        self.provider_data = ProviderData(
            account_id=uuids["account_id"],
            cluster_id=uuids["cluster_id"],
            client=client,
        )
        response.provider_data = self.provider_data
        logger.info("Configured InfluxDB V3 client")
        return response

    def resources(self) -> List[Callable[[], BaseResource]]:
        """Resources implemented in the provider."""
        return [new_token_resource, new_database_resource]

    def data_sources(self) -> List[Callable[[], BaseDataSource]]:
        """Data sources implemented in the provider."""
        return [
            new_token_data_source,
            new_tokens_data_source,
            new_database_data_source,
            new_databases_data_source,
        ]

    def resource(self, type_name: str) -> BaseResource:
        """Create and configure the resource with the given type name."""
        return self._instantiate(self.resources(), type_name)

    def data_source(self, type_name: str) -> BaseDataSource:
        """Create and configure the data source with the given type name."""
        return self._instantiate(self.data_sources(), type_name)

    def _instantiate(self, factories, type_name: str):
        for factory in factories:
            component = factory()
            if component.metadata(PROVIDER_TYPE_NAME) == type_name:
                component.configure(self.provider_data)
                return component
        raise KeyError(f"Unknown type name: {type_name}")

    async def close(self):
        """Close the current client and any client replaced by a later configure."""
        clients = self._superseded_clients
        if self.provider_data is not None:
            clients = clients + [self.provider_data.client]
        self._superseded_clients = []
        for client in clients:
            await client.close()


def new(version: str) -> Callable[[], InfluxDBProvider]:
    """Return a factory building providers of the given version."""

    def factory() -> InfluxDBProvider:
        return InfluxDBProvider(version=version)

    return factory
