"""
Shared plumbing for resources and data sources.

Both receive the ProviderData produced by the provider's configure step and
report every outcome as a response holding the new state and diagnostics.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from common.constants import PROVIDER_TYPE_NAME
from influxdb3_provider.diagnostics import Diagnostics
from influxdb3_provider.provider_data import ProviderData
from influxdb3_provider.schema import Schema
from influxdb3_provider.services.influxdb3.client import InfluxDB3Client

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)


@dataclass
class Response(Generic[StateT]):
    """Outcome of a resource or data source operation.

    ``state`` is None when the operation failed or removed the object.
    """

    state: Optional[StateT] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class ConfiguredComponent:
    """Base class holding the configured client."""

    TYPE_NAME_SUFFIX: ClassVar[str] = ""
    KIND: ClassVar[str] = "Resource"

    def __init__(self):
        self.client: Optional[InfluxDB3Client] = None
        self.account_id = None
        self.cluster_id = None

    def metadata(self, provider_type_name: str = PROVIDER_TYPE_NAME) -> str:
        """Return the type name, e.g. ``influxdb3_database``."""
        return f"{provider_type_name}_{self.TYPE_NAME_SUFFIX}"

    def schema(self) -> Schema:
        raise NotImplementedError

    def configure(self, provider_data: Any) -> Diagnostics:
        """Attach the provider configured client.

        A None value means the provider is not configured yet and is ignored.
        """
        diagnostics = Diagnostics()
        if provider_data is None:
            return diagnostics

        if not isinstance(provider_data, ProviderData):
            diagnostics.add_error(
                f"Unexpected {self.KIND} Configure Type",
                f"Expected ProviderData, got: {type(provider_data).__name__}. "
                "Please report this issue to the provider developers.",
            )
            return diagnostics

        self.client = provider_data.client
        self.account_id = provider_data.account_id
        self.cluster_id = provider_data.cluster_id
        return diagnostics

    def _check_configured(self, diagnostics: Diagnostics) -> bool:
        if self.client is None:
            diagnostics.add_error(
                "Unconfigured InfluxDB V3 Client",
                f"{self.metadata()} was used before the provider was configured.",
            )
            return False
        return True

    def validate(self, model: BaseModel) -> Diagnostics:
        """Validate a plan or config model against the schema."""
        return self.schema().validate(model.model_dump())


class BaseResource(ConfiguredComponent):
    KIND: ClassVar[str] = "Resource"

    def modify_plan(self, state: BaseModel, plan: BaseModel) -> List[str]:
        """Return the attributes whose planned change forces replacement."""
        return self.schema().requires_replace(state.model_dump(), plan.model_dump())

    def _check_replacement(
        self, state: Optional[BaseModel], plan: BaseModel, diagnostics: Diagnostics
    ) -> bool:
        if state is None:
            return True
        replaced = self.modify_plan(state, plan)
        if replaced:
            logger.warning(f"{self.metadata()} update requires replacement: {replaced}")
            diagnostics.add_error(
                "Resource replacement required",
                f"Changing {', '.join(replaced)} can't be done in place. "
                "Delete and recreate the resource instead.",
            )
            return False
        return True


class BaseDataSource(ConfiguredComponent):
    KIND: ClassVar[str] = "Data Source"
