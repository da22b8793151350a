"""
Token data sources: a single token by ID, and every token of the cluster.
"""

from typing import Dict

from common.exception.exceptions import InfluxDB3Error
from influxdb3_provider.base import BaseDataSource, Response
from influxdb3_provider.diagnostics import format_error_response
from influxdb3_provider.models.token_model import (
    TokenModel,
    TokensDataSourceModel,
    token_model_from_api,
)
from influxdb3_provider.resources.token_resource import parse_token_id
from influxdb3_provider.schema import Attribute, Schema


def _token_attributes() -> Dict[str, Attribute]:
    return {
        "access_token": Attribute(
            computed=True,
            sensitive=True,
            description="The access token; only ever returned when the token is created.",
        ),
        "account_id": Attribute(
            computed=True,
            description="The ID of the account that the database token belongs to.",
        ),
        "created_at": Attribute(
            computed=True,
            description="The date and time that the database token was created (RFC3339).",
        ),
        "cluster_id": Attribute(
            computed=True,
            description="The ID of the cluster that the database token belongs to.",
        ),
        "description": Attribute(
            computed=True, description="The description of the database token."
        ),
        "id": Attribute(computed=True, description="The ID of the database token."),
        "permissions": Attribute(
            computed=True,
            description="The list of permissions the database token allows.",
            nested={
                "action": Attribute(computed=True, description="read or write."),
                "resource": Attribute(
                    computed=True,
                    description="The database the permission applies to, `*` for all.",
                ),
            },
        ),
    }


class TokenDataSource(BaseDataSource):
    """Gets a database token, including its permissions."""

    TYPE_NAME_SUFFIX = "token"

    def schema(self) -> Schema:
        attributes = _token_attributes()
        attributes["id"] = Attribute(
            required=True, description="The ID of the database token."
        )
        return Schema(
            description=(
                "Gets a database token. Use this data source to retrieve information "
                "about a database token, including the token's permissions."
            ),
            attributes=attributes,
        )

    async def read(self, config: TokenModel) -> Response[TokenModel]:
        response: Response[TokenModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        token_id = parse_token_id(config.id, diagnostics)
        if token_id is None:
            return response

        try:
            token = await self.client.token_api().get_by_id(token_id)
        except InfluxDB3Error as e:
            diagnostics.add_error("Error getting token", format_error_response(e))
            return response

        response.state = token_model_from_api(token)
        return response


class TokensDataSource(BaseDataSource):
    """Gets all database tokens for a cluster."""

    TYPE_NAME_SUFFIX = "tokens"

    def schema(self) -> Schema:
        return Schema(
            description="Gets all database tokens for a cluster.",
            attributes={"tokens": Attribute(computed=True, nested=_token_attributes())},
        )

    async def read(
        self, config: TokensDataSourceModel = None
    ) -> Response[TokensDataSourceModel]:
        response: Response[TokensDataSourceModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        try:
            tokens = await self.client.token_api().list()
        except InfluxDB3Error as e:
            diagnostics.add_error("Error getting tokens", format_error_response(e))
            return response

        response.state = TokensDataSourceModel(
            tokens=[token_model_from_api(token) for token in tokens]
        )
        return response


def new_token_data_source() -> TokenDataSource:
    return TokenDataSource()


def new_tokens_data_source() -> TokensDataSource:
    return TokensDataSource()
