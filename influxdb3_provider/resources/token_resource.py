"""
Token resource: creates and manages a database token.
"""

import logging
from typing import Optional

from common.constants import PERMISSION_ACTIONS
from common.exception.exceptions import InfluxDB3Error
from common.utils.validation import parse_uuid
from influxdb3_provider.base import BaseResource, Response
from influxdb3_provider.diagnostics import Diagnostics, format_error_response
from influxdb3_provider.models.token_model import (
    TokenModel,
    to_permissions,
    token_model_from_api,
)
from influxdb3_provider.schema import Attribute, Schema, one_of, unique_values
from influxdb3_provider.services.influxdb3.models.types import TokenParams

logger = logging.getLogger(__name__)

UUID_ERROR_SUMMARY = "Validation error. Ensure the Id is in UUID format."


def parse_token_id(token_id: Optional[str], diagnostics: Diagnostics) -> Optional[str]:
    """Validate a token ID, recording a diagnostic when it is not a UUID."""
    try:
        return str(parse_uuid(token_id))
    except ValueError as e:
        diagnostics.add_error(UUID_ERROR_SUMMARY, str(e))
        return None


class TokenResource(BaseResource):
    """Creates and manages a token and returns the generated database token."""

    TYPE_NAME_SUFFIX = "token"

    def schema(self) -> Schema:
        return Schema(
            description=(
                "Creates and manages a token and returns the generated database "
                "token, with permissions to read or write to specific databases."
            ),
            attributes={
                "access_token": Attribute(
                    computed=True,
                    sensitive=True,
                    description=(
                        "The access token used to authenticate query and write "
                        "requests. It is only returned once, when the token is "
                        "created; if it is lost a new token must be created."
                    ),
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
                    required=True,
                    description="The description of the database token.",
                ),
                "id": Attribute(
                    computed=True,
                    description="The ID of the database token.",
                ),
                "permissions": Attribute(
                    required=True,
                    description="The list of permissions the database token allows.",
                    validators=[unique_values()],
                    nested={
                        "action": Attribute(
                            required=True,
                            description="The action the permission allows: read or write.",
                            validators=[one_of(*PERMISSION_ACTIONS)],
                        ),
                        "resource": Attribute(
                            required=True,
                            description=(
                                "The database the permission applies to. "
                                "`*` refers to all databases."
                            ),
                        ),
                    },
                ),
            },
        )

    async def create(self, plan: TokenModel) -> Response[TokenModel]:
        """Create the token; the state carries the one-time access token."""
        response: Response[TokenModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        diagnostics.extend(self.validate(plan))
        if diagnostics.has_error():
            return response

        params = TokenParams(
            description=plan.description,
            permissions=to_permissions(plan.permissions),
        )
        try:
            token = await self.client.token_api().create(params)
        except InfluxDB3Error as e:
            diagnostics.add_error("Error creating token", format_error_response(e))
            return response

        response.state = token_model_from_api(token)
        return response

    async def read(self, state: TokenModel) -> Response[TokenModel]:
        """Refresh the state, keeping the access token already stored."""
        response: Response[TokenModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        token_id = parse_token_id(state.id, diagnostics)
        if token_id is None:
            return response

        try:
            token = await self.client.token_api().get_by_id(token_id)
        except InfluxDB3Error as e:
            diagnostics.add_error("Error getting token", format_error_response(e))
            return response

        response.state = token_model_from_api(token, access_token=state.access_token)
        return response

    async def update(
        self, plan: TokenModel, state: Optional[TokenModel] = None
    ) -> Response[TokenModel]:
        """Update description and permissions in place."""
        response: Response[TokenModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        diagnostics.extend(self.validate(plan))
        if diagnostics.has_error():
            return response

        if state is not None:
            plan = plan.model_copy(
                update={
                    "id": plan.id or state.id,
                    "access_token": plan.access_token or state.access_token,
                }
            )

        token_id = parse_token_id(plan.id, diagnostics)
        if token_id is None:
            return response

        params = TokenParams(
            description=plan.description,
            permissions=to_permissions(plan.permissions),
        )
        try:
            token = await self.client.token_api().update(token_id, params)
        except InfluxDB3Error as e:
            diagnostics.add_error("Error updating token", format_error_response(e))
            return response

        response.state = token_model_from_api(token, access_token=plan.access_token)
        return response

    async def delete(self, state: TokenModel) -> Response[TokenModel]:
        """Delete the token. On success the returned state is None."""
        response: Response[TokenModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        token_id = parse_token_id(state.id, diagnostics)
        if token_id is None:
            response.state = state
            return response

        try:
            await self.client.token_api().delete(token_id)
        except InfluxDB3Error as e:
            diagnostics.add_error("Error deleting token", format_error_response(e))
            response.state = state
        return response

    async def import_state(self, token_id: str) -> Response[TokenModel]:
        """Import an existing token by ID. The access token cannot be recovered."""
        logger.info(f"Importing token {token_id}")
        return await self.read(TokenModel(id=token_id))


def new_token_resource() -> TokenResource:
    return TokenResource()
