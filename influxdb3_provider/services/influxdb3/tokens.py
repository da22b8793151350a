"""
InfluxDB V3 database token operations.
"""

import logging
import posixpath
from urllib.parse import quote
from typing import List

from pydantic import ValidationError

from common.constants import TOKEN_API_PATH
from common.exception.exceptions import (
    InfluxDB3Error,
    NotFoundError,
    UnexpectedStatusError,
)
from influxdb3_provider.services.influxdb3.client import InfluxDB3Client
from influxdb3_provider.services.influxdb3.models.types import Token, TokenParams

logger = logging.getLogger(__name__)


def _token_path(token_id: str) -> str:
    return posixpath.join(TOKEN_API_PATH, quote(token_id, safe=""))


def _parse_token(payload) -> Token:
    try:
        return Token.model_validate(payload)
    except ValidationError as e:
        raise InfluxDB3Error(f"error unmarshalling JSON: {e}") from e


class TokenOperations:
    """Handles database token operations."""

    def __init__(self, client: InfluxDB3Client):
        self.client = client

    async def create(self, params: TokenParams) -> Token:
        """Create a token.

        The returned token carries the access token; it is never returned again.
        """
        response = await self.client.post(
            TOKEN_API_PATH, data=params.model_dump(by_alias=True)
        )
        token = _parse_token(response)
        logger.info(f"Created token {token.id}")
        return token

    async def delete(self, token_id: str) -> None:
        """Delete a token by ID.

        Raises:
            NotFoundError: If the token does not exist
            InfluxDB3Error: If the deletion fails
        """
        try:
            await self.client.delete(_token_path(token_id))
        except UnexpectedStatusError as e:
            if e.status_code == 404:
                raise NotFoundError(
                    404,
                    error_code=e.error_code,
                    error_message=e.error_message,
                    message=f"error deleting token: {token_id} not found",
                ) from e
            raise UnexpectedStatusError(
                e.status_code,
                error_code=e.error_code,
                error_message=e.error_message,
                message=f"error deleting token: {e}",
            ) from e
        except InfluxDB3Error as e:
            raise InfluxDB3Error(f"error deleting token: {e}") from e
        logger.info(f"Deleted token {token_id}")

    async def list(self) -> List[Token]:
        """List all tokens of the cluster."""
        response = await self.client.get(TOKEN_API_PATH)
        if response is None:
            return []
        if not isinstance(response, list):
            raise InfluxDB3Error(
                f"error unmarshalling JSON: expected a list, got {type(response).__name__}"
            )
        return [_parse_token(item) for item in response]

    async def get_by_id(self, token_id: str) -> Token:
        """Get a token by ID.

        Raises:
            NotFoundError: If the token does not exist
        """
        try:
            response = await self.client.get(_token_path(token_id))
        except UnexpectedStatusError as e:
            if e.status_code == 404:
                raise NotFoundError(
                    404,
                    error_code=e.error_code,
                    error_message=e.error_message,
                    message=f"error getting token: {token_id} not found",
                ) from e
            raise
        return _parse_token(response)

    async def update(self, token_id: str, params: TokenParams) -> Token:
        """Update the description and permissions of a token."""
        response = await self.client.patch(
            _token_path(token_id),
            data=params.model_dump(by_alias=True),
        )
        token = _parse_token(response)
        logger.info(f"Updated token {token.id}")
        return token
