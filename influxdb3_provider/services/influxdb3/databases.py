"""
InfluxDB V3 cluster database operations.
"""

import logging
import posixpath
from urllib.parse import quote
from typing import List

from pydantic import ValidationError

from common.constants import DATABASE_API_PATH
from common.exception.exceptions import (
    BadRequestError,
    InfluxDB3Error,
    NotFoundError,
    UnexpectedStatusError,
)
from influxdb3_provider.services.influxdb3.client import InfluxDB3Client
from influxdb3_provider.services.influxdb3.models.types import (
    Database,
    DatabaseParams,
    DatabaseUpdateParams,
)

logger = logging.getLogger(__name__)


def _database_path(database_name: str) -> str:
    # Names may contain "/", "?" or "%"; escape them as a single segment
    return posixpath.join(DATABASE_API_PATH, quote(database_name, safe=""))


def _parse_database(payload) -> Database:
    try:
        return Database.model_validate(payload)
    except ValidationError as e:
        raise InfluxDB3Error(f"error unmarshalling JSON: {e}") from e


class DatabaseOperations:
    """Handles cluster database operations."""

    def __init__(self, client: InfluxDB3Client):
        self.client = client

    async def create(self, params: DatabaseParams) -> Database:
        """Create a database.

        Args:
            params: Database name, limits and partition template

        Returns:
            The created database

        Raises:
            BadRequestError: If the API rejects the parameters
            UnexpectedStatusError: For any other non-200 status
        """
        body = params.model_dump(by_alias=True, exclude_none=True)
        try:
            response = await self.client.post(DATABASE_API_PATH, data=body)
        except UnexpectedStatusError as e:
            if e.status_code == 400:
                raise BadRequestError(
                    400,
                    error_code=e.error_code,
                    error_message=e.error_message,
                    message="bad request, check your input",
                ) from e
            raise

        database = _parse_database(response)
        logger.info(f"Created database {database.name}")
        return database

    async def delete(self, database_name: str) -> None:
        """Delete a database by name.

        Raises:
            NotFoundError: If the database does not exist
            InfluxDB3Error: If the deletion fails
        """
        try:
            await self.client.delete(_database_path(database_name))
        except UnexpectedStatusError as e:
            error_type = NotFoundError if e.status_code == 404 else UnexpectedStatusError
            raise error_type(
                e.status_code,
                error_code=e.error_code,
                error_message=e.error_message,
                message=f"error deleting database: {e}",
            ) from e
        except InfluxDB3Error as e:
            raise InfluxDB3Error(f"error deleting database: {e}") from e
        logger.info(f"Deleted database {database_name}")

    async def list(self) -> List[Database]:
        """List all databases of the cluster."""
        response = await self.client.get(DATABASE_API_PATH)
        if response is None:
            return []
        if not isinstance(response, list):
            raise InfluxDB3Error(
                f"error unmarshalling JSON: expected a list, got {type(response).__name__}"
            )
        return [_parse_database(item) for item in response]

    async def get_by_name(self, database_name: str) -> Database:
        """Find a database by name.

        The API has no single-database endpoint, so this scans the list.

        Raises:
            NotFoundError: If no database has this name
        """
        for database in await self.list():
            if database.name == database_name:
                return database
        raise NotFoundError(
            404, message=f"error getting database: {database_name} not found"
        )

    async def update(
        self, database_name: str, params: DatabaseUpdateParams
    ) -> Database:
        """Update the limits and retention period of a database."""
        body = params.model_dump(by_alias=True)
        response = await self.client.patch(
            _database_path(database_name), data=body
        )
        database = _parse_database(response)
        logger.info(f"Updated database {database.name}")
        return database
