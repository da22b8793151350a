"""
Database data sources: a single database by name, and every database of the cluster.
"""

from typing import Dict

from common.constants import DATABASE_NAME_MAX_LENGTH, DATABASE_NAME_MIN_LENGTH
from common.exception.exceptions import InfluxDB3Error
from influxdb3_provider.base import BaseDataSource, Response
from influxdb3_provider.diagnostics import format_error_response
from influxdb3_provider.models.database_model import (
    DatabaseModel,
    DatabasesDataSourceModel,
    database_model_from_api,
)
from influxdb3_provider.schema import Attribute, Schema, length_between


def _database_attributes() -> Dict[str, Attribute]:
    return {
        "account_id": Attribute(
            computed=True, description="The ID of the account that the cluster belongs to."
        ),
        "cluster_id": Attribute(
            computed=True, description="The ID of the cluster that you want to manage."
        ),
        "name": Attribute(computed=True, description="The name of the cluster database."),
        "max_tables": Attribute(
            computed=True,
            description="The maximum number of tables for the cluster database.",
        ),
        "max_columns_per_table": Attribute(
            computed=True,
            description="The maximum number of columns per table for the cluster database.",
        ),
        "retention_period": Attribute(
            computed=True,
            description="The retention period of the cluster database in nanoseconds.",
        ),
        "partition_template": Attribute(
            computed=True,
            description="The template for partitioning the cluster database.",
            nested={
                "type": Attribute(computed=True, description="The type of the template part."),
                "value": Attribute(computed=True, description="The value of the template part."),
            },
        ),
    }


class DatabaseDataSource(BaseDataSource):
    """Retrieves a database by name."""

    TYPE_NAME_SUFFIX = "database"

    def schema(self) -> Schema:
        attributes = _database_attributes()
        attributes["name"] = Attribute(
            required=True,
            description=(
                "The name of the cluster database. The length should be between "
                f"[{DATABASE_NAME_MIN_LENGTH} .. {DATABASE_NAME_MAX_LENGTH}] characters."
            ),
            validators=[length_between(DATABASE_NAME_MIN_LENGTH, DATABASE_NAME_MAX_LENGTH)],
        )
        return Schema(
            description=(
                "Retrieves a database. Use this data source to retrieve information "
                "for a specific database."
            ),
            attributes=attributes,
        )

    async def read(self, config: DatabaseModel) -> Response[DatabaseModel]:
        response: Response[DatabaseModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        if config.name is None:
            diagnostics.add_error("Name is empty", "Must set name")
            return response

        diagnostics.extend(self.validate(config))
        if diagnostics.has_error():
            return response

        try:
            database = await self.client.database_api().get_by_name(config.name)
        except InfluxDB3Error as e:
            diagnostics.add_error("Database not found", format_error_response(e))
            return response

        response.state = database_model_from_api(database)
        return response


class DatabasesDataSource(BaseDataSource):
    """Gets all databases for a cluster."""

    TYPE_NAME_SUFFIX = "databases"

    def schema(self) -> Schema:
        return Schema(
            description="Gets all databases for a cluster.",
            attributes={
                "databases": Attribute(computed=True, nested=_database_attributes()),
            },
        )

    async def read(
        self, config: DatabasesDataSourceModel = None
    ) -> Response[DatabasesDataSourceModel]:
        response: Response[DatabasesDataSourceModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        try:
            databases = await self.client.database_api().list()
        except InfluxDB3Error as e:
            diagnostics.add_error("Error getting databases", format_error_response(e))
            return response

        response.state = DatabasesDataSourceModel(
            databases=[database_model_from_api(database) for database in databases]
        )
        return response


def new_database_data_source() -> DatabaseDataSource:
    return DatabaseDataSource()


def new_databases_data_source() -> DatabasesDataSource:
    return DatabasesDataSource()
