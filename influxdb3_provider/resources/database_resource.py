"""
Database resource: creates and manages a cluster database.
"""

import logging
from typing import Optional

from common.constants import (
    DATABASE_DEFAULT_MAX_COLUMNS_PER_TABLE,
    DATABASE_DEFAULT_MAX_TABLES,
    DATABASE_DEFAULT_RETENTION_PERIOD,
    DATABASE_NAME_MAX_LENGTH,
    DATABASE_NAME_MIN_LENGTH,
    PARTITION_TEMPLATE_MAX_PARTS,
    PARTITION_TEMPLATE_MIN_PARTS,
    PARTITION_TEMPLATE_TYPES,
)
from common.exception.exceptions import InfluxDB3Error, NotFoundError
from influxdb3_provider.base import BaseResource, Response
from influxdb3_provider.diagnostics import format_error_response
from influxdb3_provider.models.database_model import (
    DatabaseModel,
    database_model_from_api,
    to_partition_template_parts,
)
from influxdb3_provider.schema import (
    Attribute,
    Schema,
    length_between,
    one_of,
    size_between,
    unique_values,
)
from influxdb3_provider.services.influxdb3.models.types import (
    DatabaseParams,
    DatabaseUpdateParams,
)

logger = logging.getLogger(__name__)


class DatabaseResource(BaseResource):
    """Creates and manages a database."""

    TYPE_NAME_SUFFIX = "database"

    def schema(self) -> Schema:
        return Schema(
            description="Creates and manages a database.",
            attributes={
                "account_id": Attribute(
                    computed=True,
                    description="The ID of the account that the cluster belongs to.",
                ),
                "cluster_id": Attribute(
                    computed=True,
                    description="The ID of the cluster that you want to manage.",
                ),
                "name": Attribute(
                    required=True,
                    requires_replace=True,
                    description=(
                        "The name of the cluster database. The length should be "
                        f"between [{DATABASE_NAME_MIN_LENGTH} .. {DATABASE_NAME_MAX_LENGTH}] "
                        "characters. Database names can't be updated; a change "
                        "results in resource replacement."
                    ),
                    validators=[
                        length_between(DATABASE_NAME_MIN_LENGTH, DATABASE_NAME_MAX_LENGTH)
                    ],
                ),
                "max_tables": Attribute(
                    optional=True,
                    computed=True,
                    default=DATABASE_DEFAULT_MAX_TABLES,
                    description=(
                        "The maximum number of tables for the cluster database. "
                        f"The default is {DATABASE_DEFAULT_MAX_TABLES}."
                    ),
                ),
                "max_columns_per_table": Attribute(
                    optional=True,
                    computed=True,
                    default=DATABASE_DEFAULT_MAX_COLUMNS_PER_TABLE,
                    description=(
                        "The maximum number of columns per table for the cluster "
                        f"database. The default is {DATABASE_DEFAULT_MAX_COLUMNS_PER_TABLE}."
                    ),
                ),
                "retention_period": Attribute(
                    optional=True,
                    computed=True,
                    default=DATABASE_DEFAULT_RETENTION_PERIOD,
                    description=(
                        "The retention period of the cluster database in nanoseconds. "
                        "0 means infinite retention."
                    ),
                ),
                "partition_template": Attribute(
                    optional=True,
                    computed=True,
                    requires_replace=True,
                    description=(
                        "A template for partitioning a cluster database. Up to 7 tag "
                        "and tag bucket parts and 1 time part. Can only be set on "
                        "create; a change results in resource replacement. Bucket "
                        "values are JSON-encoded strings."
                    ),
                    validators=[
                        unique_values(),
                        size_between(
                            PARTITION_TEMPLATE_MIN_PARTS, PARTITION_TEMPLATE_MAX_PARTS
                        ),
                    ],
                    nested={
                        "type": Attribute(
                            required=True,
                            description="The type of template part: bucket, tag or time.",
                            validators=[one_of(*PARTITION_TEMPLATE_TYPES)],
                        ),
                        "value": Attribute(
                            required=True,
                            description="The value of template part.",
                        ),
                    },
                ),
            },
        )

    async def create(self, plan: DatabaseModel) -> Response[DatabaseModel]:
        """Create the database and return the initial state."""
        response: Response[DatabaseModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        diagnostics.extend(self.validate(plan))
        if diagnostics.has_error():
            return response

        plan = DatabaseModel.model_validate(
            self.schema().apply_defaults(plan.model_dump())
        )

        try:
            partition_template = to_partition_template_parts(plan.partition_template)
        except ValueError as e:
            diagnostics.add_error("Error creating database partition template", str(e))
            return response

        params = DatabaseParams(
            name=plan.name,
            max_tables=plan.max_tables,
            max_columns_per_table=plan.max_columns_per_table,
            retention_period=plan.retention_period,
            partition_template=partition_template,
        )

        try:
            database = await self.client.database_api().create(params)
        except InfluxDB3Error as e:
            diagnostics.add_error(
                "Error creating database",
                f"Could not create database, unexpected error: {format_error_response(e)}",
            )
            return response

        state = database_model_from_api(database)
        if plan.partition_template is None and not state.partition_template:
            state.partition_template = None
        response.state = state
        return response

    async def read(self, state: DatabaseModel) -> Response[DatabaseModel]:
        """Refresh the state from the cluster."""
        response: Response[DatabaseModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        try:
            database = await self.client.database_api().get_by_name(state.name)
        except NotFoundError:
            diagnostics.add_error(
                "Database not found",
                f"Database with name {state.name} not found",
            )
            return response
        except InfluxDB3Error as e:
            diagnostics.add_error("Error getting database", format_error_response(e))
            return response

        refreshed = database_model_from_api(database)
        if state.partition_template is None and not refreshed.partition_template:
            refreshed.partition_template = None
        response.state = refreshed
        return response

    async def update(
        self, plan: DatabaseModel, state: Optional[DatabaseModel] = None
    ) -> Response[DatabaseModel]:
        """Update limits and retention period in place.

        Args:
            plan: Desired attributes
            state: Prior state; a differing name or partition template
                (including one dropped from the plan) is refused as it needs
                replacement
        """
        response: Response[DatabaseModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        diagnostics.extend(self.validate(plan))
        if diagnostics.has_error():
            return response

        plan = DatabaseModel.model_validate(
            self.schema().apply_defaults(plan.model_dump())
        )
        if not self._check_replacement(state, plan, diagnostics):
            return response

        params = DatabaseUpdateParams(
            max_tables=plan.max_tables,
            max_columns_per_table=plan.max_columns_per_table,
            retention_period=plan.retention_period,
        )

        try:
            database = await self.client.database_api().update(plan.name, params)
        except InfluxDB3Error as e:
            diagnostics.add_error(
                "Error updating database",
                f"Could not update database, unexpected error: {format_error_response(e)}",
            )
            return response

        updated = plan.model_copy(
            update={
                "account_id": database.account_id,
                "cluster_id": database.cluster_id,
                "name": database.name,
                "max_tables": database.max_tables,
                "max_columns_per_table": database.max_columns_per_table,
                "retention_period": database.retention_period,
            }
        )
        response.state = updated
        return response

    async def delete(self, state: DatabaseModel) -> Response[DatabaseModel]:
        """Delete the database. On success the returned state is None."""
        response: Response[DatabaseModel] = Response()
        diagnostics = response.diagnostics
        if not self._check_configured(diagnostics):
            return response

        try:
            await self.client.database_api().delete(state.name)
        except InfluxDB3Error as e:
            diagnostics.add_error(
                "Error deleting database",
                f"Could not delete database, unexpected error: {format_error_response(e)}",
            )
            response.state = state
        return response

    async def import_state(self, name: str) -> Response[DatabaseModel]:
        """Import an existing database by name."""
        logger.info(f"Importing database {name}")
        return await self.read(DatabaseModel(name=name))


def new_database_resource() -> DatabaseResource:
    return DatabaseResource()
