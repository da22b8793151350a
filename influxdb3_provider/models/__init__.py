from influxdb3_provider.models.database_model import (
    DatabaseModel,
    DatabasePartitionTemplateModel,
    DatabasesDataSourceModel,
    database_model_from_api,
    get_partition_template,
    to_partition_template_parts,
)
from influxdb3_provider.models.token_model import (
    TokenModel,
    TokenPermissionModel,
    TokensDataSourceModel,
    get_permissions,
    to_permissions,
    token_model_from_api,
)

__all__ = [
    "DatabaseModel",
    "DatabasePartitionTemplateModel",
    "DatabasesDataSourceModel",
    "TokenModel",
    "TokenPermissionModel",
    "TokensDataSourceModel",
    "database_model_from_api",
    "get_partition_template",
    "get_permissions",
    "to_partition_template_parts",
    "to_permissions",
    "token_model_from_api",
]
