from influxdb3_provider.data_sources.database_data_sources import (
    DatabaseDataSource,
    DatabasesDataSource,
    new_database_data_source,
    new_databases_data_source,
)
from influxdb3_provider.data_sources.token_data_sources import (
    TokenDataSource,
    TokensDataSource,
    new_token_data_source,
    new_tokens_data_source,
)

__all__ = [
    "DatabaseDataSource",
    "DatabasesDataSource",
    "TokenDataSource",
    "TokensDataSource",
    "new_database_data_source",
    "new_databases_data_source",
    "new_token_data_source",
    "new_tokens_data_source",
]
