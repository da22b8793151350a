from influxdb3_provider.base import BaseResource, Response
from influxdb3_provider.resources.database_resource import (
    DatabaseResource,
    new_database_resource,
)
from influxdb3_provider.resources.token_resource import (
    TokenResource,
    new_token_resource,
)

__all__ = [
    "BaseResource",
    "DatabaseResource",
    "Response",
    "TokenResource",
    "new_database_resource",
    "new_token_resource",
]
