"""Provider and management API constants."""

# ============================================================================
# Provider
# ============================================================================

# Terraform type name prefix for every resource and data source
PROVIDER_TYPE_NAME = "influxdb3"

# ============================================================================
# Management API paths (relative to the cluster base URL)
# ============================================================================

DATABASE_API_PATH = "databases"
TOKEN_API_PATH = "tokens"

# ============================================================================
# Database defaults and limits
# ============================================================================

DATABASE_DEFAULT_MAX_TABLES = 500
DATABASE_DEFAULT_MAX_COLUMNS_PER_TABLE = 200

# Zero means infinite retention
DATABASE_DEFAULT_RETENTION_PERIOD = 0

DATABASE_NAME_MIN_LENGTH = 1
DATABASE_NAME_MAX_LENGTH = 64

# Up to 7 tag and tag bucket parts plus 1 time part
PARTITION_TEMPLATE_MIN_PARTS = 1
PARTITION_TEMPLATE_MAX_PARTS = 8

PARTITION_TYPE_TIME = "time"
PARTITION_TYPE_TAG = "tag"
PARTITION_TYPE_BUCKET = "bucket"
PARTITION_TEMPLATE_TYPES = [
    PARTITION_TYPE_BUCKET,
    PARTITION_TYPE_TAG,
    PARTITION_TYPE_TIME,
]

# ============================================================================
# Token permissions
# ============================================================================

PERMISSION_ACTION_READ = "read"
PERMISSION_ACTION_WRITE = "write"
PERMISSION_ACTIONS = [PERMISSION_ACTION_READ, PERMISSION_ACTION_WRITE]

# Permission resource matching every database
PERMISSION_RESOURCE_ALL = "*"

__all__ = [
    'PROVIDER_TYPE_NAME',
    'DATABASE_API_PATH',
    'TOKEN_API_PATH',
    'DATABASE_DEFAULT_MAX_TABLES',
    'DATABASE_DEFAULT_MAX_COLUMNS_PER_TABLE',
    'DATABASE_DEFAULT_RETENTION_PERIOD',
    'DATABASE_NAME_MIN_LENGTH',
    'DATABASE_NAME_MAX_LENGTH',
    'PARTITION_TEMPLATE_MIN_PARTS',
    'PARTITION_TEMPLATE_MAX_PARTS',
    'PARTITION_TYPE_TIME',
    'PARTITION_TYPE_TAG',
    'PARTITION_TYPE_BUCKET',
    'PARTITION_TEMPLATE_TYPES',
    'PERMISSION_ACTION_READ',
    'PERMISSION_ACTION_WRITE',
    'PERMISSION_ACTIONS',
    'PERMISSION_RESOURCE_ALL',
]
