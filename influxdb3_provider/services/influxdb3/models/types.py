"""
Request and response models for the InfluxDB V3 management API.

Field names are snake_case in Python and camelCase on the wire; dump with
``by_alias=True`` when building request bodies.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BucketValue(_APIModel):
    """Value of a ``bucket`` partition template part."""

    tag_name: Optional[str] = Field(default=None, alias="tagName")
    number_of_buckets: Optional[int] = Field(default=None, alias="numberOfBuckets")


class PartitionTemplatePart(_APIModel):
    """One part of a database partition template.

    ``time`` and ``tag`` parts carry a string; ``bucket`` parts carry an object.
    """

    type: str
    value: Union[str, BucketValue]


class Database(_APIModel):
    account_id: str = Field(..., alias="accountId")
    cluster_id: str = Field(..., alias="clusterId")
    name: str
    max_tables: int = Field(default=0, alias="maxTables")
    max_columns_per_table: int = Field(default=0, alias="maxColumnsPerTable")
    retention_period: int = Field(default=0, alias="retentionPeriod")
    partition_template: Optional[List[PartitionTemplatePart]] = Field(
        default=None, alias="partitionTemplate"
    )


class DatabaseParams(_APIModel):
    """Body of a create database request."""

    name: str
    max_tables: int = Field(..., alias="maxTables")
    max_columns_per_table: int = Field(..., alias="maxColumnsPerTable")
    retention_period: int = Field(..., alias="retentionPeriod")
    partition_template: List[PartitionTemplatePart] = Field(
        default_factory=list, alias="partitionTemplate"
    )


class DatabaseUpdateParams(_APIModel):
    """Body of an update database request. Name and partition template are create-only."""

    max_tables: int = Field(..., alias="maxTables")
    max_columns_per_table: int = Field(..., alias="maxColumnsPerTable")
    retention_period: int = Field(..., alias="retentionPeriod")


class Permission(_APIModel):
    action: str
    resource: str


class Token(_APIModel):
    id: str
    account_id: str = Field(..., alias="accountId")
    cluster_id: str = Field(..., alias="clusterId")
    description: str = ""
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    # Only present in the create response
    access_token: Optional[str] = Field(default=None, alias="accessToken")
    permissions: List[Permission] = Field(default_factory=list)


class TokenParams(_APIModel):
    """Body of a create or update token request."""

    description: str
    permissions: List[Permission] = Field(default_factory=list)
