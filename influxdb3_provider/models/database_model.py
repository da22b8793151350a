"""
State models for the database resource and data sources, and their mapping
to and from the management API types.
"""

import json
from typing import List, Optional

from pydantic import BaseModel, Field

from common.constants import (
    PARTITION_TYPE_BUCKET,
    PARTITION_TYPE_TAG,
    PARTITION_TYPE_TIME,
)
from influxdb3_provider.services.influxdb3.models.types import (
    BucketValue,
    Database,
    PartitionTemplatePart,
)


class DatabasePartitionTemplateModel(BaseModel):
    """One partition template part; bucket values are JSON-encoded strings."""

    type: str
    value: str


class DatabaseModel(BaseModel):
    account_id: Optional[str] = Field(default=None, description="Account the cluster belongs to")
    cluster_id: Optional[str] = Field(default=None, description="Cluster the database belongs to")
    name: Optional[str] = Field(default=None, description="Database name")
    max_tables: Optional[int] = None
    max_columns_per_table: Optional[int] = None
    retention_period: Optional[int] = Field(
        default=None, description="Retention period in nanoseconds, 0 for infinite"
    )
    partition_template: Optional[List[DatabasePartitionTemplateModel]] = None


class DatabasesDataSourceModel(BaseModel):
    databases: List[DatabaseModel] = Field(default_factory=list)


def encode_bucket_value(value: BucketValue) -> str:
    """Encode a bucket value the way ``jsonencode()`` does: compact, keys sorted."""
    return json.dumps(
        value.model_dump(by_alias=True, exclude_none=True),
        sort_keys=True,
        separators=(",", ":"),
    )


def get_partition_template(
    parts: Optional[List[PartitionTemplatePart]],
) -> Optional[List[DatabasePartitionTemplateModel]]:
    """Map API partition template parts to state models.

    Parts with an unknown type, or with a value that does not match their type,
    are dropped.
    """
    if parts is None:
        return None

    models = []
    for part in parts:
        if part.type in (PARTITION_TYPE_TIME, PARTITION_TYPE_TAG):
            if isinstance(part.value, str):
                models.append(
                    DatabasePartitionTemplateModel(type=part.type, value=part.value)
                )
        elif part.type == PARTITION_TYPE_BUCKET:
            if isinstance(part.value, BucketValue):
                models.append(
                    DatabasePartitionTemplateModel(
                        type=part.type, value=encode_bucket_value(part.value)
                    )
                )
    return models


def to_partition_template_parts(
    models: Optional[List[DatabasePartitionTemplateModel]],
) -> List[PartitionTemplatePart]:
    """Map state partition template parts to API request parts.

    Raises:
        ValueError: If a bucket value is not a JSON object
    """
    parts = []
    for model in models or []:
        if model.type == PARTITION_TYPE_BUCKET:
            try:
                decoded = json.loads(model.value)
            except json.JSONDecodeError as e:
                raise ValueError(f"Failed to unmarshal JSON data: {e}") from e
            if not isinstance(decoded, dict):
                raise ValueError(
                    f"Failed to unmarshal JSON data: expected an object, got {model.value}"
                )
            parts.append(
                PartitionTemplatePart(
                    type=model.type, value=BucketValue.model_validate(decoded)
                )
            )
        else:
            parts.append(PartitionTemplatePart(type=model.type, value=model.value))
    return parts


def database_model_from_api(database: Database) -> DatabaseModel:
    return DatabaseModel(
        account_id=database.account_id,
        cluster_id=database.cluster_id,
        name=database.name,
        max_tables=database.max_tables,
        max_columns_per_table=database.max_columns_per_table,
        retention_period=database.retention_period,
        partition_template=get_partition_template(database.partition_template),
    )
