"""Configured client shared by every resource and data source."""

import uuid
from dataclasses import dataclass

from influxdb3_provider.services.influxdb3.client import InfluxDB3Client


@dataclass
class ProviderData:
    account_id: uuid.UUID
    cluster_id: uuid.UUID
    client: InfluxDB3Client
