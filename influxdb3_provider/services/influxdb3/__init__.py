"""
InfluxDB V3 Management API Module

Handles the cluster management REST API:
- Client construction, authentication and retries
- Database operations
- Token operations
"""

from influxdb3_provider.services.influxdb3.client import InfluxDB3Client
from influxdb3_provider.services.influxdb3.config import ClientConfig
from influxdb3_provider.services.influxdb3.databases import DatabaseOperations
from influxdb3_provider.services.influxdb3.retry import RetryPolicy
from influxdb3_provider.services.influxdb3.tokens import TokenOperations

__all__ = [
    "ClientConfig",
    "DatabaseOperations",
    "InfluxDB3Client",
    "RetryPolicy",
    "TokenOperations",
]
