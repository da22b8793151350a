"""
InfluxDB V3 provider.

Manages InfluxDB V3 cluster databases and database tokens through the
management REST API.
"""

from influxdb3_provider.provider import ConfigureResponse, InfluxDBProvider, new

__all__ = ["ConfigureResponse", "InfluxDBProvider", "new"]
