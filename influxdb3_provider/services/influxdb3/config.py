"""Connection settings for the InfluxDB V3 management API client."""

from dataclasses import dataclass, field
from typing import Optional

import httpx

from common.config.config import HTTP_TIMEOUT_SECONDS, INFLUXDB3_DEFAULT_URL
from influxdb3_provider.services.influxdb3.retry import RetryPolicy


@dataclass
class ClientConfig:
    account_id: str
    cluster_id: str
    token: str
    host: str = INFLUXDB3_DEFAULT_URL
    # Caller-owned client; when set, timeout is ignored and close() leaves it open
    http_client: Optional[httpx.AsyncClient] = None
    timeout: float = HTTP_TIMEOUT_SECONDS
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
