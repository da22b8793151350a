"""
Configuration module for the InfluxDB V3 provider.

Values are read from the environment once at import time. A ``.env`` file in
the working directory is loaded first so local runs can keep credentials out
of the shell history.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_env_float(key: str, default: float) -> float:
    """Get a float environment variable or raise if it is not a number."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {value!r}")


def get_env_int(key: str, default: int) -> int:
    """Get an integer environment variable or raise if it is not an integer."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


# Environment variable names backing the provider configuration
ENV_ACCOUNT_ID = "INFLUXDB3_ACCOUNT_ID"
ENV_CLUSTER_ID = "INFLUXDB3_CLUSTER_ID"
ENV_TOKEN = "INFLUXDB3_TOKEN"
ENV_URL = "INFLUXDB3_URL"

# InfluxDB V3 management API
INFLUXDB3_DEFAULT_URL = "https://console.influxdata.com"
INFLUXDB3_API_ENDPOINT = "/api/v0"

# HTTP client
HTTP_TIMEOUT_SECONDS = get_env_float("INFLUXDB3_HTTP_TIMEOUT", 10.0)

# Retry configuration (linear jitter backoff)
RETRY_MAX = get_env_int("INFLUXDB3_RETRY_MAX", 3)
RETRY_WAIT_MIN_SECONDS = get_env_float("INFLUXDB3_RETRY_WAIT_MIN", 1.0)
RETRY_WAIT_MAX_SECONDS = get_env_float("INFLUXDB3_RETRY_WAIT_MAX", 5.0)

# Logging
LOG_LEVEL = os.getenv("INFLUXDB3_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
