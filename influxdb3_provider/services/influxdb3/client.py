"""
InfluxDB V3 management API client.

Every request goes to ``{host}/api/v0/accounts/{account}/clusters/{cluster}/``
with a bearer token and JSON bodies. Transient failures are retried with
linear jitter backoff according to the configured RetryPolicy.
"""

import asyncio
import logging
import posixpath
from typing import Any, Dict, Optional

import httpx

from common.config.config import INFLUXDB3_API_ENDPOINT
from common.exception.exceptions import InfluxDB3Error, UnexpectedStatusError
from influxdb3_provider.services.influxdb3.config import ClientConfig

logger = logging.getLogger(__name__)


class InfluxDB3Client:
    """Client for one InfluxDB V3 cluster."""

    def __init__(self, config: ClientConfig):
        """Initialize the client.

        Args:
            config: Account, cluster, host and credentials to use

        Raises:
            InfluxDB3Error: If the host is not a valid URL
        """
        self.config = config
        self.api_url = self._build_api_url(config)
        self.authorization = f"Bearer {config.token}"

        self._owns_client = config.http_client is None
        self._client = config.http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout)
        )
        self._database_api = None
        self._token_api = None

        logger.debug(f"InfluxDB3 client initialized with API URL: {self.api_url}")

    @staticmethod
    def _build_api_url(config: ClientConfig) -> str:
        host = config.host if config.host.endswith("/") else config.host + "/"
        try:
            url = httpx.URL(host)
        except httpx.InvalidURL as e:
            raise InfluxDB3Error(f"parsing host URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise InfluxDB3Error(f"parsing host URL: invalid host {config.host!r}")

        cluster_path = (
            f"{INFLUXDB3_API_ENDPOINT.lstrip('/')}/accounts/{config.account_id}"
            f"/clusters/{config.cluster_id}"
        )
        path = posixpath.join(url.path, cluster_path) + "/"
        return str(url.copy_with(path=path))

    def database_api(self):
        """Return the database operations bound to this client."""
        if self._database_api is None:
            from influxdb3_provider.services.influxdb3.databases import (
                DatabaseOperations,
            )

            self._database_api = DatabaseOperations(self)
        return self._database_api

    def token_api(self):
        """Return the token operations bound to this client."""
        if self._token_api is None:
            from influxdb3_provider.services.influxdb3.tokens import TokenOperations

            self._token_api = TokenOperations(self)
        return self._token_api

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": self.authorization,
            "Content-Type": "application/json",
        }

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a management API request.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: Path relative to the cluster URL
            data: JSON request body

        Returns:
            Decoded JSON body, or None for an empty response

        Raises:
            UnexpectedStatusError: If the status is not 200 (or 204 for DELETE)
            InfluxDB3Error: If the request cannot be sent or the body is not JSON
        """
        method = method.upper()
        url = f"{self.api_url}{path}"
        response = await self._send_with_retry(method, url, data)
        return self._process_response(response, method, url)

    async def _send_with_retry(
        self,
        method: str,
        url: str,
        data: Optional[Dict[str, Any]],
    ) -> httpx.Response:
        policy = self.config.retry_policy
        attempts = policy.max_attempts
        headers = self._get_headers()

        for attempt in range(attempts):
            is_last = attempt == attempts - 1
            try:
                response = await self._client.request(
                    method, url, headers=headers, json=data
                )
            except httpx.RequestError as e:
                if not is_last and policy.should_retry(error=e):
                    delay = policy.backoff(attempt)
                    logger.warning(
                        f"InfluxDB3 API {method} {url} failed: {e} "
                        f"(attempt {attempt + 1}/{attempts}). Retrying in {delay:.3f}s..."
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"InfluxDB3 API request error: {e}")
                raise InfluxDB3Error(
                    f"{method} {url} giving up after {attempt + 1} attempt(s): {e}"
                ) from e

            if not is_last and policy.should_retry(response=response):
                delay = policy.backoff(attempt)
                logger.warning(
                    f"InfluxDB3 API {method} {url} returned {response.status_code} "
                    f"(attempt {attempt + 1}/{attempts}). Retrying in {delay:.3f}s..."
                )
                await asyncio.sleep(delay)
                continue
            return response

        raise InfluxDB3Error(f"{method} {url} giving up after {attempts} attempt(s)")

    def _process_response(
        self, response: httpx.Response, method: str, url: str
    ) -> Any:
        """Check the status and decode the body.

        Raises:
            UnexpectedStatusError: If the status is not the expected one
            InfluxDB3Error: If a successful body is not valid JSON
        """
        expected = (200, 204) if method == "DELETE" else (200,)
        if response.status_code not in expected:
            error = self._status_error(response)
            logger.error(
                f"InfluxDB3 API {method} request to {url} failed: {error} "
                f"{response.text}"
            )
            raise error

        logger.info(
            f"InfluxDB3 API {method} request to {url} "
            f"successful (status: {response.status_code})"
        )
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise InfluxDB3Error(f"error unmarshalling JSON: {e}") from e

    @staticmethod
    def _status_error(response: httpx.Response) -> UnexpectedStatusError:
        error_code = None
        error_message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            code = body.get("code")
            if isinstance(code, int):
                error_code = code
            message = body.get("message")
            if isinstance(message, str):
                error_message = message
        return UnexpectedStatusError(
            response.status_code, error_code=error_code, error_message=error_message
        )

    async def get(self, path: str) -> Any:
        """Make a GET request."""
        return await self.request("GET", path)

    async def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, data=data)

    async def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Make a PATCH request."""
        return await self.request("PATCH", path, data=data)

    async def delete(self, path: str) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path)

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.info("InfluxDB3 client closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
