"""ServiceNow table API transport.

Implements TransportPort by issuing authenticated requests against the
ServiceNow Table API for a single table. Responses are returned as raw
response variants; decoding and normalization happen in the core.

One attempt is made per call. Timeouts are enforced by the httpx client.
"""

import logging
import urllib.parse
from collections.abc import Mapping
from typing import Any

import httpx

from ticketlink.core.errors import TransportConfigError, TransportError
from ticketlink.core.models import (
    AdapterConfig,
    BodyResponse,
    EmptyResponse,
    RawResponse,
)
from ticketlink.core.ports import TransportPort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _is_valid_table_name(table_name: str) -> bool:
    """Validate a table name to keep it a single path segment.

    Args:
        table_name: The table name to validate.

    Returns:
        True if the name is safe to place in the URL path.
    """
    if not isinstance(table_name, str):
        return False
    return bool(table_name) and all(c.isalnum() or c == "_" for c in table_name)


class ServiceNowTransport(TransportPort):
    """httpx-backed transport for one ServiceNow table."""

    def __init__(
        self,
        config: AdapterConfig,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the ServiceNow transport.

        Args:
            config: Adapter configuration (instance URL, credentials, table).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.

        Raises:
            TransportConfigError: If the URL, username or table name is unusable.
        """
        parsed = urllib.parse.urlparse(config.url or "")
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise TransportConfigError(
                f"ServiceNow URL must be an absolute http(s) URL, got '{config.url}'"
            )
        if not config.credentials.username:
            raise TransportConfigError("ServiceNow username must not be empty")
        if not _is_valid_table_name(config.table_name):
            raise TransportConfigError(
                f"Invalid ServiceNow table name: '{config.table_name}'"
            )

        self.api_url = config.url.rstrip("/")
        self.table_name = config.table_name
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            auth=httpx.BasicAuth(
                config.credentials.username, config.credentials.password
            ),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def resource_path(self) -> str:
        return f"/api/now/table/{self.table_name}"

    async def __aenter__(self) -> "ServiceNowTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def get(self) -> RawResponse:
        """Fetch one record from the table.

        Raises:
            TransportError: On network failure or non-2xx status.
        """
        return await self._send("GET", params={"sysparm_limit": 1})

    async def post(self, fields: Mapping[str, Any] | None = None) -> RawResponse:
        """Create a record in the table.

        Raises:
            TransportError: On network failure or non-2xx status.
        """
        return await self._send("POST", json=dict(fields or {}))

    async def _send(self, method: str, **kwargs: Any) -> RawResponse:
        logger.debug(f"{method} {self.api_url}{self.resource_path}")
        try:
            response = await self.client.request(method, self.resource_path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error during {method} to ServiceNow: {e}")
            raise TransportError(
                f"{method} {self.resource_path} failed: {e}"
            ) from e

        if response.is_error:
            raise TransportError(
                f"ServiceNow returned HTTP {response.status_code} for "
                f"{method} {self.resource_path}: {response.text[:200]}",
                status_code=response.status_code,
            )

        if not response.content:
            return EmptyResponse(status_code=response.status_code)
        return BodyResponse(body=response.text, status_code=response.status_code)
