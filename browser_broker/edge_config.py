"""
Edge Config Client

Reads routing flags and the region distribution table from a Vercel Edge
Config store over its REST API.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import parse_qs, urlparse

import httpx

logger = logging.getLogger(__name__)


class ConfigSource(Protocol):
    """Source of remote configuration items"""

    async def fetch_all(self) -> Mapping[str, Any]:
        ...


class EdgeConfigError(Exception):
    """Exception raised when Edge Config cannot be read."""
    pass


class EdgeConfigClient:
    """
    Client for the Edge Config items endpoint.

    The connection string has the form
    https://edge-config.vercel.com/<edge_config_id>?token=<read_token>
    """

    def __init__(
        self,
        connection_string: Optional[str],
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Edge Config client

        Args:
            connection_string: Value of the EDGE_CONFIG environment variable; may be
                empty, in which case every fetch raises EdgeConfigError
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.connection_string = (connection_string or "").strip()
        self.timeout = timeout
        self._transport = transport

    def _items_url(self) -> tuple[str, str]:
        if not self.connection_string:
            raise EdgeConfigError("EDGE_CONFIG is not set")

        parsed = urlparse(self.connection_string)
        edge_config_id = parsed.path.strip("/")
        token = parse_qs(parsed.query).get("token", [None])[0]
        if parsed.scheme not in ("http", "https") or not parsed.netloc or not edge_config_id or not token:
            raise EdgeConfigError("EDGE_CONFIG is not a valid connection string")

        return f"{parsed.scheme}://{parsed.netloc}/{edge_config_id}/items", token

    async def fetch_all(self) -> Dict[str, Any]:
        """
        Fetch every item in the store

        Returns:
            Mapping of item key to value

        Raises:
            EdgeConfigError: If the store is not configured or cannot be read
        """
        url, token = self._items_url()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params={"token": token})
        except httpx.TimeoutException:
            raise EdgeConfigError("Request to Edge Config timed out")
        except httpx.RequestError as e:
            raise EdgeConfigError(f"Failed to connect to Edge Config: {str(e)}")

        if response.status_code != 200:
            raise EdgeConfigError(f"Failed to read Edge Config: {response.status_code}")

        try:
            items = response.json()
        except ValueError as e:
            raise EdgeConfigError(f"Invalid JSON response from Edge Config: {str(e)}")

        if not isinstance(items, dict):
            raise EdgeConfigError(f"Unexpected Edge Config response type: {type(items).__name__}")

        logger.debug(f"Fetched {len(items)} item(s) from Edge Config")
        return items
