"""
Browserbase API Client

Client for the Browserbase cloud browser service.
Creates, releases and inspects remote browser sessions over the REST API.
"""
import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from browser_broker.browser.views import (
    SESSION_RELEASE_STATUS,
    SessionCreateParams,
    SessionDebugInfo,
    SessionHandle,
)

logger = logging.getLogger(__name__)


class BrowserbaseAPIError(Exception):
    """Exception raised when Browserbase API operations fail."""
    pass


class BrowserbaseAPIAuthError(BrowserbaseAPIError):
    """Exception raised when Browserbase API authentication fails."""
    pass


class SessionProvider(Protocol):
    """Remote browser session operations used by the broker"""

    async def create_session(self, params: SessionCreateParams) -> SessionHandle:
        ...

    async def update_session(self, session_id: str, status: str = SESSION_RELEASE_STATUS) -> None:
        ...

    async def debug_session(self, session_id: str) -> SessionDebugInfo:
        ...


class BrowserbaseAPIClient:
    """
    Client for interacting with the Browserbase sessions API.

    One instance is shared by the whole process; each call opens its own
    short-lived HTTP connection.
    """

    def __init__(
        self,
        api_key: str,
        project_id: Optional[str] = None,
        api_endpoint: str = "https://api.browserbase.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Browserbase API client

        Args:
            api_key: Browserbase API key for authentication
            project_id: Browserbase project ID sent with create/update requests
            api_endpoint: Browserbase API endpoint URL (default: https://api.browserbase.com)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not api_key or not api_key.strip():
            raise ValueError("API key is required")
        if not api_endpoint or not api_endpoint.strip():
            raise ValueError("API endpoint is required")

        self.api_key = api_key.strip()
        self.project_id = project_id.strip() if project_id else None
        self.api_endpoint = api_endpoint.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._headers = {
            "X-BB-API-Key": self.api_key,
            "Content-Type": "application/json",
        }
        logger.info(f"BrowserbaseAPIClient initialized with endpoint: {self.api_endpoint}")

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and return the decoded JSON body (None for empty bodies)

        Raises:
            BrowserbaseAPIAuthError: On 401/403
            BrowserbaseAPIError: On any other failure
        """
        url = f"{self.api_endpoint}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, headers=self._headers, json=json)
        except httpx.TimeoutException:
            raise BrowserbaseAPIError(f"Request to Browserbase API timed out: {method} {path}")
        except httpx.RequestError as e:
            raise BrowserbaseAPIError(f"Failed to connect to Browserbase API: {str(e)}")

        response_text = response.text
        if response.status_code in (401, 403):
            raise BrowserbaseAPIAuthError(
                f"Authentication failed: {response.status_code}. "
                "Please check your Browserbase API key."
            )

        if not response.is_success:
            error_text = response_text[:1000] if response_text else "Unknown error"
            raise BrowserbaseAPIError(
                f"{method} {path} failed: {response.status_code}. Error: {error_text}"
            )

        if not response_text:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise BrowserbaseAPIError(f"Invalid JSON response from API: {str(e)}. Response: {response_text[:500]}")

    async def create_session(self, params: SessionCreateParams) -> SessionHandle:
        """
        Create a new browser session

        Args:
            params: Session settings; project_id defaults to the client's project

        Returns:
            SessionHandle with the session id and CDP connect URL

        Raises:
            BrowserbaseAPIAuthError: If authentication fails
            BrowserbaseAPIError: If the request fails or the response is unusable
        """
        if params.project_id is None and self.project_id:
            params = params.model_copy(update={"project_id": self.project_id})

        payload = params.model_dump(mode="json", by_alias=True, exclude_none=True)
        logger.info(f"Creating Browserbase session in region {payload.get('region')}")

        data = await self._request("POST", "/v1/sessions", json=payload)
        if not isinstance(data, dict):
            raise BrowserbaseAPIError(f"Unexpected create session response: {data!r}")

        try:
            session = SessionHandle.model_validate(data)
        except ValueError as e:
            raise BrowserbaseAPIError(f"API response does not describe a session: {str(e)}")

        logger.info(f"Created Browserbase session: {session.id} (region: {session.region or 'unknown'})")
        return session

    async def update_session(self, session_id: str, status: str = SESSION_RELEASE_STATUS) -> None:
        """
        Update a session's status, by default requesting its release

        Args:
            session_id: Session identifier
            status: New status (Browserbase only accepts REQUEST_RELEASE)

        Raises:
            BrowserbaseAPIError: If the update fails
        """
        if not session_id:
            raise ValueError("Session ID is required")

        payload: Dict[str, Any] = {"status": status}
        if self.project_id:
            payload["projectId"] = self.project_id

        logger.info(f"Updating Browserbase session {session_id}: status={status}")
        await self._request("POST", f"/v1/sessions/{session_id}", json=payload)

    async def debug_session(self, session_id: str) -> SessionDebugInfo:
        """
        Fetch live debugger URLs for a session

        Args:
            session_id: Session identifier

        Returns:
            SessionDebugInfo containing the fullscreen debugger URL

        Raises:
            BrowserbaseAPIError: If the request fails or no debugger URL is returned
        """
        if not session_id:
            raise ValueError("Session ID is required")

        data = await self._request("GET", f"/v1/sessions/{session_id}/debug")
        if not isinstance(data, dict):
            raise BrowserbaseAPIError(f"Unexpected debug response for session {session_id}: {data!r}")

        try:
            return SessionDebugInfo.model_validate(data)
        except ValueError as e:
            raise BrowserbaseAPIError(f"API response does not contain a debugger URL: {str(e)}")
