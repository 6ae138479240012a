"""
Session Routes

Endpoints for creating and releasing remote browser sessions.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from browser_broker.broker import SessionBroker
from browser_broker.browser.browserbase_api import BrowserbaseAPIClient
from browser_broker.config import settings
from browser_broker.edge_config import EdgeConfigClient

logger = logging.getLogger(__name__)
router = APIRouter()

CREATE_FAILED_MESSAGE = "Failed to create session"
END_FAILED_MESSAGE = "Failed to end session"

# Broker instance (created on first use)
_broker: Optional[SessionBroker] = None


def get_session_broker() -> SessionBroker:
    """Get or create the session broker"""
    global _broker
    if _broker is None:
        provider = BrowserbaseAPIClient(
            api_key=settings.browserbase_api_key,
            project_id=settings.browserbase_project_id,
            api_endpoint=settings.browserbase_api_endpoint,
            timeout=settings.browserbase_timeout,
        )
        config_source = EdgeConfigClient(settings.edge_config, timeout=settings.edge_config_timeout)
        _broker = SessionBroker(provider=provider, config_source=config_source)
    return _broker


def set_session_broker(broker: Optional[SessionBroker]) -> None:
    """Replace the session broker (None resets to lazy creation)"""
    global _broker
    _broker = broker


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateSessionRequest(CamelModel):
    """Request model for creating a session"""
    timezone: Optional[str] = Field(None, description="Client timezone abbreviation, e.g. PST")

    @field_validator("timezone", mode="before")
    @classmethod
    def ignore_non_string_timezone(cls, v: Any):
        # Anything that is not a string resolves to the default region
        return v if isinstance(v, str) else None


class EndSessionRequest(CamelModel):
    """Request model for releasing a session"""
    session_id: str = Field(..., description="Browserbase session ID")


class CreateSessionResponse(CamelModel):
    """Response model for a created session"""
    success: bool = True
    session_id: str
    session_url: str
    connect_url: str


class SessionResponse(CamelModel):
    """Response model for operations without a payload"""
    success: bool = True


class SessionErrorResponse(CamelModel):
    """Response model for failed session operations"""
    success: bool = False
    error: str


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=SessionErrorResponse(error=message).model_dump(by_alias=True),
    )


async def _read_timezone(request: Request) -> Optional[str]:
    """
    Timezone from the request body

    An empty body, a JSON body that is not an object, or a non-string
    timezone all mean no timezone. Invalid JSON raises ValueError.
    """
    if not (await request.body()).strip():
        return None

    body = await request.json()
    if not isinstance(body, dict):
        return None

    return CreateSessionRequest.model_validate(body).timezone


@router.post(
    "/session",
    response_model=CreateSessionResponse,
    responses={500: {"model": SessionErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": CreateSessionRequest.model_json_schema()}},
        }
    },
)
async def create_session(request: Request):
    """
    Create a remote browser session

    The session region is derived from the client's timezone abbreviation and
    then redistributed according to the configured region distribution.

    Args:
        request: Incoming request; the JSON body may carry the client timezone

    Returns:
        Session id, live view URL and CDP connect URL
    """
    try:
        timezone = await _read_timezone(request)
        broker = get_session_broker()
        created = await broker.create_session(timezone)
        return CreateSessionResponse(
            session_id=created.handle.id,
            session_url=created.debug_url,
            connect_url=created.handle.connect_url,
        )
    except Exception as e:
        logger.error(f"Error creating session: {e}", exc_info=True)
        return _error_response(CREATE_FAILED_MESSAGE)


@router.delete(
    "/session",
    response_model=SessionResponse,
    responses={500: {"model": SessionErrorResponse}},
)
async def end_session(request: EndSessionRequest):
    """
    Release a remote browser session

    Args:
        request: Body with the session id to release

    Returns:
        Success flag
    """
    try:
        broker = get_session_broker()
        await broker.end_session(request.session_id)
        return SessionResponse()
    except Exception as e:
        logger.error(f"Error ending session {request.session_id}: {e}", exc_info=True)
        return _error_response(END_FAILED_MESSAGE)
