"""
Health Check Routes

Simple health check endpoints for monitoring.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from browser_broker.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str
    service: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint

    Returns:
        Health status
    """
    return HealthResponse(
        status="healthy",
        version=settings.api_version,
        service="browser-session-broker",
    )


@router.get("/ready")
async def readiness_check():
    """
    Readiness check endpoint

    Reports which collaborators are configured; the Edge Config store is
    optional since defaults are used without it.
    """
    browserbase_configured = bool(settings.browserbase_api_key)
    return {
        "ready": browserbase_configured,
        "checks": {
            "api": True,
            "browserbase": browserbase_configured,
            "edge_config": bool(settings.edge_config),
        }
    }
