"""
FastAPI Main Application

Entry point for the Browser Session Broker API.
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routes import health, session
from browser_broker.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Browser Session Broker API - region-aware Browserbase sessions",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix=settings.api_prefix, tags=["Health"])
app.include_router(session.router, prefix=settings.api_prefix, tags=["Session"])


@app.on_event("startup")
async def startup_event():
    """Startup event handler"""
    logger.info("Browser Session Broker API starting up")
    logger.info(f"API Version: {settings.api_version}")
    logger.info(f"Browserbase endpoint: {settings.browserbase_api_endpoint}")
    logger.info(f"Edge Config configured: {bool(settings.edge_config)}")


@app.on_event("shutdown")
async def shutdown_event():
    """Shutdown event handler"""
    logger.info("Browser Session Broker API shutting down")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Browser Session Broker API",
        "version": settings.api_version,
        "status": "running",
    }
