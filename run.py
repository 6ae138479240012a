"""
Run script for the Browser Session Broker API

Usage:
    python run.py

Or with uvicorn directly:
    uvicorn api.main:app --reload --host 0.0.0.0 --port 8000
"""
import uvicorn
from browser_broker.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
