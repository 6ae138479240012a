"""
Configuration settings for the Browser Session Broker
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    api_title: str = "Browser Session Broker API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Browserbase Settings
    browserbase_api_key: Optional[str] = None
    browserbase_project_id: Optional[str] = None
    browserbase_api_endpoint: str = "https://api.browserbase.com"
    browserbase_timeout: float = 30.0  # seconds

    # Edge Config connection string, e.g. https://edge-config.vercel.com/ecfg_xxx?token=yyy
    edge_config: Optional[str] = None
    edge_config_timeout: float = 5.0  # seconds

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from env vars that aren't defined
    )


settings = Settings()
