"""Configuration Settings for Steam Auth Service

Manages environment variables and application configuration.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Service info
    service_name: str = "steam-auth-service"
    service_version: str = "1.0.0"
    environment: str = "development"

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Steam OpenID
    steam_return_url: Optional[str] = None  # e.g. https://example.com/api/v1/auth/steam/callback
    steam_user_agent: str = "Python-SteamOpenID/1.0.0"
    steam_request_timeout_seconds: float = 10.0
    steam_proxy: Optional[str] = None

    # Steam Web API (profile lookup is skipped without a key)
    steam_api_key: Optional[str] = None
    steam_api_base_url: str = "https://api.steampowered.com"

    # CORS configuration
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
