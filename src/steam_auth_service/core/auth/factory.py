"""Authentication provider factory.

Builds the Steam provider from application settings.
"""

import logging
from typing import Optional

from steam_auth_service.config.settings import get_settings
from steam_auth_service.core.openid import VerificationClient
from steam_auth_service.infrastructure.steam.client import SteamWebAPIClient

from .provider import AuthProvider

logger = logging.getLogger(__name__)

# Global provider instance (initialized on first call)
_provider_instance: Optional[AuthProvider] = None


def get_auth_provider() -> AuthProvider:
    """Get the configured authentication provider instance.

    The provider holds configuration only; no per-login state is cached.

    Returns:
        Configured AuthProvider instance
    """
    global _provider_instance

    # Return cached instance
    if _provider_instance is not None:
        return _provider_instance

    from .steam import SteamAuthProvider

    settings = get_settings()
    logger.info("Initializing authentication provider: steam")

    if not settings.steam_return_url:
        logger.warning("STEAM_RETURN_URL is not set; Steam logins will fail until it is configured")

    steam_api = None
    if settings.steam_api_key:
        steam_api = SteamWebAPIClient(
            api_key=settings.steam_api_key,
            base_url=settings.steam_api_base_url,
            timeout=settings.steam_request_timeout_seconds,
            proxy=settings.steam_proxy
        )
    else:
        logger.info("STEAM_API_KEY not set; player profiles will not be loaded")

    _provider_instance = SteamAuthProvider(
        return_url=settings.steam_return_url,
        verification_client=VerificationClient(
            user_agent=settings.steam_user_agent,
            timeout=settings.steam_request_timeout_seconds,
            proxy=settings.steam_proxy
        ),
        steam_api=steam_api
    )

    logger.info(f"Auth provider initialized: {_provider_instance.__class__.__name__}")
    return _provider_instance


def reset_provider() -> None:
    """Reset the global provider instance (for testing)."""
    global _provider_instance
    _provider_instance = None
