"""Steam Authentication Routes

Key Endpoints:
- GET /api/v1/auth/config: Get auth configuration (provider and login URL)
- GET /api/v1/auth/steam/login: Redirect the browser to Steam
- GET /api/v1/auth/steam/callback: Steam returns here; verifies the assertion
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from steam_auth_service.core.auth import AuthProvider, UserIdentity, get_auth_provider
from steam_auth_service.core.openid import (
    AssertionRejectedError,
    ConfigurationError,
    ProviderUnavailableError,
    RateLimitedError,
    parse_callback_parameters,
)
from steam_auth_service.infrastructure.steam.client import PlayerNotFoundError, ProfileLookupError

router = APIRouter(prefix="/api/v1/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


# ============================================================================
# Request/Response Models
# ============================================================================

class AuthConfigResponse(BaseModel):
    """Auth configuration response."""
    provider: str
    login_url: Optional[str] = None
    features: dict = Field(default_factory=dict)


class SteamLoginResponse(BaseModel):
    """Successful Steam login response."""
    steam_id: str
    user: UserIdentity


# ============================================================================
# Helper Functions
# ============================================================================

def _login_redirect(provider: AuthProvider) -> RedirectResponse:
    try:
        login_url = provider.get_login_url()
    except ConfigurationError as e:
        logger.error(f"Steam login unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Steam login is not configured"
        )
    return RedirectResponse(login_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


# ============================================================================
# Endpoints
# ============================================================================

@router.get("/config", response_model=AuthConfigResponse)
async def get_auth_config(provider: AuthProvider = Depends(get_auth_provider)):
    """Get authentication configuration.

    Returns:
        Provider name, login URL (when configured) and features
    """
    try:
        login_url = provider.get_login_url()
    except ConfigurationError:
        login_url = None

    return AuthConfigResponse(
        provider="steam",
        login_url=login_url,
        features={
            "requires_redirect": True,
            "loads_profile": getattr(provider, "steam_api", None) is not None,
        }
    )


@router.get("/steam/login")
async def steam_login(provider: AuthProvider = Depends(get_auth_provider)):
    """Start a Steam login by redirecting to steamcommunity.com."""
    return _login_redirect(provider)


@router.get("/steam/callback", response_model=SteamLoginResponse)
async def steam_callback(request: Request, provider: AuthProvider = Depends(get_auth_provider)):
    """Handle the browser returning from Steam.

    Requests without an id_res assertion restart the login. Otherwise the
    assertion is verified with Steam and the user identity is returned.

    Raises:
        HTTPException: 401 if the assertion is rejected, 502/503 if Steam
            cannot be reached, 500 if the service is misconfigured
    """
    params = parse_callback_parameters(str(request.url))

    if not provider.is_callback(params):
        return _login_redirect(provider)

    try:
        user_identity = await provider.authenticate(params)
    except ConfigurationError as e:
        logger.error(f"Steam callback failed, service misconfigured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Steam login is not configured"
        )
    except AssertionRejectedError as e:
        logger.warning(f"Steam login rejected ({e.__class__.__name__}): {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Steam login failed"
        )
    except RateLimitedError as e:
        logger.warning(f"Steam rate-limited the login: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Steam is rate-limiting logins. Please try again later."
        )
    except (ProviderUnavailableError, ProfileLookupError, PlayerNotFoundError) as e:
        logger.error(f"Steam unavailable during login ({e.__class__.__name__}): {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not complete login with Steam"
        )

    logger.info(f"Steam login successful: steam_id={user_identity.user_id}")
    return SteamLoginResponse(steam_id=user_identity.user_id, user=user_identity)
