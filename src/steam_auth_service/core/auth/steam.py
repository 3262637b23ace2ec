"""Steam authentication provider.

Signs users in through Steam's OpenID 2.0 endpoint, then (when a Steam
Web API key is configured) loads their public profile.

Example Configuration:
    STEAM_RETURN_URL=https://example.com/api/v1/auth/steam/callback
    STEAM_API_KEY=XXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX
"""

import logging
from datetime import datetime
from typing import Callable, Mapping, Optional

from steam_auth_service.core.openid import OpenIDVerifier, VerificationClient, build_auth_url
from steam_auth_service.core.openid.constants import MODE_ID_RES
from steam_auth_service.infrastructure.steam.client import SteamWebAPIClient

from .provider import AuthProvider, UserIdentity

logger = logging.getLogger(__name__)


class SteamAuthProvider(AuthProvider):
    """Sign in through Steam."""

    def __init__(
        self,
        return_url: Optional[str],
        verification_client: Optional[VerificationClient] = None,
        steam_api: Optional[SteamWebAPIClient] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize Steam provider.

        Args:
            return_url: Callback URL registered with this service
            verification_client: Client for Steam's check_authentication call
            steam_api: Web API client for profile lookup (optional)
            on_error: Called with any error before it is re-raised
            clock: Current time source, forwarded to the verifier
        """
        self.return_url = return_url
        self.verification_client = verification_client or VerificationClient()
        self.steam_api = steam_api
        self.on_error = on_error
        self._clock = clock

    def get_login_url(self, return_url: Optional[str] = None) -> str:
        """Generate the Steam login URL.

        Raises:
            ConfigurationError: No return URL given or configured
        """
        try:
            return build_auth_url(return_url or self.return_url)
        except Exception as e:
            self._handle_error(e)
            raise

    def is_callback(self, params: Mapping[str, str]) -> bool:
        """Return True if Steam sent the user back with an assertion."""
        return params.get("openid.mode") == MODE_ID_RES

    async def authenticate(self, params: Mapping[str, str]) -> UserIdentity:
        """Verify a Steam callback and return the user identity.

        Args:
            params: Callback query parameters

        Returns:
            UserIdentity keyed by SteamID

        Raises:
            OpenIDError: If the assertion is rejected or Steam is unreachable
            ProfileLookupError: If the profile lookup fails
        """
        try:
            verifier = OpenIDVerifier(
                self.return_url,
                params,
                verification_client=self.verification_client,
                clock=self._clock
            )
            steam_id = await verifier.validate()
            return await self._build_identity(steam_id)
        except Exception as e:
            self._handle_error(e)
            raise

    async def _build_identity(self, steam_id: str) -> UserIdentity:
        """Map a verified SteamID (and its profile, if available) to UserIdentity."""
        if self.steam_api is None:
            return UserIdentity(
                user_id=steam_id,
                username=steam_id,
                display_name=steam_id,
                profile_url=f"https://steamcommunity.com/profiles/{steam_id}/",
                provider="steam",
            )

        player = await self.steam_api.get_player_summary(steam_id)
        return UserIdentity(
            user_id=steam_id,
            username=player.persona_name,
            display_name=player.real_name or player.persona_name,
            avatar_url=player.avatar_full or None,
            profile_url=player.profile_url or None,
            provider="steam",
            metadata={"player": player.to_dict()}
        )

    def _handle_error(self, error: Exception) -> None:
        logger.warning(f"Steam authentication failed: {error.__class__.__name__}: {error}")
        if self.on_error is not None:
            self.on_error(error)
