"""Steam Web API Client

Looks up the public profile for a verified SteamID via
ISteamUser/GetPlayerSummaries. Requires a Steam Web API key.
"""

import logging
from typing import Optional

import httpx

from steam_auth_service.core.openid.errors import NetworkError, RateLimitedError
from steam_auth_service.domain.models.player import PlayerSummary

logger = logging.getLogger(__name__)

STEAM_API_BASE_URL = "https://api.steampowered.com"


class SteamWebAPIClient:
    """Async Steam Web API client"""

    def __init__(
        self,
        api_key: str,
        base_url: str = STEAM_API_BASE_URL,
        timeout: float = 10.0,
        proxy: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize Steam Web API client

        Args:
            api_key: Steam Web API key
            base_url: API root, without trailing slash
            timeout: Request timeout in seconds
            proxy: Optional proxy URL
            transport: Optional httpx transport (tests, custom routing)
        """
        if not api_key:
            raise ValueError("Steam Web API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.proxy = proxy
        self.transport = transport

    async def get_player_summary(self, steam_id: str) -> PlayerSummary:
        """Fetch the profile of one player

        Args:
            steam_id: 64-bit SteamID

        Returns:
            PlayerSummary for the player

        Raises:
            PlayerNotFoundError: Steam returned no player for this id
            RateLimitedError: Steam answered 403 or 429
            ProfileLookupError: Any other non-2xx answer, or a body that is not
                a player summary
            NetworkError: No response received
        """
        url = f"{self.base_url}/ISteamUser/GetPlayerSummaries/v2/"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                proxy=self.proxy,
                transport=self.transport
            ) as client:
                response = await client.get(
                    url,
                    params={"key": self.api_key, "steamids": steam_id}
                )
        except httpx.RequestError as e:
            logger.warning(f"Steam Web API request failed: {e!r}")
            raise NetworkError(f"Could not reach Steam Web API: {e}") from e

        if response.status_code in (403, 429):
            raise RateLimitedError(response.status_code)
        if not response.is_success:
            logger.error(f"Steam player summary lookup failed: HTTP {response.status_code}")
            raise ProfileLookupError(response.status_code)

        try:
            players = response.json().get("response", {}).get("players", [])
            player = PlayerSummary.from_dict(players[0]) if players else None
        except (ValueError, AttributeError, KeyError, TypeError) as e:
            logger.error(f"Steam player summary response is malformed: {e!r}")
            raise ProfileLookupError(response.status_code) from e

        if player is None:
            raise PlayerNotFoundError(steam_id)

        logger.debug(f"Loaded player summary for {steam_id}")
        return player


class ProfileLookupError(Exception):
    """Steam Web API answered with an error status or an unreadable body."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Steam player summary request failed (HTTP {status_code}).")


class PlayerNotFoundError(Exception):
    """No player exists for the SteamID."""

    def __init__(self, steam_id: str):
        self.steam_id = steam_id
        super().__init__(f"No Steam player found for SteamID {steam_id}.")
