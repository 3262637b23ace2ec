"""SteamID extraction from the asserted identity URL."""

import re
from typing import Optional

from .constants import STEAM_ID_PATTERN
from .errors import InvalidIdentityFormatError


def extract_steam_id(identity: Optional[str], pattern: re.Pattern = STEAM_ID_PATTERN) -> str:
    """Return the 64-bit SteamID embedded in an openid.identity URL.

    ``https://steamcommunity.com/openid/id/76561198000000000/`` yields
    ``76561198000000000``. The trailing slash is optional.

    Raises:
        InvalidIdentityFormatError: URL is not a Steam identity URL
    """
    match = pattern.fullmatch(identity or "")
    if not match:
        raise InvalidIdentityFormatError(identity)
    return match.group(1)
