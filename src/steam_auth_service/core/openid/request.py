"""Steam login redirect construction."""

from urllib.parse import urlencode

from .constants import IDENTIFIER_SELECT, MODE_CHECKID_SETUP, OPENID_NS, STEAM_LOGIN_ENDPOINT
from .errors import ConfigurationError


def build_auth_url(return_url: str, endpoint: str = STEAM_LOGIN_ENDPOINT) -> str:
    """Build the URL that sends the user to Steam's login page.

    Steam picks the account (identifier_select), so identity and
    claimed_id both carry the sentinel URI rather than a user id.

    Args:
        return_url: Where Steam redirects back to, passed through unmodified

    Returns:
        Endpoint URL with the five checkid_setup parameters

    Raises:
        ConfigurationError: return_url is empty
    """
    if not return_url:
        raise ConfigurationError("A return URL is required to build the Steam login URL.")

    params = {
        "openid.ns": OPENID_NS,
        "openid.mode": MODE_CHECKID_SETUP,
        "openid.return_to": return_url,
        "openid.identity": IDENTIFIER_SELECT,
        "openid.claimed_id": IDENTIFIER_SELECT,
    }
    return f"{endpoint}?{urlencode(params)}"
