"""Fixed Steam OpenID 2.0 protocol values.

Steam does not negotiate: the endpoint, namespace, signed field list and
identity URL shape are the same for every login. They are kept here as
immutable values and grouped into SteamOpenIDConfig for the verifier.
"""

import re
from dataclasses import dataclass

OPENID_NS = "http://specs.openid.net/auth/2.0"
IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"

STEAM_LOGIN_ENDPOINT = "https://steamcommunity.com/openid/login"

MODE_CHECKID_SETUP = "checkid_setup"
MODE_ID_RES = "id_res"
MODE_CHECK_AUTHENTICATION = "check_authentication"

# Order matters: Steam always signs these fields in exactly this order
SIGNED_FIELDS = (
    "signed",
    "op_endpoint",
    "claimed_id",
    "identity",
    "return_to",
    "response_nonce",
    "assoc_handle",
)
EXPECTED_SIGNED = ",".join(SIGNED_FIELDS)

# Required on every callback but not part of the signed list
UNSIGNED_REQUIRED_FIELDS = ("mode", "sig", "ns")

STEAM_ID_PATTERN = re.compile(
    r"https://steamcommunity\.com/openid/id/(76561[0-9]{12})/?"
)
NONCE_TIMESTAMP_PATTERN = re.compile(
    r"([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z)"
)
NONCE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NONCE_TOLERANCE_MS = 300_000

USER_AGENT = "Python-SteamOpenID/1.0.0"


def openid_key(name: str) -> str:
    """Return the namespaced query parameter name for a field."""
    return f"openid.{name}"


@dataclass(frozen=True)
class SteamOpenIDConfig:
    """Provider constants owned by an OpenIDVerifier."""

    endpoint: str = STEAM_LOGIN_ENDPOINT
    namespace: str = OPENID_NS
    signed_fields: tuple[str, ...] = SIGNED_FIELDS
    identity_pattern: re.Pattern = STEAM_ID_PATTERN
    nonce_tolerance_ms: int = NONCE_TOLERANCE_MS

    @property
    def expected_signed(self) -> str:
        return ",".join(self.signed_fields)


DEFAULT_CONFIG = SteamOpenIDConfig()
