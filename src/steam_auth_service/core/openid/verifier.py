"""Steam OpenID 2.0 relying party.

A correct and simple, stateless implementation of "Sign in through
Steam". One OpenIDVerifier handles one incoming request:

    verifier = OpenIDVerifier.from_url(return_url, str(request.url))
    if not verifier.should_validate():
        return redirect(verifier.get_auth_url())
    steam_id = await verifier.validate()

validate() checks, in order: required arguments, op_endpoint, return_to,
response nonce, identity URL, and finally Steam's own confirmation via
check_authentication. The first failing check raises.
"""

import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Mapping, Optional
from urllib.parse import parse_qsl, urlsplit

from .arguments import validate_arguments
from .constants import DEFAULT_CONFIG, MODE_ID_RES, SteamOpenIDConfig
from .errors import ConfigurationError, InvalidEndpointError, InvalidReturnToError
from .identity import extract_steam_id
from .nonce import validate_nonce
from .request import build_auth_url
from .verification import VerificationClient

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_callback_parameters(url: str) -> Mapping[str, str]:
    """Read the query string of a request URL into an immutable mapping.

    Repeated names keep their first value.
    """
    params: dict[str, str] = {}
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        params.setdefault(key, value)
    return MappingProxyType(params)


class OpenIDVerifier:
    """Validates one Steam OpenID callback, or starts a new login."""

    def __init__(
        self,
        return_url: str,
        params: Optional[Mapping[str, str]],
        *,
        verification_client: Optional[VerificationClient] = None,
        clock: Optional[Callable[[], datetime]] = None,
        config: SteamOpenIDConfig = DEFAULT_CONFIG
    ):
        """Initialize verifier.

        Args:
            return_url: URL Steam returns to; openid.return_to must start with it
            params: Query parameters of the incoming request
            verification_client: Client for the check_authentication call
            clock: Returns the current timezone-aware time (for nonce checks)
            config: Provider constants

        Raises:
            ConfigurationError: return_url or params missing
        """
        if not return_url or params is None:
            raise ConfigurationError("Both a return URL and the request parameters are required.")

        self.return_url = return_url
        self.params = MappingProxyType(dict(params))
        self.config = config
        self.verification_client = verification_client or VerificationClient(
            endpoint=config.endpoint,
            namespace=config.namespace
        )
        self._clock = clock or _utcnow

    @classmethod
    def from_url(cls, return_url: str, url: str, **kwargs) -> "OpenIDVerifier":
        """Create a verifier for the request at ``url``."""
        if not url:
            raise ConfigurationError("Both a return URL and the request URL are required.")
        return cls(return_url, parse_callback_parameters(url), **kwargs)

    def should_validate(self) -> bool:
        """Return True when the request is a positive assertion from Steam.

        This only selects the path (validate vs. redirect); it says nothing
        about whether the assertion is genuine.
        """
        return self.params.get("openid.mode") == MODE_ID_RES

    def get_auth_url(self) -> str:
        """Return the Steam login URL to redirect the user to."""
        return build_auth_url(self.return_url, endpoint=self.config.endpoint)

    async def validate(self) -> str:
        """Validate the callback and return the user's 64-bit SteamID.

        Raises:
            AssertionRejectedError: Any check failed or Steam said no
            ProviderUnavailableError: Steam could not be asked
        """
        args = validate_arguments(self.params, self.config)

        # The assertion must come from Steam and be addressed to us
        if args["openid.op_endpoint"] != self.config.endpoint:
            raise InvalidEndpointError(self.config.endpoint, args["openid.op_endpoint"])
        if not args["openid.return_to"].startswith(self.return_url):
            raise InvalidReturnToError(self.return_url, args["openid.return_to"])

        validate_nonce(
            args["openid.response_nonce"],
            now=self._clock(),
            tolerance_ms=self.config.nonce_tolerance_ms
        )

        steam_id = extract_steam_id(args["openid.identity"], self.config.identity_pattern)

        await self.verification_client.verify(args)

        logger.info(f"Steam login verified for SteamID {steam_id}")
        return steam_id
