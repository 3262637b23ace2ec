"""Stateless Steam OpenID 2.0 protocol engine.

- request: build the Steam login redirect
- arguments, nonce, identity: validate the callback
- verification: confirm the assertion with Steam (check_authentication)
- verifier: OpenIDVerifier ties the steps together
"""

from .arguments import validate_arguments
from .constants import OPENID_NS, STEAM_LOGIN_ENDPOINT, SteamOpenIDConfig
from .errors import (
    AssertionRejectedError,
    ConfigurationError,
    InvalidEndpointError,
    InvalidIdentityFormatError,
    InvalidModeError,
    InvalidNamespaceError,
    InvalidNonceFormatError,
    InvalidReturnToError,
    InvalidSignedFieldsError,
    MissingParameterError,
    NetworkError,
    OpenIDError,
    ProviderUnavailableError,
    RateLimitedError,
    StaleNonceError,
    VerificationRejectedError,
    VerificationTransportError,
)
from .identity import extract_steam_id
from .kvform import parse_key_values
from .nonce import validate_nonce
from .request import build_auth_url
from .verification import VerificationClient
from .verifier import OpenIDVerifier, parse_callback_parameters

__all__ = [
    # Engine
    "OpenIDVerifier",
    "VerificationClient",
    "SteamOpenIDConfig",
    "build_auth_url",
    "parse_callback_parameters",
    "validate_arguments",
    "validate_nonce",
    "extract_steam_id",
    "parse_key_values",
    "OPENID_NS",
    "STEAM_LOGIN_ENDPOINT",
    # Errors
    "OpenIDError",
    "ConfigurationError",
    "AssertionRejectedError",
    "MissingParameterError",
    "InvalidModeError",
    "InvalidNamespaceError",
    "InvalidSignedFieldsError",
    "InvalidEndpointError",
    "InvalidReturnToError",
    "InvalidNonceFormatError",
    "StaleNonceError",
    "InvalidIdentityFormatError",
    "VerificationRejectedError",
    "ProviderUnavailableError",
    "NetworkError",
    "RateLimitedError",
    "VerificationTransportError",
]
