"""Steam OpenID error taxonomy.

Every failure raised by the protocol engine is an OpenIDError. Callers
usually care about three groups:

- ConfigurationError: the relying party is misconfigured
- AssertionRejectedError: the callback (or Steam's verdict on it) is not
  acceptable, the login must be refused
- ProviderUnavailableError: Steam could not be asked, the login may be
  retried later
"""

from typing import Optional


class OpenIDError(Exception):
    """Base class for Steam OpenID failures."""
    pass


class ConfigurationError(OpenIDError):
    """Return URL or request context is missing."""
    pass


# ============================================================================
# Callback rejected
# ============================================================================

class AssertionRejectedError(OpenIDError):
    """The provider callback failed validation."""
    pass


class MissingParameterError(AssertionRejectedError):
    """A required openid.* parameter is absent or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Missing required OpenID parameter: "{field}".')


class _UnexpectedValueError(AssertionRejectedError):
    field = ""

    def __init__(self, expected: str, actual: Optional[str]):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Invalid "{self.field}": expected {expected!r}, got {actual!r}.'
        )


class InvalidModeError(_UnexpectedValueError):
    field = "openid.mode"


class InvalidNamespaceError(_UnexpectedValueError):
    field = "openid.ns"


class InvalidSignedFieldsError(_UnexpectedValueError):
    field = "openid.signed"


class InvalidEndpointError(_UnexpectedValueError):
    field = "openid.op_endpoint"


class InvalidReturnToError(AssertionRejectedError):
    """openid.return_to does not start with the configured return URL."""

    def __init__(self, expected_prefix: str, actual: Optional[str]):
        self.expected = expected_prefix
        self.actual = actual
        super().__init__(
            f'Invalid "openid.return_to": {actual!r} does not start with {expected_prefix!r}.'
        )


class InvalidNonceFormatError(AssertionRejectedError):
    """openid.response_nonce does not start with a valid RFC3339 timestamp."""

    def __init__(self, nonce: Optional[str]):
        self.nonce = nonce
        super().__init__(f'Invalid "openid.response_nonce" format: {nonce!r}.')


class StaleNonceError(AssertionRejectedError):
    """Nonce timestamp lies outside the accepted clock window."""

    def __init__(self, nonce: str, skew_ms: int, tolerance_ms: int):
        self.nonce = nonce
        self.skew_ms = skew_ms
        self.tolerance_ms = tolerance_ms
        super().__init__(
            f"Nonce timestamp is too old or too far in the future "
            f"(skew {skew_ms} ms, tolerance {tolerance_ms} ms)."
        )


class InvalidIdentityFormatError(AssertionRejectedError):
    """openid.identity is not a Steam community identity URL."""

    def __init__(self, identity: Optional[str]):
        self.identity = identity
        super().__init__(f'Invalid "openid.identity": {identity!r}.')


class VerificationRejectedError(AssertionRejectedError):
    """Steam did not confirm the assertion during check_authentication."""

    def __init__(self, response: dict[str, str]):
        self.response = response
        super().__init__(
            "Failed to validate login with Steam: "
            f"is_valid={response.get('is_valid')!r}, ns={response.get('ns')!r}."
        )


# ============================================================================
# Provider unavailable
# ============================================================================

class ProviderUnavailableError(OpenIDError):
    """Steam could not be reached or refused to answer."""
    pass


class NetworkError(ProviderUnavailableError):
    """No HTTP response was received (connection failure, timeout)."""
    pass


class RateLimitedError(ProviderUnavailableError):
    """Steam answered 403 or 429."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(
            f"Steam endpoint is rate-limited (HTTP {status_code}). Please try again later."
        )


class VerificationTransportError(ProviderUnavailableError):
    """Steam answered check_authentication with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Steam verification request failed with HTTP {status_code}.")
