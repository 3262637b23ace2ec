"""Response nonce freshness check.

Steam nonces look like ``2024-05-01T12:00:00Zabc123``: an RFC3339 UTC
timestamp followed by provider-chosen characters. Without a nonce store
the only replay protection available is a bound on the timestamp, so a
nonce is accepted when it lies within the tolerance window of the
current time in either direction.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from .constants import NONCE_TIMESTAMP_FORMAT, NONCE_TIMESTAMP_PATTERN, NONCE_TOLERANCE_MS
from .errors import InvalidNonceFormatError, StaleNonceError

logger = logging.getLogger(__name__)


def parse_nonce_timestamp(nonce: Optional[str]) -> datetime:
    """Return the UTC instant a nonce was issued at.

    Raises:
        InvalidNonceFormatError: No timestamp prefix, or it is not a real date
    """
    match = NONCE_TIMESTAMP_PATTERN.match(nonce or "")
    if not match:
        raise InvalidNonceFormatError(nonce)

    try:
        issued = datetime.strptime(match.group(1), NONCE_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidNonceFormatError(nonce) from e

    return issued.replace(tzinfo=timezone.utc)


def validate_nonce(
    nonce: Optional[str],
    now: Optional[datetime] = None,
    tolerance_ms: int = NONCE_TOLERANCE_MS
) -> datetime:
    """Check that a response nonce is well-formed and fresh.

    Args:
        nonce: openid.response_nonce value
        now: Current time (timezone-aware), defaults to the system clock
        tolerance_ms: Accepted skew in milliseconds, inclusive

    Returns:
        The nonce's issue time

    Raises:
        InvalidNonceFormatError: Nonce does not start with a valid timestamp
        StaleNonceError: Timestamp is outside the tolerance window
    """
    issued = parse_nonce_timestamp(nonce)
    if now is None:
        now = datetime.now(timezone.utc)

    skew = abs(now - issued)
    if skew > timedelta(milliseconds=tolerance_ms):
        skew_ms = skew // timedelta(milliseconds=1)
        logger.warning(f"Rejecting nonce issued at {issued.isoformat()}: skew {skew_ms} ms")
        raise StaleNonceError(nonce, skew_ms, tolerance_ms)

    return issued
