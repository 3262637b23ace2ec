"""Stateless check_authentication round trip with Steam.

No association secret is kept, so every assertion is confirmed by posting
it back to Steam with ``openid.mode=check_authentication`` and reading
Steam's ``is_valid`` verdict.
"""

import logging
from typing import Mapping, Optional

import httpx

from .constants import MODE_CHECK_AUTHENTICATION, OPENID_NS, STEAM_LOGIN_ENDPOINT, USER_AGENT
from .errors import NetworkError, RateLimitedError, VerificationRejectedError, VerificationTransportError
from .kvform import parse_key_values

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES = (403, 429)


class VerificationClient:
    """Posts assertions back to Steam for confirmation.

    The HTTP transport is injectable: pass an ``httpx.MockTransport`` in
    tests, or any ``httpx.AsyncBaseTransport`` to route requests through
    custom infrastructure. ``proxy`` is forwarded to httpx unchanged.

    Example:
        client = VerificationClient(timeout=5.0)
        response = await client.verify(validated_args)
    """

    def __init__(
        self,
        endpoint: str = STEAM_LOGIN_ENDPOINT,
        namespace: str = OPENID_NS,
        user_agent: str = USER_AGENT,
        timeout: float = 10.0,
        proxy: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize verification client.

        Args:
            endpoint: Steam OpenID login endpoint
            namespace: Namespace Steam must echo back
            user_agent: User-Agent header sent with each request
            timeout: Request timeout in seconds
            proxy: Optional proxy URL
            transport: Optional httpx transport replacing the network
        """
        self.endpoint = endpoint
        self.namespace = namespace
        self.user_agent = user_agent
        self.timeout = timeout
        self.proxy = proxy
        self.transport = transport

    def build_request_body(self, args: Mapping[str, str]) -> dict[str, str]:
        """Copy the validated arguments, switching the mode to check_authentication."""
        body = dict(args)
        body["openid.mode"] = MODE_CHECK_AUTHENTICATION
        return body

    async def send(self, body: Mapping[str, str]) -> str:
        """POST a verification request and return the raw response text.

        Raises:
            RateLimitedError: Steam answered 403 or 429
            VerificationTransportError: Steam answered any other non-2xx status
            NetworkError: No response was received
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                proxy=self.proxy,
                transport=self.transport
            ) as client:
                response = await client.post(
                    self.endpoint,
                    data=dict(body),
                    headers={
                        "Content-Type": "application/x-www-form-urlencoded",
                        "User-Agent": self.user_agent,
                    }
                )
        except httpx.RequestError as e:
            logger.warning(f"Steam verification request failed: {e!r}")
            raise NetworkError(f"Could not reach Steam: {e}") from e

        if not response.is_success:
            logger.warning(f"Steam verification returned HTTP {response.status_code}")
            if response.status_code in RATE_LIMIT_STATUSES:
                raise RateLimitedError(response.status_code)
            raise VerificationTransportError(response.status_code)

        return response.text

    async def verify(self, args: Mapping[str, str]) -> dict[str, str]:
        """Ask Steam to confirm a validated assertion.

        Args:
            args: Output of validate_arguments

        Returns:
            Parsed key-value response

        Raises:
            VerificationRejectedError: Steam did not answer is_valid:true
                under the OpenID 2.0 namespace
            ProviderUnavailableError: See send()
        """
        body = self.build_request_body(args)
        response = parse_key_values(await self.send(body))

        if response.get("is_valid") != "true" or response.get("ns") != self.namespace:
            logger.warning(
                f"Steam rejected assertion: is_valid={response.get('is_valid')!r}, "
                f"ns={response.get('ns')!r}"
            )
            raise VerificationRejectedError(response)

        return response
