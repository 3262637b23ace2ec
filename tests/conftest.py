"""
Pytest configuration and fixtures for Steam OpenID tests.

Provides fixtures for:
- A fixed clock for nonce checks
- Callback parameters as Steam would send them
- Mock Steam endpoints (httpx.MockTransport)
"""

from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import parse_qsl

import httpx
import pytest

from steam_auth_service.core.openid import OPENID_NS, STEAM_LOGIN_ENDPOINT
from steam_auth_service.core.openid.constants import EXPECTED_SIGNED

RETURN_URL = "https://example.com/auth/callback"
STEAM_ID = "76561198000000001"
FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

VALID_BODY = f"is_valid:true\nns:{OPENID_NS}\n"


def identity_url(steam_id: str = STEAM_ID) -> str:
    return f"https://steamcommunity.com/openid/id/{steam_id}"


def nonce_for(issued: datetime, suffix: str = "xyz") -> str:
    return issued.strftime("%Y-%m-%dT%H:%M:%SZ") + suffix


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock frozen at FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def make_callback_params() -> Callable[..., dict]:
    """Factory for id_res callback parameters signed the way Steam signs them"""

    def _make(
        steam_id: str = STEAM_ID,
        issued: datetime = FIXED_NOW,
        **overrides: Optional[str]
    ) -> dict:
        params = {
            "openid.ns": OPENID_NS,
            "openid.mode": "id_res",
            "openid.op_endpoint": STEAM_LOGIN_ENDPOINT,
            "openid.claimed_id": identity_url(steam_id),
            "openid.identity": identity_url(steam_id),
            "openid.return_to": RETURN_URL,
            "openid.response_nonce": nonce_for(issued),
            "openid.assoc_handle": "h",
            "openid.signed": EXPECTED_SIGNED,
            "openid.sig": "s",
        }
        for name, value in overrides.items():
            key = f"openid.{name}"
            if value is None:
                params.pop(key, None)
            else:
                params[key] = value
        return params

    return _make


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served"""

    def __init__(self, status_code: int = 200, text: str = VALID_BODY, json: Optional[dict] = None):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if json is not None:
                return httpx.Response(status_code, json=json)
            return httpx.Response(status_code, text=text)

        super().__init__(handler)

    def form(self, index: int = -1) -> list[tuple[str, str]]:
        """Decoded form body of a recorded request"""
        return parse_qsl(self.requests[index].content.decode())


@pytest.fixture
def steam_transport() -> Callable[..., RecordingTransport]:
    """Factory for a mock Steam endpoint"""
    return RecordingTransport


@pytest.fixture
def failing_transport() -> httpx.MockTransport:
    """Transport that never gets a response"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)
