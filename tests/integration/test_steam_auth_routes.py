"""
Integration tests for Steam authentication endpoints.

The app runs in-process over httpx.ASGITransport; Steam is a MockTransport.
"""

from datetime import datetime, timezone
from typing import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlsplit

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from steam_auth_service.core.auth import get_auth_provider
from steam_auth_service.core.auth.steam import SteamAuthProvider
from steam_auth_service.core.openid import OPENID_NS, VerificationClient
from steam_auth_service.main import app

pytestmark = pytest.mark.integration

RETURN_URL = "http://test/api/v1/auth/steam/callback"
IDENTITY = "https://steamcommunity.com/openid/id/76561198000000001"


def callback_query(**overrides) -> str:
    params = {
        "openid.ns": OPENID_NS,
        "openid.mode": "id_res",
        "openid.op_endpoint": "https://steamcommunity.com/openid/login",
        "openid.claimed_id": IDENTITY,
        "openid.identity": IDENTITY,
        "openid.return_to": RETURN_URL,
        "openid.response_nonce": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ") + "xyz",
        "openid.assoc_handle": "h",
        "openid.signed": "signed,op_endpoint,claimed_id,identity,return_to,response_nonce,assoc_handle",
        "openid.sig": "s",
    }
    params.update({f"openid.{k}": v for k, v in overrides.items()})
    return urlencode(params)


@pytest.fixture
def make_client(steam_transport):
    """Create test HTTP client whose Steam provider talks to a mock Steam."""

    async def _make(steam_status: int = 200, steam_body: str = f"is_valid:true\nns:{OPENID_NS}\n",
                    return_url: str = RETURN_URL) -> AsyncClient:
        provider = SteamAuthProvider(
            return_url=return_url,
            verification_client=VerificationClient(transport=steam_transport(steam_status, steam_body)),
        )
        app.dependency_overrides[get_auth_provider] = lambda: provider
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def client(make_client) -> AsyncGenerator[AsyncClient, None]:
    ac = await make_client()
    async with ac:
        yield ac


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


class TestServiceEndpoints:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_config(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/config")

        assert response.status_code == 200
        data = response.json()
        assert data["provider"] == "steam"
        assert data["login_url"].startswith("https://steamcommunity.com/openid/login?")
        assert data["features"]["loads_profile"] is False


class TestLoginEndpoint:
    """Test GET /api/v1/auth/steam/login"""

    @pytest.mark.asyncio
    async def test_redirects_to_steam(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/steam/login")

        assert response.status_code == 307
        location = urlsplit(response.headers["location"])
        assert location.netloc == "steamcommunity.com"
        assert parse_qs(location.query)["openid.return_to"] == [RETURN_URL]

    @pytest.mark.asyncio
    async def test_unconfigured_return_url(self, make_client):
        async with await make_client(return_url=None) as ac:
            response = await ac.get("/api/v1/auth/steam/login")

        assert response.status_code == 500
        assert response.json()["detail"] == "Steam login is not configured"


class TestCallbackEndpoint:
    """Test GET /api/v1/auth/steam/callback"""

    @pytest.mark.asyncio
    async def test_successful_login(self, client: AsyncClient):
        response = await client.get(f"/api/v1/auth/steam/callback?{callback_query()}")

        assert response.status_code == 200
        data = response.json()
        assert data["steam_id"] == "76561198000000001"
        assert data["user"]["provider"] == "steam"

    @pytest.mark.asyncio
    async def test_without_assertion_redirects_to_steam(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/steam/callback")

        assert response.status_code == 307
        assert response.headers["location"].startswith("https://steamcommunity.com/openid/login?")

    @pytest.mark.asyncio
    async def test_cancelled_login_redirects_to_steam(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/steam/callback?openid.mode=cancel")

        assert response.status_code == 307

    @pytest.mark.asyncio
    async def test_forged_endpoint_is_unauthorized(self, client: AsyncClient):
        query = callback_query(op_endpoint="https://evil.example/openid/login")

        response = await client.get(f"/api/v1/auth/steam/callback?{query}")

        assert response.status_code == 401
        assert response.json()["detail"] == "Steam login failed"

    @pytest.mark.asyncio
    async def test_stale_nonce_is_unauthorized(self, client: AsyncClient):
        query = callback_query(response_nonce="2020-01-01T00:00:00Zxyz")

        response = await client.get(f"/api/v1/auth/steam/callback?{query}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_steam_rejection_is_unauthorized(self, make_client):
        async with await make_client(steam_body=f"is_valid:false\nns:{OPENID_NS}\n") as ac:
            response = await ac.get(f"/api/v1/auth/steam/callback?{callback_query()}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_steam_rate_limit(self, make_client):
        async with await make_client(steam_status=429, steam_body="") as ac:
            response = await ac.get(f"/api/v1/auth/steam/callback?{callback_query()}")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_steam_server_error(self, make_client):
        async with await make_client(steam_status=500, steam_body="") as ac:
            response = await ac.get(f"/api/v1/auth/steam/callback?{callback_query()}")

        assert response.status_code == 502
