"""Unit tests for the Steam login redirect"""

from urllib.parse import parse_qs, urlsplit

import pytest

from steam_auth_service.core.openid import ConfigurationError, build_auth_url

pytestmark = pytest.mark.unit

RETURN_URL = "https://example.com/auth/callback"
IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"


def test_auth_url_targets_steam_login():
    parts = urlsplit(build_auth_url(RETURN_URL))

    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://steamcommunity.com/openid/login"


def test_auth_url_has_exactly_five_parameters():
    query = parse_qs(urlsplit(build_auth_url(RETURN_URL)).query)

    assert query == {
        "openid.ns": ["http://specs.openid.net/auth/2.0"],
        "openid.mode": ["checkid_setup"],
        "openid.return_to": [RETURN_URL],
        "openid.identity": [IDENTIFIER_SELECT],
        "openid.claimed_id": [IDENTIFIER_SELECT],
    }


def test_return_url_with_query_is_passed_through_unmodified():
    return_url = "https://example.com/auth/callback?next=%2Fdashboard&x=1"

    query = parse_qs(urlsplit(build_auth_url(return_url)).query)

    assert query["openid.return_to"] == [return_url]


def test_auth_url_is_deterministic():
    assert build_auth_url(RETURN_URL) == build_auth_url(RETURN_URL)


@pytest.mark.parametrize("return_url", ["", None])
def test_missing_return_url(return_url):
    with pytest.raises(ConfigurationError):
        build_auth_url(return_url)
