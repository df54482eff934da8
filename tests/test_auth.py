"""
Tests for the login bootstrap and the authenticated session.
"""

import httpx
import pytest

from adapters.auth import LOGIN_PATH, BearerAuth, bootstrap, login
from adapters.http_client import USER_AGENT, build_client
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, BASE_URL, TOKEN
from core.domain.models import Credentials
from core.errors import AuthError


def _credentials(password: str = ADMIN_PASSWORD) -> Credentials:
    return Credentials(base_url=BASE_URL, identity=ADMIN_EMAIL, secret=password)


class TestLogin:
    def test_login_returns_token(self, settings, mock_transport, fake):
        client = build_client(settings, base_url=BASE_URL, transport=mock_transport)

        assert login(client, _credentials()) == TOKEN
        assert fake.bodies("POST", LOGIN_PATH) == [{"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}]

    def test_login_request_has_no_authorization(self, settings, mock_transport, fake):
        client = build_client(settings, base_url=BASE_URL, transport=mock_transport)
        login(client, _credentials())

        request = fake.requests[0]
        assert "Authorization" not in request.headers
        assert request.headers["User-Agent"] == USER_AGENT

    def test_bad_credentials(self, settings, mock_transport):
        client = build_client(settings, base_url=BASE_URL, transport=mock_transport)

        with pytest.raises(AuthError) as info:
            login(client, _credentials("wrong"))

        assert info.value.summary == "Unable to Login to Medusa API"
        assert info.value.detail == "login failed: 401 Unauthorized"

    def test_missing_token(self, settings, mock_transport, fake):
        fake.fail("POST", LOGIN_PATH, 200, {"user": {"id": "usr_1"}})
        client = build_client(settings, base_url=BASE_URL, transport=mock_transport)

        with pytest.raises(AuthError, match="no access_token"):
            login(client, _credentials())

    def test_non_json_response(self, settings, mock_transport, fake):
        fake.fail("POST", LOGIN_PATH, 200, "<html>maintenance</html>")
        client = build_client(settings, base_url=BASE_URL, transport=mock_transport)

        with pytest.raises(AuthError, match="not JSON"):
            login(client, _credentials())

    def test_transport_error(self, settings):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = build_client(settings, base_url=BASE_URL, transport=httpx.MockTransport(refuse))

        with pytest.raises(AuthError, match="connection refused"):
            login(client, _credentials())


class TestBootstrap:
    def test_session_sends_bearer_token(self, settings, mock_transport, fake):
        session = bootstrap(_credentials(), transport=mock_transport, settings=settings)

        response = session.api.call("GET", "/admin/store")

        assert response.status_code == 200
        assert fake.requests[-1].headers["Authorization"] == f"Bearer {TOKEN}"
        session.close()

    def test_token_is_hidden_from_repr(self, settings, mock_transport):
        session = bootstrap(_credentials(), transport=mock_transport, settings=settings)

        assert TOKEN not in repr(session)
        assert session.base_url == BASE_URL
        session.close()

    def test_failed_login_yields_no_session(self, settings, mock_transport, fake):
        with pytest.raises(AuthError):
            bootstrap(_credentials("wrong"), transport=mock_transport, settings=settings)

        assert [r.url.path for r in fake.requests] == [LOGIN_PATH]


def test_bearer_auth_sets_header():
    request = httpx.Request("GET", f"{BASE_URL}/admin/regions")
    flow = BearerAuth("abc").auth_flow(request)

    assert next(flow).headers["Authorization"] == "Bearer abc"
