"""
Tests for the session HTTP endpoints.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.routes import session as session_routes
from browser_broker.broker import SessionBroker
from browser_broker.browser.browserbase_api import BrowserbaseAPIError
from browser_broker.browser.views import SessionDebugInfo, SessionHandle
from browser_broker.config import settings
from browser_broker.edge_config import EdgeConfigError
from browser_broker.regions import Region

SESSION_URL = f"{settings.api_prefix}/session"


@pytest.fixture
def provider():
    provider = MagicMock()
    provider.create_session = AsyncMock(return_value=SessionHandle(
        id="sess_123",
        connect_url="wss://connect.browserbase.com?sessionId=sess_123",
    ))
    provider.update_session = AsyncMock(return_value=None)
    provider.debug_session = AsyncMock(return_value=SessionDebugInfo(
        debugger_fullscreen_url="https://www.browserbase.com/devtools-fullscreen/sess_123",
    ))
    return provider


@pytest.fixture
def config_source():
    source = MagicMock()
    source.fetch_all = AsyncMock(side_effect=EdgeConfigError("EDGE_CONFIG is not set"))
    return source


@pytest.fixture
def client(provider, config_source, fixed_random):
    session_routes.set_session_broker(SessionBroker(provider, config_source, rng=fixed_random(0.5)))
    yield TestClient(app)
    session_routes.set_session_broker(None)


class TestCreateSessionRoute:

    def test_success_payload(self, client, provider):
        response = client.post(SESSION_URL, json={"timezone": "JST"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "sessionId": "sess_123",
            "sessionUrl": "https://www.browserbase.com/devtools-fullscreen/sess_123",
            "connectUrl": "wss://connect.browserbase.com?sessionId=sess_123",
        }
        assert provider.create_session.await_args.args[0].region is Region.AP_SOUTHEAST_1

    def test_missing_timezone_uses_default_region(self, client, provider):
        response = client.post(SESSION_URL, json={})
        assert response.status_code == 200
        assert provider.create_session.await_args.args[0].region is Region.US_WEST_2

    def test_missing_body_uses_default_region(self, client, provider):
        response = client.post(SESSION_URL)
        assert response.status_code == 200
        assert provider.create_session.await_args.args[0].region is Region.US_WEST_2

    def test_non_string_timezone_uses_default_region(self, client, provider):
        response = client.post(SESSION_URL, json={"timezone": 123})
        assert response.status_code == 200
        assert provider.create_session.await_args.args[0].region is Region.US_WEST_2

    def test_invalid_json_returns_generic_error(self, client, provider):
        response = client.post(
            SESSION_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to create session"}
        provider.create_session.assert_not_awaited()

    @pytest.mark.parametrize("body", [b"[]", b'"PST"', b"null", b"42", b'["JST"]'])
    def test_non_object_body_uses_default_region(self, client, provider, body):
        response = client.post(SESSION_URL, content=body, headers={"Content-Type": "application/json"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert provider.create_session.await_args.args[0].region is Region.US_WEST_2

    def test_extra_body_fields_are_ignored(self, client, provider):
        response = client.post(SESSION_URL, json={"timezone": "CET", "locale": "de-DE"})
        assert response.status_code == 200
        assert provider.create_session.await_args.args[0].region is Region.EU_CENTRAL_1

    def test_unavailable_config_still_succeeds(self, client, provider):
        response = client.post(SESSION_URL, json={"timezone": "EST"})

        assert response.status_code == 200
        params = provider.create_session.await_args.args[0]
        assert params.region is Region.US_EAST_1
        assert params.proxies is True
        assert params.browser_settings.advanced_stealth is True
        assert params.browser_settings.os == "windows"

    def test_provider_failure_returns_generic_error(self, client, provider):
        provider.create_session.side_effect = BrowserbaseAPIError("402 quota exceeded for project proj_1")

        response = client.post(SESSION_URL, json={"timezone": "PST"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to create session"}
        assert "quota" not in response.text

    def test_debug_failure_returns_generic_error(self, client, provider):
        provider.debug_session.side_effect = BrowserbaseAPIError("debug unavailable")
        response = client.post(SESSION_URL, json={"timezone": "PST"})
        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_missing_credentials_returns_generic_error(self, monkeypatch):
        session_routes.set_session_broker(None)
        monkeypatch.setattr(settings, "browserbase_api_key", None)

        response = TestClient(app).post(SESSION_URL, json={"timezone": "PST"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to create session"}
        session_routes.set_session_broker(None)


class TestEndSessionRoute:

    def test_success(self, client, provider):
        response = client.request("DELETE", SESSION_URL, json={"sessionId": "sess_123"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        provider.update_session.assert_awaited_once_with("sess_123", status="REQUEST_RELEASE")

    def test_provider_failure_returns_structured_error(self, client, provider):
        provider.update_session.side_effect = BrowserbaseAPIError("session not found")

        response = client.request("DELETE", SESSION_URL, json={"sessionId": "sess_missing"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to end session"}

    def test_missing_session_id_is_rejected(self, client, provider):
        response = client.request("DELETE", SESSION_URL, json={})
        assert response.status_code == 422
        provider.update_session.assert_not_awaited()


class TestHealthRoutes:

    def test_health(self, client):
        response = client.get(f"{settings.api_prefix}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"

    def test_ready_reports_configuration(self, client, monkeypatch):
        monkeypatch.setattr(settings, "browserbase_api_key", "bb_key")
        monkeypatch.setattr(settings, "edge_config", None)

        body = client.get(f"{settings.api_prefix}/ready").json()

        assert body["ready"] is True
        assert body["checks"] == {"api": True, "browserbase": True, "edge_config": False}
