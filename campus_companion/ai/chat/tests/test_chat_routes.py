"""Tests for the chat HTTP endpoint."""

import json

import pytest
from fastapi.testclient import TestClient

from campus_companion.ai.chat import context as context_module
from campus_companion.ai.chat.config import ChatSettings
from campus_companion.ai.chat.constants import APOLOGY_MESSAGE
from campus_companion.ai.chat.context import ContextBuilder
from campus_companion.ai.chat.dependencies import (
    get_chat_responder_factory,
    get_chat_settings_dependency,
)
from campus_companion.ai.chat.service import CampusChatService
from campus_companion.ai.chat.tests.helpers import (
    FakeSessionFactory,
    StubProvider,
    make_repository,
)
from campus_companion.ai.openai.exceptions import (
    OpenAIContentGenerationError,
    OpenAITimeoutError,
)
from campus_companion.auth.dependencies import get_auth_provider_dependency
from campus_companion.auth.schemas import Claims
from campus_companion.auth.service import AuthProvider
from campus_companion.main import app, get_version

VALID_TOKEN = "valid-token"
AUTH_HEADERS = {"Authorization": f"Bearer {VALID_TOKEN}"}


class FakeAuthProvider(AuthProvider):
    async def verify_token(self, access_token):
        if access_token == VALID_TOKEN:
            return Claims(sub="user-123", email="student@unlv.edu", role="authenticated")
        return None


@pytest.fixture
def provider():
    return StubProvider(text='{"message": "Hi there!", "suggestedLinks": []}')


@pytest.fixture
def client(monkeypatch, provider, counseling_center):
    settings = ChatSettings()
    monkeypatch.setattr(
        context_module,
        "CampusRepository",
        make_repository(resources=[counseling_center]),
    )

    def chat_service():
        return CampusChatService(
            provider=provider,
            context_builder=ContextBuilder(FakeSessionFactory(), settings),
            settings=settings,
        )

    app.dependency_overrides[get_auth_provider_dependency] = FakeAuthProvider
    app.dependency_overrides[get_chat_settings_dependency] = lambda: settings
    app.dependency_overrides[get_chat_responder_factory] = lambda: chat_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class TestAuthentication:
    def test_missing_header(self, client, provider):
        response = client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        assert provider.calls == []

    def test_non_bearer_header(self, client):
        response = client.post(
            "/api/chat", json={"message": "hi"}, headers={"Authorization": "Basic abc"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_rejected_token(self, client, provider):
        response = client.post(
            "/api/chat",
            json={"message": "hi"},
            headers={"Authorization": "Bearer expired-token"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid authentication"}
        assert provider.calls == []

    def test_auth_checked_before_body(self, client):
        response = client.post("/api/chat", json={})

        assert response.status_code == 401


class TestValidation:
    @pytest.mark.parametrize(
        "body",
        [{}, {"message": ""}, {"message": "   \n\t"}, {"message": 123}, {"message": None}, []],
    )
    def test_message_required(self, client, provider, body):
        response = client.post("/api/chat", json=body, headers=AUTH_HEADERS)

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert provider.calls == []

    def test_invalid_json_body(self, client):
        response = client.post(
            "/api/chat",
            content="not json",
            headers={**AUTH_HEADERS, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}

    def test_message_too_long(self, client, provider):
        response = client.post(
            "/api/chat", json={"message": "a" * 2001}, headers=AUTH_HEADERS
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Message too long (max 2000 characters)"}
        assert provider.calls == []

    def test_message_at_limit_is_accepted(self, client, provider):
        response = client.post(
            "/api/chat", json={"message": "a" * 2000}, headers=AUTH_HEADERS
        )

        assert response.status_code == 200
        assert len(provider.calls) == 1

    def test_message_is_trimmed_before_completion(self, client, provider):
        client.post("/api/chat", json={"message": "  clubs?  "}, headers=AUTH_HEADERS)

        assert provider.calls[0][1].content == "clubs?"


class TestAnswers:
    def test_counseling_center_scenario(self, client, provider):
        provider.text = json.dumps(
            {
                "message": "Here's a resource.",
                "suggestedLinks": [
                    {"title": "Counseling Center", "type": "resource", "id": "abc-123"}
                ],
            }
        )

        response = client.post(
            "/api/chat",
            json={"message": "What mental health resources are available?"},
            headers=AUTH_HEADERS,
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Here's a resource.",
            "suggestedLinks": [
                {"title": "Counseling Center", "url": "/app/resources/abc-123"}
            ],
        }
        assert "[ID: abc-123]" in provider.calls[0][0].content

    def test_plain_text_completion(self, client, provider):
        provider.text = "I can only help with campus questions."

        response = client.post("/api/chat", json={"message": "hi"}, headers=AUTH_HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "message": "I can only help with campus questions.",
            "suggestedLinks": [],
        }

    def test_upstream_503_returns_apology(self, client, provider):
        provider.error = OpenAIContentGenerationError(
            "AI gateway error: 503", status_code=503
        )

        response = client.post("/api/chat", json={"message": "hi"}, headers=AUTH_HEADERS)

        assert response.status_code == 500
        assert response.json() == {"message": APOLOGY_MESSAGE, "suggestedLinks": []}
        assert "503" not in response.text

    def test_upstream_timeout_returns_apology(self, client, provider):
        provider.error = OpenAITimeoutError("Chat completion timed out after 10.0s")

        response = client.post("/api/chat", json={"message": "hi"}, headers=AUTH_HEADERS)

        assert response.status_code == 500
        assert response.json() == {"message": APOLOGY_MESSAGE, "suggestedLinks": []}


class TestCors:
    def test_preflight(self, client):
        response = client.options(
            "/api/chat",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_bare_options(self, client):
        response = client.options("/api/chat")

        assert response.status_code == 200
        assert response.text == "ok"
        assert response.headers["access-control-allow-origin"] == "*"


def test_healthcheck(client):
    response = client.get("/healthcheck")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestResponderConstructionFailure:
    @pytest.fixture
    def broken_client(self):
        def broken_factory():
            raise RuntimeError("OPENAI_API_KEY is not set")

        app.dependency_overrides[get_auth_provider_dependency] = FakeAuthProvider
        app.dependency_overrides[get_chat_responder_factory] = lambda: broken_factory

        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client

        app.dependency_overrides.clear()

    def test_empty_message_is_still_rejected(self, broken_client):
        response = broken_client.post(
            "/api/chat", json={"message": ""}, headers=AUTH_HEADERS
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}

    def test_apology_carries_cors_header(self, broken_client):
        response = broken_client.post(
            "/api/chat",
            json={"message": "hi"},
            headers={**AUTH_HEADERS, "Origin": "http://localhost:5173"},
        )

        assert response.status_code == 500
        assert response.json() == {"message": APOLOGY_MESSAGE, "suggestedLinks": []}
        assert response.headers["access-control-allow-origin"] == "*"


def test_unhandled_error_apology_carries_cors_header():
    class ExplodingAuthProvider(AuthProvider):
        async def verify_token(self, access_token):
            raise RuntimeError("identity provider misconfigured")

    app.dependency_overrides[get_auth_provider_dependency] = ExplodingAuthProvider
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.post(
                "/api/chat",
                json={"message": "hi"},
                headers={**AUTH_HEADERS, "Origin": "http://localhost:5173"},
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"message": APOLOGY_MESSAGE, "suggestedLinks": []}
    assert response.headers["access-control-allow-origin"] == "*"


def test_app_version_comes_from_pyproject():
    assert get_version() == "0.1.0"
    assert app.version == "0.1.0"
