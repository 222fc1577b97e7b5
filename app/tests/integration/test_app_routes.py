"""
Integration tests for health, fallback routes, CORS and rate limiting.
"""
from datetime import datetime

from fastapi import APIRouter
from fastapi.testclient import TestClient

from app.core.application import create_application
from app.dependencies.clients import get_completion_client
from app.services.completion_client import CompletionClient
from app.tests.fakes import FakeOpenAI, make_settings


def build_client(**overrides):
    app = create_application(make_settings(**overrides))
    client = CompletionClient(FakeOpenAI(), timeout=1)
    app.dependency_overrides[get_completion_client] = lambda: client
    return app, TestClient(app, raise_server_exceptions=False)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"status", "timestamp", "environment"}
    assert body["status"] == "OK"
    assert body["environment"] == "development"
    assert body["timestamp"].endswith("Z")
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_health_reports_configured_environment():
    _, client = build_client(ENVIRONMENT="production")
    assert client.get("/health").json()["environment"] == "production"


def test_unknown_route_returns_not_found(client):
    response = client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found", "type": "not_found"}


def test_wrong_method_returns_not_found(client):
    response = client.get("/api/chat")
    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found", "type": "not_found"}


def test_unhandled_exception_is_sanitized(app, client):
    router = APIRouter()

    @router.get("/api/explode")
    async def explode():
        raise RuntimeError("database password is hunter2")

    app.include_router(router)

    response = client.get("/api/explode")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "type": "server_error"}


def test_rate_limit_rejects_excess_api_requests():
    _, client = build_client(ENVIRONMENT="production", RATE_LIMIT_MAX_REQUESTS=2)

    for _ in range(2):
        assert client.post("/api/chat", json={"userPrompt": "Explain gravity"}).status_code == 200

    response = client.post("/api/chat", json={"userPrompt": "Explain gravity"})
    assert response.status_code == 429
    assert response.json() == {
        "error": "Too many requests from this IP, please try again later.",
        "type": "rate_limit_exceeded",
    }
    assert int(response.headers["Retry-After"]) > 0

    # Health checks are not rate limited
    assert client.get("/health").status_code == 200


def test_production_cors_allows_only_configured_origins():
    _, client = build_client(ENVIRONMENT="production", ALLOWED_ORIGINS="https://playground.example.com")

    allowed = client.get("/health", headers={"Origin": "https://playground.example.com"})
    assert allowed.headers["access-control-allow-origin"] == "https://playground.example.com"

    denied = client.get("/health", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in denied.headers


def test_development_cors_allows_any_origin(client):
    response = client.options("/api/chat", headers={
        "Origin": "http://localhost:5173",
        "Access-Control-Request-Method": "POST",
    })
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers
