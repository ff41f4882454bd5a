"""
Tests for the FastAPI application.
"""

from fastapi.testclient import TestClient

from slotmatcher.adapters.sample_data import load_sample_request
from slotmatcher.api.app import create_app
from slotmatcher.config import AppConfig, ServerConfig


def _client(config: AppConfig | None = None) -> TestClient:
    return TestClient(create_app(config))


def test_post_sample_request():
    """A valid POST returns the ranked result."""
    response = _client().post("/api", json=load_sample_request())

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["requested_time"] == "09:00:00"
    assert [r["name"] for r in payload["results"]] == ["Fatih", "Mehmet", "Aydin", "Alperen", "Nadi"]
    assert response.headers["access-control-allow-origin"] == "*"


def test_preflight():
    """OPTIONS answers with CORS headers and no body."""
    response = _client().options("/api")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"


def test_get_not_allowed():
    """GET is routed to the handler and rejected there."""
    response = _client().get("/api")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed. Please use POST."}


def test_invalid_json_body():
    """Raw unparseable bodies are a 400."""
    response = _client().post(
        "/api",
        content=b"{broken",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid JSON body"


def test_configured_origin():
    """CORS origin follows the configuration."""
    config = AppConfig(server=ServerConfig(allow_origin="https://booking.example.com"))

    response = _client(config).post("/api", json=load_sample_request())

    assert response.headers["access-control-allow-origin"] == "https://booking.example.com"


def test_root():
    """The root endpoint points at /api."""
    response = _client().get("/")

    assert response.status_code == 200
    assert "/api" in response.json()["message"]
