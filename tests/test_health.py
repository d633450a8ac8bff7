"""Test the health check, response headers and error envelopes."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

import routes.health
import routes.posts
from main import app
from middleware import BodySizeLimitMiddleware


def test_health_connected(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["database"] == "Connected"
    assert data["timestamp"]


def test_health_disconnected(client, monkeypatch):
    monkeypatch.setattr(routes.health, "check_connection", lambda: False)
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"] == "Disconnected"


def test_security_headers_present(client):
    response = client.get("/api/health")
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Referrer-Policy"] == "no-referrer"
    assert "Strict-Transport-Security" not in response.headers
    assert response.headers["X-RateLimit-Limit"] == "100"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_malformed_json_is_a_validation_error(client):
    response = client.post("/api/auth/login", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_oversized_body_rejected(client):
    response = client.post("/api/auth/login", content=b"x" * (10 * 1024 * 1024 + 1),
                           headers={"Content-Type": "application/json"})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}


def test_unexpected_error_hides_details(monkeypatch):
    monkeypatch.setattr(routes.posts, "POST_SELECT", "SELECT * FROM missing_table WHERE ? IS NULL")
    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/api/posts")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "missing_table" not in response.text


def small_body_app():
    mini = FastAPI()
    mini.add_middleware(BodySizeLimitMiddleware, max_bytes=32)

    @mini.post("/echo")
    def echo(payload: dict):
        return payload

    return TestClient(mini)


def test_chunked_body_counted_against_limit():
    client = small_body_app()
    chunks = iter([b'{"note": "', b"x" * 64, b'"}'])
    response = client.post("/echo", content=chunks, headers={"Content-Type": "application/json"})
    assert response.status_code == 413


def test_small_chunked_body_passes():
    client = small_body_app()
    chunks = iter([b'{"note": ', b'"hi"}'])
    response = client.post("/echo", content=chunks, headers={"Content-Type": "application/json"})
    assert response.status_code == 200
    assert response.json() == {"note": "hi"}
