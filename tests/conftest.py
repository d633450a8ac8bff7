import os
import tempfile

# Settings are read at import time, so they must be in place before the app loads
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_PATH"] = os.path.join(tempfile.gettempdir(), "social-platform-bootstrap.sqlite3")

from typing import Generator

import pytest
from fastapi.testclient import TestClient

import database
from main import app, rate_limiter

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fresh_database(tmp_path, monkeypatch):
    """Point every test at its own empty sqlite file."""
    path = tmp_path / "test.sqlite3"
    monkeypatch.setattr(database, "DB_NAME", str(path))
    database.init_db()
    rate_limiter.reset()
    yield path


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def register_user(client):
    def _register(username: str, email: str = None, password: str = PASSWORD, display_name: str = None):
        response = client.post("/api/auth/register", json={
            "displayName": display_name or username.title(),
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture()
def make_user(client, register_user):
    """Register a user, optionally flip role flags, and return id, token and auth headers."""
    def _make(username: str, **flags):
        data = register_user(username)
        if flags:
            with database.get_db() as conn:
                for flag, value in flags.items():
                    conn.execute(f"UPDATE users SET {flag} = ? WHERE id = ?", (int(value), data["user"]["id"]))
                conn.commit()
            # Role flags travel in the token, so log in again to pick them up
            response = client.post("/api/auth/login", json={"identifier": username, "password": PASSWORD})
            assert response.status_code == 200, response.text
            data = response.json()
        return {
            "id": data["user"]["id"],
            "username": data["user"]["username"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }
    return _make
