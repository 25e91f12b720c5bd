"""Shared fixtures for the profile service tests."""

import base64

import pytest
from fastapi.testclient import TestClient

from profile_app.core.app_factory import create_application
from profile_app.core.config import Settings
from profile_app.infrastructure.persistence.memory import InMemoryUserStore

_ENV_DEFAULTS = {
    "STORE_BACKEND": "memory",
    "BASIC_AUTH_USER": "",
    "BASIC_AUTH_PASS": "",
    "RATE_LIMIT_WINDOW_SECONDS": "60",
    "RATE_LIMIT_MAX": "300",
    "WRITE_RATE_LIMIT_MAX": "30",
}


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Pin every setting the app reads so the host environment cannot leak in."""
    for key, value in _ENV_DEFAULTS.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "profiles.db"))
    monkeypatch.delenv("VIEWS_DIR", raising=False)
    return monkeypatch


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def make_client(env, store):
    """Build a fresh app (own limiters, own gate) around the shared store."""

    def _make(**overrides) -> TestClient:
        for key, value in overrides.items():
            env.setenv(key, str(value))
        app = create_application(Settings(), repository=store)
        return TestClient(app, follow_redirects=False)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


def _basic_auth_header(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def _profile_form(**overrides) -> dict:
    form = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "hobbies": "Reading, Hiking",
        "location": "Nairobi",
    }
    form.update(overrides)
    return form


@pytest.fixture
def basic_auth_header():
    return _basic_auth_header


@pytest.fixture
def profile_form():
    return _profile_form
