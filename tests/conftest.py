"""
Shared test configuration.

The environment is set before any application module is imported so the
engine binds to an in-memory SQLite database and bcrypt stays fast.
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_FORMAT"] = "console"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTH_BCRYPT_ROUNDS"] = "4"
os.environ["AUTH_SECRET_KEY"] = "test-secret-key"
os.environ["SEED_COUNTRIES_ON_STARTUP"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from tests.support import FIXED_NOW, FakeClock, auth_headers, service_payload  # noqa: E402


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def client(clock):
    """Test client with a fresh database and a fixed clock."""
    from api.dependencies import get_clock
    from main import app

    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user through the API and return (user, headers)."""

    def _register(email, role="client", name="Test User", country="United States", password="secret123"):
        response = client.post(
            "/api/auth/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "role": role,
                "country": country,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], auth_headers(body["token"])

    return _register


@pytest.fixture
def admin_headers(register, monkeypatch):
    from config.settings import settings

    monkeypatch.setattr(settings.auth, "allow_admin_registration", True)
    _, headers = register("admin@example.com", role="admin", name="Admin")
    return headers


@pytest.fixture
def freelancer(register):
    return register("freelancer@example.com", role="freelancer", name="Fran Lancer")


@pytest.fixture
def other_freelancer(register):
    return register("other.freelancer@example.com", role="freelancer", name="Otto")


@pytest.fixture
def client_user(register):
    return register("client@example.com", role="client", name="Cleo Client")


@pytest.fixture
def create_country(client, admin_headers):
    def _create(name="Testland", code="TL", multiplier=1.2, currency_code="TLD"):
        response = client.post(
            "/api/countries",
            json={
                "name": name,
                "code": code,
                "region": "Test Region",
                "currency": "Test Dollar",
                "currencyCode": currency_code,
                "multiplier": multiplier,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["country"]

    return _create


@pytest.fixture
def country(create_country):
    return create_country()


@pytest.fixture
def service(client, freelancer):
    """A service owned by the freelancer, with Basic and Standard tiers."""
    _, headers = freelancer
    response = client.post("/api/services", json=service_payload(), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["service"]


@pytest.fixture
def make_quote(client, service, country):
    def _make(headers=None, tier="Basic", complexity="Advanced", **overrides):
        payload = {
            "serviceId": service["id"],
            "clientName": "Cleo Client",
            "clientEmail": "Cleo@Example.COM",
            "clientCountry": country["name"],
            "selectedTier": tier,
            "complexity": complexity,
            "description": "Need a landing page for a product launch.",
        }
        payload.update(overrides)
        return client.post("/api/quotes", json=payload, headers=headers or {})

    return _make
