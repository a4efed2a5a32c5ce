"""Pytest configuration and global fixtures for Taskboard tests.

This file provides test fixtures that are automatically available to all tests.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from taskboard.core.config import AuthConfig, DatabaseConfig, ServerConfig, Settings
from taskboard.core.database import DatabaseManager
from taskboard.c1_errors.errors import InvalidCredentials
from taskboard.c2_auth_service.credential_store import CredentialStore
from taskboard.c2_auth_service.external_identity import ExternalProfile
from taskboard.server import create_app

TEST_PASSWORD = "CorrectHorse42!"

# Lowest cost bcrypt allows; keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


class FakeClock:
    """Manually advanced clock returning timezone-aware UTC datetimes."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeExternalVerifier:
    """Accepts credentials of the form ``valid:<email>:<name>``."""

    def __init__(self):
        self.calls = []

    def verify(self, credential: str) -> ExternalProfile:
        self.calls.append(credential)
        parts = credential.split(":")
        if len(parts) != 3 or parts[0] != "valid":
            raise InvalidCredentials("Invalid external credential")
        return ExternalProfile(email=parts[1], name=parts[2], avatar_url=f"https://avatars.example.com/{parts[2]}.png")


@pytest.fixture
def db_manager():
    """In-memory database with the full schema."""
    manager = DatabaseManager("sqlite://")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def credential_store(db_manager):
    return CredentialStore(db_manager, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def make_user(credential_store):
    """Factory registering users with a known password."""

    def _make_user(email: str, name: str = "Test User", password: str = TEST_PASSWORD):
        return credential_store.register(email=email, name=name, plaintext=password)

    return _make_user


@pytest.fixture
def test_settings():
    return Settings(
        auth=AuthConfig(secret_key="test-secret-key", bcrypt_rounds=TEST_BCRYPT_ROUNDS),
        database=DatabaseConfig(database_url="sqlite://"),
        server=ServerConfig(enable_cors=False),
        debug=False,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def external_verifier():
    return FakeExternalVerifier()


@pytest.fixture
def test_client(test_settings, clock, external_verifier):
    """Test client over a fresh in-memory database."""
    app = create_app(
        test_settings,
        external_verifier=external_verifier,
        db_manager=DatabaseManager("sqlite://"),
        clock=clock,
    )
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register_user(test_client):
    """Register through the API; returns (auth headers, user summary)."""

    def _register(email: str, name: str = "Test User", password: str = TEST_PASSWORD):
        response = test_client.post(
            "/api/auth/register",
            json={"email": email, "name": name, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _register
