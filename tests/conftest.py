# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Gives every test a fresh in-memory SQLite schema
# - Provides a TestClient and a registered user
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret-0123456789")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from core.database import drop_db, get_sessionmaker, init_db


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_database():
    """Recreate all tables so every test starts empty."""
    drop_db()
    init_db()
    yield


@pytest.fixture
def db_session():
    """A database session for service-level tests."""
    session = get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """TestClient with the app's lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_payload():
    return {
        "email": "jane@example.com",
        "password": "secret123",
        "name": "Jane Doe",
    }


@pytest.fixture
def registered_user(client, user_payload):
    """
    Register a user through the API.

    Returns the response body; the refresh cookie stays in the client's jar.
    """
    response = client.post("/auth/register", json=user_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['access_token']}"}
