"""Pytest fixtures for the data room backend.

Provides reusable test fixtures for:
- Settings pointing at the in-memory object store and in-memory SQLite
- An application instance with its storage and database exposed
- A test client, and one already past the gate

Usage:
    def test_catalog(unlocked_client):
        response = unlocked_client.get("/api/v1/documents")
        assert response.status_code == 200
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from dataroom.config import Settings
from dataroom.database import create_db_engine, create_session_factory, init_db
from dataroom.infrastructure.storage.memory_storage_adapter import InMemoryStorageAdapter
from dataroom.main import create_app

TEST_USERNAME = "investor"
TEST_PASSWORD = "correct horse battery staple"
TEST_JWT_SECRET = "test-jwt-secret-key-256-bits-minimum-length-required-for-security"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATAROOM_USERNAME=TEST_USERNAME,
        DATAROOM_PASSWORD=TEST_PASSWORD,
        JWT_SECRET=TEST_JWT_SECRET,
        STORAGE_BACKEND="memory",
        DATABASE_URL="sqlite://",
        LOG_JSON=False,
        MAX_UPLOAD_SIZE_BYTES=1024 * 1024,
    )


@pytest.fixture
def session_factory() -> sessionmaker:
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return create_session_factory(engine)


@pytest.fixture
def storage() -> InMemoryStorageAdapter:
    return InMemoryStorageAdapter(bucket_name="test-dataroom")


@pytest.fixture
def app(settings, storage, session_factory) -> FastAPI:
    return create_app(settings=settings, storage=storage, session_factory=session_factory)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_token(client) -> str:
    response = client.post(
        "/api/v1/gate/unlock",
        json={"username": TEST_USERNAME, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture
def unlocked_client(client, auth_token) -> TestClient:
    """Test client that sends the session token on every request."""
    client.headers.update({"Authorization": f"Bearer {auth_token}"})
    return client


@pytest.fixture
def gate_credentials() -> dict:
    return {"username": TEST_USERNAME, "password": TEST_PASSWORD}
