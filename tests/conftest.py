"""Shared fixtures: an app bound to a fresh in-memory SQLite store per test."""
import pytest
from fastapi.testclient import TestClient

from bank_service.config import Settings
from bank_service.database import Database
from bank_service.main import create_app


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", service_name="bank-service-test")


@pytest.fixture
def client(settings):
    """Test client with the lifespan running (store connected and tables created)."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    """A session on its own in-memory store, for service-level tests."""
    database = Database("sqlite://")
    database.connect()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.dispose()
