"""Test fixtures and configuration for pytest."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_db_client
from api.main import app
from config.settings import DatabaseConfig
from db.connection import DatabaseClient


@pytest.fixture
def db_client(tmp_path):
    """SQLite database with a small users table."""
    config = DatabaseConfig(url=f"sqlite:///{tmp_path / 'gateway_test.db'}")
    client = DatabaseClient(config)
    with client.engine.begin() as conn:
        conn.exec_driver_sql(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, age INTEGER)"
        )
        conn.exec_driver_sql(
            "INSERT INTO users (id, name, age) VALUES (1, 'ada', 36), (2, 'linus', 28), (3, 'grace', NULL)"
        )
    yield client
    client.close()


@pytest.fixture
def client(db_client):
    """HTTP client wired to the temporary database."""
    app.dependency_overrides[get_db_client] = lambda: db_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
