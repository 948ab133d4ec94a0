"""
FastAPI dependency-injection helpers.
"""

from fastapi import Request

from db.connection import DatabaseClient


def get_db_client(request: Request) -> DatabaseClient:
    """Return the database client created by the application lifespan."""
    return request.app.state.db_client


def authorize(request: Request) -> None:
    """Access hook for the SQL routes; every request is currently allowed."""
    return None
