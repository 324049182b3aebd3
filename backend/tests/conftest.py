"""Shared fixtures: an app per test backed by a throwaway SQLite file."""
import pytest
from fastapi.testclient import TestClient

from auth_backend.config import Settings
from auth_backend.main import create_app
from auth_backend.services import auth_service


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'auth.sqlite3'}",
        jwt_secret_key="tests-secret-key",
        bcrypt_rounds=4,
        cors_origin="http://localhost:3000",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def fetch_user(app, client):
    """Read a user straight from the store, bypassing the API."""

    def _fetch(email: str):
        async def _query():
            async with app.state.db.session_factory() as session:
                return await auth_service.get_user_by_email(session, email)

        return client.portal.call(_query)

    return _fetch
