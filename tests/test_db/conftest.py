"""
Fixtures for database tests: a SQLite backend and a fully started app.
"""

from contextlib import asynccontextmanager
from typing import Any

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import text
from sqlalchemy.engine import URL

from fileservice.auth.dependencies import get_current_user
from fileservice.config import DbType
from fileservice.core.exceptions import ConfigurationException
from fileservice.db.backends import DatabaseBackend
from fileservice.main import create_app, lifespan


class SqliteBackend(DatabaseBackend):
    """Runs against the sqlite+aiosqlite URL given as CONNECTION_STRING."""

    db_type = DbType.POSTGRESQL
    drivername = "sqlite+aiosqlite"

    @property
    def name(self) -> str:
        return "sqlite"

    def url_from_parts(self, parts: dict[str, str]) -> URL:
        raise ConfigurationException("Test backend needs a URL")

    def engine_options(self) -> dict[str, Any]:
        return {}


class ServerOnlyBackend(SqliteBackend):
    def migration_contexts(self):
        contexts = super().migration_contexts()
        return {"server": contexts["server"]}


@pytest.fixture
def sqlite_backend(test_settings) -> SqliteBackend:
    return SqliteBackend(test_settings)


@pytest.fixture
def server_only_backend(test_settings) -> ServerOnlyBackend:
    return ServerOnlyBackend(test_settings)


@pytest.fixture
def fetch_rows(sqlite_backend):
    """Run a query on a fresh connection and return all rows."""

    async def _fetch_rows(sql: str) -> list[tuple]:
        engine = sqlite_backend.create_engine()
        try:
            async with engine.connect() as conn:
                return [tuple(row) for row in (await conn.execute(text(sql))).all()]
        finally:
            await engine.dispose()

    return _fetch_rows


@pytest.fixture
def started_app(test_settings, current_user, monkeypatch):
    """
    Start the app through its lifespan on a migrated SQLite database and
    yield a client. Only authentication is overridden.
    """
    monkeypatch.setattr("fileservice.main.get_database_backend", SqliteBackend)

    @asynccontextmanager
    async def _started_app(**settings_overrides):
        settings = test_settings.model_copy(
            update={"RUN_MIGRATIONS": True, **settings_overrides}
        )
        app = create_app(settings)

        async def override_get_current_user():
            return current_user

        app.dependency_overrides[get_current_user] = override_get_current_user

        async with lifespan(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client

    return _started_app
