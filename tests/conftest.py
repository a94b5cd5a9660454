"""
Pytest configuration and fixtures for File Service tests.
"""

import io
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from fileservice.auth.dependencies import get_current_user
from fileservice.config import Settings
from fileservice.db.base import ContentBase, ServerBase
from fileservice.db.session import Database
from fileservice.main import app


@pytest.fixture
def database_url(tmp_path) -> str:
    """Per-test SQLite database file."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def test_settings(database_url) -> Settings:
    """Get test settings."""
    return Settings(
        CONNECTION_STRING=database_url,
        RUN_MIGRATIONS=False,
        DEV_MODE=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_engine(database_url):
    """Create a test database engine with both schemas."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(ServerBase.metadata.create_all)
        await conn.run_sync(ContentBase.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def current_user() -> dict[str, Any]:
    """
    Claims returned for every request made through `client`.
    Tests may change the roles or expiry before calling the API.
    """
    return {
        "user_id": "test-user-001",
        "name": "Test User",
        "email": "test@example.com",
        "roles": ["Editor"],
        "exp": None,
    }


@pytest.fixture
def database(db_engine) -> Database:
    """The Database the app serves requests from, as the lifespan would open it."""
    return Database.for_engine(db_engine)


@pytest_asyncio.fixture(scope="function")
async def client(database, current_user) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client.

    Requests use the real request-scoped session, so writes are committed
    and can be read back through `db_session`.
    """
    async def override_get_current_user():
        return current_user

    app.state.database = database
    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    del app.state.database


@pytest.fixture
def upload():
    """Build the multipart body for an add or update request."""

    def _upload(
        file_name: str = "logo.png",
        content: bytes = b"\x89PNG fake image bytes",
        content_type: str = "image/png",
        type_id: int = 1,
        description: str = "logo",
        **fields: str,
    ) -> dict[str, Any]:
        data = {"typeId": str(type_id), "description": description}
        data.update(fields)
        return {
            "data": data,
            "files": {"content": (file_name, io.BytesIO(content), content_type)},
        }

    return _upload
