"""
Database session management for async SQLAlchemy.
Provides connection pooling and the request-scoped session dependency.
"""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fileservice.db.backends import DatabaseBackend

logger = logging.getLogger(__name__)


@dataclass
class Database:
    """The engine and session factory for the selected backend."""

    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]

    @classmethod
    def for_engine(cls, engine: AsyncEngine) -> "Database":
        return cls(
            engine=engine,
            sessionmaker=async_sessionmaker(
                bind=engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            ),
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database(backend: DatabaseBackend) -> Database:
    """Create the engine and session factory for a backend."""
    engine = backend.create_engine()
    logger.info(f"Database engine created for backend '{backend.name}'")
    return Database.for_engine(engine)


def get_database(request: Request) -> Database:
    """The Database opened by the application lifespan."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Commits once at the end of the request, rolls back on any error.

    Usage:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with get_database(request).sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
