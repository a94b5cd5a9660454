"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fileservice.config import Settings
from fileservice.db.session import Database, get_database, get_db
from fileservice.services.access_service import AccessService


def get_app_settings(request: Request) -> Settings:
    """The settings object the application was created with."""
    return request.app.state.settings


def get_access_service(database: Database = Depends(get_database)) -> AccessService:
    """Access bookkeeping, committed apart from the request session."""
    return AccessService(database.sessionmaker)


# Type aliases for cleaner endpoint signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
AccessLog = Annotated[AccessService, Depends(get_access_service)]
