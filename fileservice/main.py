"""
File Service - Main Application Entry Point.

A REST facade for uploading, listing, retrieving, updating and deleting
binary files stored as blobs in a relational database.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from fileservice import __version__
from fileservice.api.router import api_router
from fileservice.config import Settings, get_settings
from fileservice.core.exceptions import FileServiceException
from fileservice.db.backends import get_database_backend
from fileservice.db.migrations import MigrationRunner
from fileservice.db.session import create_database

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Selects the database backend, applies pending migrations and opens the
    connection pool before the first request is served. Any configuration
    error here aborts startup.
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.PROJECT_NAME}")

    backend = get_database_backend(settings)
    logger.info(f"Database backend: {backend.name}")
    logger.info(f"Dev mode (bypass auth): {settings.DEV_MODE}")

    if settings.RUN_MIGRATIONS:
        await MigrationRunner(settings, backend).run()
    else:
        logger.warning("Skipping database migrations (RUN_MIGRATIONS=false)")

    app.state.database = create_database(backend)

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}")
    await app.state.database.dispose()


async def file_service_exception_handler(request: Request, exc: FileServiceException) -> JSONResponse:
    """Return the standardized error body for File Service exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error but returns a sanitized response.
    """
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    The settings object is created once and shared through app.state; every
    component that needs configuration receives this same instance.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Upload, list, download, replace and delete stored files.",
        version=__version__,
        openapi_tags=[
            {"name": "files", "description": "File management operations"},
            {"name": "health", "description": "Service health checks"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Honour X-Forwarded-For / X-Forwarded-Proto from trusted proxies
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.FORWARDED_ALLOW_IPS)
    if settings.HTTPS_REDIRECT:
        app.add_middleware(HTTPSRedirectMiddleware)

    app.add_exception_handler(FileServiceException, file_service_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Service information."""
        return {
            "name": settings.PROJECT_NAME,
            "version": __version__,
            "files": ["/Files", "/api/Files"],
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fileservice.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
        proxy_headers=True,
    )
