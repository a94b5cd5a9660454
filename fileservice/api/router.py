"""
API Router - Aggregates all endpoints.
Files are served under both /Files and /api/Files.
"""

from fastapi import APIRouter

from fileservice.api import files, health

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.router, prefix="/Files", tags=["files"])
api_router.include_router(files.router, prefix="/api/Files", tags=["files"])
