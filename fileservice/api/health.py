"""
Health endpoint.
No authentication required.
"""

from fastapi import APIRouter, Request
from sqlalchemy import text

from fileservice.dependencies import DbSession

router = APIRouter()


@router.get("/health")
async def health_check(request: Request, db: DbSession):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok", "database": "<backend>"} when the database answers
        {"status": "degraded", "issues": [...]} otherwise
    """
    issues = []

    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        issues.append(f"Database: {str(e)}")

    if issues:
        return {
            "status": "degraded",
            "issues": issues,
        }

    return {
        "status": "ok",
        "database": request.app.state.settings.DB_TYPE.value,
    }
