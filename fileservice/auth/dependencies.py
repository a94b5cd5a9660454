"""
Authentication dependencies for FastAPI.
Provides dependency injection for authenticated endpoints.
"""

from typing import Annotated, Any

from fastapi import Depends, Header

from fileservice.auth.jwt import extract_user_claims, validate_token
from fileservice.auth.permissions import Permission, check_permission
from fileservice.config import Settings
from fileservice.core.exceptions import UnauthorizedException
from fileservice.dependencies import get_app_settings


async def get_current_user(
    settings: Settings = Depends(get_app_settings),
    authorization: str | None = Header(default=None),
) -> dict[str, Any]:
    """
    Dependency to get current authenticated user.

    In development mode (DEV_MODE=true), returns the configured dev user.
    Otherwise validates the bearer JWT from the Authorization header.

    Raises:
        UnauthorizedException: If authentication fails
    """
    if settings.DEV_MODE:
        return {
            "user_id": settings.DEV_USER_ID,
            "name": "Development User",
            "email": settings.DEV_USER_EMAIL,
            "roles": list(settings.DEV_USER_ROLES),
            "exp": None,
        }

    if not authorization:
        raise UnauthorizedException("Authorization header required")

    # Extract token from "Bearer <token>" format
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedException("Invalid authorization header format")

    payload = await validate_token(parts[1], settings)
    return extract_user_claims(payload)


def require_permission(permission: Permission):
    """
    Dependency factory to require a specific permission.

    Usage:
        @router.delete("/{value}")
        async def remove(
            user: dict = Depends(require_permission(Permission.DELETE_ASSETS))
        ):
            ...
    """
    async def _check_permission(
        user: dict[str, Any] = Depends(get_current_user),
    ) -> dict[str, Any]:
        check_permission(user, permission)
        return user

    return _check_permission


# Type aliases for dependency injection
CanReadAssets = Annotated[dict[str, Any], Depends(require_permission(Permission.READ_ASSETS))]
CanWriteAssets = Annotated[dict[str, Any], Depends(require_permission(Permission.WRITE_ASSETS))]
CanDeleteAssets = Annotated[dict[str, Any], Depends(require_permission(Permission.DELETE_ASSETS))]
