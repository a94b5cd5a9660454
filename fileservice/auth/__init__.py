"""
Authentication and authorization module for the File Service.
"""

from fileservice.auth.jwt import validate_token, extract_user_claims, fetch_jwks
from fileservice.auth.permissions import (
    Permission,
    Role,
    ROLE_PERMISSIONS,
    check_permission,
    has_permission,
    permissions_for,
)
from fileservice.auth.dependencies import (
    get_current_user,
    require_permission,
    CanReadAssets,
    CanWriteAssets,
    CanDeleteAssets,
)

__all__ = [
    # JWT functions
    "validate_token",
    "extract_user_claims",
    "fetch_jwks",
    # Permission functions
    "Permission",
    "Role",
    "ROLE_PERMISSIONS",
    "check_permission",
    "has_permission",
    "permissions_for",
    # Dependencies
    "get_current_user",
    "require_permission",
    # Type aliases
    "CanReadAssets",
    "CanWriteAssets",
    "CanDeleteAssets",
]
