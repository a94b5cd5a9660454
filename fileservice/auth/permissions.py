"""
Role based permission checking.

Each role grants an explicit set of permissions and each route requires one
permission:

    Author               assets:write
    Editor               assets:read, assets:write, assets:delete
    SystemAdministrator  assets:read, assets:write, assets:delete
"""

import enum
from typing import Any, Iterable

from fileservice.core.exceptions import ForbiddenException


class Role(str, enum.Enum):
    AUTHOR = "Author"
    EDITOR = "Editor"
    SYSTEM_ADMINISTRATOR = "SystemAdministrator"


class Permission(str, enum.Enum):
    READ_ASSETS = "assets:read"
    WRITE_ASSETS = "assets:write"
    DELETE_ASSETS = "assets:delete"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.AUTHOR: frozenset({Permission.WRITE_ASSETS}),
    Role.EDITOR: frozenset({
        Permission.READ_ASSETS,
        Permission.WRITE_ASSETS,
        Permission.DELETE_ASSETS,
    }),
    Role.SYSTEM_ADMINISTRATOR: frozenset(Permission),
}


def permissions_for(roles: Iterable[str]) -> frozenset[Permission]:
    """
    Union of the permissions granted by the given role names.
    Unknown role names grant nothing.
    """
    granted: set[Permission] = set()
    for name in roles:
        try:
            role = Role(name)
        except ValueError:
            continue
        granted |= ROLE_PERMISSIONS[role]
    return frozenset(granted)


def has_permission(user_claims: dict[str, Any], permission: Permission) -> bool:
    return permission in permissions_for(user_claims.get("roles", []))


def check_permission(user_claims: dict[str, Any], permission: Permission) -> bool:
    """
    Check that the user holds a permission.

    Returns:
        True if the permission is granted

    Raises:
        ForbiddenException: If none of the user's roles grant it
    """
    if not has_permission(user_claims, permission):
        raise ForbiddenException(
            message="Insufficient permissions for this operation",
            details={
                "required": permission.value,
                "roles": list(user_claims.get("roles", [])),
            },
        )
    return True
