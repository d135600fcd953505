"""Role checks shared by the API.

Every staff user carries one of the seeded roles (core.seeders). A permission
class names the roles that may read (safe methods) and the roles that may
write; anonymous users and users without a role get nothing.
"""

from __future__ import annotations

from rest_framework.permissions import SAFE_METHODS, BasePermission


def role_name(user) -> str | None:
    """Role of an authenticated user, or None."""
    if user is None or not user.is_authenticated:
        return None
    role = getattr(user, "role", None)
    return role.name if role is not None else None


class RBACPermission(BasePermission):
    """Grant access by role: read_roles for GET/HEAD/OPTIONS, write_roles otherwise."""

    read_roles: frozenset[str] = frozenset()
    write_roles: frozenset[str] = frozenset()
    message = "Your role is not allowed to perform this action."

    def roles_for(self, method: str) -> frozenset[str]:
        return self.read_roles if method in SAFE_METHODS else self.write_roles

    def has_permission(self, request, view):
        name = role_name(getattr(request, "user", None))
        return name is not None and name in self.roles_for(request.method)

    @classmethod
    def grants(cls, user) -> dict[str, bool]:
        name = role_name(user)
        return {"read": name in cls.read_roles, "write": name in cls.write_roles}
