# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission

# =========================================================
# ROLE CONSTANTS
# =========================================================
ROLE_ADMIN = "admin"
ROLE_CASHIER = "cashier"
ROLE_CUSTOMER = "customer"

# Roles allowed on cashier-protected operations (order code lookup,
# status updates, admin product management, staff login).
CASHIER_ROLES = {
    ROLE_CASHIER,
    ROLE_ADMIN,
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def is_cashier_role(role: Optional[str]) -> bool:
    return role in CASHIER_ROLES


# =========================================================
# Base Role Permission
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Unauthenticated callers fail before the role is looked at; with an
    authentication class that sets a WWW-Authenticate header DRF turns that
    into 401, while a wrong role stays 403.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()
    message = "Access denied: insufficient role"

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


class IsCashierOrAdmin(BaseRolePermission):
    allowed_roles = CASHIER_ROLES
    message = "Access denied: cashier or admin role required"
