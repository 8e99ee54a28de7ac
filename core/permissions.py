from rest_framework.permissions import BasePermission

from .constants import ROLE_MANAGEMENT


# ---- Helper functions -------------------------------------------------


def user_role(user) -> str:
    """
    Role carried by the authenticated identity.

    Works for both the stateless token identity and a full User row.
    """
    if not user or not getattr(user, "is_authenticated", False):
        return ""
    return getattr(user, "role", "") or ""


def require_role(user, allowed_roles) -> bool:
    return user_role(user) in allowed_roles


# ---- Permission classes -----------------------------------------------


class IsManagement(BasePermission):
    """
    Management-only endpoints (member admin, task deletion, activity log,
    user administration).
    """
    message = "Forbidden"

    def has_permission(self, request, view):
        return require_role(request.user, (ROLE_MANAGEMENT,))


class IsManagementForMethods(BasePermission):
    """
    Role gate for mixed views: only the HTTP methods listed in
    `view.management_methods` require the management role.
    """
    message = "Forbidden"

    def has_permission(self, request, view):
        gated = getattr(view, "management_methods", ())
        if request.method not in gated:
            return True
        return require_role(request.user, (ROLE_MANAGEMENT,))
