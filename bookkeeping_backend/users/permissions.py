# users/permissions.py

from rest_framework.permissions import SAFE_METHODS, BasePermission


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and (user.is_superuser or user.role in self.allowed_roles)
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsAdmin(HasRole):
    allowed_roles = {"admin"}


class CanPostOrReadOnly(BasePermission):
    """
    Any authenticated user may read.
    Writes (posting entries, creating accounts) follow User.can_post_entries.
    """

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return bool(user.can_post_entries)
