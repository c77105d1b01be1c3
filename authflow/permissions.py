from rest_framework import permissions

from accounts.models import Role


class RolePermission(permissions.BasePermission):
    """
    Allows authenticated users whose role is in `allowed_roles`.
    Usage:
        permission_classes = [IsAdminRole]
    """
    allowed_roles: tuple = ()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.allowed_roles
        )


class IsAdminRole(RolePermission):
    allowed_roles = (Role.ADMIN,)


class IsBusinessRole(RolePermission):
    allowed_roles = (Role.BUSINESS,)


class IsAdminOrBusinessRole(RolePermission):
    allowed_roles = (Role.ADMIN, Role.BUSINESS)
