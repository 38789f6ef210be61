from rest_framework import permissions


class IsAdminUser(permissions.BasePermission):
    """
    Allows access to staff accounts and accounts with the admin role.
    """
    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.is_admin
        )


class IsSelfOrAdmin(permissions.BasePermission):
    """
    Allows a user to access their own resource, or an admin to access any.
    Assumes the object being checked is the user object itself.
    """
    def has_object_permission(self, request, view, obj):
        return bool(request.user and (request.user.is_admin or obj == request.user))
