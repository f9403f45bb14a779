"""
Account Permissions

Role-based permissions for admin-only endpoints.
"""
from rest_framework import permissions


class IsAdminRole(permissions.BasePermission):
    """
    Permission for users holding the admin role.
    """
    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        """Check if user is authenticated and is an admin."""
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.role == 'admin'
        )
