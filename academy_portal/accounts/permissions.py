"""
Permission classes по ролям пользователя.
"""
from rest_framework import permissions

from .models import CustomUser


class IsPlatformAdmin(permissions.BasePermission):
    """Разрешение только для администраторов платформы."""

    message = 'You are not authorized to perform this action'

    def has_permission(self, request, view):
        return (
            request.user and
            request.user.is_authenticated and
            request.user.is_platform_admin
        )


class IsAdminOrAcademic(permissions.BasePermission):
    """Администратор (с имперсонацией) или владелец академии."""

    message = 'You are not authorized to perform this action'

    def has_permission(self, request, view):
        return (
            request.user and
            request.user.is_authenticated and
            request.user.role in (CustomUser.ROLE_ADMIN, CustomUser.ROLE_ACADEMIC)
        )
