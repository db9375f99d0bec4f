"""
Academy-aware permissions для DRF.
"""
from rest_framework.permissions import BasePermission


class HasAcademy(BasePermission):
    """Запрос должен быть привязан к академии (своей или имперсонированной)."""

    message = 'Academy not found'

    def has_permission(self, request, view):
        return getattr(request, 'academy', None) is not None


class IsAcademyOwner(BasePermission):
    """Только сам владелец академии — имперсонация администратором не подходит."""

    message = 'You are not authorized to perform this action'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        academy = getattr(request, 'academy', None)
        return (
            request.user.is_academic and
            academy is not None and
            academy.user_id == request.user.pk
        )
