"""
Уведомления портала академии (доставка опросом).

- GET  /api/academy/notifications/                 — список, новые сверху
- GET  /api/academy/notifications/unread-count/
- POST /api/academy/notifications/<id>/read/
- POST /api/academy/notifications/read-all/
"""
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from academies.mixins import AcademyViewSetMixin
from academies.permissions import HasAcademy
from accounts.permissions import IsAdminOrAcademic

from .models import Notification
from .serializers import NotificationSerializer
from .services import NotificationService


class NotificationViewSet(AcademyViewSetMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    queryset = Notification.objects.select_related('profile')
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]

    @action(detail=False, methods=['get'], url_path='unread-count')
    def unread_count(self, request):
        return Response({'count': self.get_queryset().filter(read_at__isnull=True).count()})

    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        notification = self.get_object()
        NotificationService.mark_read(Notification.objects.filter(pk=notification.pk))
        notification.refresh_from_db()
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=['post'], url_path='read-all')
    def read_all(self, request):
        return Response({'updated': NotificationService.mark_read(self.get_queryset())})
