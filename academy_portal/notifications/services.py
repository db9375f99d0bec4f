"""
Создание и прочтение уведомлений.

Доставка — опрос API порталом (/api/academy/notifications/).
"""
import logging

from django.utils import timezone

from .models import Notification

logger = logging.getLogger(__name__)


class NotificationService:

    @staticmethod
    def notify(title, description='', academy=None, user=None, profile=None):
        notification = Notification.objects.create(
            title=title,
            description=description,
            academy=academy,
            user=user,
            profile=profile,
        )
        logger.info(
            'Notification created: id=%s academy=%s user=%s title=%s',
            notification.pk, getattr(academy, 'pk', None), getattr(user, 'pk', None), title,
        )
        return notification

    @staticmethod
    def mark_read(queryset):
        """Помечает непрочитанные уведомления из queryset. Возвращает количество."""
        return queryset.filter(read_at__isnull=True).update(read_at=timezone.now())
