"""
/api/health/ и /api/ready/ для мониторинга и оркестратора.

health — БД, обязательные настройки и опциональные интеграции;
ready  — только доступность БД.
"""
import time

from django.conf import settings
from django.db import connection
from django.db.utils import DatabaseError
from django.http import JsonResponse

REQUIRED_SETTINGS = (
    'SECRET_KEY',
    'ALLOWED_HOSTS',
    'AUTH_USER_MODEL',
    'ACADEMY_IMPERSONATION_COOKIE',
    'IMAGE_UPLOAD_CONTENT_TYPES',
)


def _database_ok():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        cursor.fetchone()


def health_check(request):
    """200 если БД и настройки в порядке, иначе 500. Интеграции только информируют."""
    checks = {}
    healthy = True

    try:
        _database_ok()
        checks['database'] = 'ok'
    except DatabaseError as exc:
        healthy = False
        checks['database'] = f'error: {str(exc)[:100]}'

    missing = [name for name in REQUIRED_SETTINGS if not getattr(settings, name, None)]
    if missing:
        healthy = False
        checks['settings'] = f'missing: {", ".join(missing)}'
    else:
        checks['settings'] = 'ok'

    checks['google_places'] = 'configured' if settings.GOOGLE_PLACES_API_KEY else 'disabled'
    checks['celery'] = 'eager' if settings.CELERY_TASK_ALWAYS_EAGER else 'broker'

    payload = {
        'status': 'healthy' if healthy else 'unhealthy',
        'timestamp': time.time(),
        'version': settings.VERSION,
        'checks': checks,
    }
    return JsonResponse(payload, status=200 if healthy else 500)


def ready_check(request):
    try:
        _database_ok()
    except DatabaseError:
        return JsonResponse({'ready': False}, status=503)
    return JsonResponse({'ready': True})
