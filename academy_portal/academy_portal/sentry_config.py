"""
Sentry Integration для Django.
Отправляет ошибки API и Celery-задач в Sentry.

Настройка: добавить в окружение SENTRY_DSN=https://xxx@xxx.ingest.sentry.io/xxx
Без DSN инициализация пропускается.
"""
import os
import logging

import sentry_sdk
from sentry_sdk.integrations.celery import CeleryIntegration
from sentry_sdk.integrations.django import DjangoIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = ('password', 'token', 'secret', 'api_key', 'refresh', 'access')


def init_sentry():
    """
    Инициализирует Sentry SDK.
    Вызывается в конце settings.py.
    """
    sentry_dsn = os.environ.get('SENTRY_DSN', '')

    if not sentry_dsn:
        logger.info("Sentry: DSN not configured, skipping initialization")
        return False

    environment = os.environ.get('DJANGO_ENV', 'production')
    if os.environ.get('DEBUG', 'False').lower() in ('true', '1', 'yes'):
        environment = 'development'

    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[
            DjangoIntegration(transaction_style='url'),
            CeleryIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        environment=environment,
        release=os.environ.get('APP_VERSION', 'unknown'),
        traces_sample_rate=float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '0.1')),
        send_default_pii=False,
        ignore_errors=[
            'django.security.DisallowedHost',
        ],
        before_send=before_send_callback,
    )

    logger.info(f"Sentry: initialized for {environment} environment")
    return True


def before_send_callback(event, hint):
    """
    Фильтрация событий перед отправкой: 404 не шлём, секреты маскируем.
    """
    if 'exc_info' in hint:
        exc_type, _, _ = hint['exc_info']
        if exc_type.__name__ == 'Http404':
            return None

    request_data = event.get('request')
    if request_data:
        data = request_data.get('data')
        if isinstance(data, dict):
            for key in SENSITIVE_KEYS:
                if key in data:
                    data[key] = '[FILTERED]'

        headers = request_data.get('headers')
        if isinstance(headers, dict):
            if 'Authorization' in headers:
                headers['Authorization'] = '[FILTERED]'
            if 'Cookie' in headers:
                headers['Cookie'] = '[FILTERED]'

    return event


def set_user_context(user):
    """
    Устанавливает контекст пользователя для последующих событий.
    Вызывается из AcademyMiddleware.
    """
    if user and user.is_authenticated:
        sentry_sdk.set_user({
            'id': user.id,
            'email': user.email,
            'role': getattr(user, 'role', 'unknown'),
        })
    else:
        sentry_sdk.set_user(None)
