"""
Development settings - локальная разработка
"""
from .settings import *  # noqa: F401,F403

DEBUG = True
ALLOWED_HOSTS = ['*']

# Задачи Celery выполняются синхронно, брокер не нужен
CELERY_TASK_ALWAYS_EAGER = True

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
