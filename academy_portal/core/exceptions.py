"""
Единый формат ошибок API: {"error": <сообщение>, "field": <поле или null>}.

Ошибки валидации отдают первое проблемное поле (non_field_errors → "root"),
остальные ошибки (auth, 403, 404) приходят с field = null, если исключение
само не указывает поле.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

ROOT_FIELD = 'root'


class FieldValidationError(ValidationError):
    """Ошибка бизнес-валидации, привязанная к полю формы."""

    default_field = ROOT_FIELD

    def __init__(self, message, field=None):
        self.field = field or self.default_field
        super().__init__({self.field: [message]})


class FieldAPIException(APIException):
    """APIException с произвольным статусом и полем формы."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, field=ROOT_FIELD, status_code=None):
        self.field = field
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


def _is_index(key):
    return isinstance(key, int) or (isinstance(key, str) and key.isdigit())


def _first_error(detail, field=None):
    """
    Первая ошибка и путь к полю через точку.

    Индексы элементов вложенных списков в путь не попадают:
    {'packages': {0: {'price': [...]}}} -> 'packages.price'.
    """
    if isinstance(detail, dict):
        if not detail:
            return field or ROOT_FIELD, 'Invalid input.'
        key, value = next(iter(detail.items()))
        if key == api_settings.NON_FIELD_ERRORS_KEY or _is_index(key):
            key = field or ROOT_FIELD
        elif field:
            key = f'{field}.{key}'
        return _first_error(value, key)
    if isinstance(detail, (list, tuple)):
        for item in detail:
            if item:
                return _first_error(item, field)
        return field or ROOT_FIELD, 'Invalid input.'
    return field or ROOT_FIELD, str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Необработанное исключение уйдёт в Django (500) и в Sentry
        return None

    if isinstance(exc, ValidationError):
        field, message = _first_error(exc.detail)
        view = context.get('view')
        logger.info(
            'Validation failed in %s: field=%s error=%s',
            view.__class__.__name__ if view else '-', field, message,
        )
    else:
        field = getattr(exc, 'field', None)
        detail = getattr(exc, 'detail', None)
        if isinstance(detail, (dict, list)):
            _, message = _first_error(detail)
        else:
            message = str(detail) if detail is not None else str(exc)

    response.data = {'error': message, 'field': field}
    return response
