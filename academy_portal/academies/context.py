"""
Academy context — хранение текущей академии.
Устанавливается при обработке запроса, читается сервисами и задачами.

Использует contextvars (async-safe) вместо threading.local.
"""
import contextvars

_current_academy: contextvars.ContextVar = contextvars.ContextVar(
    'current_academy', default=None
)


def set_current_academy(academy):
    """Установить текущую академию в context."""
    _current_academy.set(academy)


def get_current_academy():
    """Получить текущую академию из context. Возвращает None если не установлена."""
    return _current_academy.get()


def clear_current_academy():
    """Очистить текущую академию из context."""
    _current_academy.set(None)
