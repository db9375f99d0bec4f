"""
Выбор и запись переводов.

Правило отображения: перевод на локаль по умолчанию ('en'), иначе
перевод с лексикографически наименьшей локалью, иначе пустая строка.
"""
from django.conf import settings


def default_locale():
    return getattr(settings, 'DEFAULT_CONTENT_LOCALE', 'en')


def pick_translation(translations, locale=None):
    items = list(translations)
    if not items:
        return None
    preferred = locale or default_locale()
    for item in items:
        if item.locale == preferred:
            return item
    return min(items, key=lambda item: item.locale)


def translated_value(instance, field='name', locale=None, related_name='translations'):
    """Значение поля перевода. Использует prefetch-кеш, если он есть."""
    if instance is None:
        return ''
    translation = pick_translation(getattr(instance, related_name).all(), locale)
    if translation is None:
        return ''
    return getattr(translation, field, '') or ''


def save_translation(instance, locale=None, related_name='translations', **values):
    """Создаёт или обновляет перевод на указанную (или дефолтную) локаль."""
    manager = getattr(instance, related_name)
    translation, _ = manager.update_or_create(
        locale=locale or default_locale(),
        defaults=values,
    )
    return translation
