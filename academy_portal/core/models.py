"""
Абстрактные базовые модели, общие для всех приложений.
"""
from django.db import models


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField('Создано', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлено', auto_now=True)

    class Meta:
        abstract = True


class TranslationModel(TimeStampedModel):
    """
    Строка перевода сущности на одну локаль.

    Наследник объявляет FK на родителя с related_name='translations'
    и unique_together = (<parent>, 'locale').
    """
    locale = models.CharField('Локаль', max_length=10, default='en')

    class Meta:
        abstract = True
        ordering = ['locale']


class TranslatableMixin:
    """Доступ к переведённым полям через прокси-методы."""

    def translated(self, field='name', locale=None):
        from .translations import translated_value
        return translated_value(self, field, locale=locale)

    @property
    def display_name(self):
        return self.translated('name')

    def __str__(self):
        return self.display_name or f'{self.__class__.__name__} #{self.pk}'
