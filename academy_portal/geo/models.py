from django.db import models

from core.models import TimeStampedModel, TranslatableMixin, TranslationModel


class Country(TranslatableMixin, TimeStampedModel):

    class Meta:
        verbose_name = 'Страна'
        verbose_name_plural = 'Страны'
        ordering = ['id']


class CountryTranslation(TranslationModel):
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод страны'
        verbose_name_plural = 'Переводы стран'
        unique_together = [('country', 'locale')]


class State(TranslatableMixin, TimeStampedModel):
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='states', verbose_name='Страна')

    class Meta:
        verbose_name = 'Регион'
        verbose_name_plural = 'Регионы'
        ordering = ['id']


class StateTranslation(TranslationModel):
    state = models.ForeignKey(State, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод региона'
        verbose_name_plural = 'Переводы регионов'
        unique_together = [('state', 'locale')]


class City(TranslatableMixin, TimeStampedModel):
    state = models.ForeignKey(State, on_delete=models.CASCADE, related_name='cities', verbose_name='Регион')

    class Meta:
        verbose_name = 'Город'
        verbose_name_plural = 'Города'
        ordering = ['id']


class CityTranslation(TranslationModel):
    city = models.ForeignKey(City, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод города'
        verbose_name_plural = 'Переводы городов'
        unique_together = [('city', 'locale')]
