"""
Справочники платформы: виды спорта, языки, пол, удобства, CMS-страницы.

У каждой сущности своя таблица переводов (locale → name/title).
"""
from django.db import models

from core.models import TimeStampedModel, TranslatableMixin, TranslationModel


class Sport(TranslatableMixin, TimeStampedModel):
    slug = models.SlugField('Slug', max_length=255, unique=True)
    image = models.CharField('Изображение', max_length=500, blank=True, default='')

    class Meta:
        verbose_name = 'Вид спорта'
        verbose_name_plural = 'Виды спорта'
        ordering = ['id']


class SportTranslation(TranslationModel):
    sport = models.ForeignKey(Sport, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод вида спорта'
        verbose_name_plural = 'Переводы видов спорта'
        unique_together = [('sport', 'locale')]


class SpokenLanguage(TranslatableMixin, TimeStampedModel):

    class Meta:
        verbose_name = 'Язык общения'
        verbose_name_plural = 'Языки общения'
        ordering = ['id']


class SpokenLanguageTranslation(TranslationModel):
    spoken_language = models.ForeignKey(SpokenLanguage, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод языка'
        verbose_name_plural = 'Переводы языков'
        unique_together = [('spoken_language', 'locale')]


class Gender(TranslatableMixin, TimeStampedModel):

    class Meta:
        verbose_name = 'Пол'
        verbose_name_plural = 'Пол'
        ordering = ['id']


class GenderTranslation(TranslationModel):
    gender = models.ForeignKey(Gender, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод пола'
        verbose_name_plural = 'Переводы пола'
        unique_together = [('gender', 'locale')]


class Facility(TranslatableMixin, TimeStampedModel):
    """Удобство филиала (парковка, раздевалка, ...)."""

    class Meta:
        verbose_name = 'Удобство'
        verbose_name_plural = 'Удобства'
        ordering = ['id']


class FacilityTranslation(TranslationModel):
    facility = models.ForeignKey(Facility, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод удобства'
        verbose_name_plural = 'Переводы удобств'
        unique_together = [('facility', 'locale')]


class Page(TranslatableMixin, TimeStampedModel):
    """CMS-страница (о нас, правила, ...)."""
    order_by = models.IntegerField('Порядок', default=0)
    image = models.CharField('Изображение', max_length=500, blank=True, default='')

    class Meta:
        verbose_name = 'Страница'
        verbose_name_plural = 'Страницы'
        ordering = ['order_by', 'id']

    @property
    def display_name(self):
        return self.translated('title')


class PageTranslation(TranslationModel):
    page = models.ForeignKey(Page, on_delete=models.CASCADE, related_name='translations')
    title = models.CharField('Заголовок', max_length=255)
    content = models.TextField('Содержимое', blank=True, default='')

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод страницы'
        verbose_name_plural = 'Переводы страниц'
        unique_together = [('page', 'locale')]
