"""
Академия — тенант платформы.

Все ресурсы портала (филиалы, тренеры, программы, промокоды, спортсмены,
блоки календаря) принадлежат одной академии и фильтруются по ней.
"""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel, TranslatableMixin, TranslationModel


class Academy(TranslatableMixin, TimeStampedModel):

    STATUS_PENDING = 'pending'
    STATUS_ACCEPTED = 'accepted'
    STATUS_REJECTED = 'rejected'

    STATUS_CHOICES = (
        (STATUS_PENDING, 'На модерации'),
        (STATUS_ACCEPTED, 'Одобрена'),
        (STATUS_REJECTED, 'Отклонена'),
    )

    slug = models.SlugField('Slug', max_length=255, unique=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='academy',
        verbose_name='Владелец',
    )
    entry_fees = models.DecimalField('Вступительный взнос', max_digits=10, decimal_places=2, default=0)
    image = models.CharField('Логотип', max_length=500, blank=True, default='')
    policy = models.TextField('Правила академии', blank=True, default='')
    extra = models.CharField('Дополнительно', max_length=255, blank=True, default='')
    status = models.CharField('Статус', max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    onboarded = models.BooleanField('Онбординг пройден', default=False)
    hidden = models.BooleanField('Скрыта', default=False)
    sports = models.ManyToManyField('catalog.Sport', blank=True, related_name='academies', verbose_name='Виды спорта')

    class Meta:
        verbose_name = 'Академия'
        verbose_name_plural = 'Академии'
        ordering = ['-created_at']

    @property
    def is_active(self):
        return self.status == self.STATUS_ACCEPTED and not self.hidden


class AcademyTranslation(TranslationModel):
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255, blank=True, default='')
    description = models.TextField('Описание', blank=True, default='')

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод академии'
        verbose_name_plural = 'Переводы академий'
        unique_together = [('academy', 'locale')]


class AcademyGalleryImage(models.Model):
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='gallery', verbose_name='Академия')
    url = models.CharField('Изображение', max_length=500)
    order = models.PositiveIntegerField('Порядок', default=0)
    created_at = models.DateTimeField('Создано', auto_now_add=True)

    class Meta:
        verbose_name = 'Фото галереи'
        verbose_name_plural = 'Галерея'
        ordering = ['order', 'id']

    def __str__(self):
        return self.url
