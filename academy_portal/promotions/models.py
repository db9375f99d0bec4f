from django.core.validators import MinValueValidator
from django.db import models

from academies.mixins import AcademyQuerySet
from core.models import TimeStampedModel


class PromoCode(TimeStampedModel):
    """Промокод академии. academy = NULL — общий промокод платформы."""

    TYPE_FIXED = 'fixed'
    TYPE_PERCENTAGE = 'percentage'

    TYPE_CHOICES = (
        (TYPE_FIXED, 'Фиксированная'),
        (TYPE_PERCENTAGE, 'Процент'),
    )

    code = models.CharField('Код', max_length=50)
    discount_type = models.CharField('Тип скидки', max_length=20, choices=TYPE_CHOICES)
    discount_value = models.DecimalField('Размер скидки', max_digits=10, decimal_places=2)
    start_date = models.DateTimeField('Действует с')
    end_date = models.DateTimeField('Действует по')
    can_be_used = models.PositiveIntegerField('Лимит использований', default=1, validators=[MinValueValidator(1)])
    academy = models.ForeignKey(
        'academies.Academy',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='promo_codes',
        verbose_name='Академия',
    )

    objects = AcademyQuerySet.as_manager()

    class Meta:
        verbose_name = 'Промокод'
        verbose_name_plural = 'Промокоды'
        ordering = ['created_at']
        unique_together = [('code', 'academy')]

    def __str__(self):
        return self.code

    @property
    def is_general(self):
        return self.academy_id is None
