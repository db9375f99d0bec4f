"""
Промокоды: проверки дат, типа и уникальности кода в пределах академии.

Ошибки — PromoCodeError с полем формы.
"""
import logging

from django.db import IntegrityError, transaction

from core.exceptions import FieldValidationError

from .models import PromoCode

logger = logging.getLogger(__name__)

GENERAL_ACADEMY_NAME = 'General (All Academies)'

SELECTION_GENERAL = 'general'
SELECTION_SPECIFIC = 'specific'


class PromoCodeError(FieldValidationError):
    pass


class PromoCodeService:

    @staticmethod
    def validate(discount_type, discount_value, start_date, end_date, can_be_used):
        if start_date > end_date:
            raise PromoCodeError('Start date must be before end date', field='start_date')
        if discount_type not in (PromoCode.TYPE_FIXED, PromoCode.TYPE_PERCENTAGE):
            raise PromoCodeError('Discount type must be either fixed or percentage', field='discount_type')
        if discount_value is None or discount_value <= 0:
            raise PromoCodeError('Discount value must be greater than 0', field='discount_value')
        if discount_type == PromoCode.TYPE_PERCENTAGE and discount_value > 100:
            raise PromoCodeError('Percentage discount cannot exceed 100%', field='discount_value')
        if can_be_used is None or can_be_used < 1:
            raise PromoCodeError('Promo code must be usable at least once', field='can_be_used')

    @staticmethod
    def check_unique(code, academy_id, exclude_pk=None):
        queryset = PromoCode.objects.filter(code=code, academy_id=academy_id)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)
        if queryset.exists():
            if academy_id is None:
                raise PromoCodeError('A general promo code with this code already exists', field='code')
            raise PromoCodeError('A promo code with this code already exists for this academy', field='code')

    @classmethod
    def save(cls, data, academy_id, instance=None):
        """Создание или обновление одной строки промокода."""
        cls.validate(
            data['discount_type'], data['discount_value'],
            data['start_date'], data['end_date'], data.get('can_be_used', 1),
        )
        cls.check_unique(data['code'], academy_id, exclude_pk=getattr(instance, 'pk', None))

        promo_code = instance or PromoCode()
        for key in ('code', 'discount_type', 'discount_value', 'start_date', 'end_date', 'can_be_used'):
            if key in data:
                setattr(promo_code, key, data[key])
        promo_code.academy_id = academy_id
        try:
            with transaction.atomic():
                promo_code.save()
        except IntegrityError:
            logger.exception('Failed to save promo code %s', data['code'])
            raise PromoCodeError('Failed to save promo code')
        return promo_code

    @classmethod
    @transaction.atomic
    def create_for_selection(cls, data, selection_mode, academy_ids):
        """
        Back-office: general → одна строка без академии,
        specific → по строке на каждую выбранную академию.
        """
        if selection_mode == SELECTION_SPECIFIC:
            if not academy_ids:
                raise PromoCodeError('Select at least one academy', field='academy_ids')
            targets = list(dict.fromkeys(academy_ids))
        else:
            targets = [None]

        created = [cls.save(data, academy_id) for academy_id in targets]
        logger.info(
            'Promo code %s created for %s',
            data['code'], 'all academies' if targets == [None] else f'academies {targets}',
        )
        return created
