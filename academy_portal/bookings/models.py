"""
Спортсмены академии, бронирования пакетов и календарь.

Booking         — покупка пакета профилем спортсмена
BookingSession  — отдельное занятие бронирования (дата + время)
EntryFeesHistory — оплаченные вступительные взносы (профиль + спорт + программа)
Block           — закрытый интервал календаря академии
"""
from django.conf import settings
from django.db import models

from academies.mixins import AcademyQuerySet
from core.models import TimeStampedModel


class AcademicAthlete(TimeStampedModel):
    TYPE_PRIMARY = 'primary'
    TYPE_FELLOW = 'fellow'

    TYPE_CHOICES = (
        (TYPE_PRIMARY, 'Основной'),
        (TYPE_FELLOW, 'Сопровождаемый'),
    )

    academy = models.ForeignKey(
        'academies.Academy',
        on_delete=models.CASCADE,
        related_name='athletes',
        verbose_name='Академия',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='academy_athletes',
        verbose_name='Пользователь',
    )
    profile = models.ForeignKey(
        'accounts.Profile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='academy_athletes',
        verbose_name='Профиль',
    )
    sport = models.ForeignKey(
        'catalog.Sport',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='athletes',
        verbose_name='Вид спорта',
    )
    certificate = models.CharField('Сертификат', max_length=500, blank=True, default='')
    type = models.CharField('Тип', max_length=20, choices=TYPE_CHOICES, default=TYPE_PRIMARY)
    first_guardian_name = models.CharField('Первый опекун', max_length=255, blank=True, default='')
    first_guardian_relationship = models.CharField('Кем приходится (1)', max_length=255, blank=True, default='')
    first_guardian_email = models.EmailField('Email опекуна (1)', blank=True, default='')
    first_guardian_phone = models.CharField('Телефон опекуна (1)', max_length=32, blank=True, default='')
    second_guardian_name = models.CharField('Второй опекун', max_length=255, blank=True, default='')
    second_guardian_relationship = models.CharField('Кем приходится (2)', max_length=255, blank=True, default='')
    second_guardian_email = models.EmailField('Email опекуна (2)', blank=True, default='')
    second_guardian_phone = models.CharField('Телефон опекуна (2)', max_length=32, blank=True, default='')

    objects = AcademyQuerySet.as_manager()

    class Meta:
        verbose_name = 'Спортсмен академии'
        verbose_name_plural = 'Спортсмены академии'
        ordering = ['-created_at']

    def __str__(self):
        return self.profile.name if self.profile_id else str(self.user)


class BookingQuerySet(AcademyQuerySet):
    academy_field = 'package__program__academy'

    def successful(self):
        return self.filter(status=Booking.STATUS_SUCCESS)


class Booking(TimeStampedModel):
    STATUS_SUCCESS = 'success'
    STATUS_REJECTED = 'rejected'
    STATUS_PENDING = 'pending'

    STATUS_CHOICES = (
        (STATUS_SUCCESS, 'Успешно'),
        (STATUS_REJECTED, 'Отклонено'),
        (STATUS_PENDING, 'Ожидает'),
    )

    status = models.CharField('Статус', max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    coach = models.ForeignKey(
        'programs.Coach',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bookings',
        verbose_name='Тренер',
    )
    profile = models.ForeignKey(
        'accounts.Profile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bookings',
        verbose_name='Профиль',
    )
    package = models.ForeignKey(
        'programs.Package',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bookings',
        verbose_name='Пакет',
    )
    price = models.DecimalField('Итоговая цена', max_digits=10, decimal_places=2)
    package_price = models.DecimalField('Цена пакета', max_digits=10, decimal_places=2)
    academy_policy = models.BooleanField('Согласие с правилами академии', default=False)
    roap_policy = models.BooleanField('Согласие с правилами платформы', default=False)
    entry_fees_paid = models.BooleanField('Взнос оплачен', default=False)
    # Оценочное бронирование, стоимость которого учтена в этом
    assessment_deduction = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='deducted_in',
        verbose_name='Учтённая оценка',
    )

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = 'Бронирование'
        verbose_name_plural = 'Бронирования'
        ordering = ['-created_at']

    def __str__(self):
        return f'Booking #{self.pk} ({self.status})'


class BookingSession(TimeStampedModel):
    STATUS_PENDING = 'pending'
    STATUS_ACCEPTED = 'accepted'
    STATUS_UPCOMING = 'upcoming'
    STATUS_REJECTED = 'rejected'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = (
        (STATUS_PENDING, 'Ожидает'),
        (STATUS_ACCEPTED, 'Подтверждено'),
        (STATUS_UPCOMING, 'Предстоит'),
        (STATUS_REJECTED, 'Отклонено'),
        (STATUS_CANCELLED, 'Отменено'),
    )

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name='sessions', verbose_name='Бронирование')
    date = models.DateField('Дата', db_index=True)
    from_time = models.TimeField('С')
    to_time = models.TimeField('До')
    status = models.CharField('Статус', max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    class Meta:
        verbose_name = 'Занятие'
        verbose_name_plural = 'Занятия'
        ordering = ['date', 'from_time']

    def __str__(self):
        return f'{self.date} {self.from_time:%H:%M}-{self.to_time:%H:%M}'


class EntryFeesHistory(models.Model):
    profile = models.ForeignKey(
        'accounts.Profile', on_delete=models.CASCADE, related_name='entry_fees_history', verbose_name='Профиль',
    )
    sport = models.ForeignKey(
        'catalog.Sport', on_delete=models.CASCADE, related_name='entry_fees_history', verbose_name='Вид спорта',
    )
    program = models.ForeignKey(
        'programs.Program', on_delete=models.CASCADE, related_name='entry_fees_history', verbose_name='Программа',
    )
    paid_at = models.DateTimeField('Оплачено', auto_now_add=True)

    class Meta:
        verbose_name = 'Оплата взноса'
        verbose_name_plural = 'История взносов'
        ordering = ['-paid_at']


class Block(TimeStampedModel):
    """
    Закрытый интервал в календаре.

    Для каждого измерения (филиалы, виды спорта, пакеты, программы) блок
    действует либо на все объекты академии, либо на выбранные через M2M.
    """

    SCOPE_ALL = 'all'
    SCOPE_SPECIFIC = 'specific'

    SCOPE_CHOICES = (
        (SCOPE_ALL, 'Все'),
        (SCOPE_SPECIFIC, 'Выбранные'),
    )

    academy = models.ForeignKey(
        'academies.Academy',
        on_delete=models.CASCADE,
        related_name='blocks',
        verbose_name='Академия',
    )
    date = models.DateField('Дата', db_index=True)
    start_time = models.TimeField('Начало')
    end_time = models.TimeField('Окончание')
    note = models.TextField('Заметка', blank=True, default='')
    branch_scope = models.CharField('Филиалы', max_length=10, choices=SCOPE_CHOICES, default=SCOPE_ALL)
    sport_scope = models.CharField('Виды спорта', max_length=10, choices=SCOPE_CHOICES, default=SCOPE_ALL)
    package_scope = models.CharField('Пакеты', max_length=10, choices=SCOPE_CHOICES, default=SCOPE_ALL)
    program_scope = models.CharField('Программы', max_length=10, choices=SCOPE_CHOICES, default=SCOPE_ALL)
    branches = models.ManyToManyField('programs.Branch', blank=True, related_name='blocks', verbose_name='Выбранные филиалы')
    sports = models.ManyToManyField('catalog.Sport', blank=True, related_name='blocks', verbose_name='Выбранные виды спорта')
    packages = models.ManyToManyField('programs.Package', blank=True, related_name='blocks', verbose_name='Выбранные пакеты')
    programs = models.ManyToManyField('programs.Program', blank=True, related_name='blocks', verbose_name='Выбранные программы')

    objects = AcademyQuerySet.as_manager()

    # scope-поле → M2M
    SCOPES = (
        ('branch_scope', 'branches'),
        ('sport_scope', 'sports'),
        ('package_scope', 'packages'),
        ('program_scope', 'programs'),
    )

    class Meta:
        verbose_name = 'Блокировка'
        verbose_name_plural = 'Блокировки'
        ordering = ['date', 'start_time']

    def __str__(self):
        return f'{self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M}'
