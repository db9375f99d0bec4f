"""
Ресурсы академии: филиалы (локации), тренеры, программы, пакеты,
расписание и скидки.

Оценочная тренировка (assessment) — это Program с name == 'Assessment';
такие программы создаются автоматически для каждой пары филиал + спорт.
"""
from django.db import models

from academies.mixins import AcademyQuerySet
from core.models import TimeStampedModel, TranslatableMixin, TranslationModel

ASSESSMENT_NAME = 'Assessment'


class Branch(TranslatableMixin, TimeStampedModel):
    academy = models.ForeignKey(
        'academies.Academy',
        on_delete=models.CASCADE,
        related_name='branches',
        verbose_name='Академия',
    )
    slug = models.SlugField('Slug', max_length=255)
    latitude = models.CharField('Широта', max_length=255, blank=True, default='')
    longitude = models.CharField('Долгота', max_length=255, blank=True, default='')
    is_default = models.BooleanField('Основной филиал', default=False)
    rate = models.FloatField('Рейтинг Google', null=True, blank=True)
    reviews = models.PositiveIntegerField('Количество отзывов', null=True, blank=True)
    url = models.CharField('Ссылка на карту', max_length=255, blank=True, default='')
    place_id = models.CharField('Google place_id', max_length=255, blank=True, default='')
    name_in_google_map = models.CharField('Название в Google Maps', max_length=255, blank=True, default='')
    hidden = models.BooleanField('Скрыт', default=False)
    facilities = models.ManyToManyField('catalog.Facility', blank=True, related_name='branches', verbose_name='Удобства')
    sports = models.ManyToManyField('catalog.Sport', blank=True, related_name='branches', verbose_name='Виды спорта')

    objects = AcademyQuerySet.as_manager()

    class Meta:
        verbose_name = 'Филиал'
        verbose_name_plural = 'Филиалы'
        ordering = ['-is_default', 'created_at']


class BranchTranslation(TranslationModel):
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name='translations')
    name = models.CharField('Название', max_length=255)

    class Meta(TranslationModel.Meta):
        verbose_name = 'Перевод филиала'
        verbose_name_plural = 'Переводы филиалов'
        unique_together = [('branch', 'locale')]


class Review(TimeStampedModel):
    """Отзыв Google Maps о филиале."""

    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name='place_reviews', verbose_name='Филиал')
    place_id = models.CharField('Google place_id', max_length=255)
    author_name = models.CharField('Автор', max_length=255)
    author_url = models.CharField('Профиль автора', max_length=512, blank=True, default='')
    language = models.CharField('Язык', max_length=10, default='en')
    original_language = models.CharField('Исходный язык', max_length=10, default='en')
    profile_photo_url = models.CharField('Фото автора', max_length=512, blank=True, default='')
    rating = models.PositiveSmallIntegerField('Оценка')
    relative_time_description = models.CharField('Когда', max_length=100, blank=True, default='')
    text = models.TextField('Текст', blank=True, default='')
    time = models.BigIntegerField('Unix time')
    translated = models.BooleanField('Переведён', default=False)

    class Meta:
        verbose_name = 'Отзыв'
        verbose_name_plural = 'Отзывы'
        ordering = ['-time']

    def __str__(self):
        return f'{self.author_name}: {self.rating}'


class ProgramQuerySet(AcademyQuerySet):

    def assessments(self):
        return self.filter(name=ASSESSMENT_NAME)

    def regular(self):
        return self.exclude(name=ASSESSMENT_NAME)


class Program(TimeStampedModel):
    TYPE_TEAM = 'TEAM'
    TYPE_PRIVATE = 'PRIVATE'

    TYPE_CHOICES = (
        (TYPE_TEAM, 'Групповая'),
        (TYPE_PRIVATE, 'Индивидуальная'),
    )

    academy = models.ForeignKey(
        'academies.Academy',
        on_delete=models.CASCADE,
        related_name='programs',
        verbose_name='Академия',
    )
    name = models.CharField('Название', max_length=255)
    description = models.TextField('Описание', blank=True, default='')
    type = models.CharField('Тип', max_length=20, choices=TYPE_CHOICES, default=TYPE_TEAM)
    number_of_seats = models.PositiveIntegerField('Мест', null=True, blank=True)
    branch = models.ForeignKey(
        Branch,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='programs',
        verbose_name='Филиал',
    )
    sport = models.ForeignKey(
        'catalog.Sport',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='programs',
        verbose_name='Вид спорта',
    )
    gender = models.CharField('Пол', max_length=255, blank=True, default='')
    start_date_of_birth = models.DateField('Дата рождения с', null=True, blank=True)
    end_date_of_birth = models.DateField('Дата рождения по', null=True, blank=True)
    color = models.CharField('Цвет в календаре', max_length=32, blank=True, default='')
    assessment_deducted_from_program = models.BooleanField('Стоимость оценки вычитается из программы', default=False)

    objects = ProgramQuerySet.as_manager()

    class Meta:
        verbose_name = 'Программа'
        verbose_name_plural = 'Программы'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def is_assessment(self):
        return self.name == ASSESSMENT_NAME


class Package(TimeStampedModel):
    program = models.ForeignKey(Program, on_delete=models.CASCADE, related_name='packages', verbose_name='Программа')
    name = models.CharField('Название', max_length=255, default='Assessment Package')
    price = models.DecimalField('Цена', max_digits=10, decimal_places=2)
    start_date = models.DateField('Начало')
    end_date = models.DateField('Окончание')
    # ["January 2026", "February 2026"] для помесячных пакетов
    months = models.JSONField('Месяцы', default=list, blank=True)
    session_per_week = models.PositiveIntegerField('Занятий в неделю', default=0)
    session_duration = models.PositiveIntegerField('Длительность занятия, мин', null=True, blank=True)
    capacity = models.PositiveIntegerField('Вместимость', default=0)
    memo = models.TextField('Заметка', blank=True, default='')
    entry_fees = models.DecimalField('Вступительный взнос', max_digits=10, decimal_places=2, default=0)
    entry_fees_explanation = models.TextField('Пояснение к взносу', blank=True, default='')
    entry_fees_applied_until = models.JSONField('Взнос для месяцев', default=list, blank=True)
    entry_fees_start_date = models.DateField('Взнос с', null=True, blank=True)
    entry_fees_end_date = models.DateField('Взнос по', null=True, blank=True)

    class Meta:
        verbose_name = 'Пакет'
        verbose_name_plural = 'Пакеты'
        ordering = ['start_date', 'id']

    def __str__(self):
        return self.name

    @property
    def is_assessment(self):
        return self.name.lower().startswith('assessment')

    @property
    def is_monthly(self):
        return self.name.lower().startswith('monthly')


class Schedule(TimeStampedModel):
    DAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')
    DAY_CHOICES = tuple((day, day.capitalize()) for day in DAYS)

    package = models.ForeignKey(Package, on_delete=models.CASCADE, related_name='schedules', verbose_name='Пакет')
    day = models.CharField('День недели', max_length=20, choices=DAY_CHOICES)
    from_time = models.TimeField('С')
    to_time = models.TimeField('До')
    memo = models.TextField('Заметка', blank=True, default='')

    class Meta:
        verbose_name = 'Расписание'
        verbose_name_plural = 'Расписание'
        ordering = ['id']

    def __str__(self):
        return f'{self.day} {self.from_time:%H:%M}-{self.to_time:%H:%M}'

    @property
    def weekday(self):
        """0 = понедельник, как date.weekday()."""
        return self.DAYS.index(self.day)


class Coach(TimeStampedModel):
    academy = models.ForeignKey(
        'academies.Academy',
        on_delete=models.CASCADE,
        related_name='coaches',
        verbose_name='Академия',
    )
    name = models.CharField('Имя', max_length=255)
    title = models.CharField('Должность', max_length=255, blank=True, default='')
    image = models.CharField('Фото', max_length=500, blank=True, default='')
    bio = models.TextField('О тренере', blank=True, default='')
    gender = models.CharField('Пол', max_length=50, blank=True, default='')
    private_session_percentage = models.CharField('Процент за индивидуальные', max_length=255, blank=True, default='')
    date_of_birth = models.DateField('Дата рождения', null=True, blank=True)
    sports = models.ManyToManyField('catalog.Sport', blank=True, related_name='coaches', verbose_name='Виды спорта')
    spoken_languages = models.ManyToManyField(
        'catalog.SpokenLanguage', blank=True, related_name='coaches', verbose_name='Языки',
    )
    programs = models.ManyToManyField(Program, blank=True, related_name='coaches', verbose_name='Программы')
    packages = models.ManyToManyField(Package, blank=True, related_name='coaches', verbose_name='Пакеты')

    objects = AcademyQuerySet.as_manager()

    class Meta:
        verbose_name = 'Тренер'
        verbose_name_plural = 'Тренеры'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class Discount(TimeStampedModel):
    TYPE_FIXED = 'fixed'
    TYPE_PERCENTAGE = 'percentage'

    TYPE_CHOICES = (
        (TYPE_FIXED, 'Фиксированная'),
        (TYPE_PERCENTAGE, 'Процент'),
    )

    program = models.ForeignKey(Program, on_delete=models.CASCADE, related_name='discounts', verbose_name='Программа')
    type = models.CharField('Тип', max_length=20, choices=TYPE_CHOICES)
    value = models.DecimalField('Размер', max_digits=10, decimal_places=2)
    start_date = models.DateTimeField('Начало')
    end_date = models.DateTimeField('Окончание')
    packages = models.ManyToManyField(Package, blank=True, related_name='discounts', verbose_name='Пакеты')

    class Meta:
        verbose_name = 'Скидка'
        verbose_name_plural = 'Скидки'
        ordering = ['start_date']

    def __str__(self):
        return f'{self.value} {self.type} ({self.start_date:%Y-%m-%d} - {self.end_date:%Y-%m-%d})'
