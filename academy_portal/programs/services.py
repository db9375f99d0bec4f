"""
Бизнес-логика ресурсов академии.

LocationService  — филиалы, основной филиал, assessment-программы, отзывы
ProgramService   — программы с вложенными пакетами и расписанием
DiscountService  — скидки на пакеты программы (проверка пересечений)
ReviewService    — обновление рейтинга и отзывов из Google Places
"""
import calendar
import logging
from datetime import date, datetime

from django.db import transaction
from django.utils.text import slugify

from core.exceptions import FieldValidationError

from .google_places import GooglePlacesClient, GooglePlacesError
from .models import ASSESSMENT_NAME, Branch, Discount, Package, Program, Review, Schedule

logger = logging.getLogger(__name__)


class DiscountOverlapError(FieldValidationError):
    default_field = 'package_ids'


# ═══════════════════════════════════════════════════════════════
# LOCATIONS
# ═══════════════════════════════════════════════════════════════

class LocationService:

    @staticmethod
    def branch_slug(name):
        return slugify(name or '') or 'location'

    @staticmethod
    def reset_default(academy, exclude_pk=None):
        """Основной филиал у академии один."""
        queryset = Branch.objects.filter(academy=academy, is_default=True)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)
        queryset.update(is_default=False)

    @staticmethod
    def ensure_assessment_programs(branch):
        """
        Для каждого спорта филиала должна существовать программа 'Assessment'.
        Возвращает список созданных программ.
        """
        sport_ids = list(branch.sports.values_list('pk', flat=True))
        if not sport_ids:
            return []
        existing = set(
            Program.objects
            .filter(branch=branch, sport_id__in=sport_ids, name=ASSESSMENT_NAME)
            .values_list('sport_id', flat=True)
        )
        created = [
            Program.objects.create(
                academy=branch.academy,
                branch=branch,
                sport_id=sport_id,
                name=ASSESSMENT_NAME,
                type=Program.TYPE_TEAM,
            )
            for sport_id in sport_ids
            if sport_id not in existing
        ]
        if created:
            logger.info('Created %s assessment programs for branch %s', len(created), branch.pk)
        return created

    @staticmethod
    def schedule_review_refresh(branch):
        """Отзывы подтягиваются Celery-задачей после коммита транзакции."""
        if not (branch.name_in_google_map or branch.url):
            return
        from .tasks import refresh_branch_reviews

        transaction.on_commit(lambda: refresh_branch_reviews.delay(branch.pk))

    @staticmethod
    def toggle_hidden(branch):
        branch.hidden = not branch.hidden
        branch.save(update_fields=['hidden', 'updated_at'])
        return branch


# ═══════════════════════════════════════════════════════════════
# PROGRAMS / PACKAGES
# ═══════════════════════════════════════════════════════════════

def parse_month(value):
    """'January 2026' → date(2026, 1, 1)."""
    try:
        return datetime.strptime(value.strip(), '%B %Y').date()
    except (AttributeError, ValueError):
        raise FieldValidationError(f'Invalid month: {value}', field='months')


def month_bounds(months):
    """Первый день первого месяца и последний день последнего."""
    parsed = sorted(parse_month(value) for value in months)
    first, last = parsed[0], parsed[-1]
    last_day = calendar.monthrange(last.year, last.month)[1]
    return first, date(last.year, last.month, last_day)


class ProgramService:

    @staticmethod
    def prepare_package_data(data):
        """Нормализует данные пакета: даты помесячного пакета и число занятий в неделю."""
        data = dict(data)
        schedules = data.get('schedules')
        name = (data.get('name') or '').lower()
        months = data.get('months') or []

        if name.startswith('monthly'):
            if not months:
                raise FieldValidationError('Select at least one month', field='months')
            data['start_date'], data['end_date'] = month_bounds(months)
        else:
            data['months'] = []

        if data.get('start_date') and data.get('end_date') and data['start_date'] > data['end_date']:
            raise FieldValidationError('End date must be after start date', field='end_date')

        if schedules is not None:
            data['session_per_week'] = len(schedules)
        return data

    @staticmethod
    def replace_schedules(package, schedules):
        package.schedules.all().delete()
        Schedule.objects.bulk_create([
            Schedule(
                package=package,
                day=item['day'],
                from_time=item['from_time'],
                to_time=item['to_time'],
                memo=item.get('memo') or '',
            )
            for item in schedules
        ])

    @classmethod
    @transaction.atomic
    def save_package(cls, program, data, package=None):
        data = cls.prepare_package_data(data)
        schedules = data.pop('schedules', None)
        data.pop('id', None)
        if package is None:
            package = Package.objects.create(program=program, **data)
        else:
            for key, value in data.items():
                setattr(package, key, value)
            package.save()
        if schedules is not None:
            cls.replace_schedules(package, schedules)
        return package

    @classmethod
    @transaction.atomic
    def sync_packages(cls, program, packages_data):
        """
        Приводит пакеты программы к переданному списку:
        без id — создаются, с id — обновляются, отсутствующие — удаляются.
        """
        current = {package.pk: package for package in program.packages.all()}
        keep_ids = set()
        for item in packages_data:
            package_id = item.get('id')
            package = current.get(package_id) if package_id else None
            package = cls.save_package(program, item, package=package)
            keep_ids.add(package.pk)

        stale = [pk for pk in current if pk not in keep_ids]
        if stale:
            Package.objects.filter(pk__in=stale).delete()
            logger.info('Program %s: removed packages %s', program.pk, stale)


# ═══════════════════════════════════════════════════════════════
# DISCOUNTS
# ═══════════════════════════════════════════════════════════════

class DiscountService:

    @staticmethod
    def validate(discount_type, value, start_date, end_date):
        if discount_type not in (Discount.TYPE_FIXED, Discount.TYPE_PERCENTAGE):
            raise FieldValidationError('Invalid discount type', field='type')
        if value is None or value <= 0:
            raise FieldValidationError('Discount value must be greater than 0', field='value')
        if discount_type == Discount.TYPE_PERCENTAGE and value > 100:
            raise FieldValidationError('Percentage discount cannot exceed 100%', field='value')
        if start_date >= end_date:
            raise FieldValidationError('Start date must be before end date', field='end_date')

    @staticmethod
    def overlapping_package_names(program, start_date, end_date, package_ids, exclude_pk=None):
        """Названия пакетов, у которых уже есть скидка, пересекающая [start_date, end_date]."""
        overlapping = Discount.objects.filter(
            program=program,
            end_date__gte=start_date,
            start_date__lte=end_date,
        )
        if exclude_pk is not None:
            overlapping = overlapping.exclude(pk=exclude_pk)
        return list(
            Package.objects
            .filter(discounts__in=overlapping, pk__in=package_ids)
            .order_by('name')
            .values_list('name', flat=True)
            .distinct()
        )

    @classmethod
    def check_overlap(cls, program, start_date, end_date, package_ids, exclude_pk=None):
        names = cls.overlapping_package_names(program, start_date, end_date, package_ids, exclude_pk)
        if names:
            logger.info('Discount overlap for program %s: %s', program.pk, names)
            raise DiscountOverlapError(
                f"Some packages already have discounts in this date range: {', '.join(names)}"
            )

    @staticmethod
    def _packages_of(program, package_ids):
        packages = list(Package.objects.filter(program=program, pk__in=package_ids))
        if len(packages) != len(set(package_ids)):
            raise FieldValidationError('Package not found', field='package_ids')
        return packages

    @classmethod
    @transaction.atomic
    def create(cls, program, discount_type, value, start_date, end_date, package_ids):
        cls.validate(discount_type, value, start_date, end_date)
        packages = cls._packages_of(program, package_ids)
        cls.check_overlap(program, start_date, end_date, package_ids)

        discount = Discount.objects.create(
            program=program,
            type=discount_type,
            value=value,
            start_date=start_date,
            end_date=end_date,
        )
        discount.packages.set(packages)
        logger.info('Discount %s created for program %s', discount.pk, program.pk)
        return discount

    @classmethod
    @transaction.atomic
    def update(cls, discount, discount_type, value, start_date, end_date, package_ids):
        cls.validate(discount_type, value, start_date, end_date)
        packages = cls._packages_of(discount.program, package_ids)
        cls.check_overlap(discount.program, start_date, end_date, package_ids, exclude_pk=discount.pk)

        discount.type = discount_type
        discount.value = value
        discount.start_date = start_date
        discount.end_date = end_date
        discount.save()
        discount.packages.set(packages)
        return discount

    @staticmethod
    def for_program(program):
        return [
            {
                'id': discount.pk,
                'type': discount.type,
                'value': discount.value,
                'start_date': discount.start_date,
                'end_date': discount.end_date,
                'package_ids': [package.pk for package in discount.packages.all()],
            }
            for discount in program.discounts.prefetch_related('packages')
        ]


# ═══════════════════════════════════════════════════════════════
# GOOGLE REVIEWS
# ═══════════════════════════════════════════════════════════════

class ReviewService:

    @staticmethod
    def refresh_branch(branch, client=None):
        """
        Обновляет rate, reviews, place_id и строки Review филиала.

        Returns:
            bool: True если данные получены и сохранены
        """
        client = client or GooglePlacesClient()
        if not client.is_configured:
            logger.info('Google Places API key is not configured, skipping branch %s', branch.pk)
            return False

        query = branch.name_in_google_map or branch.display_name
        if not query:
            return False

        try:
            info = client.fetch_place_information(query)
        except GooglePlacesError:
            logger.warning('Could not refresh reviews for branch %s', branch.pk)
            return False
        if info is None:
            return False

        with transaction.atomic():
            reviews = info['reviews']
            branch.place_id = info['place_id']
            branch.rate = info['rating']
            branch.reviews = info['user_ratings_total'] if info['user_ratings_total'] is not None else len(reviews)
            if info['latitude'] is not None and info['longitude'] is not None:
                branch.latitude = str(info['latitude'])
                branch.longitude = str(info['longitude'])
            branch.save(update_fields=['place_id', 'rate', 'reviews', 'latitude', 'longitude', 'updated_at'])

            branch.place_reviews.all().delete()
            Review.objects.bulk_create([
                Review(
                    branch=branch,
                    place_id=info['place_id'],
                    author_name=item.get('author_name') or '',
                    author_url=item.get('author_url') or '',
                    language=item.get('language') or 'en',
                    original_language=item.get('original_language') or item.get('language') or 'en',
                    profile_photo_url=item.get('profile_photo_url') or '',
                    rating=item.get('rating') or 0,
                    relative_time_description=item.get('relative_time_description') or '',
                    text=item.get('text') or '',
                    time=item.get('time') or 0,
                    translated=bool(item.get('translated')),
                )
                for item in reviews
            ])

        logger.info('Branch %s reviews refreshed: rate=%s reviews=%s', branch.pk, branch.rate, branch.reviews)
        return True
