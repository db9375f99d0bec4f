"""
Статистика портала академии.

Счётчики и «трафик» считаются по занятиям (BookingSession) академии,
фильтры — по отображаемым названиям филиала, спорта, программы и полу программы.
"""
import logging
from datetime import timedelta

from django.db.models import Count
from django.utils import timezone

from bookings.models import Booking, BookingSession
from catalog.models import Sport
from core.translations import translated_value
from programs.models import Branch, Program

logger = logging.getLogger(__name__)

TRAFFIC_LIMIT = 4


def month_range(day):
    """Первый и последний день месяца."""
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


class DashboardService:

    def __init__(self, academy, location=None, sport=None, program=None, gender=None, today=None):
        self.academy = academy
        self.location = location or None
        self.sport = sport or None
        self.program = program or None
        self.gender = gender or None
        self.today = today or timezone.localdate()

    def _filter(self, queryset, prefix):
        """prefix — путь до Program ('booking__package__program' или 'package__program')."""
        queryset = queryset.filter(**{f'{prefix}__academy': self.academy})
        if self.location:
            queryset = queryset.filter(**{f'{prefix}__branch__translations__name': self.location})
        if self.sport:
            queryset = queryset.filter(**{f'{prefix}__sport__translations__name': self.sport})
        if self.program:
            queryset = queryset.filter(**{f'{prefix}__name': self.program})
        if self.gender:
            queryset = queryset.filter(**{f'{prefix}__gender': self.gender})
        return queryset.distinct()

    def sessions(self):
        return self._filter(BookingSession.objects.all(), 'booking__package__program')

    def bookings(self):
        return self._filter(Booking.objects.all(), 'package__program')

    def month_count(self, day):
        first, last = month_range(day)
        return self.sessions().filter(date__gte=first, date__lte=last).count()

    def _traffic(self, field, exclude_empty=True):
        rows = self.sessions()
        if exclude_empty:
            rows = rows.exclude(**{f'{field}__isnull': True})
        return list(
            rows.values(field)
            .annotate(count=Count('id', distinct=True))
            .order_by('-count', field)[:TRAFFIC_LIMIT]
        )

    def time_traffic(self):
        return [
            {'hour': row['from_time'].strftime('%H:%M'), 'count': row['count']}
            for row in self._traffic('from_time')
        ]

    def package_traffic(self):
        return [
            {'name': row['booking__package__name'], 'count': row['count']}
            for row in self._traffic('booking__package__name')
        ]

    def program_traffic(self):
        return [
            {'name': row['booking__package__program__name'], 'count': row['count']}
            for row in self._traffic('booking__package__program__name')
        ]

    def coach_traffic(self):
        return [
            {'name': row['booking__coach__name'], 'count': row['count']}
            for row in self._traffic('booking__coach__name')
        ]

    def _translated_traffic(self, field, model):
        rows = self._traffic(field)
        objects = model.objects.prefetch_related('translations').in_bulk([row[field] for row in rows])
        return [
            {'name': translated_value(objects.get(row[field])), 'count': row['count']}
            for row in rows
        ]

    def sport_traffic(self):
        return self._translated_traffic('booking__package__program__sport', Sport)

    def branch_traffic(self):
        return self._translated_traffic('booking__package__program__branch', Branch)

    def all_programs(self):
        programs = (
            Program.objects.for_academy(self.academy)
            .select_related('branch', 'sport')
            .prefetch_related('branch__translations', 'sport__translations')
        )
        names = []
        for program in programs:
            if program.is_assessment:
                name = f'{program.name} {translated_value(program.sport)} {translated_value(program.branch)}'.strip()
            else:
                name = program.name
            names.append({'name': name})
        return names

    def all_locations(self):
        return [
            {'name': translated_value(branch)}
            for branch in Branch.objects.for_academy(self.academy).prefetch_related('translations')
        ]

    def all_sports(self):
        return [
            {'name': translated_value(sport)}
            for sport in self.academy.sports.prefetch_related('translations')
        ]

    def stats(self):
        last_month_day = self.today.replace(day=1) - timedelta(days=1)
        data = {
            'current_month_count': self.month_count(self.today),
            'last_month_count': self.month_count(last_month_day),
            'total_bookings': self.bookings().count(),
            'time_traffic': self.time_traffic(),
            'package_traffic': self.package_traffic(),
            'program_traffic': self.program_traffic(),
            'coach_traffic': self.coach_traffic(),
            'sport_traffic': self.sport_traffic(),
            'branch_traffic': self.branch_traffic(),
            'all_programs': self.all_programs(),
            'all_locations': self.all_locations(),
            'all_sports': self.all_sports(),
        }
        logger.debug('Dashboard stats for academy %s: %s sessions this month', self.academy.pk, data['current_month_count'])
        return data
