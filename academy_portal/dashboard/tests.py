from datetime import date

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from bookings.models import Booking, BookingSession
from core.testing import (
    create_academy,
    create_admin,
    create_athlete,
    create_branch,
    create_package,
    create_program,
    create_sport,
)
from programs.models import ASSESSMENT_NAME, Coach

from .services import DashboardService, month_range


def book(profile, package, dates, from_time='17:00', to_time='18:00', coach=None):
    booking = Booking.objects.create(
        profile=profile,
        package=package,
        coach=coach,
        price=package.price,
        package_price=package.price,
        status=Booking.STATUS_SUCCESS,
    )
    for day in dates:
        BookingSession.objects.create(booking=booking, date=day, from_time=from_time, to_time=to_time)
    return booking


class DashboardFixtureMixin:
    """
    Juniors (Main Branch, Football, male): 26.01, 02.02, 09.02 в 17:00.
    Seniors (North Branch, Tennis, female): 04.02 в 18:00 с тренером.
    """

    def create_fixture(self):
        self.academy = create_academy()
        self.football = create_sport('Football')
        self.tennis = create_sport('Tennis')
        self.academy.sports.set([self.football, self.tennis])

        self.main = create_branch(self.academy, sports=[self.football], is_default=True)
        self.north = create_branch(self.academy, name='North Branch', sports=[self.tennis])
        self.juniors = create_program(self.academy, self.main, self.football, gender='male')
        self.seniors = create_program(self.academy, self.north, self.tennis, name='Seniors', gender='female')
        create_program(self.academy, self.main, self.football, name=ASSESSMENT_NAME)
        self.coach = Coach.objects.create(academy=self.academy, name='Coach Sam')

        athlete = create_athlete(self.academy)
        book(
            athlete.profile,
            create_package(self.juniors),
            [date(2026, 1, 26), date(2026, 2, 2), date(2026, 2, 9)],
        )
        book(
            athlete.profile,
            create_package(self.seniors, name='Monthly'),
            [date(2026, 2, 4)],
            from_time='18:00',
            to_time='19:00',
            coach=self.coach,
        )


class MonthRangeTests(TestCase):

    def test_month_range(self):
        self.assertEqual(month_range(date(2026, 2, 15)), (date(2026, 2, 1), date(2026, 2, 28)))
        self.assertEqual(month_range(date(2028, 2, 1)), (date(2028, 2, 1), date(2028, 2, 29)))
        self.assertEqual(month_range(date(2026, 12, 31)), (date(2026, 12, 1), date(2026, 12, 31)))


class DashboardServiceTests(DashboardFixtureMixin, TestCase):

    def setUp(self):
        self.create_fixture()

    def test_counters(self):
        stats = DashboardService(self.academy, today=date(2026, 2, 15)).stats()

        self.assertEqual(stats['current_month_count'], 3)
        self.assertEqual(stats['last_month_count'], 1)
        self.assertEqual(stats['total_bookings'], 2)

    def test_traffic(self):
        stats = DashboardService(self.academy, today=date(2026, 2, 15)).stats()

        self.assertEqual(stats['time_traffic'], [{'hour': '17:00', 'count': 3}, {'hour': '18:00', 'count': 1}])
        self.assertEqual(stats['program_traffic'], [{'name': 'Juniors', 'count': 3}, {'name': 'Seniors', 'count': 1}])
        self.assertEqual(stats['package_traffic'], [{'name': 'Term 1', 'count': 3}, {'name': 'Monthly', 'count': 1}])
        self.assertEqual(stats['coach_traffic'], [{'name': 'Coach Sam', 'count': 1}])
        self.assertEqual(stats['sport_traffic'], [{'name': 'Football', 'count': 3}, {'name': 'Tennis', 'count': 1}])
        self.assertEqual(
            stats['branch_traffic'],
            [{'name': 'Main Branch', 'count': 3}, {'name': 'North Branch', 'count': 1}],
        )

    def test_filter_lists(self):
        stats = DashboardService(self.academy).stats()

        self.assertEqual(stats['all_locations'], [{'name': 'Main Branch'}, {'name': 'North Branch'}])
        self.assertEqual(sorted(item['name'] for item in stats['all_sports']), ['Football', 'Tennis'])
        self.assertEqual(
            sorted(item['name'] for item in stats['all_programs']),
            ['Assessment Football Main Branch', 'Juniors', 'Seniors'],
        )

    def test_location_filter(self):
        stats = DashboardService(self.academy, location='North Branch', today=date(2026, 2, 15)).stats()

        self.assertEqual(stats['current_month_count'], 1)
        self.assertEqual(stats['last_month_count'], 0)
        self.assertEqual(stats['total_bookings'], 1)
        self.assertEqual(stats['program_traffic'], [{'name': 'Seniors', 'count': 1}])

    def test_sport_program_and_gender_filters(self):
        today = date(2026, 2, 15)

        self.assertEqual(DashboardService(self.academy, sport='Football', today=today).stats()['current_month_count'], 2)
        self.assertEqual(DashboardService(self.academy, program='Seniors', today=today).stats()['total_bookings'], 1)
        self.assertEqual(DashboardService(self.academy, gender='male', today=today).stats()['last_month_count'], 1)

    def test_other_academy_is_not_counted(self):
        other = create_academy(email='other@example.com', name='Other')
        program = create_program(other, sport=self.football)
        book(create_athlete(other, phone_number='+201000000999').profile, create_package(program), [date(2026, 2, 3)])

        stats = DashboardService(self.academy, today=date(2026, 2, 15)).stats()

        self.assertEqual(stats['current_month_count'], 3)
        self.assertEqual(stats['total_bookings'], 2)


class DashboardApiTests(DashboardFixtureMixin, APITestCase):

    def setUp(self):
        self.create_fixture()

    def test_stats_with_filters(self):
        self.client.force_authenticate(user=self.academy.user)

        response = self.client.get(reverse('dashboard'), {'location': 'North Branch', 'gender': ''})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_bookings'], 1)
        self.assertEqual(response.data['coach_traffic'], [{'name': 'Coach Sam', 'count': 1}])
        self.assertEqual(len(response.data['all_locations']), 2)

    def test_admin_needs_impersonation(self):
        self.client.force_authenticate(user=create_admin())

        response = self.client.get(reverse('dashboard'))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.get(reverse('dashboard'), HTTP_X_IMPERSONATED_ACADEMY_ID=str(self.academy.pk))
        self.assertEqual(response.data['total_bookings'], 2)

    def test_anonymous(self):
        response = self.client.get(reverse('dashboard'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
