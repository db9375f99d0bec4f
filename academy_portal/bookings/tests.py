from datetime import date, datetime, time
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import CustomUser, Profile
from core.exceptions import FieldValidationError
from core.testing import (
    create_academy,
    create_admin,
    create_athlete,
    create_branch,
    create_package,
    create_program,
    create_sport,
)
from notifications.models import Notification
from programs.models import ASSESSMENT_NAME, Discount

from .models import AcademicAthlete, Block, Booking, BookingSession, EntryFeesHistory
from .services import BlockService, BookingError, BookingService, generate_sessions, parse_time_range


class BookingFixtureMixin:
    """
    Академия с филиалом, программой и пакетами.

    Term 1: 05.01.2026 - 01.02.2026, по понедельникам → 4 занятия по 100.
    Monthly: февраль 2026, пн + ср → 8 занятий по 25.
    """

    def create_fixture(self):
        self.academy = create_academy()
        self.sport = create_sport('Football')
        self.branch = create_branch(self.academy, sports=[self.sport])
        self.program = create_program(self.academy, self.branch, self.sport, color='#00AA00', gender='mix')
        self.term = create_package(
            self.program,
            name='Term 1',
            price='400.00',
            start=date(2026, 1, 5),
            end=date(2026, 2, 1),
            schedules=[('monday', '17:00', '18:00')],
            entry_fees=Decimal('100.00'),
        )
        self.monthly = create_package(
            self.program,
            name='Monthly',
            price='200.00',
            start=date(2026, 2, 1),
            end=date(2026, 2, 28),
            months=['February 2026'],
            schedules=[('monday', '17:00', '18:00'), ('wednesday', '18:00', '19:00')],
        )
        self.assessment_program = create_program(
            self.academy, self.branch, self.sport,
            name=ASSESSMENT_NAME,
            assessment_deducted_from_program=True,
        )
        self.assessment_package = create_package(
            self.assessment_program,
            name='Assessment Package',
            price='50.00',
            start=date(2026, 1, 1),
            end=date(2026, 12, 31),
            schedules=[('saturday', '10:00', '11:00')],
        )
        self.athlete = create_athlete(self.academy, sport=self.sport)
        self.profile = self.athlete.profile


class SessionGenerationTests(TestCase):

    def test_parse_time_range(self):
        self.assertEqual(parse_time_range('10:00 11:30'), (time(10, 0), time(11, 30)))
        self.assertEqual(parse_time_range('10:00:00 11:30:00'), (time(10, 0), time(11, 30)))
        with self.assertRaises(FieldValidationError) as ctx:
            parse_time_range('10:00')
        self.assertEqual(ctx.exception.field, 'time')

    def test_first_schedule_of_the_weekday_wins(self):
        class FakeSchedule:
            def __init__(self, weekday, hour):
                self.weekday = weekday
                self.from_time = time(hour)
                self.to_time = time(hour + 1)

        sessions = generate_sessions(
            [FakeSchedule(0, 9), FakeSchedule(0, 15), FakeSchedule(2, 10)],
            date(2026, 1, 5),
            date(2026, 1, 11),
        )

        self.assertEqual(
            [(item['date'], item['from_time']) for item in sessions],
            [(date(2026, 1, 5), time(9)), (date(2026, 1, 7), time(10))],
        )


class PricingTests(BookingFixtureMixin, TestCase):

    def setUp(self):
        self.create_fixture()

    def calculate(self, package, selected_date, time_range=''):
        return BookingService.calculate_sessions_and_price(
            package, selected_date, list(package.schedules.all()), time_range,
        )

    def test_term_package_deducts_missed_sessions(self):
        result = self.calculate(self.term, date(2026, 1, 13))

        self.assertEqual([item['date'] for item in result['sessions']], [date(2026, 1, 19), date(2026, 1, 26)])
        self.assertEqual(result['total_price'], Decimal('400'))
        self.assertEqual(result['deductions'], Decimal('200'))
        self.assertEqual(result['final_price'], Decimal('200'))

    def test_term_package_from_first_day(self):
        result = self.calculate(self.term, date(2026, 1, 1))

        self.assertEqual(len(result['sessions']), 4)
        self.assertEqual(result['final_price'], Decimal('400'))

    def test_monthly_package_uses_selected_month(self):
        result = self.calculate(self.monthly, date(2026, 2, 10))

        self.assertEqual(len(result['sessions']), 5)
        self.assertEqual(result['sessions'][0]['date'], date(2026, 2, 11))
        self.assertEqual(result['sessions'][0]['from_time'], time(18, 0))
        self.assertEqual(result['deductions'], Decimal('75'))
        self.assertEqual(result['final_price'], Decimal('125'))

    def test_monthly_package_rejects_other_month(self):
        with self.assertRaises(BookingError) as ctx:
            self.calculate(self.monthly, date(2026, 3, 2))

        self.assertEqual(ctx.exception.field, 'date')
        self.assertEqual(str(ctx.exception.detail['date'][0]), 'Selected month is not available in this package')

    def test_assessment_is_a_single_session(self):
        result = self.calculate(self.assessment_package, date(2026, 1, 20), '10:00 11:00')

        self.assertEqual(result['sessions'], [
            {'date': date(2026, 1, 20), 'from_time': time(10), 'to_time': time(11)},
        ])
        self.assertEqual(result['final_price'], Decimal('50.00'))

    def test_package_without_schedule(self):
        empty = create_package(self.program, name='Empty', price='100.00')

        with self.assertRaises(BookingError) as ctx:
            self.calculate(empty, date(2026, 1, 1))

        self.assertEqual(ctx.exception.field, 'package_id')

    def test_term_package_after_last_session(self):
        with self.assertRaises(BookingError) as ctx:
            self.calculate(self.term, date(2026, 3, 2))

        self.assertEqual(ctx.exception.field, 'date')

    def test_monthly_package_after_last_weekday(self):
        # последнее занятие февраля - среда 25.02
        with self.assertRaises(BookingError) as ctx:
            self.calculate(self.monthly, date(2026, 2, 27))

        self.assertEqual(ctx.exception.field, 'date')

    def test_entry_fees_due_once_per_program(self):
        self.assertEqual(
            BookingService.check_entry_fees(self.profile, self.program, self.term, date(2026, 1, 13)),
            (True, Decimal('100.00')),
        )

        EntryFeesHistory.objects.create(profile=self.profile, sport=self.sport, program=self.program)

        self.assertEqual(
            BookingService.check_entry_fees(self.profile, self.program, self.term, date(2026, 1, 13)),
            (False, Decimal('0')),
        )

    def test_entry_fees_window(self):
        self.term.entry_fees_start_date = date(2026, 1, 20)
        self.term.save()

        should_pay, _ = BookingService.check_entry_fees(self.profile, self.program, self.term, date(2026, 1, 13))

        self.assertFalse(should_pay)

    def test_monthly_entry_fees_only_for_listed_months(self):
        self.monthly.entry_fees = Decimal('80.00')
        self.monthly.entry_fees_applied_until = ['January 2026']
        self.monthly.save()

        should_pay, _ = BookingService.check_entry_fees(self.profile, self.program, self.monthly, date(2026, 2, 10))

        self.assertFalse(should_pay)

    def test_discounts_are_applied_in_order(self):
        start = timezone.make_aware(datetime(2026, 1, 1))
        end = timezone.make_aware(datetime(2026, 12, 31))
        percentage = Discount.objects.create(
            program=self.program, type=Discount.TYPE_PERCENTAGE, value=Decimal('10'), start_date=start, end_date=end,
        )
        fixed = Discount.objects.create(
            program=self.program, type=Discount.TYPE_FIXED, value=Decimal('20'),
            start_date=timezone.make_aware(datetime(2026, 1, 2)), end_date=end,
        )
        percentage.packages.add(self.term)
        fixed.packages.add(self.term)

        price = BookingService.price_after_active_discounts(self.term, Decimal('400'), Decimal('0'))

        self.assertEqual(price, Decimal('340'))

    def test_assessment_deduction(self):
        assessment = Booking.objects.create(
            profile=self.profile,
            package=self.assessment_package,
            price=Decimal('50.00'),
            package_price=Decimal('50.00'),
            status=Booking.STATUS_SUCCESS,
        )

        applies, amount, booking = BookingService.check_assessment_deduction(self.profile, self.program, self.term)

        self.assertTrue(applies)
        self.assertEqual(amount, Decimal('50.00'))
        self.assertEqual(booking, assessment)

    def test_assessment_deduction_requires_same_branch(self):
        Booking.objects.create(
            profile=self.profile,
            package=self.assessment_package,
            price=Decimal('50.00'),
            package_price=Decimal('50.00'),
            status=Booking.STATUS_SUCCESS,
        )
        other_branch = create_branch(self.academy, name='Other Branch', sports=[self.sport])
        other_program = create_program(self.academy, other_branch, self.sport, name='Seniors')

        applies, _, _ = BookingService.check_assessment_deduction(self.profile, other_program, self.term)

        self.assertFalse(applies)


class CreateBookingTests(BookingFixtureMixin, TestCase):

    def setUp(self):
        self.create_fixture()

    def test_creates_booking_sessions_and_entry_fees(self):
        booking = BookingService.create_booking(
            self.academy, self.profile, self.term, date(2026, 1, 13), '', academy_policy=True,
        )

        self.assertEqual(booking.status, Booking.STATUS_SUCCESS)
        self.assertEqual(booking.price, Decimal('300.00'))
        self.assertEqual(booking.package_price, Decimal('400.00'))
        self.assertTrue(booking.entry_fees_paid)
        self.assertTrue(booking.academy_policy)
        self.assertEqual(
            list(booking.sessions.values_list('date', 'status')),
            [(date(2026, 1, 19), BookingSession.STATUS_PENDING), (date(2026, 1, 26), BookingSession.STATUS_PENDING)],
        )
        self.assertTrue(EntryFeesHistory.objects.filter(profile=self.profile, program=self.program).exists())
        notification = Notification.objects.get(academy=self.academy)
        self.assertEqual(notification.title, 'New booking')
        self.assertEqual(notification.profile, self.profile)

    def test_entry_fees_not_charged_twice(self):
        BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')

        second = BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')

        self.assertEqual(second.price, Decimal('200.00'))
        self.assertFalse(second.entry_fees_paid)

    def test_assessment_booking_is_linked_once(self):
        assessment = BookingService.create_booking(
            self.academy, self.profile, self.assessment_package, date(2026, 1, 10), '10:00 11:00',
        )
        self.assertEqual(assessment.price, Decimal('50.00'))

        first = BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')
        self.assertEqual(first.assessment_deduction, assessment)
        # 200 за занятия + 100 взнос + (100 - 50) за оценку
        self.assertEqual(first.price, Decimal('350.00'))

        second = BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')
        self.assertIsNone(second.assessment_deduction)

    def test_package_without_sport(self):
        program = create_program(self.academy, self.branch, None, name='No sport')
        package = create_package(program, schedules=[('monday', '17:00', '18:00')])

        with self.assertRaises(BookingError) as ctx:
            BookingService.create_booking(self.academy, self.profile, package, date(2026, 1, 13), '')

        self.assertEqual(str(ctx.exception.detail['package_id'][0]), 'Invalid package configuration')
        self.assertFalse(Booking.objects.exists())

    def test_nothing_is_saved_when_no_sessions_remain(self):
        with self.assertRaises(BookingError):
            BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 3, 2), '')

        self.assertFalse(Booking.objects.exists())
        self.assertFalse(EntryFeesHistory.objects.exists())
        self.assertFalse(Notification.objects.exists())


class BookingApiTests(BookingFixtureMixin, APITestCase):

    def setUp(self):
        self.create_fixture()
        self.client.force_authenticate(user=self.academy.user)

    def test_create_booking(self):
        response = self.client.post(reverse('booking-list'), {
            'profile_id': self.profile.pk,
            'package_id': self.term.pk,
            'date': '2026-01-13',
            'academy_policy': True,
            'roap_policy': True,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['price'], '300.00')
        self.assertEqual(response.data['program_name'], 'Juniors')
        self.assertEqual(len(response.data['sessions']), 2)
        self.assertEqual(response.data['sessions'][0]['from_time'], '17:00')

    def test_assessment_requires_time(self):
        response = self.client.post(reverse('booking-list'), {
            'profile_id': self.profile.pk,
            'package_id': self.assessment_package.pk,
            'date': '2026-01-10',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Select a time for the assessment', 'field': 'time'})

    def test_profile_of_other_academy(self):
        other = create_academy(email='other@example.com', name='Other')
        stranger = create_athlete(other, name='Stranger', phone_number='+201000000999')

        response = self.client.post(reverse('booking-list'), {
            'profile_id': stranger.profile_id,
            'package_id': self.term.pk,
            'date': '2026-01-13',
        }, format='json')

        self.assertEqual(response.data, {'error': 'Athlete not found', 'field': 'profile_id'})

    def test_package_of_other_academy(self):
        other = create_academy(email='other@example.com', name='Other')
        foreign_package = create_package(create_program(other, sport=self.sport))

        response = self.client.post(reverse('booking-list'), {
            'profile_id': self.profile.pk,
            'package_id': foreign_package.pk,
            'date': '2026-01-13',
        }, format='json')

        self.assertEqual(response.data, {'error': 'Package not found', 'field': 'package_id'})

    def test_list_filters_by_profile(self):
        BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')
        sibling = create_athlete(self.academy, name='Sibling', phone_number='+201000000101')
        BookingService.create_booking(self.academy, sibling.profile, self.term, date(2026, 1, 13), '')

        response = self.client.get(reverse('booking-list'), {'profile_id': sibling.profile_id})

        self.assertEqual(response.data['meta']['total_items'], 1)
        self.assertEqual(response.data['data'][0]['profile_name'], 'Sibling')

    def test_program_details(self):
        response = self.client.get(reverse('booking-program-details', kwargs={'program_id': self.program.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['branch'], 'Main Branch')
        self.assertEqual(response.data['sport'], 'Football')
        term = next(item for item in response.data['packages'] if item['id'] == self.term.pk)
        self.assertEqual(term['schedules'], [
            {'id': self.term.schedules.get().pk, 'day': 'monday', 'from_time': '17:00', 'to_time': '18:00'},
        ])

    def test_program_details_of_other_academy(self):
        other = create_academy(email='other@example.com', name='Other')
        foreign = create_program(other)

        response = self.client.get(reverse('booking-program-details', kwargs={'program_id': foreign.pk}))

        self.assertEqual(response.data, {'error': 'Program not found', 'field': 'program_id'})


class SessionStatusTests(BookingFixtureMixin, APITestCase):

    def setUp(self):
        self.create_fixture()
        self.client.force_authenticate(user=self.academy.user)
        self.booking = BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')
        self.session = self.booking.sessions.first()

    def test_set_status(self):
        response = self.client.post(
            reverse('booking-session-set-status', args=[self.session.pk]),
            {'status': BookingSession.STATUS_ACCEPTED},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.session.refresh_from_db()
        self.assertEqual(self.session.status, BookingSession.STATUS_ACCEPTED)

    def test_invalid_status(self):
        response = self.client.patch(
            reverse('booking-session-set-status', args=[self.session.pk]),
            {'status': 'done'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'status')

    def test_service_rejects_pending(self):
        with self.assertRaises(FieldValidationError):
            BookingService.set_session_status(self.session, BookingSession.STATUS_PENDING)

    def test_list_by_booking(self):
        response = self.client.get(reverse('booking-session-list'), {'booking_id': self.booking.pk})
        self.assertEqual(response.data['meta']['total_items'], 2)


class CalendarTests(BookingFixtureMixin, APITestCase):

    def setUp(self):
        self.create_fixture()
        self.client.force_authenticate(user=self.academy.user)

    def test_sessions_and_blocks(self):
        BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')
        block = BlockService.create(
            self.academy, date(2026, 1, 10), time(9), time(12), note='Pitch maintenance',
            scopes={'branches': [self.branch.pk]},
        )

        response = self.client.get(reverse('calendar'), {'start': '2026-01-01', 'end': '2026-01-31'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        sessions = [item for item in response.data if item['type'] == 'session']
        blocks = [item for item in response.data if item['type'] == 'block']
        self.assertEqual(len(sessions), 2)
        self.assertEqual(sessions[0]['student_name'], 'Omar Khaled')
        self.assertEqual(sessions[0]['branch_name'], 'Main Branch')
        self.assertEqual(sessions[0]['color'], '#00AA00')
        self.assertEqual(blocks, [{
            'id': block.pk,
            'type': 'block',
            'date': date(2026, 1, 10),
            'start_time': '09:00',
            'end_time': '12:00',
            'status': 'blocked',
            'program_name': 'block',
            'student_name': None,
            'student_birthday': None,
            'branch_names': ['Main Branch'],
            'sport_names': [],
            'package_names': [],
            'note': 'Pitch maintenance',
            'coach_name': None,
            'coach_id': None,
            'color': '#F5F5F5',
        }])

    def test_range_is_required(self):
        response = self.client.get(reverse('calendar'), {'start': '2026-01-01'})
        self.assertEqual(response.data, {'error': 'Start and end dates are required', 'field': 'start'})

    def test_range_order(self):
        response = self.client.get(reverse('calendar'), {'start': '2026-02-01', 'end': '2026-01-01'})
        self.assertEqual(response.data['error'], 'Start date cannot be greater than end date')


class BlockApiTests(BookingFixtureMixin, APITestCase):
    """Блокировки календаря: только владелец, без пересечений по времени."""

    def setUp(self):
        self.create_fixture()
        self.client.force_authenticate(user=self.academy.user)

    def payload(self, **overrides):
        data = {
            'date': '2026-01-10',
            'start_time': '10:00',
            'end_time': '12:00',
            'note': 'Pitch maintenance',
            'branches': [self.branch.pk],
            'sports': 'all',
        }
        data.update(overrides)
        return data

    def test_create(self):
        response = self.client.post(reverse('block-list'), self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['start_time'], '10:00')
        self.assertEqual(response.data['branches'], [self.branch.pk])
        self.assertEqual(response.data['sports'], 'all')
        self.assertEqual(response.data['packages'], 'all')
        block = Block.objects.get()
        self.assertEqual(block.branch_scope, Block.SCOPE_SPECIFIC)
        self.assertEqual(block.sport_scope, Block.SCOPE_ALL)

    def test_overlap_is_rejected(self):
        self.client.post(reverse('block-list'), self.payload(), format='json')

        response = self.client.post(
            reverse('block-list'),
            self.payload(start_time='11:00', end_time='13:00'),
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'There is already a block during this time period', 'field': 'root'})

    def test_adjacent_block_is_allowed(self):
        self.client.post(reverse('block-list'), self.payload(), format='json')

        response = self.client.post(
            reverse('block-list'),
            self.payload(start_time='12:00', end_time='13:00'),
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_end_after_start(self):
        response = self.client.post(
            reverse('block-list'),
            self.payload(start_time='12:00', end_time='10:00'),
            format='json',
        )
        self.assertEqual(response.data, {'error': 'End time must be after start time', 'field': 'end_time'})

    def test_foreign_location(self):
        other = create_academy(email='other@example.com', name='Other')
        foreign = create_branch(other, name='Foreign')

        response = self.client.post(reverse('block-list'), self.payload(branches=[foreign.pk]), format='json')

        self.assertEqual(response.data, {'error': 'Location not found', 'field': 'branches'})

    def test_update_does_not_conflict_with_itself(self):
        created = self.client.post(reverse('block-list'), self.payload(), format='json')

        response = self.client.patch(
            reverse('block-detail', args=[created.data['id']]),
            {'end_time': '12:30', 'branches': 'all'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        block = Block.objects.get()
        self.assertEqual(block.end_time, time(12, 30))
        self.assertEqual(block.branch_scope, Block.SCOPE_ALL)
        self.assertFalse(block.branches.exists())

    def test_impersonating_admin_is_forbidden(self):
        self.client.force_authenticate(user=create_admin())

        response = self.client.get(
            reverse('block-list'),
            HTTP_X_IMPERSONATED_ACADEMY_ID=str(self.academy.pk),
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_block_form_data(self):
        response = self.client.get(reverse('block-data'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        [branch] = response.data['branches']
        self.assertEqual(branch['name'], 'Main Branch')
        self.assertEqual(branch['sports'], [self.sport.pk])
        self.assertEqual(sorted(branch['programs']), sorted([self.program.pk, self.assessment_program.pk]))
        self.assertEqual([item['name'] for item in response.data['sports']], ['Football'])
        self.assertEqual(
            {item['id'] for item in response.data['packages']},
            {self.term.pk, self.monthly.pk, self.assessment_package.pk},
        )


class AthleteApiTests(APITestCase):

    def setUp(self):
        self.academy = create_academy()
        self.sport = create_sport('Football')
        self.client.force_authenticate(user=self.academy.user)

    def test_create_new_athlete(self):
        response = self.client.post(reverse('athlete-list'), {
            'name': 'Youssef Ali',
            'email': 'youssef@example.com',
            'phone_number': '+201000000200',
            'gender': 'male',
            'birthday': '2014-03-15',
            'sport_id': self.sport.pk,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Youssef Ali')
        self.assertEqual(response.data['phone_number'], '+201000000200')
        self.assertEqual(response.data['birthday'], '2014-03-15')
        self.assertEqual(response.data['sport_name'], 'Football')
        user = CustomUser.objects.get(email='youssef@example.com')
        self.assertEqual(user.role, CustomUser.ROLE_USER)
        self.assertFalse(user.has_usable_password())

    def test_existing_email(self):
        CustomUser.objects.create_user(email='youssef@example.com', password='StrongPass123')

        response = self.client.post(
            reverse('athlete-list'),
            {'name': 'Youssef Ali', 'email': 'Youssef@example.com'},
            format='json',
        )

        self.assertEqual(response.data, {'error': 'User with this email already exists', 'field': 'email'})

    def test_phone_reuses_user_and_profile(self):
        other = create_academy(email='other@example.com', name='Other')
        existing = create_athlete(other)

        response = self.client.post(
            reverse('athlete-list'),
            {'name': 'Omar Khaled', 'phone_number': '+201000000100'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        athlete = AcademicAthlete.objects.get(pk=response.data['id'])
        self.assertEqual(athlete.user, existing.user)
        self.assertEqual(athlete.profile, existing.profile)

    def test_sibling_gets_own_profile(self):
        existing = create_athlete(self.academy)

        response = self.client.post(
            reverse('athlete-list'),
            {'name': 'Laila Khaled', 'phone_number': '+201000000100'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Profile.objects.filter(user=existing.user).count(), 2)

    def test_already_registered(self):
        create_athlete(self.academy)

        response = self.client.post(
            reverse('athlete-list'),
            {'name': 'Omar Khaled', 'phone_number': '+201000000100'},
            format='json',
        )

        self.assertEqual(response.data, {
            'error': 'This athlete is already registered in this academy',
            'field': 'phone_number',
        })

    def test_fellow_requires_guardian(self):
        response = self.client.post(
            reverse('athlete-list'),
            {'name': 'Little One', 'type': AcademicAthlete.TYPE_FELLOW},
            format='json',
        )
        self.assertEqual(response.data['field'], 'first_guardian_name')

        response = self.client.post(reverse('athlete-list'), {
            'name': 'Little One',
            'type': AcademicAthlete.TYPE_FELLOW,
            'first_guardian_name': 'Mona',
            'first_guardian_relationship': 'mother',
            'first_guardian_phone': '+201000000300',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_update_email_in_use(self):
        athlete = create_athlete(self.academy)
        CustomUser.objects.create_user(email='taken@example.com', password='StrongPass123')

        response = self.client.patch(
            reverse('athlete-detail', args=[athlete.pk]),
            {'email': 'taken@example.com'},
            format='json',
        )

        self.assertEqual(response.data, {'error': 'Email is already in use by another user', 'field': 'email'})

    def test_update_profile_fields(self):
        athlete = create_athlete(self.academy)

        response = self.client.patch(
            reverse('athlete-detail', args=[athlete.pk]),
            {'name': 'Omar K.', 'city': 'Cairo', 'certificate': 'images/certificates/omar.png'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        athlete.refresh_from_db()
        athlete.profile.refresh_from_db()
        self.assertEqual(athlete.profile.name, 'Omar K.')
        self.assertEqual(athlete.profile.city, 'Cairo')
        self.assertEqual(athlete.certificate, 'images/certificates/omar.png')

    def test_search_by_phone(self):
        athlete = create_athlete(self.academy)
        guarded = create_athlete(self.academy, name='Nour', phone_number='+201000000555')
        guarded.first_guardian_phone = '+201000000100'
        guarded.save()

        response = self.client.get(reverse('athlete-search'), {'q': '000100'})

        self.assertEqual(
            sorted(item['athlete_id'] for item in response.data),
            sorted([athlete.pk, guarded.pk]),
        )
        row = next(item for item in response.data if item['athlete_id'] == athlete.pk)
        self.assertEqual(row['id'], athlete.profile_id)
        self.assertEqual(row['name'], 'Omar Khaled')

    def test_search_needs_three_characters(self):
        create_athlete(self.academy)
        response = self.client.get(reverse('athlete-search'), {'q': '01'})
        self.assertEqual(response.data, [])


class AdminAthleteTests(BookingFixtureMixin, APITestCase):

    def setUp(self):
        self.create_fixture()
        self.client.force_authenticate(user=create_admin())

    def test_list_filters_by_academy(self):
        other = create_academy(email='other@example.com', name='Other')
        create_athlete(other, name='Stranger', phone_number='+201000000999')

        response = self.client.get(reverse('admin-athlete-list'), {'academy_id': self.academy.pk})

        self.assertEqual(response.data['meta']['total_items'], 1)
        self.assertEqual(response.data['data'][0]['academy_name'], 'Falcons Academy')

    def test_detail_includes_bookings(self):
        booking = BookingService.create_booking(self.academy, self.profile, self.term, date(2026, 1, 13), '')

        response = self.client.get(reverse('admin-athlete-detail', args=[self.athlete.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['profile']['birthday'], '2015-05-01')
        self.assertEqual(len(response.data['bookings']), 1)
        row = response.data['bookings'][0]
        self.assertEqual(row['id'], booking.pk)
        self.assertEqual(row['session_count'], 2)
        self.assertEqual(row['branch_name'], 'Main Branch')
