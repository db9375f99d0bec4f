from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, patch

import requests
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from catalog.models import Facility
from core.testing import create_academy, create_admin, create_branch, create_package, create_program, create_sport
from core.translations import save_translation

from .google_places import GooglePlacesClient, GooglePlacesError
from .models import ASSESSMENT_NAME, Branch, Discount, Package, Program, Review
from .services import LocationService, ProgramService, ReviewService, month_bounds


class LocationApiTests(APITestCase):
    """Филиалы академии и автоматические assessment-программы."""

    def setUp(self):
        self.academy = create_academy()
        self.football = create_sport('Football')
        self.tennis = create_sport('Tennis')
        self.client.force_authenticate(user=self.academy.user)

    def test_create_location_creates_assessments(self):
        with patch('programs.tasks.refresh_branch_reviews.delay') as delay:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(reverse('location-list'), {
                    'name': 'Nasr City',
                    'url': 'https://maps.google.com/?q=nasr',
                    'name_in_google_map': 'Falcons Nasr City',
                    'sport_ids': [self.football.pk, self.tennis.pk],
                }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Nasr City')
        self.assertEqual(response.data['slug'], 'nasr-city')
        branch = Branch.objects.get(pk=response.data['id'])
        assessments = Program.objects.filter(branch=branch).assessments()
        self.assertEqual(
            sorted(assessments.values_list('sport_id', flat=True)),
            sorted([self.football.pk, self.tennis.pk]),
        )
        delay.assert_called_once_with(branch.pk)

    def test_adding_sport_adds_only_missing_assessment(self):
        branch = create_branch(self.academy, sports=[self.football])
        LocationService.ensure_assessment_programs(branch)

        response = self.client.patch(
            reverse('location-detail', args=[branch.pk]),
            {'sport_ids': [self.football.pk, self.tennis.pk]},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Program.objects.filter(branch=branch, name=ASSESSMENT_NAME).count(), 2)

    def test_single_default_location(self):
        first = create_branch(self.academy, name='First', is_default=True)

        response = self.client.post(
            reverse('location-list'),
            {'name': 'Second', 'is_default': True},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        first.refresh_from_db()
        self.assertFalse(first.is_default)
        self.assertEqual(Branch.objects.filter(academy=self.academy, is_default=True).count(), 1)

    def test_duplicate_name_within_academy(self):
        create_branch(self.academy, name='Zamalek')

        response = self.client.post(reverse('location-list'), {'name': 'zamalek'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'A location with this name already exists', 'field': 'name'})

    def test_same_name_in_other_academy(self):
        other = create_academy(email='other@example.com', name='Other')
        create_branch(other, name='Zamalek')

        response = self.client.post(reverse('location-list'), {'name': 'Zamalek'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_list_is_scoped(self):
        create_branch(self.academy, name='Mine')
        other = create_academy(email='other@example.com', name='Other')
        foreign = create_branch(other, name='Foreign')

        response = self.client.get(reverse('location-list'))
        self.assertEqual([row['name'] for row in response.data['data']], ['Mine'])

        response = self.client.get(reverse('location-detail', args=[foreign.pk]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_facilities(self):
        facility = Facility.objects.create()
        save_translation(facility, name='Parking')

        response = self.client.post(
            reverse('location-list'),
            {'name': 'Maadi', 'facility_ids': [facility.pk]},
            format='json',
        )

        self.assertEqual(response.data['facility_ids'], [facility.pk])

    def test_toggle_hidden(self):
        branch = create_branch(self.academy)
        response = self.client.post(reverse('location-toggle-hidden', args=[branch.pk]))
        self.assertTrue(response.data['hidden'])

    def test_rename_refreshes_reviews_when_searched_by_name(self):
        branch = create_branch(self.academy, name='Zamalek', url='https://maps.google.com/?q=zamalek')

        with patch('programs.tasks.refresh_branch_reviews.delay') as delay:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.patch(
                    reverse('location-detail', args=[branch.pk]), {'name': 'Zamalek Club'}, format='json',
                )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        delay.assert_called_once_with(branch.pk)

    def test_rename_keeps_reviews_of_google_map_name(self):
        branch = create_branch(self.academy, name='Zamalek', name_in_google_map='Falcons Zamalek')

        with patch('programs.tasks.refresh_branch_reviews.delay') as delay:
            with self.captureOnCommitCallbacks(execute=True):
                self.client.patch(reverse('location-detail', args=[branch.pk]), {'name': 'Zamalek Club'}, format='json')

        delay.assert_not_called()


class ProgramApiTests(APITestCase):

    def setUp(self):
        self.academy = create_academy()
        self.sport = create_sport('Football')
        self.branch = create_branch(self.academy, sports=[self.sport])
        self.client.force_authenticate(user=self.academy.user)

    def program_payload(self, **overrides):
        data = {
            'name': 'Juniors',
            'description': 'Kids 6-9',
            'branch_id': self.branch.pk,
            'sport_id': self.sport.pk,
            'gender': 'mix',
            'start_date_of_birth': '2016-01-01',
            'end_date_of_birth': '2019-12-31',
            'color': '#FF0000',
            'packages': [{
                'name': 'Term 1',
                'price': '300.00',
                'start_date': '2026-01-01',
                'end_date': '2026-03-31',
                'schedules': [
                    {'day': 'monday', 'from_time': '17:00', 'to_time': '18:00'},
                    {'day': 'wednesday', 'from_time': '17:00', 'to_time': '18:00'},
                ],
            }],
        }
        data.update(overrides)
        return data

    def test_create_program_with_packages(self):
        response = self.client.post(reverse('program-list'), self.program_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        program = Program.objects.get(pk=response.data['id'])
        package = program.packages.get()
        self.assertEqual(package.session_per_week, 2)
        self.assertEqual(
            [(item.day, item.from_time.strftime('%H:%M')) for item in package.schedules.all()],
            [('monday', '17:00'), ('wednesday', '17:00')],
        )
        self.assertEqual(response.data['packages'][0]['schedules'][0]['from_time'], '17:00')
        self.assertEqual(response.data['branch_name'], 'Main Branch')

    def test_monthly_package_dates_follow_months(self):
        payload = self.program_payload(packages=[{
            'name': 'Monthly',
            'price': '100.00',
            'months': ['March 2026', 'February 2026'],
        }])

        response = self.client.post(reverse('program-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        package = Package.objects.get(program_id=response.data['id'])
        self.assertEqual(package.start_date, date(2026, 2, 1))
        self.assertEqual(package.end_date, date(2026, 3, 31))

    def test_monthly_package_requires_months(self):
        payload = self.program_payload(packages=[{'name': 'Monthly', 'price': '100.00'}])

        response = self.client.post(reverse('program-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Select at least one month', 'field': 'months'})

    def test_schedule_times_are_checked(self):
        payload = self.program_payload()
        payload['packages'][0]['schedules'] = [{'day': 'monday', 'from_time': '18:00', 'to_time': '17:00'}]

        response = self.client.post(reverse('program-list'), payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'packages.schedules.to_time')

    def test_assessment_name_is_reserved(self):
        response = self.client.post(reverse('program-list'), self.program_payload(name='Assessment'), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'name')

    def test_birth_date_range(self):
        payload = self.program_payload(start_date_of_birth='2020-01-01', end_date_of_birth='2016-01-01')

        response = self.client.post(reverse('program-list'), payload, format='json')

        self.assertEqual(response.data['field'], 'end_date_of_birth')

    def test_foreign_branch_is_not_found(self):
        other = create_academy(email='other@example.com', name='Other')
        foreign = create_branch(other, name='Foreign')

        response = self.client.post(reverse('program-list'), self.program_payload(branch_id=foreign.pk), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Location not found', 'field': 'branch_id'})

    def test_update_syncs_packages(self):
        program = create_program(self.academy, self.branch, self.sport)
        kept = create_package(program, name='Term 1')
        create_package(program, name='Term 2')

        response = self.client.patch(reverse('program-detail', args=[program.pk]), {
            'packages': [
                {'id': kept.pk, 'name': 'Term 1', 'price': '350.00', 'start_date': '2026-01-01', 'end_date': '2026-03-31'},
                {'name': 'Term 3', 'price': '200.00', 'start_date': '2026-04-01', 'end_date': '2026-06-30'},
            ],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            list(program.packages.order_by('name').values_list('name', 'price')),
            [('Term 1', Decimal('350.00')), ('Term 3', Decimal('200.00'))],
        )

    def test_programs_and_assessments_are_separate_lists(self):
        LocationService.ensure_assessment_programs(self.branch)
        create_program(self.academy, self.branch, self.sport)

        programs = self.client.get(reverse('program-list'))
        assessments = self.client.get(reverse('assessment-list'))

        self.assertEqual([row['name'] for row in programs.data['data']], ['Juniors'])
        self.assertEqual([row['name'] for row in assessments.data['data']], [ASSESSMENT_NAME])

    def test_assessment_name_cannot_change(self):
        assessment = LocationService.ensure_assessment_programs(self.branch)[0]

        response = self.client.patch(
            reverse('assessment-detail', args=[assessment.pk]),
            {'name': 'Trial', 'description': 'First visit', 'number_of_seats': 10},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        assessment.refresh_from_db()
        self.assertEqual(assessment.name, ASSESSMENT_NAME)
        self.assertEqual(assessment.number_of_seats, 10)

    def test_standalone_package_crud(self):
        program = create_program(self.academy, self.branch, self.sport)

        response = self.client.post(reverse('package-list'), {
            'program_id': program.pk,
            'name': 'Assessment Package',
            'price': '50.00',
            'start_date': '2026-01-01',
            'end_date': '2026-12-31',
            'schedules': [{'day': 'saturday', 'from_time': '10:00', 'to_time': '11:00'}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        package = Package.objects.get(pk=response.data['id'])
        self.assertTrue(package.is_assessment)
        self.assertEqual(package.schedules.get().weekday, 5)

        listed = self.client.get(reverse('package-list'), {'program_id': program.pk})
        self.assertEqual(listed.data['meta']['total_items'], 1)


class DiscountTests(APITestCase):
    """Скидки на пакеты программы: один пакет не может иметь пересекающиеся скидки."""

    def setUp(self):
        self.academy = create_academy()
        self.client.force_authenticate(user=self.academy.user)
        self.program = create_program(self.academy)
        self.term1 = create_package(self.program, name='Term 1')
        self.term2 = create_package(self.program, name='Term 2')

    def post_discount(self, **overrides):
        data = {
            'program_id': self.program.pk,
            'type': Discount.TYPE_PERCENTAGE,
            'value': '10.00',
            'start_date': '2026-01-01T00:00:00Z',
            'end_date': '2026-01-31T23:59:59Z',
            'package_ids': [self.term1.pk],
        }
        data.update(overrides)
        return self.client.post(reverse('discount-list'), data, format='json')

    def test_create(self):
        response = self.post_discount()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['package_ids'], [self.term1.pk])

    def test_overlap_is_rejected(self):
        self.post_discount()

        response = self.post_discount(
            start_date='2026-01-15T00:00:00Z',
            end_date='2026-02-15T00:00:00Z',
            package_ids=[self.term1.pk, self.term2.pk],
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {
            'error': 'Some packages already have discounts in this date range: Term 1',
            'field': 'package_ids',
        })

    def test_other_package_or_range_is_allowed(self):
        self.post_discount()

        self.assertEqual(self.post_discount(package_ids=[self.term2.pk]).status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            self.post_discount(start_date='2026-02-01T00:00:00Z', end_date='2026-02-28T00:00:00Z').status_code,
            status.HTTP_201_CREATED,
        )

    def test_update_ignores_itself(self):
        created = self.post_discount()

        response = self.client.patch(
            reverse('discount-detail', args=[created.data['id']]),
            {'value': '15.00'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Discount.objects.get().value, Decimal('15.00'))

    def test_percentage_limit(self):
        response = self.post_discount(value='120')
        self.assertEqual(response.data, {'error': 'Percentage discount cannot exceed 100%', 'field': 'value'})

    def test_dates_order(self):
        response = self.post_discount(start_date='2026-02-01T00:00:00Z', end_date='2026-01-01T00:00:00Z')
        self.assertEqual(response.data['field'], 'end_date')

    def test_package_of_other_program(self):
        other_program = create_program(self.academy, name='Seniors')
        foreign_package = create_package(other_program)

        response = self.post_discount(package_ids=[foreign_package.pk])

        self.assertEqual(response.data, {'error': 'Package not found', 'field': 'package_ids'})

    def test_program_discounts_action(self):
        self.post_discount()

        response = self.client.get(reverse('program-discounts', args=[self.program.pk]))

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['package_ids'], [self.term1.pk])


class MonthHelpersTests(TestCase):

    def test_month_bounds(self):
        self.assertEqual(
            month_bounds(['February 2024', 'January 2024']),
            (date(2024, 1, 1), date(2024, 2, 29)),
        )

    def test_prepare_package_data_clears_months_for_terms(self):
        data = ProgramService.prepare_package_data({
            'name': 'Term',
            'months': ['January 2026'],
            'start_date': date(2026, 1, 1),
            'end_date': date(2026, 2, 1),
            'schedules': [{}, {}, {}],
        })
        self.assertEqual(data['months'], [])
        self.assertEqual(data['session_per_week'], 3)


@override_settings(GOOGLE_PLACES_API_KEY='test-key')
class GooglePlacesClientTests(TestCase):

    def fake_response(self, payload):
        response = MagicMock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        return response

    @patch('programs.google_places.requests.get')
    def test_fetch_place_information(self, mock_get):
        mock_get.side_effect = [
            self.fake_response({'status': 'OK', 'candidates': [{'place_id': 'abc'}]}),
            self.fake_response({
                'status': 'OK',
                'result': {
                    'rating': 4.6,
                    'user_ratings_total': 87,
                    'reviews': [{'author_name': 'Omar', 'rating': 5, 'time': 1700000000}],
                    'geometry': {'location': {'lat': 30.05, 'lng': 31.33}},
                },
            }),
        ]

        info = GooglePlacesClient().fetch_place_information('Falcons Nasr City')

        self.assertEqual(info['place_id'], 'abc')
        self.assertEqual(info['rating'], 4.6)
        self.assertEqual(info['latitude'], 30.05)
        first_call = mock_get.call_args_list[0]
        self.assertTrue(first_call.args[0].endswith('/findplacefromtext/json'))
        self.assertEqual(first_call.kwargs['params']['key'], 'test-key')

    @patch('programs.google_places.requests.get')
    def test_no_candidates(self, mock_get):
        mock_get.return_value = self.fake_response({'status': 'ZERO_RESULTS', 'candidates': []})
        self.assertIsNone(GooglePlacesClient().fetch_place_information('Nowhere'))

    @patch('programs.google_places.requests.get')
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('boom')
        with self.assertRaises(GooglePlacesError):
            GooglePlacesClient().find_place_id('Falcons')


class ReviewServiceTests(TestCase):

    def setUp(self):
        self.academy = create_academy()
        self.branch = create_branch(self.academy, name_in_google_map='Falcons Nasr City')

    def test_refresh_saves_rating_and_reviews(self):
        client = MagicMock(is_configured=True)
        client.fetch_place_information.return_value = {
            'place_id': 'abc',
            'rating': 4.5,
            'user_ratings_total': None,
            'reviews': [
                {'author_name': 'Omar', 'rating': 5, 'time': 1700000000, 'text': 'Great'},
                {'author_name': 'Mona', 'rating': 4, 'time': 1700000100},
            ],
            'latitude': 30.0,
            'longitude': 31.0,
        }

        self.assertTrue(ReviewService.refresh_branch(self.branch, client=client))

        self.branch.refresh_from_db()
        self.assertEqual(self.branch.place_id, 'abc')
        self.assertEqual(self.branch.rate, 4.5)
        self.assertEqual(self.branch.reviews, 2)
        self.assertEqual(Review.objects.filter(branch=self.branch).count(), 2)
        client.fetch_place_information.assert_called_once_with('Falcons Nasr City')

    def test_skips_without_api_key(self):
        client = MagicMock(is_configured=False)
        self.assertFalse(ReviewService.refresh_branch(self.branch, client=client))
        client.fetch_place_information.assert_not_called()

    def test_api_error_keeps_branch(self):
        client = MagicMock(is_configured=True)
        client.fetch_place_information.side_effect = GooglePlacesError('down')

        self.assertFalse(ReviewService.refresh_branch(self.branch, client=client))
        self.branch.refresh_from_db()
        self.assertIsNone(self.branch.rate)


class AdminBranchTests(APITestCase):

    def test_list_filters_by_academy(self):
        first = create_academy()
        second = create_academy(email='other@example.com', name='Other')
        create_branch(first, name='A')
        create_branch(second, name='B')
        self.client.force_authenticate(user=create_admin())

        response = self.client.get(reverse('admin-branch-list'), {'academy_id': second.pk})

        self.assertEqual(response.data['meta']['total_items'], 1)
        self.assertEqual(response.data['data'][0]['academy_name'], 'Other')
