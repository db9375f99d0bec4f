from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from core.testing import create_academy, create_admin

from .models import PromoCode
from .services import GENERAL_ACADEMY_NAME


def promo_payload(**overrides):
    data = {
        'code': 'SUMMER10',
        'discount_type': PromoCode.TYPE_PERCENTAGE,
        'discount_value': '10.00',
        'start_date': '2026-06-01T00:00:00Z',
        'end_date': '2026-08-31T23:59:59Z',
        'can_be_used': 5,
    }
    data.update(overrides)
    return data


class AcademyPromoCodeTests(APITestCase):
    """Промокоды в портале академии."""

    def setUp(self):
        self.academy = create_academy()
        self.client.force_authenticate(user=self.academy.user)

    def test_create_belongs_to_academy(self):
        response = self.client.post(reverse('promo-code-list'), promo_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(PromoCode.objects.get().academy, self.academy)

    def test_duplicate_code_in_same_academy(self):
        self.client.post(reverse('promo-code-list'), promo_payload(), format='json')

        response = self.client.post(reverse('promo-code-list'), promo_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {
            'error': 'A promo code with this code already exists for this academy',
            'field': 'code',
        })

    def test_same_code_in_other_academy(self):
        other = create_academy(email='other@example.com', name='Other')
        PromoCode.objects.create(
            academy=other, code='SUMMER10', discount_type=PromoCode.TYPE_FIXED,
            discount_value=50, start_date='2026-06-01T00:00:00Z', end_date='2026-06-30T00:00:00Z',
        )

        response = self.client.post(reverse('promo-code-list'), promo_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_validation_rules(self):
        cases = [
            (promo_payload(start_date='2026-09-01T00:00:00Z'), 'start_date'),
            (promo_payload(discount_type='bogus'), 'discount_type'),
            (promo_payload(discount_value='0'), 'discount_value'),
            (promo_payload(discount_value='101'), 'discount_value'),
            (promo_payload(can_be_used=0), 'can_be_used'),
        ]
        for payload, field in cases:
            with self.subTest(field=field, payload=payload):
                response = self.client.post(reverse('promo-code-list'), payload, format='json')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data['field'], field)

    def test_partial_update(self):
        created = self.client.post(reverse('promo-code-list'), promo_payload(), format='json')

        response = self.client.patch(
            reverse('promo-code-detail', args=[created.data['id']]),
            {'discount_value': '20.00'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['discount_value'], '20.00')
        self.assertEqual(response.data['code'], 'SUMMER10')

    def test_list_excludes_general_codes(self):
        PromoCode.objects.create(
            academy=None, code='ALL', discount_type=PromoCode.TYPE_FIXED,
            discount_value=10, start_date='2026-06-01T00:00:00Z', end_date='2026-06-30T00:00:00Z',
        )

        response = self.client.get(reverse('promo-code-list'))

        self.assertEqual(response.data['meta']['total_items'], 0)

    def test_bulk_delete_is_scoped_to_academy(self):
        own = self.client.post(reverse('promo-code-list'), promo_payload(), format='json').data['id']
        other = create_academy(email='other@example.com', name='Other')
        foreign = PromoCode.objects.create(
            academy=other, code='SUMMER10', discount_type=PromoCode.TYPE_FIXED,
            discount_value=50, start_date='2026-06-01T00:00:00Z', end_date='2026-06-30T00:00:00Z',
        )

        response = self.client.post(reverse('promo-code-bulk-delete'), {'ids': [own, foreign.pk]}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'deleted': 1})
        self.assertEqual(list(PromoCode.objects.values_list('pk', flat=True)), [foreign.pk])


class AdminPromoCodeTests(APITestCase):
    """Back-office: general-промокод или по строке на каждую академию."""

    def setUp(self):
        self.client.force_authenticate(user=create_admin())
        self.first = create_academy()
        self.second = create_academy(email='other@example.com', name='Other')

    def test_general_code(self):
        response = self.client.post(reverse('admin-promo-code-list'), promo_payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data), 1)
        self.assertIsNone(response.data[0]['academy_id'])
        self.assertEqual(response.data[0]['academy_name'], GENERAL_ACADEMY_NAME)

    def test_duplicate_general_code(self):
        self.client.post(reverse('admin-promo-code-list'), promo_payload(), format='json')

        response = self.client.post(reverse('admin-promo-code-list'), promo_payload(), format='json')

        self.assertEqual(response.data, {
            'error': 'A general promo code with this code already exists',
            'field': 'code',
        })

    def test_specific_academies(self):
        response = self.client.post(
            reverse('admin-promo-code-list'),
            promo_payload(selection_mode='specific', academy_ids=[self.first.pk, self.second.pk, self.first.pk]),
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            sorted(PromoCode.objects.values_list('academy_id', flat=True)),
            sorted([self.first.pk, self.second.pk]),
        )

    def test_specific_requires_academies(self):
        response = self.client.post(
            reverse('admin-promo-code-list'),
            promo_payload(selection_mode='specific'),
            format='json',
        )

        self.assertEqual(response.data, {'error': 'Select at least one academy', 'field': 'academy_ids'})

    def test_specific_is_all_or_nothing(self):
        PromoCode.objects.create(
            academy=self.second, code='SUMMER10', discount_type=PromoCode.TYPE_FIXED,
            discount_value=10, start_date='2026-06-01T00:00:00Z', end_date='2026-06-30T00:00:00Z',
        )

        response = self.client.post(
            reverse('admin-promo-code-list'),
            promo_payload(selection_mode='specific', academy_ids=[self.first.pk, self.second.pk]),
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(PromoCode.objects.filter(academy=self.first).exists())

    def test_unknown_academy(self):
        response = self.client.post(
            reverse('admin-promo-code-list'),
            promo_payload(selection_mode='specific', academy_ids=[999]),
            format='json',
        )

        self.assertEqual(response.data, {'error': 'Academy not found', 'field': 'academy_ids'})

    def test_search_by_code(self):
        self.client.post(reverse('admin-promo-code-list'), promo_payload(), format='json')
        self.client.post(reverse('admin-promo-code-list'), promo_payload(code='WINTER'), format='json')

        response = self.client.get(reverse('admin-promo-code-list'), {'search': 'wint'})

        self.assertEqual([row['code'] for row in response.data['data']], ['WINTER'])

    def test_update_keeps_own_code(self):
        created = self.client.post(
            reverse('admin-promo-code-list'),
            promo_payload(selection_mode='specific', academy_ids=[self.first.pk]),
            format='json',
        )
        promo_id = created.data[0]['id']

        response = self.client.patch(
            reverse('admin-promo-code-detail', args=[promo_id]),
            {'code': 'SUMMER10', 'discount_value': '15.00'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['code'], 'SUMMER10')
        self.assertEqual(response.data['discount_value'], '15.00')
        self.assertEqual(response.data['academy_id'], self.first.pk)

    def test_update_to_taken_code(self):
        self.client.post(reverse('admin-promo-code-list'), promo_payload(code='WINTER'), format='json')
        created = self.client.post(reverse('admin-promo-code-list'), promo_payload(), format='json')

        response = self.client.patch(
            reverse('admin-promo-code-detail', args=[created.data[0]['id']]),
            {'code': 'WINTER'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'A general promo code with this code already exists')
