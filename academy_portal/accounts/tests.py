from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from academies.models import Academy
from core.testing import PASSWORD, create_academy, create_admin

from .models import CustomUser


class SignInTests(APITestCase):
    """Вход в портал и в back-office."""

    def setUp(self):
        # Сбрасываем счётчики throttling между тестами
        cache.clear()
        self.academy = create_academy()
        self.admin = create_admin()

    def test_academic_sign_in_returns_tokens(self):
        response = self.client.post(
            reverse('sign-in'),
            {'email': 'OWNER@example.com', 'password': PASSWORD},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['role'], CustomUser.ROLE_ACADEMIC)
        self.assertEqual(response.data['user']['academy_id'], self.academy.pk)

    def test_wrong_password(self):
        response = self.client.post(
            reverse('sign-in'),
            {'email': 'owner@example.com', 'password': 'wrong-password'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Invalid email or password', 'field': 'root'})

    def test_pending_academy_cannot_sign_in(self):
        create_academy(email='pending@example.com', name='Pending', status=Academy.STATUS_PENDING)

        response = self.client.post(
            reverse('sign-in'),
            {'email': 'pending@example.com', 'password': PASSWORD},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], Academy.STATUS_PENDING)

    def test_admin_sign_in(self):
        response = self.client.post(
            reverse('admin-sign-in'),
            {'email': 'admin@example.com', 'password': PASSWORD},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['role'], CustomUser.ROLE_ADMIN)

    def test_admin_sign_in_rejects_academic(self):
        response = self.client.post(
            reverse('admin-sign-in'),
            {'email': 'owner@example.com', 'password': PASSWORD},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'You are not authorized to perform this action')

    def test_token_works_for_me(self):
        response = self.client.post(
            reverse('sign-in'),
            {'email': 'owner@example.com', 'password': PASSWORD},
            format='json',
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")

        me = self.client.get(reverse('me'))

        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data['email'], 'owner@example.com')


class SignUpTests(APITestCase):
    """Регистрация академии."""

    def setUp(self):
        cache.clear()

    def payload(self, **overrides):
        data = {
            'name': 'Sara Ali',
            'email': 'sara@example.com',
            'password': PASSWORD,
            'academy_name': 'Eagles Club',
            'phone_number': '+201000000001',
        }
        data.update(overrides)
        return data

    def test_creates_pending_academy(self):
        response = self.client.post(reverse('sign-up'), self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], Academy.STATUS_PENDING)
        academy = Academy.objects.get(pk=response.data['academy_id'])
        self.assertEqual(academy.display_name, 'Eagles Club')
        self.assertEqual(academy.slug, 'eagles-club')
        self.assertEqual(academy.user.role, CustomUser.ROLE_ACADEMIC)

    def test_duplicate_email(self):
        create_academy(email='sara@example.com')

        response = self.client.post(reverse('sign-up'), self.payload(email='SARA@example.com'), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'User with this email already exists', 'field': 'email'})

    def test_duplicate_phone(self):
        CustomUser.objects.create_user(email='other@example.com', password=PASSWORD, phone_number='+201000000001')

        response = self.client.post(reverse('sign-up'), self.payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'phone_number')

    def test_invalid_email(self):
        response = self.client.post(reverse('sign-up'), self.payload(email='not-an-email'), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'email')


class MeTests(APITestCase):

    def setUp(self):
        self.academy = create_academy()
        self.client.force_authenticate(user=self.academy.user)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('me'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_name(self):
        response = self.client.patch(reverse('me'), {'name': 'New Owner'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.academy.user.refresh_from_db()
        self.assertEqual(self.academy.user.name, 'New Owner')

    def test_role_is_read_only(self):
        self.client.patch(reverse('me'), {'role': CustomUser.ROLE_ADMIN}, format='json')

        self.academy.user.refresh_from_db()
        self.assertEqual(self.academy.user.role, CustomUser.ROLE_ACADEMIC)
