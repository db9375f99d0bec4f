from django.conf import settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import CustomUser
from catalog.models import Sport
from core.testing import create_academy, create_admin, create_sport
from notifications.models import Notification

from .models import Academy


class AdminAcademyModerationTests(APITestCase):
    """Модерация академий администратором."""

    def setUp(self):
        self.admin = create_admin()
        self.client.force_authenticate(user=self.admin)
        self.academy = create_academy(status=Academy.STATUS_PENDING)

    def test_list_filters_by_status(self):
        create_academy(email='other@example.com', name='Other', status=Academy.STATUS_ACCEPTED)

        response = self.client.get(reverse('admin-academy-list'), {'status': Academy.STATUS_PENDING})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['meta']['total_items'], 1)
        self.assertEqual(response.data['data'][0]['name'], 'Falcons Academy')

    def test_accept_notifies_owner(self):
        response = self.client.post(reverse('admin-academy-accept', args=[self.academy.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], Academy.STATUS_ACCEPTED)
        notification = Notification.objects.get(academy=self.academy)
        self.assertEqual(notification.title, 'Academy accepted')
        self.assertEqual(notification.user, self.academy.user)

    def test_reject(self):
        response = self.client.post(reverse('admin-academy-reject', args=[self.academy.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.academy.refresh_from_db()
        self.assertEqual(self.academy.status, Academy.STATUS_REJECTED)
        self.assertTrue(Notification.objects.filter(academy=self.academy, title='Academy rejected').exists())

    def test_toggle_hidden(self):
        self.client.post(reverse('admin-academy-toggle-hidden', args=[self.academy.pk]))
        self.academy.refresh_from_db()
        self.assertTrue(self.academy.hidden)

    def test_academic_cannot_moderate(self):
        self.client.force_authenticate(user=self.academy.user)

        response = self.client.post(reverse('admin-academy-accept', args=[self.academy.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {
            'error': 'You are not authorized to perform this action',
            'field': None,
        })


class ImpersonationTests(APITestCase):
    """Администратор работает в портале от имени академии."""

    def setUp(self):
        self.admin = create_admin()
        self.academy = create_academy()
        self.client.force_authenticate(user=self.admin)

    def test_admin_without_impersonation_has_no_academy(self):
        response = self.client.get(reverse('academy-details'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'Academy not found')

    def test_impersonate_sets_cookie_and_scopes_portal(self):
        response = self.client.post(reverse('admin-impersonate'), {'academy_id': self.academy.pk}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies[settings.ACADEMY_IMPERSONATION_COOKIE].value, str(self.academy.pk))

        details = self.client.get(reverse('academy-details'))
        self.assertEqual(details.status_code, status.HTTP_200_OK)
        self.assertEqual(details.data['id'], self.academy.pk)

    def test_impersonation_header(self):
        response = self.client.get(
            reverse('academy-details'),
            HTTP_X_IMPERSONATED_ACADEMY_ID=str(self.academy.pk),
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Falcons Academy')

    def test_unknown_academy(self):
        response = self.client.post(reverse('admin-impersonate'), {'academy_id': 999}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Academy not found', 'field': 'academy_id'})


class AcademyPortalTests(APITestCase):

    def setUp(self):
        self.academy = create_academy()
        self.client.force_authenticate(user=self.academy.user)

    def test_status_without_session(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse('academy-status'))
        self.assertEqual(response.data, {'redirect': '/sign-in'})

    def test_status_for_owner(self):
        response = self.client.get(reverse('academy-status'))
        self.assertEqual(response.data, {'is_onboarded': False, 'status': Academy.STATUS_ACCEPTED})

    def test_update_details(self):
        sport = create_sport('Tennis')

        response = self.client.patch(reverse('academy-details'), {
            'name': 'Falcons Sports Academy',
            'description': 'Football and tennis for kids',
            'sports': [sport.pk],
            'gallery': ['images/academies/a.png', 'images/academies/b.png'],
            'policy': 'No refunds',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Falcons Sports Academy')
        self.assertEqual(response.data['sports'], [sport.pk])
        self.assertEqual([item['path'] for item in response.data['gallery']], [
            'images/academies/a.png',
            'images/academies/b.png',
        ])
        self.academy.refresh_from_db()
        self.assertEqual(self.academy.policy, 'No refunds')

    def test_unknown_sport(self):
        response = self.client.patch(reverse('academy-details'), {'sports': [Sport.objects.count() + 100]}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Sport not found', 'field': 'sports'})

    def test_other_roles_are_rejected(self):
        user = CustomUser.objects.create_user(email='parent@example.com', password='StrongPass123')
        self.client.force_authenticate(user=user)

        response = self.client.get(reverse('academy-details'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
