from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APITestCase

from core.testing import create_academy

from .models import Notification
from .services import NotificationService


class NotificationApiTests(APITestCase):

    def setUp(self):
        self.academy = create_academy()
        self.other = create_academy(email='other@example.com', name='Other Academy')
        self.client.force_authenticate(user=self.academy.user)
        self.first = NotificationService.notify('First', academy=self.academy)
        self.second = NotificationService.notify('Second', academy=self.academy)
        NotificationService.notify('Foreign', academy=self.other)
        Notification.objects.filter(pk=self.first.pk).update(created_at=timezone.now() - timedelta(hours=1))

    def test_list_is_scoped_and_newest_first(self):
        response = self.client.get(reverse('notification-list'))

        self.assertEqual(response.status_code, 200)
        titles = [item['title'] for item in response.data['data']]
        self.assertEqual(titles, ['Second', 'First'])

    def test_unread_count(self):
        response = self.client.get(reverse('notification-unread-count'))
        self.assertEqual(response.data, {'count': 2})

    def test_mark_one_read(self):
        response = self.client.post(reverse('notification-read', args=[self.first.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['is_read'])
        self.assertEqual(Notification.objects.filter(academy=self.academy, read_at__isnull=True).count(), 1)

    def test_cannot_read_foreign_notification(self):
        foreign = Notification.objects.get(title='Foreign')
        response = self.client.post(reverse('notification-read', args=[foreign.pk]))
        self.assertEqual(response.status_code, 404)

    def test_read_all_keeps_other_academies(self):
        response = self.client.post(reverse('notification-read-all'))

        self.assertEqual(response.data, {'updated': 2})
        self.assertFalse(Notification.objects.get(title='Foreign').is_read)
