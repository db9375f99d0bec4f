from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from core.testing import create_academy, create_admin, create_sport
from core.translations import save_translation

from .models import Page, SpokenLanguage, Sport


class AdminSportTests(APITestCase):

    def setUp(self):
        self.client.force_authenticate(user=create_admin())

    def test_create_generates_slug(self):
        response = self.client.post(reverse('admin-sport-list'), {'name': 'Table Tennis'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'table-tennis')
        self.assertEqual(response.data['name'], 'Table Tennis')

    def test_duplicate_name(self):
        create_sport('Football')

        response = self.client.post(reverse('admin-sport-list'), {'name': 'football'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'A sport with this name already exists', 'field': 'name'})

    def test_duplicate_slug(self):
        create_sport('Football')

        response = self.client.post(
            reverse('admin-sport-list'),
            {'name': 'Soccer', 'slug': 'football'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'slug')

    def test_rename_keeps_own_name_valid(self):
        sport = create_sport('Football')

        response = self.client.put(
            reverse('admin-sport-detail', args=[sport.pk]),
            {'name': 'Football', 'slug': sport.slug},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_bulk_delete(self):
        ids = [create_sport(name).pk for name in ('Football', 'Tennis', 'Padel')]

        response = self.client.post(reverse('admin-sport-bulk-delete'), {'ids': ids[:2]}, format='json')

        self.assertEqual(response.data, {'deleted': 2})
        self.assertEqual(list(Sport.objects.values_list('pk', flat=True)), ids[2:])


class AdminSpokenLanguageTests(APITestCase):

    def setUp(self):
        self.client.force_authenticate(user=create_admin())

    def test_crud(self):
        created = self.client.post(reverse('admin-spoken-language-list'), {'name': 'Arabic'}, format='json')
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)

        url = reverse('admin-spoken-language-detail', args=[created.data['id']])
        updated = self.client.patch(url, {'name': 'Arabic (MSA)'}, format='json')
        self.assertEqual(updated.data['name'], 'Arabic (MSA)')

        deleted = self.client.delete(url)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(SpokenLanguage.objects.exists())


class AdminPageTests(APITestCase):

    def setUp(self):
        self.client.force_authenticate(user=create_admin())

    def test_create_page_with_content(self):
        response = self.client.post(reverse('admin-page-list'), {
            'title': 'About us',
            'content': '<p>Hello</p>',
            'order_by': 2,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['title'], 'About us')
        self.assertEqual(response.data['content'], '<p>Hello</p>')

    def test_search_by_title(self):
        for title in ('About us', 'Privacy policy'):
            page = Page.objects.create()
            save_translation(page, title=title)

        response = self.client.get(reverse('admin-page-list'), {'search': 'privacy'})

        self.assertEqual(response.data['meta']['total_items'], 1)
        self.assertEqual(response.data['data'][0]['title'], 'Privacy policy')


class CatalogListTests(APITestCase):

    def test_portal_lists_are_not_paginated(self):
        academy = create_academy()
        create_sport('Football')
        create_sport('Tennis')
        self.client.force_authenticate(user=academy.user)

        response = self.client.get(reverse('sport-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['name'] for item in response.data], ['Football', 'Tennis'])
