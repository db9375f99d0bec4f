from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from core.testing import create_academy, create_admin
from core.translations import save_translation

from .models import City, Country, State


class GeoAdminApiTests(APITestCase):
    """CRUD стран, регионов и городов в back-office."""

    def setUp(self):
        self.client.force_authenticate(user=create_admin())
        self.egypt = Country.objects.create()
        save_translation(self.egypt, name='Egypt')
        self.cairo_state = State.objects.create(country=self.egypt)
        save_translation(self.cairo_state, name='Cairo Governorate')

    def test_create_country(self):
        response = self.client.post(reverse('admin-country-list'), {'name': 'Jordan'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Jordan')
        self.assertEqual(Country.objects.count(), 2)

    def test_duplicate_country_is_case_insensitive(self):
        response = self.client.post(reverse('admin-country-list'), {'name': 'EGYPT'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'name')

    def test_same_name_in_other_locale_is_allowed(self):
        response = self.client.post(
            reverse('admin-country-list'),
            {'name': 'Egypt', 'locale': 'fr'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_add_translation_on_update(self):
        response = self.client.patch(
            reverse('admin-country-detail', args=[self.egypt.pk]),
            {'name': 'مصر', 'locale': 'ar'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Egypt')
        detail = self.client.get(reverse('admin-country-detail', args=[self.egypt.pk]))
        self.assertEqual(
            sorted(item['locale'] for item in detail.data['translations']),
            ['ar', 'en'],
        )

    def test_country_states_count(self):
        response = self.client.get(reverse('admin-country-list'))
        self.assertEqual(response.data['data'][0]['states_count'], 1)

    def test_state_requires_existing_country(self):
        response = self.client.post(
            reverse('admin-state-list'),
            {'name': 'Giza', 'country_id': 999},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Country not found', 'field': 'country_id'})

    def test_state_name_unique_within_country(self):
        response = self.client.post(
            reverse('admin-state-list'),
            {'name': 'Cairo Governorate', 'country_id': self.egypt.pk},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'A state with this name already exists in this country')

        other = Country.objects.create()
        save_translation(other, name='Jordan')
        response = self.client.post(
            reverse('admin-state-list'),
            {'name': 'Cairo Governorate', 'country_id': other.pk},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_city_filters_and_names(self):
        city = City.objects.create(state=self.cairo_state)
        save_translation(city, name='Nasr City')
        other_state = State.objects.create(country=self.egypt)
        save_translation(other_state, name='Alexandria Governorate')
        other_city = City.objects.create(state=other_state)
        save_translation(other_city, name='Alexandria')

        response = self.client.get(reverse('admin-city-list'), {'state_id': self.cairo_state.pk})

        self.assertEqual(response.data['meta']['total_items'], 1)
        row = response.data['data'][0]
        self.assertEqual(row['name'], 'Nasr City')
        self.assertEqual(row['state_name'], 'Cairo Governorate')
        self.assertEqual(row['country_name'], 'Egypt')

    def test_search(self):
        response = self.client.get(reverse('admin-state-list'), {'search': 'cairo'})
        self.assertEqual(response.data['meta']['total_items'], 1)

    def test_academic_is_forbidden(self):
        academy = create_academy()
        self.client.force_authenticate(user=academy.user)

        response = self.client.get(reverse('admin-country-list'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_country_pages_do_not_overlap(self):
        for name in ['Jordan', 'Oman', 'Qatar']:
            save_translation(Country.objects.create(), name=name)

        first = self.client.get(reverse('admin-country-list'), {'page_size': 2, 'page': 1})
        second = self.client.get(reverse('admin-country-list'), {'page_size': 2, 'page': 2})

        ids = [row['id'] for row in first.data['data'] + second.data['data']]
        self.assertEqual(ids, list(Country.objects.order_by('id').values_list('id', flat=True)))

    def test_state_list_is_ordered(self):
        save_translation(State.objects.create(country=self.egypt), name='Giza')

        response = self.client.get(reverse('admin-state-list'))

        ids = [row['id'] for row in response.data['data']]
        self.assertEqual(ids, sorted(ids))


class GeoTranslationApiTests(APITestCase):
    """Переводы стран, регионов и городов как вложенный ресурс."""

    def setUp(self):
        self.client.force_authenticate(user=create_admin())
        self.egypt = Country.objects.create()
        self.english = save_translation(self.egypt, name='Egypt')
        self.arabic = save_translation(self.egypt, locale='ar', name='مصر')

    def test_list(self):
        response = self.client.get(reverse('admin-country-translations', args=[self.egypt.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['locale'] for item in response.data], ['ar', 'en'])
        self.assertEqual(response.data[1]['id'], self.english.pk)

    def test_add(self):
        response = self.client.post(
            reverse('admin-country-translations', args=[self.egypt.pk]),
            {'locale': 'fr', 'name': 'Égypte'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['locale'], 'fr')
        self.assertEqual(self.egypt.translations.count(), 3)

    def test_add_existing_locale(self):
        response = self.client.post(
            reverse('admin-country-translations', args=[self.egypt.pk]),
            {'locale': 'ar', 'name': 'Misr'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'A translation for this locale already exists', 'field': 'locale'})

    def test_add_name_of_other_country(self):
        jordan = Country.objects.create()
        save_translation(jordan, locale='fr', name='Jordanie')

        response = self.client.post(
            reverse('admin-country-translations', args=[self.egypt.pk]),
            {'locale': 'fr', 'name': 'jordanie'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'A country with this name already exists', 'field': 'name'})

    def test_edit(self):
        response = self.client.patch(
            reverse('admin-country-translation-detail', args=[self.egypt.pk, self.english.pk]),
            {'name': 'Arab Republic of Egypt'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.english.refresh_from_db()
        self.assertEqual(self.english.name, 'Arab Republic of Egypt')
        self.assertEqual(self.english.locale, 'en')

    def test_edit_keeps_own_locale(self):
        response = self.client.patch(
            reverse('admin-country-translation-detail', args=[self.egypt.pk, self.arabic.pk]),
            {'locale': 'ar', 'name': 'جمهورية مصر العربية'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.patch(
            reverse('admin-country-translation-detail', args=[self.egypt.pk, self.arabic.pk]),
            {'locale': 'en'},
            format='json',
        )
        self.assertEqual(response.data['field'], 'locale')

    def test_translation_of_other_country_is_not_found(self):
        jordan = Country.objects.create()
        foreign = save_translation(jordan, name='Jordan')

        response = self.client.patch(
            reverse('admin-country-translation-detail', args=[self.egypt.pk, foreign.pk]),
            {'name': 'Hijacked'},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        foreign.refresh_from_db()
        self.assertEqual(foreign.name, 'Jordan')

    def test_delete(self):
        response = self.client.delete(
            reverse('admin-country-translation-detail', args=[self.egypt.pk, self.arabic.pk]),
        )

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(list(self.egypt.translations.values_list('locale', flat=True)), ['en'])

    def test_last_translation_is_kept(self):
        self.arabic.delete()

        response = self.client.delete(
            reverse('admin-country-translation-detail', args=[self.egypt.pk, self.english.pk]),
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'At least one translation must remain', 'field': 'ids'})
        self.assertTrue(self.egypt.translations.exists())

    def test_bulk_delete(self):
        french = save_translation(self.egypt, locale='fr', name='Égypte')
        jordan = Country.objects.create()
        foreign = save_translation(jordan, locale='ar', name='الأردن')

        response = self.client.post(
            reverse('admin-country-translations-bulk-delete', args=[self.egypt.pk]),
            {'ids': [self.arabic.pk, french.pk, foreign.pk]},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'deleted': 2})
        self.assertEqual(list(self.egypt.translations.values_list('locale', flat=True)), ['en'])
        self.assertTrue(jordan.translations.filter(pk=foreign.pk).exists())

    def test_bulk_delete_everything_is_rejected(self):
        response = self.client.post(
            reverse('admin-country-translations-bulk-delete', args=[self.egypt.pk]),
            {'ids': [self.arabic.pk, self.english.pk]},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.egypt.translations.count(), 2)

    def test_state_translation_name_is_scoped_to_country(self):
        cairo = State.objects.create(country=self.egypt)
        save_translation(cairo, locale='fr', name='Le Caire')
        giza = State.objects.create(country=self.egypt)
        save_translation(giza, name='Giza')
        jordan = Country.objects.create()
        amman = State.objects.create(country=jordan)
        save_translation(amman, locale='fr', name='Amman')

        response = self.client.post(
            reverse('admin-state-translations', args=[giza.pk]),
            {'locale': 'fr', 'name': 'Amman'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.patch(
            reverse('admin-state-translation-detail', args=[giza.pk, response.data['id']]),
            {'name': 'le caire'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['field'], 'name')

    def test_city_translations(self):
        state = State.objects.create(country=self.egypt)
        save_translation(state, name='Cairo Governorate')
        city = City.objects.create(state=state)
        save_translation(city, name='Nasr City')

        response = self.client.post(
            reverse('admin-city-translations', args=[city.pk]),
            {'locale': 'ar', 'name': 'مدينة نصر'},
            format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        detail = self.client.get(reverse('admin-city-detail', args=[city.pk]))
        self.assertEqual([item['locale'] for item in detail.data['translations']], ['ar', 'en'])
        self.assertEqual(detail.data['name'], 'Nasr City')

    def test_academic_is_forbidden(self):
        academy = create_academy()
        self.client.force_authenticate(user=academy.user)

        response = self.client.get(reverse('admin-country-translations', args=[self.egypt.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
