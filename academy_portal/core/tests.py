import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.exceptions import ValidationError
from rest_framework.test import APITestCase

from catalog.models import Sport
from geo.models import Country

from .exceptions import FieldValidationError, _first_error
from .mixins import parse_ids
from .testing import create_admin, create_sport
from .translations import save_translation, translated_value
from .utils import unique_slug


class TranslationHelpersTests(TestCase):

    def test_prefers_default_locale(self):
        sport = create_sport('Football')
        save_translation(sport, locale='ar', name='كرة القدم')

        self.assertEqual(translated_value(sport), 'Football')
        self.assertEqual(translated_value(sport, locale='ar'), 'كرة القدم')

    def test_falls_back_to_smallest_locale(self):
        country = Country.objects.create()
        save_translation(country, locale='fr', name='Egypte')
        save_translation(country, locale='ar', name='مصر')

        self.assertEqual(translated_value(country), 'مصر')

    def test_empty_without_translations(self):
        country = Country.objects.create()
        self.assertEqual(translated_value(country), '')
        self.assertEqual(str(country), f'Country #{country.pk}')

    def test_save_translation_updates_existing_locale(self):
        country = Country.objects.create()
        save_translation(country, name='Egypt')
        save_translation(country, name='Egypt (EG)')

        self.assertEqual(country.translations.count(), 1)
        self.assertEqual(country.display_name, 'Egypt (EG)')


class UniqueSlugTests(TestCase):

    def test_adds_numeric_suffix(self):
        create_sport('Football')
        self.assertEqual(unique_slug(Sport, 'Football'), 'football-2')
        self.assertEqual(unique_slug(Sport, 'Tennis'), 'tennis')


class ErrorFormatTests(TestCase):

    def test_first_field_error(self):
        exc = ValidationError({'email': ['Enter a valid email address.']})
        self.assertEqual(_first_error(exc.detail), ('email', 'Enter a valid email address.'))

    def test_non_field_errors_become_root(self):
        exc = ValidationError({'non_field_errors': ['Something is wrong']})
        self.assertEqual(_first_error(exc.detail), ('root', 'Something is wrong'))

    def test_nested_errors_keep_path(self):
        exc = ValidationError({'packages': [{'price': ['A valid number is required.']}]})
        self.assertEqual(_first_error(exc.detail), ('packages.price', 'A valid number is required.'))

    def test_index_keyed_errors_drop_the_index(self):
        exc = ValidationError({'packages': {0: {'schedules': {1: {'to_time': ['End must be after start']}}}}})
        self.assertEqual(_first_error(exc.detail), ('packages.schedules.to_time', 'End must be after start'))

    def test_field_validation_error_default_field(self):
        exc = FieldValidationError('Boom')
        self.assertEqual(exc.field, 'root')
        self.assertEqual(_first_error(exc.detail), ('root', 'Boom'))

    def test_parse_ids(self):
        self.assertEqual(parse_ids(['1', 2]), [1, 2])
        with self.assertRaises(FieldValidationError):
            parse_ids([])
        with self.assertRaises(FieldValidationError):
            parse_ids(['x'])


class AdminListApiTests(APITestCase):
    def setUp(self):
        self.admin = create_admin()
        self.client.force_authenticate(user=self.admin)
        for name in ('Egypt', 'Jordan', 'Kuwait'):
            country = Country.objects.create()
            save_translation(country, name=name)

    def test_paginated_list_shape(self):
        response = self.client.get(reverse('admin-country-list'), {'page_size': 2})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data['data']), 2)
        self.assertEqual(response.data['meta'], {
            'page': 1,
            'page_size': 2,
            'total_items': 3,
            'total_pages': 2,
        })

    def test_validation_error_shape(self):
        response = self.client.post(reverse('admin-country-list'), {'name': 'Egypt'}, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'A country with this name already exists', 'field': 'name'})

    def test_bulk_delete(self):
        ids = list(Country.objects.values_list('pk', flat=True)[:2])

        response = self.client.post(reverse('admin-country-bulk-delete'), {'ids': ids}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'deleted': 2})
        self.assertEqual(Country.objects.count(), 1)

    def test_bulk_delete_requires_ids(self):
        response = self.client.post(reverse('admin-country-bulk-delete'), {'ids': []}, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'No items selected', 'field': 'ids'})

    def test_not_authenticated_shape(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse('admin-country-list'))

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.data['field'])
        self.assertIn('error', response.data)


class ImageUploadTests(APITestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        self.client.force_authenticate(user=create_admin())

    def test_upload_returns_path_and_url(self):
        upload = SimpleUploadedFile('logo.png', b'\x89PNG\r\n\x1a\nfake', content_type='image/png')
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.client.post(reverse('image-upload'), {'file': upload, 'folder': 'academies'})

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data['path'].startswith('images/academies/'))
        self.assertTrue(response.data['path'].endswith('.png'))
        self.assertIn(response.data['path'], response.data['url'])

    def test_rejects_unsupported_type(self):
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.client.post(reverse('image-upload'), {'file': upload})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'Unsupported image type', 'field': 'file'})

    def test_rejects_extension_not_matching_type(self):
        uploads = [
            SimpleUploadedFile('shell.php', b'\x89PNG\r\n\x1a\nfake', content_type='image/png'),
            SimpleUploadedFile('photo.jpg', b'\x89PNG\r\n\x1a\nfake', content_type='image/png'),
            SimpleUploadedFile('no-extension', b'\x89PNG\r\n\x1a\nfake', content_type='image/png'),
        ]
        for upload in uploads:
            with self.subTest(name=upload.name):
                with override_settings(MEDIA_ROOT=self.media_root):
                    response = self.client.post(reverse('image-upload'), {'file': upload})

                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.data, {'error': 'Unsupported image type', 'field': 'file'})

    def test_jpeg_extension_variants(self):
        upload = SimpleUploadedFile('PHOTO.JPEG', b'\xff\xd8\xff\xe0fake', content_type='image/jpeg')
        with override_settings(MEDIA_ROOT=self.media_root):
            response = self.client.post(reverse('image-upload'), {'file': upload})

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data['path'].endswith('.jpg'))

    def test_requires_file(self):
        response = self.client.post(reverse('image-upload'), {})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['field'], 'file')


class HealthCheckTests(TestCase):

    @override_settings(GOOGLE_PLACES_API_KEY='')
    def test_health(self):
        response = self.client.get(reverse('health'))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['checks']['database'], 'ok')
        self.assertEqual(data['checks']['google_places'], 'disabled')

    def test_ready(self):
        response = self.client.get(reverse('ready'))
        self.assertEqual(response.json(), {'ready': True})
