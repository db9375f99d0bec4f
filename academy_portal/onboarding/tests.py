from datetime import date

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from academies.models import AcademyGalleryImage
from catalog.models import Facility, SpokenLanguage
from core.testing import create_academy, create_branch, create_package, create_program, create_sport
from core.translations import save_translation
from programs.models import ASSESSMENT_NAME, Coach

from .services import OnboardingIncompleteError, OnboardingService


def fill_academy_details(academy, sport):
    save_translation(academy, name='Falcons Academy', description='Football for kids')
    academy.sports.set([sport])
    academy.image = 'images/academies/logo.png'
    academy.policy = 'No refunds after the first session'
    academy.save()
    AcademyGalleryImage.objects.create(academy=academy, url='images/gallery/pitch.png')


def fill_location(academy, sport):
    facility = Facility.objects.create()
    save_translation(facility, name='Parking')
    branch = create_branch(academy, sports=[sport], url='https://maps.example.com/main')
    branch.facilities.set([facility])
    return branch


def fill_coach(academy, sport):
    language = SpokenLanguage.objects.create()
    save_translation(language, name='Arabic')
    coach = Coach.objects.create(
        academy=academy, name='Coach Sam', title='Head coach', bio='UEFA B licence', gender='male',
    )
    coach.sports.set([sport])
    coach.spoken_languages.set([language])
    return coach


def fill_programs(academy, branch, sport, coach):
    dob = {'start_date_of_birth': date(2012, 1, 1), 'end_date_of_birth': date(2016, 12, 31)}
    program = create_program(
        academy, branch, sport, description='Weekly training', gender='mix', color='#00AA00', **dob,
    )
    create_package(program)
    assessment = create_program(
        academy, branch, sport, name=ASSESSMENT_NAME, description='Level check', gender='mix',
        number_of_seats=6, **dob,
    )
    create_package(assessment, name='Assessment Package', price='50.00')
    assessment.coaches.add(coach)


class OnboardingServiceTests(TestCase):

    def setUp(self):
        self.academy = create_academy()
        self.sport = create_sport('Football')

    def step(self, key):
        return next(step for step in OnboardingService.steps(self.academy) if step['key'] == key)

    def test_new_academy(self):
        status_data = OnboardingService.status(self.academy)

        self.assertEqual(
            [step['key'] for step in status_data['steps']],
            ['academy-details', 'location', 'coach', 'program', 'assessment'],
        )
        self.assertEqual(status_data['completed_steps'], 0)
        self.assertEqual(status_data['total_steps'], 5)
        self.assertFalse(status_data['is_completed'])
        self.assertEqual(self.step('academy-details')['missing'], ['description', 'sports', 'logo', 'gallery', 'policy'])
        self.assertEqual(self.step('location')['missing'], ['name', 'url', 'sports', 'facilities'])

    def test_partially_filled_location(self):
        create_branch(self.academy, sports=[self.sport])

        self.assertEqual(self.step('location')['missing'], ['url', 'facilities'])

    def test_assessment_is_not_a_program(self):
        create_program(self.academy, name=ASSESSMENT_NAME)

        self.assertEqual(len(self.step('program')['missing']), 10)
        self.assertEqual(
            self.step('assessment')['missing'],
            ['description', 'coaches', 'packages', 'branch', 'sport',
             'start_date_of_birth', 'end_date_of_birth', 'gender', 'number_of_seats'],
        )

    def test_complete_names_first_incomplete_step(self):
        fill_academy_details(self.academy, self.sport)

        with self.assertRaises(OnboardingIncompleteError) as ctx:
            OnboardingService.complete(self.academy)

        self.assertEqual(ctx.exception.field, 'location')
        self.academy.refresh_from_db()
        self.assertFalse(self.academy.onboarded)

    def test_status_marks_onboarded(self):
        fill_academy_details(self.academy, self.sport)
        branch = fill_location(self.academy, self.sport)
        coach = fill_coach(self.academy, self.sport)
        fill_programs(self.academy, branch, self.sport, coach)

        status_data = OnboardingService.status(self.academy)

        self.assertTrue(status_data['is_completed'])
        self.assertTrue(status_data['onboarded'])
        self.academy.refresh_from_db()
        self.assertTrue(self.academy.onboarded)


class OnboardingApiTests(APITestCase):

    def setUp(self):
        self.academy = create_academy()
        self.sport = create_sport('Football')
        self.client.force_authenticate(user=self.academy.user)

    def test_progress(self):
        fill_academy_details(self.academy, self.sport)

        response = self.client.get(reverse('onboarding'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['completed_steps'], 1)
        self.assertEqual(response.data['steps'][0], {'key': 'academy-details', 'completed': True, 'missing': []})
        self.assertFalse(response.data['onboarded'])

    def test_complete_too_early(self):
        response = self.client.post(reverse('onboarding-complete'))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Complete all onboarding steps first', 'field': 'academy-details'})

    def test_complete(self):
        fill_academy_details(self.academy, self.sport)
        branch = fill_location(self.academy, self.sport)
        coach = fill_coach(self.academy, self.sport)
        fill_programs(self.academy, branch, self.sport, coach)

        response = self.client.post(reverse('onboarding-complete'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['is_completed'])
        self.academy.refresh_from_db()
        self.assertTrue(self.academy.onboarded)
