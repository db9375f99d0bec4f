"""
Онбординг академии: пять шагов, каждый проверяет заполненность
обязательных полей первой сущности своего типа.

Сами сущности создаются обычными эндпоинтами портала
(details/, locations/, coaches/, programs/, assessments/).
"""
import logging

from core.exceptions import FieldValidationError
from core.translations import translated_value
from programs.models import Branch, Coach, Program

logger = logging.getLogger(__name__)


class OnboardingIncompleteError(FieldValidationError):
    pass


def _missing(checks):
    return [name for name, filled in checks if not filled]


def academy_details_missing(academy):
    return _missing([
        ('name', translated_value(academy)),
        ('description', translated_value(academy, 'description')),
        ('sports', academy.sports.exists()),
        ('logo', academy.image),
        ('gallery', academy.gallery.exists()),
        ('policy', academy.policy),
    ])


def location_missing(academy):
    branch = Branch.objects.for_academy(academy).order_by('created_at', 'pk').first()
    if branch is None:
        return ['name', 'url', 'sports', 'facilities']
    return _missing([
        ('name', translated_value(branch)),
        ('url', branch.url),
        ('sports', branch.sports.exists()),
        ('facilities', branch.facilities.exists()),
    ])


def coach_missing(academy):
    coach = Coach.objects.for_academy(academy).order_by('created_at', 'pk').first()
    if coach is None:
        return ['name', 'title', 'bio', 'gender', 'sports', 'languages']
    return _missing([
        ('name', coach.name),
        ('title', coach.title),
        ('bio', coach.bio),
        ('gender', coach.gender),
        ('sports', coach.sports.exists()),
        ('languages', coach.spoken_languages.exists()),
    ])


def program_missing(academy):
    program = Program.objects.for_academy(academy).regular().order_by('created_at', 'pk').first()
    if program is None:
        return [
            'name', 'description', 'branch', 'sport', 'start_date_of_birth',
            'end_date_of_birth', 'type', 'packages', 'gender', 'color',
        ]
    return _missing([
        ('name', program.name),
        ('description', program.description),
        ('branch', program.branch_id),
        ('sport', program.sport_id),
        ('start_date_of_birth', program.start_date_of_birth),
        ('end_date_of_birth', program.end_date_of_birth),
        ('type', program.type),
        ('packages', program.packages.exists()),
        ('gender', program.gender),
        ('color', program.color),
    ])


def assessment_missing(academy):
    program = Program.objects.for_academy(academy).assessments().order_by('created_at', 'pk').first()
    if program is None:
        return [
            'description', 'coaches', 'packages', 'branch', 'sport',
            'start_date_of_birth', 'end_date_of_birth', 'gender', 'number_of_seats',
        ]
    return _missing([
        ('description', program.description),
        ('coaches', program.coaches.exists()),
        ('packages', program.packages.exists()),
        ('branch', program.branch_id),
        ('sport', program.sport_id),
        ('start_date_of_birth', program.start_date_of_birth),
        ('end_date_of_birth', program.end_date_of_birth),
        ('gender', program.gender),
        ('number_of_seats', program.number_of_seats),
    ])


STEPS = (
    ('academy-details', academy_details_missing),
    ('location', location_missing),
    ('coach', coach_missing),
    ('program', program_missing),
    ('assessment', assessment_missing),
)


class OnboardingService:

    @staticmethod
    def steps(academy):
        result = []
        for key, missing_for in STEPS:
            missing = missing_for(academy)
            result.append({'key': key, 'completed': not missing, 'missing': missing})
        return result

    @classmethod
    def _mark_onboarded(cls, academy):
        if not academy.onboarded:
            academy.onboarded = True
            academy.save(update_fields=['onboarded', 'updated_at'])
            logger.info('Academy %s completed onboarding', academy.pk)

    @classmethod
    def status(cls, academy):
        """Прогресс по шагам; при полностью пройденных шагах академия помечается onboarded."""
        steps = cls.steps(academy)
        completed = sum(1 for step in steps if step['completed'])
        is_completed = completed == len(steps)
        if is_completed:
            cls._mark_onboarded(academy)
        return {
            'steps': steps,
            'completed_steps': completed,
            'total_steps': len(steps),
            'is_completed': is_completed,
            'onboarded': academy.onboarded,
        }

    @classmethod
    def complete(cls, academy):
        for step in cls.steps(academy):
            if not step['completed']:
                raise OnboardingIncompleteError('Complete all onboarding steps first', field=step['key'])
        cls._mark_onboarded(academy)
        return cls.status(academy)
