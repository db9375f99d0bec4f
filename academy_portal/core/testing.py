"""
Фабрики тестовых данных, общие для tests.py всех приложений.
"""
from datetime import date
from decimal import Decimal

from django.utils.text import slugify

from academies.models import Academy
from accounts.models import CustomUser, Profile
from catalog.models import Sport

from .translations import save_translation
from .utils import unique_slug

PASSWORD = 'StrongPass123'


def create_admin(email='admin@example.com'):
    return CustomUser.objects.create_user(
        email=email,
        password=PASSWORD,
        role=CustomUser.ROLE_ADMIN,
        is_staff=True,
        is_superuser=True,
    )


def create_academy(email='owner@example.com', name='Falcons Academy', status=Academy.STATUS_ACCEPTED):
    """Владелец (academic) и его академия."""
    user = CustomUser.objects.create_user(
        email=email,
        password=PASSWORD,
        role=CustomUser.ROLE_ACADEMIC,
        name='Owner',
    )
    academy = Academy.objects.create(user=user, slug=unique_slug(Academy, name), status=status)
    save_translation(academy, name=name, description='')
    return academy


def create_sport(name='Football'):
    sport = Sport.objects.create(slug=unique_slug(Sport, name))
    save_translation(sport, name=name)
    return sport


def create_branch(academy, name='Main Branch', sports=(), **extra):
    from programs.models import Branch

    branch = Branch.objects.create(academy=academy, slug=slugify(name), **extra)
    save_translation(branch, name=name)
    if sports:
        branch.sports.set(sports)
    return branch


def create_program(academy, branch=None, sport=None, name='Juniors', **extra):
    from programs.models import Program

    return Program.objects.create(academy=academy, branch=branch, sport=sport, name=name, **extra)


def create_package(program, name='Term 1', price='300.00', start=date(2026, 1, 1), end=date(2026, 3, 31),
                   schedules=(), **extra):
    """schedules: [('monday', '17:00', '18:00'), ...]."""
    from programs.models import Package, Schedule

    package = Package.objects.create(
        program=program,
        name=name,
        price=Decimal(price),
        start_date=start,
        end_date=end,
        session_per_week=len(schedules),
        **extra,
    )
    for day, from_time, to_time in schedules:
        Schedule.objects.create(package=package, day=day, from_time=from_time, to_time=to_time)
    return package


def create_athlete(academy, name='Omar Khaled', phone_number='+201000000100', sport=None):
    from bookings.models import AcademicAthlete

    user = CustomUser(email=None, name=name, phone_number=phone_number, role=CustomUser.ROLE_USER)
    user.set_unusable_password()
    user.save()
    profile = Profile.objects.create(user=user, name=name, birthday=date(2015, 5, 1))
    return AcademicAthlete.objects.create(academy=academy, user=user, profile=profile, sport=sport)
