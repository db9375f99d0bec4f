"""
Бизнес-логика спортсменов, бронирований и календаря.

AthleteService  — спортсмены академии (пользователь + профиль + карточка)
BlockService    — блокировки календаря и проверка пересечений
BookingService  — расчёт занятий и цены, создание бронирования
CalendarService — занятия и блокировки за период
"""
import calendar
import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from django.db import transaction
from django.db.models import Q

from accounts.models import CustomUser, Profile
from catalog.models import Sport
from core.exceptions import FieldValidationError
from core.storage import resolve_image_url
from core.translations import translated_value
from notifications.services import NotificationService
from programs.models import Branch, Package, Program

from .models import AcademicAthlete, Block, Booking, BookingSession, EntryFeesHistory

logger = logging.getLogger(__name__)

MONTH_FORMAT = '%B %Y'
BLOCK_COLOR = '#F5F5F5'
SEARCH_MIN_LENGTH = 3
SEARCH_LIMIT = 5


class BlockConflictError(FieldValidationError):
    pass


class BookingError(FieldValidationError):
    default_field = 'package_id'


# ═══════════════════════════════════════════════════════════════
# ATHLETES
# ═══════════════════════════════════════════════════════════════

PROFILE_FIELDS = ('gender', 'birthday', 'image', 'country', 'nationality', 'city', 'street_address')
ATHLETE_FIELDS = (
    'sport', 'certificate', 'type',
    'first_guardian_name', 'first_guardian_relationship', 'first_guardian_email', 'first_guardian_phone',
    'second_guardian_name', 'second_guardian_relationship', 'second_guardian_email', 'second_guardian_phone',
)


class AthleteService:

    @staticmethod
    def validate_guardian(data):
        if data.get('type') != AcademicAthlete.TYPE_FELLOW:
            return
        if not data.get('first_guardian_name'):
            raise FieldValidationError(
                'First guardian information is required for fellow athletes', field='first_guardian_name',
            )
        if not data.get('first_guardian_relationship'):
            raise FieldValidationError(
                'First guardian information is required for fellow athletes', field='first_guardian_relationship',
            )

    @staticmethod
    def _profile_values(data):
        return {field: data[field] for field in PROFILE_FIELDS if field in data}

    @staticmethod
    def _athlete_values(data):
        return {field: data[field] for field in ATHLETE_FIELDS if field in data}

    @classmethod
    @transaction.atomic
    def create(cls, academy, data):
        """
        Заводит спортсмена академии.

        Email уже существующего пользователя — ошибка. Пользователь с тем же
        телефоном переиспользуется, как и его профиль с тем же именем.
        """
        cls.validate_guardian(data)
        email = (data.get('email') or '').strip() or None
        phone_number = (data.get('phone_number') or '').strip() or None
        name = data['name']

        if email and CustomUser.objects.filter(email__iexact=email).exists():
            raise FieldValidationError('User with this email already exists', field='email')

        user = CustomUser.objects.filter(phone_number=phone_number).first() if phone_number else None
        if user is None:
            user = CustomUser(email=email, phone_number=phone_number, name=name, role=CustomUser.ROLE_USER)
            user.set_unusable_password()
            user.save()
            profile = None
        else:
            profile = user.profiles.filter(name=name).first()

        if profile is None:
            profile = Profile.objects.create(
                user=user,
                name=name,
                relationship=Profile.RELATIONSHIP_SELF,
                **cls._profile_values(data),
            )
        elif AcademicAthlete.objects.filter(academy=academy, profile=profile).exists():
            raise FieldValidationError('This athlete is already registered in this academy', field='phone_number')

        athlete = AcademicAthlete.objects.create(
            academy=academy,
            user=user,
            profile=profile,
            **cls._athlete_values(data),
        )
        logger.info('Athlete %s created for academy %s (user=%s)', athlete.pk, academy.pk, user.pk)
        return athlete

    @classmethod
    @transaction.atomic
    def update(cls, athlete, data):
        merged = {field: getattr(athlete, field) for field in ('type', 'first_guardian_name', 'first_guardian_relationship')}
        merged.update(data)
        cls.validate_guardian(merged)

        user = athlete.user
        if 'email' in data:
            email = (data.get('email') or '').strip() or None
            if email and CustomUser.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
                raise FieldValidationError('Email is already in use by another user', field='email')
            user.email = email
        if 'phone_number' in data:
            phone_number = (data.get('phone_number') or '').strip() or None
            if phone_number and CustomUser.objects.filter(phone_number=phone_number).exclude(pk=user.pk).exists():
                raise FieldValidationError('Phone number is already in use by another user', field='phone_number')
            user.phone_number = phone_number
        if data.get('name'):
            user.name = data['name']
        user.save()

        profile = athlete.profile
        if profile is not None:
            values = cls._profile_values(data)
            if data.get('name'):
                values['name'] = data['name']
            for key, value in values.items():
                setattr(profile, key, value)
            profile.save()

        for key, value in cls._athlete_values(data).items():
            setattr(athlete, key, value)
        athlete.save()
        return athlete

    @staticmethod
    def search(academy, query):
        """Поиск по телефону пользователя или первого опекуна для формы бронирования."""
        query = (query or '').strip()
        if len(query) < SEARCH_MIN_LENGTH:
            return []
        athletes = (
            AcademicAthlete.objects
            .for_academy(academy)
            .filter(Q(user__phone_number__icontains=query) | Q(first_guardian_phone__icontains=query))
            .select_related('user', 'profile')[:SEARCH_LIMIT]
        )
        return [
            {
                'id': athlete.profile_id,
                'name': athlete.profile.name if athlete.profile else athlete.user.name,
                'image': resolve_image_url(athlete.profile.image) if athlete.profile else None,
                'phone_number': athlete.user.phone_number or '',
                'birthday': athlete.profile.birthday if athlete.profile else None,
                'athlete_id': athlete.pk,
            }
            for athlete in athletes
        ]


# ═══════════════════════════════════════════════════════════════
# BLOCKS
# ═══════════════════════════════════════════════════════════════

class BlockService:

    @staticmethod
    def validate_times(start_time, end_time):
        if start_time >= end_time:
            raise FieldValidationError('End time must be after start time', field='end_time')

    @staticmethod
    def check_conflict(academy, block_date, start_time, end_time, exclude_pk=None):
        conflicts = Block.objects.filter(
            academy=academy,
            date=block_date,
            start_time__lt=end_time,
            end_time__gt=start_time,
        )
        if exclude_pk is not None:
            conflicts = conflicts.exclude(pk=exclude_pk)
        if conflicts.exists():
            raise BlockConflictError('There is already a block during this time period')

    @staticmethod
    def _apply_scopes(block, scopes):
        """scopes: {'branches': 'all' | [ids], ...}."""
        for scope_field, relation in Block.SCOPES:
            if relation not in scopes:
                continue
            value = scopes[relation]
            if value == Block.SCOPE_ALL:
                setattr(block, scope_field, Block.SCOPE_ALL)
                getattr(block, relation).clear()
            else:
                setattr(block, scope_field, Block.SCOPE_SPECIFIC)
                getattr(block, relation).set(value)
        block.save()

    @classmethod
    @transaction.atomic
    def create(cls, academy, block_date, start_time, end_time, note='', scopes=None):
        cls.validate_times(start_time, end_time)
        cls.check_conflict(academy, block_date, start_time, end_time)
        block = Block.objects.create(
            academy=academy,
            date=block_date,
            start_time=start_time,
            end_time=end_time,
            note=note or '',
        )
        cls._apply_scopes(block, scopes or {})
        logger.info('Block %s created for academy %s on %s', block.pk, academy.pk, block_date)
        return block

    @classmethod
    @transaction.atomic
    def update(cls, block, block_date, start_time, end_time, note=None, scopes=None):
        cls.validate_times(start_time, end_time)
        cls.check_conflict(block.academy, block_date, start_time, end_time, exclude_pk=block.pk)
        block.date = block_date
        block.start_time = start_time
        block.end_time = end_time
        if note is not None:
            block.note = note
        cls._apply_scopes(block, scopes or {})
        return block

    @staticmethod
    def block_data(academy):
        """Справочники формы блокировки: филиалы, виды спорта, пакеты и программы академии."""
        programs = list(Program.objects.for_academy(academy).only('id', 'name', 'branch_id', 'sport_id'))
        branches = Branch.objects.for_academy(academy).prefetch_related('translations', 'sports')
        branch_sport_ids = set()

        branches_data = []
        for branch in branches:
            sport_ids = sorted(sport.pk for sport in branch.sports.all())
            branch_sport_ids.update(sport_ids)
            branches_data.append({
                'id': branch.pk,
                'name': translated_value(branch),
                'sports': sport_ids,
                'programs': [program.pk for program in programs if program.branch_id == branch.pk],
            })

        sports_data = [
            {
                'id': sport.pk,
                'name': translated_value(sport),
                'programs': [program.pk for program in programs if program.sport_id == sport.pk],
            }
            for sport in Sport.objects.filter(pk__in=branch_sport_ids).prefetch_related('translations')
        ]

        packages_data = [
            {
                'id': package.pk,
                'name': package.name,
                'sport_id': package.program.sport_id or 0,
                'programs': [package.program_id],
            }
            for package in Package.objects.filter(program__academy=academy).select_related('program')
        ]

        programs_data = [
            {
                'id': program.pk,
                'name': program.name or '',
                'branch_ids': [program.branch_id] if program.branch_id else [],
                'sport_ids': [program.sport_id] if program.sport_id else [],
            }
            for program in programs
        ]

        return {
            'branches': branches_data,
            'sports': sports_data,
            'packages': packages_data,
            'programs': programs_data,
        }


# ═══════════════════════════════════════════════════════════════
# BOOKINGS
# ═══════════════════════════════════════════════════════════════

def parse_time_range(value):
    """'HH:MM HH:MM' → (time, time)."""
    try:
        start, end = value.split()
        return (
            datetime.strptime(start[:5], '%H:%M').time(),
            datetime.strptime(end[:5], '%H:%M').time(),
        )
    except (AttributeError, ValueError):
        raise FieldValidationError('Invalid time range', field='time')


def generate_sessions(schedules, start_date, end_date):
    """Занятие на каждый день периода, для которого есть расписание (первое подходящее)."""
    by_weekday = {}
    for schedule in schedules:
        by_weekday.setdefault(schedule.weekday, schedule)

    sessions = []
    current = start_date
    while current <= end_date:
        schedule = by_weekday.get(current.weekday())
        if schedule is not None:
            sessions.append({'date': current, 'from_time': schedule.from_time, 'to_time': schedule.to_time})
        current += timedelta(days=1)
    return sessions


class BookingService:

    @staticmethod
    def calculate_sessions_and_price(package, selected_date, schedules, time_range):
        """
        Занятия бронирования и цена.

        Returns:
            dict: sessions, total_price, deductions, final_price
        """
        total_price = Decimal(package.price)
        deductions = Decimal('0')

        if package.is_assessment:
            from_time, to_time = parse_time_range(time_range)
            sessions = [{'date': selected_date, 'from_time': from_time, 'to_time': to_time}]
        else:
            if package.is_monthly:
                if selected_date.strftime(MONTH_FORMAT) not in (package.months or []):
                    raise BookingError('Selected month is not available in this package', field='date')
                month_start = selected_date.replace(day=1)
                month_end = selected_date.replace(day=calendar.monthrange(selected_date.year, selected_date.month)[1])
                all_sessions = generate_sessions(schedules, month_start, month_end)
            else:
                all_sessions = generate_sessions(schedules, package.start_date, package.end_date)

            if not all_sessions:
                raise BookingError('No sessions are scheduled for this package')

            price_per_session = total_price / len(all_sessions)
            missed = [session for session in all_sessions if session['date'] < selected_date]
            deductions = price_per_session * len(missed)
            sessions = [session for session in all_sessions if session['date'] >= selected_date]
            if not sessions:
                raise BookingError('No sessions left in this package after the selected date', field='date')

        return {
            'sessions': sessions,
            'total_price': total_price,
            'deductions': deductions,
            'final_price': total_price - deductions,
        }

    @staticmethod
    def check_entry_fees(profile, program, package, selected_date):
        """Returns: (should_pay, amount)."""
        if package.entry_fees_start_date and selected_date < package.entry_fees_start_date:
            return False, Decimal('0')
        if package.entry_fees_end_date and selected_date > package.entry_fees_end_date:
            return False, Decimal('0')

        already_paid = EntryFeesHistory.objects.filter(
            profile=profile, sport_id=program.sport_id, program=program,
        ).exists()
        if already_paid:
            return False, Decimal('0')

        if package.is_monthly and package.entry_fees_applied_until:
            if selected_date.strftime(MONTH_FORMAT) not in package.entry_fees_applied_until:
                return False, Decimal('0')

        return True, Decimal(package.entry_fees or 0)

    @staticmethod
    def check_assessment_deduction(profile, program, package):
        """
        Последняя успешная оценка спортсмена по тому же спорту и филиалу,
        ещё не учтённая ни в одном бронировании.

        Returns: (should_apply, amount, assessment_booking)
        """
        candidates = (
            Booking.objects
            .successful()
            .filter(profile=profile, deducted_in__isnull=True)
            .select_related('package__program')
            .order_by('-created_at', '-pk')
        )
        for booking in candidates:
            booked_package = booking.package
            if booked_package is None or not booked_package.is_assessment:
                continue
            booked_program = booked_package.program
            if (
                booked_program.assessment_deducted_from_program and
                booked_program.sport_id == program.sport_id and
                booked_program.branch_id == program.branch_id
            ):
                amount = Decimal(package.entry_fees or 0) - Decimal(booking.price)
                return True, amount, booking
        return False, Decimal('0'), None

    @staticmethod
    def price_after_active_discounts(package, total_price, deductions):
        price = Decimal(total_price) - Decimal(deductions)
        for discount in package.discounts.all():
            if discount.type == discount.TYPE_PERCENTAGE:
                price *= 1 - Decimal(discount.value) / 100
            else:
                price -= Decimal(discount.value)
        return price

    @classmethod
    def create_booking(cls, academy, profile, package, selected_date, time_range, coach=None,
                       academy_policy=False, roap_policy=False):
        if package is None:
            raise BookingError('Package not found')
        program = package.program
        if program.sport_id is None:
            raise BookingError('Invalid package configuration')

        schedules = list(package.schedules.all())
        pricing = cls.calculate_sessions_and_price(package, selected_date, schedules, time_range)
        pay_entry_fees, entry_fees = cls.check_entry_fees(profile, program, package, selected_date)
        apply_deduction, deduction_amount, assessment_booking = cls.check_assessment_deduction(
            profile, program, package,
        )
        discounted = cls.price_after_active_discounts(package, pricing['total_price'], pricing['deductions'])

        price = discounted
        if pay_entry_fees:
            price += entry_fees
        if apply_deduction:
            price += deduction_amount

        with transaction.atomic():
            booking = Booking.objects.create(
                profile=profile,
                package=package,
                coach=coach,
                price=price.quantize(Decimal('0.01')),
                package_price=package.price,
                status=Booking.STATUS_SUCCESS,
                academy_policy=academy_policy,
                roap_policy=roap_policy,
                entry_fees_paid=pay_entry_fees,
                assessment_deduction=assessment_booking,
            )
            BookingSession.objects.bulk_create([
                BookingSession(
                    booking=booking,
                    date=session['date'],
                    from_time=session['from_time'],
                    to_time=session['to_time'],
                    status=BookingSession.STATUS_PENDING,
                )
                for session in pricing['sessions']
            ])
            if pay_entry_fees:
                EntryFeesHistory.objects.create(profile=profile, sport_id=program.sport_id, program=program)

            NotificationService.notify(
                title='New booking',
                description=f'{profile.name} booked {package.name} ({program.name})',
                academy=academy,
                user=academy.user,
                profile=profile,
            )

        logger.info(
            'Booking %s created: academy=%s package=%s sessions=%s price=%s',
            booking.pk, academy.pk, package.pk, len(pricing['sessions']), booking.price,
        )
        return booking

    @staticmethod
    def set_session_status(session, status):
        allowed = (
            BookingSession.STATUS_ACCEPTED,
            BookingSession.STATUS_REJECTED,
            BookingSession.STATUS_CANCELLED,
            BookingSession.STATUS_UPCOMING,
        )
        if status not in allowed:
            raise FieldValidationError('Invalid session status', field='status')
        session.status = status
        session.save(update_fields=['status', 'updated_at'])
        return session

    @staticmethod
    def program_details(program):
        """Данные для формы бронирования: пакеты с расписанием и тренеры программы."""
        return {
            'id': program.pk,
            'name': program.name,
            'branch': translated_value(program.branch) if program.branch_id else '',
            'sport': translated_value(program.sport) if program.sport_id else '',
            'packages': [
                {
                    'id': package.pk,
                    'name': package.name,
                    'price': package.price,
                    'entry_fees': package.entry_fees,
                    'session_per_week': package.session_per_week,
                    'session_duration': package.session_duration,
                    'months': package.months,
                    'start_date': package.start_date,
                    'end_date': package.end_date,
                    'schedules': [
                        {
                            'id': schedule.pk,
                            'day': schedule.day,
                            'from_time': schedule.from_time.strftime('%H:%M'),
                            'to_time': schedule.to_time.strftime('%H:%M'),
                        }
                        for schedule in package.schedules.all()
                    ],
                }
                for package in program.packages.all()
            ],
            'coaches': [
                {'id': coach.pk, 'name': coach.name, 'image': resolve_image_url(coach.image)}
                for coach in program.coaches.all()
            ],
        }


# ═══════════════════════════════════════════════════════════════
# CALENDAR
# ═══════════════════════════════════════════════════════════════

class CalendarService:

    @staticmethod
    def parse_range(start, end):
        if not start or not end:
            raise FieldValidationError('Start and end dates are required', field='start')
        try:
            start_date = date.fromisoformat(start[:10])
            end_date = date.fromisoformat(end[:10])
        except ValueError:
            raise FieldValidationError('Invalid date', field='start')
        if start_date > end_date:
            raise FieldValidationError('Start date cannot be greater than end date', field='start')
        return start_date, end_date

    @staticmethod
    def slots(academy, start_date, end_date):
        sessions = (
            BookingSession.objects
            .filter(
                booking__package__program__academy=academy,
                date__gte=start_date,
                date__lte=end_date,
            )
            .select_related(
                'booking__profile',
                'booking__coach',
                'booking__package__program__branch',
                'booking__package__program__sport',
            )
            .prefetch_related(
                'booking__package__program__branch__translations',
                'booking__package__program__sport__translations',
            )
        )
        data = []
        for session in sessions:
            booking = session.booking
            package = booking.package
            program = package.program
            data.append({
                'id': session.pk,
                'type': 'session',
                'date': session.date,
                'start_time': session.from_time.strftime('%H:%M'),
                'end_time': session.to_time.strftime('%H:%M'),
                'status': session.status,
                'program_name': program.name,
                'student_name': booking.profile.name if booking.profile else None,
                'student_birthday': booking.profile.birthday if booking.profile else None,
                'branch_name': translated_value(program.branch) if program.branch_id else '',
                'sport_name': translated_value(program.sport) if program.sport_id else '',
                'package_name': package.name,
                'package_id': package.pk,
                'coach_name': booking.coach.name if booking.coach else None,
                'coach_id': booking.coach_id,
                'color': program.color,
                'gender': program.gender,
            })

        blocks = (
            Block.objects
            .for_academy(academy)
            .filter(date__gte=start_date, date__lte=end_date)
            .prefetch_related('branches__translations', 'sports__translations', 'packages')
        )
        for block in blocks:
            data.append({
                'id': block.pk,
                'type': 'block',
                'date': block.date,
                'start_time': block.start_time.strftime('%H:%M'),
                'end_time': block.end_time.strftime('%H:%M'),
                'status': 'blocked',
                'program_name': 'block',
                'student_name': None,
                'student_birthday': None,
                'branch_names': [translated_value(branch) for branch in block.branches.all()],
                'sport_names': [translated_value(sport) for sport in block.sports.all()],
                'package_names': [package.name for package in block.packages.all()],
                'note': block.note,
                'coach_name': None,
                'coach_id': None,
                'color': BLOCK_COLOR,
            })
        return data
