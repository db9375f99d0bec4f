from rest_framework import serializers

from academies.fields import AcademyPrimaryKeyRelatedField
from accounts.models import Profile
from catalog.models import Sport
from core.fields import ImageUrlField, TranslatedField
from core.storage import resolve_image_url
from core.translations import translated_value
from programs.models import Branch, Coach, Package, Program

from .models import AcademicAthlete, Block, Booking, BookingSession


# ═══════════════════════════════════════════════════════════════
# ATHLETES
# ═══════════════════════════════════════════════════════════════

def athlete_person(athlete):
    """Поля пользователя и профиля спортсмена для ответов API."""
    profile = athlete.profile
    return {
        'user_id': athlete.user_id,
        'profile_id': athlete.profile_id,
        'name': profile.name if profile else athlete.user.name,
        'email': athlete.user.email,
        'phone_number': athlete.user.phone_number or '',
        'gender': profile.gender if profile else '',
        'birthday': profile.birthday.isoformat() if profile and profile.birthday else None,
        'image': profile.image if profile else '',
        'image_url': resolve_image_url(profile.image) if profile else None,
        'country': profile.country if profile else '',
        'nationality': profile.nationality if profile else '',
        'city': profile.city if profile else '',
        'street_address': profile.street_address if profile else '',
    }


class AthleteSerializer(serializers.ModelSerializer):
    """Сохранение — AthleteService; поля пользователя и профиля только на запись."""

    name = serializers.CharField(max_length=255, write_only=True)
    email = serializers.EmailField(write_only=True, required=False, allow_blank=True, allow_null=True)
    phone_number = serializers.CharField(max_length=32, write_only=True, required=False, allow_blank=True, allow_null=True)
    gender = serializers.CharField(max_length=50, write_only=True, required=False, allow_blank=True)
    birthday = serializers.DateField(write_only=True, required=False, allow_null=True)
    image = serializers.CharField(max_length=500, write_only=True, required=False, allow_blank=True)
    country = serializers.CharField(max_length=255, write_only=True, required=False, allow_blank=True)
    nationality = serializers.CharField(max_length=255, write_only=True, required=False, allow_blank=True)
    city = serializers.CharField(max_length=255, write_only=True, required=False, allow_blank=True)
    street_address = serializers.CharField(max_length=512, write_only=True, required=False, allow_blank=True)
    sport_id = serializers.PrimaryKeyRelatedField(
        source='sport', queryset=Sport.objects.all(), required=False, allow_null=True,
        error_messages={'does_not_exist': 'Sport not found'},
    )
    sport_name = TranslatedField(source_attr='sport')
    certificate_url = ImageUrlField(source='certificate')

    class Meta:
        model = AcademicAthlete
        fields = [
            'id', 'name', 'email', 'phone_number', 'gender', 'birthday', 'image', 'country',
            'nationality', 'city', 'street_address', 'sport_id', 'sport_name', 'certificate',
            'certificate_url', 'type', 'first_guardian_name', 'first_guardian_relationship',
            'first_guardian_email', 'first_guardian_phone', 'second_guardian_name',
            'second_guardian_relationship', 'second_guardian_email', 'second_guardian_phone',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'certificate': {'required': False}}

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(athlete_person(instance))
        return data


class AdminAthleteSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    email = serializers.EmailField(source='user.email', read_only=True)
    phone_number = serializers.CharField(source='user.phone_number', read_only=True)
    academy_name = TranslatedField(source_attr='academy')
    sport_name = TranslatedField(source_attr='sport')

    class Meta:
        model = AcademicAthlete
        fields = [
            'id', 'name', 'email', 'phone_number', 'academy_id', 'academy_name',
            'sport_id', 'sport_name', 'type', 'created_at',
        ]
        read_only_fields = fields

    def get_name(self, obj):
        return obj.profile.name if obj.profile else obj.user.name


class AthleteBookingSerializer(serializers.ModelSerializer):
    """Бронирование в карточке спортсмена (admin view)."""
    package_name = serializers.CharField(source='package.name', read_only=True, default='')
    program_id = serializers.IntegerField(source='package.program_id', read_only=True, default=None)
    program_name = serializers.CharField(source='package.program.name', read_only=True, default='')
    branch_name = serializers.SerializerMethodField()
    session_count = serializers.SerializerMethodField()
    upcoming_sessions = serializers.SerializerMethodField()
    completed_sessions = serializers.SerializerMethodField()
    cancelled_sessions = serializers.SerializerMethodField()
    next_session_date = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            'id', 'status', 'package_id', 'package_name', 'program_id', 'program_name',
            'branch_name', 'price', 'package_price', 'entry_fees_paid', 'session_count',
            'upcoming_sessions', 'completed_sessions', 'cancelled_sessions',
            'next_session_date', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_branch_name(self, obj):
        program = obj.package.program if obj.package else None
        if program is None or program.branch is None:
            return ''
        return translated_value(program.branch)

    def _count(self, obj, status=None):
        sessions = obj.sessions.all()
        if status is None:
            return len(sessions)
        return sum(1 for session in sessions if session.status == status)

    def get_session_count(self, obj):
        return self._count(obj)

    def get_upcoming_sessions(self, obj):
        return self._count(obj, BookingSession.STATUS_UPCOMING)

    def get_completed_sessions(self, obj):
        return self._count(obj, BookingSession.STATUS_ACCEPTED)

    def get_cancelled_sessions(self, obj):
        return self._count(obj, BookingSession.STATUS_CANCELLED)

    def get_next_session_date(self, obj):
        dates = [session.date for session in obj.sessions.all() if session.status == BookingSession.STATUS_UPCOMING]
        return min(dates).isoformat() if dates else None


class AdminAthleteDetailSerializer(AdminAthleteSerializer):
    academy_slug = serializers.CharField(source='academy.slug', read_only=True)
    profile = serializers.SerializerMethodField()
    bookings = serializers.SerializerMethodField()
    certificate_url = ImageUrlField(source='certificate')

    class Meta(AdminAthleteSerializer.Meta):
        fields = AdminAthleteSerializer.Meta.fields + [
            'academy_slug', 'user_id', 'profile', 'certificate_url',
            'first_guardian_name', 'first_guardian_relationship', 'first_guardian_email',
            'first_guardian_phone', 'second_guardian_name', 'second_guardian_relationship',
            'second_guardian_email', 'second_guardian_phone', 'bookings',
        ]
        read_only_fields = fields

    def get_profile(self, obj):
        profile = obj.profile
        if profile is None:
            return None
        return {
            'id': profile.pk,
            'name': profile.name,
            'gender': profile.gender,
            'birthday': profile.birthday.isoformat() if profile.birthday else None,
            'image_url': resolve_image_url(profile.image),
            'relationship': profile.relationship,
            'country': profile.country,
            'nationality': profile.nationality,
            'city': profile.city,
            'street_address': profile.street_address,
        }

    def get_bookings(self, obj):
        if obj.profile_id is None:
            return []
        bookings = (
            Booking.objects
            .filter(profile_id=obj.profile_id, package__program__academy_id=obj.academy_id)
            .select_related('package__program__branch')
            .prefetch_related('sessions', 'package__program__branch__translations')
        )
        return AthleteBookingSerializer(bookings, many=True).data


# ═══════════════════════════════════════════════════════════════
# BLOCKS
# ═══════════════════════════════════════════════════════════════

class ScopeField(serializers.Field):
    """'all' или список id."""

    default_error_messages = {
        'invalid': "Expected 'all' or a list of ids",
    }

    def __init__(self, relation, **kwargs):
        self.relation = relation
        kwargs['source'] = '*'
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if data == Block.SCOPE_ALL:
            return {self.relation: Block.SCOPE_ALL}
        if not isinstance(data, list):
            self.fail('invalid')
        try:
            return {self.relation: [int(value) for value in data]}
        except (TypeError, ValueError):
            self.fail('invalid')

    def to_representation(self, instance):
        scope_field = dict((relation, scope) for scope, relation in Block.SCOPES)[self.relation]
        if getattr(instance, scope_field) == Block.SCOPE_ALL:
            return Block.SCOPE_ALL
        return [obj.pk for obj in getattr(instance, self.relation).all()]


class BlockSerializer(serializers.ModelSerializer):
    """Проверки и сохранение — BlockService."""

    start_time = serializers.TimeField(format='%H:%M')
    end_time = serializers.TimeField(format='%H:%M')
    branches = ScopeField('branches', required=False)
    sports = ScopeField('sports', required=False)
    packages = ScopeField('packages', required=False)
    programs = ScopeField('programs', required=False)

    # relation → (queryset ресурсов академии, сообщение об ошибке)
    SCOPE_LOOKUPS = {
        'branches': (lambda academy: Branch.objects.for_academy(academy), 'Location not found'),
        'sports': (lambda academy: Sport.objects.all(), 'Sport not found'),
        'packages': (lambda academy: Package.objects.filter(program__academy=academy), 'Package not found'),
        'programs': (lambda academy: Program.objects.for_academy(academy), 'Program not found'),
    }

    class Meta:
        model = Block
        fields = [
            'id', 'date', 'start_time', 'end_time', 'note',
            'branches', 'sports', 'packages', 'programs', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'note': {'required': False, 'allow_blank': True}}

    def validate(self, attrs):
        academy = getattr(self.context.get('request'), 'academy', None)
        for relation, (queryset_for, message) in self.SCOPE_LOOKUPS.items():
            ids = attrs.get(relation)
            if not isinstance(ids, list):
                continue
            found = queryset_for(academy).filter(pk__in=ids).count()
            if found != len(set(ids)):
                raise serializers.ValidationError({relation: message})
        return attrs

    @staticmethod
    def pop_scopes(validated_data):
        return {
            relation: validated_data.pop(relation)
            for relation in ('branches', 'sports', 'packages', 'programs')
            if relation in validated_data
        }


# ═══════════════════════════════════════════════════════════════
# BOOKINGS
# ═══════════════════════════════════════════════════════════════

class BookingSessionSerializer(serializers.ModelSerializer):
    from_time = serializers.TimeField(format='%H:%M', read_only=True)
    to_time = serializers.TimeField(format='%H:%M', read_only=True)

    class Meta:
        model = BookingSession
        fields = ['id', 'booking_id', 'date', 'from_time', 'to_time', 'status']
        read_only_fields = ['id', 'booking_id', 'date']


class SessionStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[
        BookingSession.STATUS_ACCEPTED,
        BookingSession.STATUS_UPCOMING,
        BookingSession.STATUS_REJECTED,
        BookingSession.STATUS_CANCELLED,
    ])


class BookingSerializer(serializers.ModelSerializer):
    profile_name = serializers.CharField(source='profile.name', read_only=True, default='')
    package_name = serializers.CharField(source='package.name', read_only=True, default='')
    program_name = serializers.CharField(source='package.program.name', read_only=True, default='')
    coach_name = serializers.CharField(source='coach.name', read_only=True, default=None)
    sessions = BookingSessionSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id', 'status', 'profile_id', 'profile_name', 'package_id', 'package_name',
            'program_name', 'coach_id', 'coach_name', 'price', 'package_price',
            'entry_fees_paid', 'academy_policy', 'roap_policy', 'assessment_deduction_id',
            'sessions', 'created_at',
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    profile_id = AcademyPrimaryKeyRelatedField(
        academy_field='academy_athletes__academy',
        queryset=Profile.objects.all(),
        error_messages={'does_not_exist': 'Athlete not found'},
    )
    package_id = AcademyPrimaryKeyRelatedField(
        academy_field='program__academy',
        queryset=Package.objects.select_related('program'),
        error_messages={'does_not_exist': 'Package not found'},
    )
    coach_id = AcademyPrimaryKeyRelatedField(
        queryset=Coach.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Coach not found'},
    )
    date = serializers.DateField()
    # "HH:MM HH:MM"
    time = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    academy_policy = serializers.BooleanField(required=False, default=False)
    roap_policy = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        package = attrs['package_id']
        if package.is_assessment and not attrs.get('time'):
            raise serializers.ValidationError({'time': 'Select a time for the assessment'})
        return attrs
