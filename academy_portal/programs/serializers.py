from django.db import transaction
from rest_framework import serializers

from academies.fields import AcademyPrimaryKeyRelatedField
from catalog.models import Facility, SpokenLanguage, Sport
from core.fields import ImageUrlField, TranslatedField
from core.serializers import TranslatableModelSerializer

from .models import ASSESSMENT_NAME, Branch, Coach, Discount, Package, Program, Schedule
from .services import LocationService, ProgramService


# ═══════════════════════════════════════════════════════════════
# LOCATIONS
# ═══════════════════════════════════════════════════════════════

class BranchSerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)
    sport_ids = serializers.PrimaryKeyRelatedField(
        source='sports',
        queryset=Sport.objects.all(),
        many=True,
        required=False,
        error_messages={'does_not_exist': 'Sport not found'},
    )
    facility_ids = serializers.PrimaryKeyRelatedField(
        source='facilities',
        queryset=Facility.objects.all(),
        many=True,
        required=False,
        error_messages={'does_not_exist': 'Facility not found'},
    )

    duplicate_name_message = 'A location with this name already exists'
    duplicate_scope = 'academy'

    class Meta:
        model = Branch
        fields = [
            'id', 'name', 'locale', 'slug', 'name_in_google_map', 'url', 'is_default',
            'latitude', 'longitude', 'rate', 'reviews', 'place_id', 'hidden',
            'sport_ids', 'facility_ids', 'created_at', 'updated_at',
        ]
        read_only_fields = ['slug', 'rate', 'reviews', 'place_id', 'hidden', 'created_at', 'updated_at']

    def create(self, validated_data):
        validated_data['slug'] = LocationService.branch_slug(validated_data.get('name'))
        if validated_data.get('is_default'):
            LocationService.reset_default(validated_data['academy'])
        branch = super().create(validated_data)
        LocationService.ensure_assessment_programs(branch)
        LocationService.schedule_review_refresh(branch)
        return branch

    def update(self, instance, validated_data):
        if 'name' in validated_data:
            validated_data['slug'] = LocationService.branch_slug(validated_data['name'])
        if validated_data.get('is_default'):
            LocationService.reset_default(instance.academy, exclude_pk=instance.pk)
        place_changed = any(
            key in validated_data and validated_data[key] != getattr(instance, key)
            for key in ('url', 'name_in_google_map')
        )
        if not validated_data.get('name_in_google_map', instance.name_in_google_map):
            # без name_in_google_map место ищется по названию филиала
            place_changed = place_changed or (
                'name' in validated_data and validated_data['name'] != instance.display_name
            )
        branch = super().update(instance, validated_data)
        if 'sports' in validated_data:
            LocationService.ensure_assessment_programs(branch)
        if place_changed:
            LocationService.schedule_review_refresh(branch)
        return branch


class AdminBranchSerializer(serializers.ModelSerializer):
    name = TranslatedField()
    academy_name = TranslatedField(source_attr='academy')

    class Meta:
        model = Branch
        fields = [
            'id', 'name', 'slug', 'academy_id', 'academy_name', 'is_default', 'hidden',
            'rate', 'reviews', 'url', 'created_at',
        ]
        read_only_fields = fields


# ═══════════════════════════════════════════════════════════════
# COACHES
# ═══════════════════════════════════════════════════════════════

class CoachSerializer(serializers.ModelSerializer):
    image_url = ImageUrlField(source='image')
    sport_ids = serializers.PrimaryKeyRelatedField(
        source='sports', queryset=Sport.objects.all(), many=True, required=False,
        error_messages={'does_not_exist': 'Sport not found'},
    )
    spoken_language_ids = serializers.PrimaryKeyRelatedField(
        source='spoken_languages', queryset=SpokenLanguage.objects.all(), many=True, required=False,
        error_messages={'does_not_exist': 'Spoken language not found'},
    )
    program_ids = AcademyPrimaryKeyRelatedField(
        source='programs', queryset=Program.objects.all(), many=True, required=False,
        error_messages={'does_not_exist': 'Program not found'},
    )
    package_ids = AcademyPrimaryKeyRelatedField(
        academy_field='program__academy',
        source='packages', queryset=Package.objects.all(), many=True, required=False,
        error_messages={'does_not_exist': 'Package not found'},
    )

    class Meta:
        model = Coach
        fields = [
            'id', 'name', 'title', 'image', 'image_url', 'bio', 'gender',
            'private_session_percentage', 'date_of_birth', 'sport_ids',
            'spoken_language_ids', 'program_ids', 'package_ids', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'image': {'required': False}}


# ═══════════════════════════════════════════════════════════════
# PROGRAMS / PACKAGES
# ═══════════════════════════════════════════════════════════════

class ScheduleSerializer(serializers.ModelSerializer):
    from_time = serializers.TimeField(format='%H:%M')
    to_time = serializers.TimeField(format='%H:%M')

    class Meta:
        model = Schedule
        fields = ['id', 'day', 'from_time', 'to_time', 'memo']
        read_only_fields = ['id']
        extra_kwargs = {'memo': {'required': False}}

    def validate(self, attrs):
        if attrs['from_time'] >= attrs['to_time']:
            raise serializers.ValidationError({'to_time': 'End time must be after start time'})
        return attrs


class PackageSerializer(serializers.ModelSerializer):
    """Пакет; внутри программы (nested) id используется для обновления."""
    id = serializers.IntegerField(required=False)
    schedules = ScheduleSerializer(many=True, required=False)
    months = serializers.ListField(child=serializers.CharField(max_length=32), required=False)
    entry_fees_applied_until = serializers.ListField(child=serializers.CharField(max_length=32), required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    class Meta:
        model = Package
        fields = [
            'id', 'name', 'price', 'start_date', 'end_date', 'months', 'session_per_week',
            'session_duration', 'capacity', 'memo', 'entry_fees', 'entry_fees_explanation',
            'entry_fees_applied_until', 'entry_fees_start_date', 'entry_fees_end_date', 'schedules',
        ]
        read_only_fields = ['session_per_week']
        extra_kwargs = {
            'price': {'min_value': 0},
            'entry_fees': {'min_value': 0, 'required': False},
        }

    def validate(self, attrs):
        is_monthly = (attrs.get('name') or getattr(self.instance, 'name', '')).lower().startswith('monthly')
        if not is_monthly and self.instance is None and not (attrs.get('start_date') and attrs.get('end_date')):
            raise serializers.ValidationError({'start_date': 'Start and end dates are required'})
        return attrs


class StandalonePackageSerializer(PackageSerializer):
    """Отдельный CRUD пакетов: /api/academy/packages/."""
    program_id = AcademyPrimaryKeyRelatedField(
        source='program',
        queryset=Program.objects.all(),
        error_messages={'does_not_exist': 'Program not found'},
    )

    class Meta(PackageSerializer.Meta):
        fields = PackageSerializer.Meta.fields + ['program_id']

    def create(self, validated_data):
        program = validated_data.pop('program')
        return ProgramService.save_package(program, validated_data)

    def update(self, instance, validated_data):
        validated_data.pop('program', None)
        merged = {
            'name': instance.name,
            'start_date': instance.start_date,
            'end_date': instance.end_date,
            'months': instance.months,
            **validated_data,
        }
        return ProgramService.save_package(instance.program, merged, package=instance)


class ProgramSerializer(serializers.ModelSerializer):
    branch_id = AcademyPrimaryKeyRelatedField(
        source='branch', queryset=Branch.objects.all(), required=False, allow_null=True,
        error_messages={'does_not_exist': 'Location not found'},
    )
    sport_id = serializers.PrimaryKeyRelatedField(
        source='sport', queryset=Sport.objects.all(), required=False, allow_null=True,
        error_messages={'does_not_exist': 'Sport not found'},
    )
    coach_ids = AcademyPrimaryKeyRelatedField(
        source='coaches', queryset=Coach.objects.all(), many=True, required=False,
        error_messages={'does_not_exist': 'Coach not found'},
    )
    packages = PackageSerializer(many=True, required=False)
    branch_name = TranslatedField(source_attr='branch')
    sport_name = TranslatedField(source_attr='sport')

    class Meta:
        model = Program
        fields = [
            'id', 'name', 'description', 'type', 'number_of_seats', 'branch_id', 'branch_name',
            'sport_id', 'sport_name', 'gender', 'start_date_of_birth', 'end_date_of_birth',
            'color', 'assessment_deducted_from_program', 'coach_ids', 'packages',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate_name(self, value):
        if value.strip() == ASSESSMENT_NAME:
            raise serializers.ValidationError('This name is reserved for assessments')
        return value

    def validate(self, attrs):
        start = attrs.get('start_date_of_birth', getattr(self.instance, 'start_date_of_birth', None))
        end = attrs.get('end_date_of_birth', getattr(self.instance, 'end_date_of_birth', None))
        if start and end and start > end:
            raise serializers.ValidationError({'end_date_of_birth': 'End date of birth must be after start date of birth'})
        return attrs

    def _save_relations(self, program, coaches, packages):
        if coaches is not None:
            program.coaches.set(coaches)
        if packages is not None:
            ProgramService.sync_packages(program, packages)

    @transaction.atomic
    def create(self, validated_data):
        coaches = validated_data.pop('coaches', None)
        packages = validated_data.pop('packages', None)
        program = Program.objects.create(**validated_data)
        self._save_relations(program, coaches, packages)
        return program

    @transaction.atomic
    def update(self, instance, validated_data):
        coaches = validated_data.pop('coaches', None)
        packages = validated_data.pop('packages', None)
        for key, value in validated_data.items():
            setattr(instance, key, value)
        instance.save()
        self._save_relations(instance, coaches, packages)
        return instance


class AssessmentSerializer(ProgramSerializer):
    """Программа 'Assessment': имя фиксировано, тип всегда TEAM."""

    class Meta(ProgramSerializer.Meta):
        read_only_fields = ['name', 'type', 'created_at', 'updated_at']

    def validate_name(self, value):
        return value

    def create(self, validated_data):
        validated_data['name'] = ASSESSMENT_NAME
        validated_data['type'] = Program.TYPE_TEAM
        return super().create(validated_data)

    def update(self, instance, validated_data):
        validated_data['type'] = Program.TYPE_TEAM
        return super().update(instance, validated_data)


class DiscountSerializer(serializers.ModelSerializer):
    """Проверки и сохранение — DiscountService."""
    program_id = AcademyPrimaryKeyRelatedField(
        source='program', queryset=Program.objects.all(),
        error_messages={'does_not_exist': 'Program not found'},
    )
    package_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=True, write_only=True)

    class Meta:
        model = Discount
        fields = ['id', 'program_id', 'type', 'value', 'start_date', 'end_date', 'package_ids']

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['package_ids'] = [package.pk for package in instance.packages.all()]
        return data
