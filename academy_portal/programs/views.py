"""
Портал академии (academic или admin с имперсонацией):
- /api/academy/locations/     — филиалы (+ toggle-hidden)
- /api/academy/coaches/       — тренеры
- /api/academy/programs/      — программы с пакетами и расписанием (+ discounts)
- /api/academy/assessments/   — оценочные программы
- /api/academy/packages/      — пакеты (?program_id=)
- /api/academy/discounts/     — скидки (?program_id=)

Back-office:
- /api/admin/branches/        — филиалы всех академий
"""
import logging

from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from academies.mixins import AcademyModelViewSet
from accounts.permissions import IsPlatformAdmin
from core.mixins import BulkDeleteMixin, TranslatedSearchMixin

from .models import Branch, Coach, Discount, Package, Program
from .serializers import (
    AdminBranchSerializer,
    AssessmentSerializer,
    BranchSerializer,
    CoachSerializer,
    DiscountSerializer,
    ProgramSerializer,
    StandalonePackageSerializer,
)
from .services import DiscountService, LocationService

logger = logging.getLogger(__name__)

PROGRAM_PREFETCH = (
    'packages__schedules',
    'coaches',
    'branch__translations',
    'sport__translations',
)


class LocationViewSet(TranslatedSearchMixin, AcademyModelViewSet):
    queryset = Branch.objects.prefetch_related('translations', 'sports', 'facilities')
    serializer_class = BranchSerializer

    @action(detail=True, methods=['post'], url_path='toggle-hidden')
    def toggle_hidden(self, request, pk=None):
        branch = LocationService.toggle_hidden(self.get_object())
        return Response(self.get_serializer(branch).data)


class CoachViewSet(TranslatedSearchMixin, AcademyModelViewSet):
    queryset = Coach.objects.prefetch_related('sports', 'spoken_languages', 'programs', 'packages')
    serializer_class = CoachSerializer
    search_lookup = 'name__icontains'


class ProgramFilterMixin:
    """?branch_id= и ?sport_id= для списков программ."""

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        for param in ('branch_id', 'sport_id'):
            value = self.request.query_params.get(param)
            if value:
                queryset = queryset.filter(**{param: value})
        return queryset


class ProgramViewSet(ProgramFilterMixin, TranslatedSearchMixin, AcademyModelViewSet):
    queryset = Program.objects.regular().select_related('branch', 'sport').prefetch_related(*PROGRAM_PREFETCH)
    serializer_class = ProgramSerializer
    search_lookup = 'name__icontains'

    @action(detail=True, methods=['get'])
    def discounts(self, request, pk=None):
        return Response(DiscountService.for_program(self.get_object()))


class AssessmentViewSet(ProgramFilterMixin, AcademyModelViewSet):
    queryset = Program.objects.assessments().select_related('branch', 'sport').prefetch_related(*PROGRAM_PREFETCH)
    serializer_class = AssessmentSerializer


class PackageViewSet(AcademyModelViewSet):
    queryset = Package.objects.select_related('program').prefetch_related('schedules')
    serializer_class = StandalonePackageSerializer
    academy_field = 'program__academy'

    def get_queryset(self):
        queryset = super().get_queryset()
        program_id = self.request.query_params.get('program_id')
        if program_id:
            queryset = queryset.filter(program_id=program_id)
        return queryset


class DiscountViewSet(AcademyModelViewSet):
    queryset = Discount.objects.select_related('program').prefetch_related('packages')
    serializer_class = DiscountSerializer
    academy_field = 'program__academy'

    def get_queryset(self):
        queryset = super().get_queryset()
        program_id = self.request.query_params.get('program_id')
        if program_id:
            queryset = queryset.filter(program_id=program_id)
        return queryset

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = DiscountService.create(
            program=data['program'],
            discount_type=data['type'],
            value=data['value'],
            start_date=data['start_date'],
            end_date=data['end_date'],
            package_ids=data['package_ids'],
        )

    def perform_update(self, serializer):
        discount = serializer.instance
        data = serializer.validated_data
        serializer.instance = DiscountService.update(
            discount,
            discount_type=data.get('type', discount.type),
            value=data.get('value', discount.value),
            start_date=data.get('start_date', discount.start_date),
            end_date=data.get('end_date', discount.end_date),
            package_ids=data.get('package_ids', [package.pk for package in discount.packages.all()]),
        )


class AdminBranchViewSet(
    BulkDeleteMixin,
    TranslatedSearchMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Branch.objects.select_related('academy').prefetch_related('translations', 'academy__translations')
    serializer_class = AdminBranchSerializer
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get_queryset(self):
        queryset = super().get_queryset()
        academy_id = self.request.query_params.get('academy_id')
        if academy_id:
            queryset = queryset.filter(academy_id=academy_id)
        return queryset
