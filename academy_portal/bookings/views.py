"""
Портал академии:
- /api/academy/athletes/          — спортсмены (+ search/?q= по телефону)
- /api/academy/blocks/            — блокировки календаря (+ data/)
- /api/academy/bookings/          — бронирования (+ program-details/<id>/)
- /api/academy/sessions/          — занятия (+ <id>/status/)
- /api/academy/calendar/          — занятия и блокировки за период

Back-office:
- /api/admin/athletes/            — спортсмены всех академий
"""
import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from academies.mixins import AcademyModelViewSet, AcademyScopedMixin, AcademyViewSetMixin
from academies.permissions import HasAcademy, IsAcademyOwner
from accounts.permissions import IsAdminOrAcademic, IsPlatformAdmin
from core.exceptions import FieldValidationError
from core.mixins import BulkDeleteMixin, TranslatedSearchMixin
from programs.models import Program

from .models import AcademicAthlete, Block, Booking, BookingSession
from .serializers import (
    AdminAthleteDetailSerializer,
    AdminAthleteSerializer,
    AthleteSerializer,
    BlockSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingSessionSerializer,
    SessionStatusSerializer,
)
from .services import AthleteService, BlockService, BookingService, CalendarService

logger = logging.getLogger(__name__)

PORTAL_PERMISSIONS = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]


class AthleteViewSet(TranslatedSearchMixin, AcademyModelViewSet):
    queryset = AcademicAthlete.objects.select_related('user', 'profile', 'sport').prefetch_related('sport__translations')
    serializer_class = AthleteSerializer
    search_lookup = 'profile__name__icontains'

    def perform_create(self, serializer):
        serializer.instance = AthleteService.create(self.request.academy, serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = AthleteService.update(serializer.instance, serializer.validated_data)

    @action(detail=False, methods=['get'])
    def search(self, request):
        return Response(AthleteService.search(request.academy, request.query_params.get('q', '')))


class AdminAthleteViewSet(
    BulkDeleteMixin,
    TranslatedSearchMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = (
        AcademicAthlete.objects
        .select_related('user', 'profile', 'academy', 'sport')
        .prefetch_related('academy__translations', 'sport__translations')
    )
    serializer_class = AdminAthleteSerializer
    permission_classes = [IsAuthenticated, IsPlatformAdmin]
    search_lookup = 'profile__name__icontains'

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return AdminAthleteDetailSerializer
        return super().get_serializer_class()

    def get_queryset(self):
        queryset = super().get_queryset()
        academy_id = self.request.query_params.get('academy_id')
        if academy_id:
            queryset = queryset.filter(academy_id=academy_id)
        return queryset


class BlockViewSet(AcademyModelViewSet):
    """Только владелец академии; администратор с имперсонацией не допускается."""

    queryset = Block.objects.prefetch_related('branches', 'sports', 'packages', 'programs')
    serializer_class = BlockSerializer
    permission_classes = [IsAuthenticated, HasAcademy, IsAcademyOwner]

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        scopes = serializer.pop_scopes(data)
        serializer.instance = BlockService.create(
            self.request.academy,
            block_date=data['date'],
            start_time=data['start_time'],
            end_time=data['end_time'],
            note=data.get('note', ''),
            scopes=scopes,
        )

    def perform_update(self, serializer):
        block = serializer.instance
        data = dict(serializer.validated_data)
        scopes = serializer.pop_scopes(data)
        serializer.instance = BlockService.update(
            block,
            block_date=data.get('date', block.date),
            start_time=data.get('start_time', block.start_time),
            end_time=data.get('end_time', block.end_time),
            note=data.get('note'),
            scopes=scopes,
        )

    @action(detail=False, methods=['get'], url_path='data', url_name='data')
    def block_data(self, request):
        return Response(BlockService.block_data(request.academy))


class BookingViewSet(
    BulkDeleteMixin,
    AcademyViewSetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = (
        Booking.objects
        .select_related('profile', 'coach', 'package__program')
        .prefetch_related('sessions')
    )
    serializer_class = BookingSerializer
    permission_classes = PORTAL_PERMISSIONS
    academy_field = 'package__program__academy'

    def get_queryset(self):
        queryset = super().get_queryset()
        profile_id = self.request.query_params.get('profile_id')
        if profile_id:
            queryset = queryset.filter(profile_id=profile_id)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = BookingCreateSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = BookingService.create_booking(
            request.academy,
            profile=data['profile_id'],
            package=data['package_id'],
            coach=data.get('coach_id'),
            selected_date=data['date'],
            time_range=data.get('time', ''),
            academy_policy=data['academy_policy'],
            roap_policy=data['roap_policy'],
        )
        return Response(self.get_serializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path=r'program-details/(?P<program_id>[0-9]+)')
    def program_details(self, request, program_id=None):
        program = (
            Program.objects
            .for_academy(request.academy)
            .select_related('branch', 'sport')
            .prefetch_related('packages__schedules', 'coaches', 'branch__translations', 'sport__translations')
            .filter(pk=program_id)
            .first()
        )
        if program is None:
            raise FieldValidationError('Program not found', field='program_id')
        return Response(BookingService.program_details(program))


class BookingSessionViewSet(AcademyViewSetMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    queryset = BookingSession.objects.select_related('booking')
    serializer_class = BookingSessionSerializer
    permission_classes = PORTAL_PERMISSIONS
    academy_field = 'booking__package__program__academy'

    def get_queryset(self):
        queryset = super().get_queryset()
        booking_id = self.request.query_params.get('booking_id')
        if booking_id:
            queryset = queryset.filter(booking_id=booking_id)
        return queryset

    @action(detail=True, methods=['post', 'patch'], url_path='status')
    def set_status(self, request, pk=None):
        session = self.get_object()
        serializer = SessionStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = BookingService.set_session_status(session, serializer.validated_data['status'])
        logger.info('Session %s status -> %s (user=%s)', session.pk, session.status, request.user.pk)
        return Response(BookingSessionSerializer(session).data)


class CalendarView(AcademyScopedMixin, APIView):
    """GET /api/academy/calendar/?start=YYYY-MM-DD&end=YYYY-MM-DD"""

    permission_classes = PORTAL_PERMISSIONS

    def get(self, request):
        start_date, end_date = CalendarService.parse_range(
            request.query_params.get('start'),
            request.query_params.get('end'),
        )
        return Response(CalendarService.slots(request.academy, start_date, end_date))
