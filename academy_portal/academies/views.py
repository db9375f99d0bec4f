"""
API академий.

Back-office (роль admin):
- /api/admin/academies/                  — список, view, удаление, bulk-delete
- /api/admin/academies/<id>/accept/      — одобрить
- /api/admin/academies/<id>/reject/      — отклонить
- /api/admin/academies/<id>/toggle-hidden/
- /api/admin/impersonate/                — POST войти в академию, DELETE выйти

Портал:
- /api/academy/status/   — куда направить пользователя (публичный)
- /api/academy/details/  — профиль академии
"""
import logging

from django.conf import settings as django_settings
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdminOrAcademic, IsPlatformAdmin
from core.exceptions import FieldValidationError
from core.mixins import BulkDeleteMixin, TranslatedSearchMixin
from core.translations import translated_value

from .mixins import AcademyScopedMixin
from .models import Academy
from .permissions import HasAcademy
from .serializers import AcademyDetailsSerializer, AcademyListSerializer
from .services import AcademyService

logger = logging.getLogger(__name__)


class AdminAcademyViewSet(
    BulkDeleteMixin,
    TranslatedSearchMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Модерация академий. Создаются академии только через регистрацию."""

    queryset = Academy.objects.select_related('user').prefetch_related('translations')
    serializer_class = AcademyListSerializer
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get_queryset(self):
        queryset = super().get_queryset()
        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        academy = AcademyService.set_status(self.get_object(), Academy.STATUS_ACCEPTED)
        return Response(self.get_serializer(academy).data)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        academy = AcademyService.set_status(self.get_object(), Academy.STATUS_REJECTED)
        return Response(self.get_serializer(academy).data)

    @action(detail=True, methods=['post'], url_path='toggle-hidden')
    def toggle_hidden(self, request, pk=None):
        academy = AcademyService.toggle_hidden(self.get_object())
        return Response(self.get_serializer(academy).data)


class ImpersonateView(APIView):
    """
    POST   {"academy_id": 5} — ставит cookie impersonatedAcademyId
    DELETE                   — удаляет cookie
    """
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def post(self, request):
        raw_id = request.data.get('academy_id')
        try:
            academy = Academy.objects.get(pk=int(raw_id))
        except (TypeError, ValueError, Academy.DoesNotExist):
            raise FieldValidationError('Academy not found', field='academy_id')

        response = Response({
            'academy_id': academy.pk,
            'name': translated_value(academy, 'name'),
        })
        response.set_cookie(
            django_settings.ACADEMY_IMPERSONATION_COOKIE,
            str(academy.pk),
            httponly=True,
            samesite='Lax',
            secure=not django_settings.DEBUG and request.is_secure(),
        )
        logger.info('Admin %s impersonates academy %s', request.user.pk, academy.pk)
        return response

    def delete(self, request):
        response = Response(status=status.HTTP_204_NO_CONTENT)
        response.delete_cookie(django_settings.ACADEMY_IMPERSONATION_COOKIE)
        return response


class AcademyStatusView(AcademyScopedMixin, APIView):
    """
    GET /api/academy/status/

    {"redirect": "/sign-in"} без сессии или академии,
    иначе {"is_onboarded": bool, "status": "pending|accepted|rejected"}.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(AcademyService.check_status(request.user, getattr(request, 'academy', None)))


class AcademyDetailsView(AcademyScopedMixin, APIView):
    permission_classes = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]

    def get_academy(self):
        return (
            Academy.objects
            .prefetch_related('translations', 'gallery', 'sports')
            .get(pk=self.request.academy.pk)
        )

    def get(self, request):
        return Response(AcademyDetailsSerializer(self.get_academy()).data)

    def patch(self, request):
        academy = self.get_academy()
        serializer = AcademyDetailsSerializer(academy, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        locale = data.pop('locale', None)
        AcademyService.update_details(academy, data, locale=locale)
        return Response(AcademyDetailsSerializer(self.get_academy()).data)
