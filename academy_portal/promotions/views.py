"""
Промокоды.

- /api/academy/promo-codes/  — промокоды текущей академии
- /api/admin/promo-codes/    — все промокоды (general и по академиям)
"""
from rest_framework import status
from rest_framework.response import Response

from academies.mixins import AcademyModelViewSet
from core.viewsets import AdminModelViewSet

from .models import PromoCode
from .serializers import AdminPromoCodeSerializer, PromoCodeSerializer
from .services import PromoCodeService

PROMO_FIELDS = ('code', 'discount_type', 'discount_value', 'start_date', 'end_date', 'can_be_used')


def merged_data(instance, validated_data):
    """Данные для частичного обновления: недостающие поля берутся из instance."""
    return {key: validated_data.get(key, getattr(instance, key)) for key in PROMO_FIELDS}


class PromoCodeViewSet(AcademyModelViewSet):
    queryset = PromoCode.objects.all()
    serializer_class = PromoCodeSerializer

    def get_queryset(self):
        return super().get_queryset().order_by('created_at')

    def perform_create(self, serializer):
        serializer.instance = PromoCodeService.save(serializer.validated_data, self.request.academy.pk)

    def perform_update(self, serializer):
        instance = serializer.instance
        serializer.instance = PromoCodeService.save(
            merged_data(instance, serializer.validated_data), instance.academy_id, instance=instance,
        )


class AdminPromoCodeViewSet(AdminModelViewSet):
    queryset = PromoCode.objects.select_related('academy').prefetch_related('academy__translations')
    serializer_class = AdminPromoCodeSerializer
    search_lookup = 'code__icontains'

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        created = PromoCodeService.create_for_selection(
            data,
            selection_mode=data.get('selection_mode'),
            academy_ids=data.get('academy_ids') or [],
        )
        return Response(
            self.get_serializer(created, many=True).data,
            status=status.HTTP_201_CREATED,
        )

    def perform_update(self, serializer):
        instance = serializer.instance
        data = serializer.validated_data
        academy = data['academy'] if 'academy' in data else instance.academy
        serializer.instance = PromoCodeService.save(
            merged_data(instance, data), academy.pk if academy else None, instance=instance,
        )
