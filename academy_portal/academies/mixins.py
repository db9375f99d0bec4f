"""
Academy mixins — переиспользуемые компоненты для ресурсов, принадлежащих академии.
"""
from django.db import models
from rest_framework import viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsAdminOrAcademic
from core.mixins import BulkDeleteMixin

from .middleware import attach_academy
from .permissions import HasAcademy


# ═══════════════════════════════════════════════════════════════
# MODEL MIXINS
# ═══════════════════════════════════════════════════════════════

class AcademyQuerySet(models.QuerySet):
    """QuerySet ресурсов академии. Без академии — пустой результат."""

    academy_field = 'academy'

    def for_academy(self, academy):
        if academy is None:
            return self.none()
        return self.filter(**{self.academy_field: academy})


# ═══════════════════════════════════════════════════════════════
# VIEW MIXINS
# ═══════════════════════════════════════════════════════════════

class AcademyScopedMixin:
    """
    Определяет request.academy сразу после аутентификации DRF,
    до проверки permissions.
    """

    def perform_authentication(self, request):
        super().perform_authentication(request)
        attach_academy(request)


class AcademyViewSetMixin(AcademyScopedMixin):
    """
    Mixin для DRF ViewSets — фильтрует queryset по request.academy
    и проставляет академию при создании объектов.

    Использование:
        class CoachViewSet(AcademyViewSetMixin, viewsets.ModelViewSet):
            queryset = Coach.objects.all()
            serializer_class = CoachSerializer
    """

    academy_field = 'academy'

    def get_queryset(self):
        qs = super().get_queryset()
        academy = getattr(self.request, 'academy', None)
        if academy is None:
            return qs.none()
        return qs.filter(**{self.academy_field: academy})

    def perform_create(self, serializer):
        academy = getattr(self.request, 'academy', None)
        if academy is None:
            raise PermissionDenied('Academy not found')
        # Дочерние модели (academy_field='program__academy') связаны через родителя
        model = getattr(getattr(serializer, 'Meta', None), 'model', None)
        if model is not None and self.academy_field == 'academy':
            serializer.save(academy=academy)
        else:
            serializer.save()


class AcademyModelViewSet(BulkDeleteMixin, AcademyViewSetMixin, viewsets.ModelViewSet):
    """CRUD ресурса академии для портала (academic или admin с имперсонацией)."""

    permission_classes = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]
