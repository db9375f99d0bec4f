"""
Справочники.

Back-office (роль admin):
- /api/admin/sports/, /api/admin/spoken-languages/, /api/admin/genders/,
  /api/admin/facilities/, /api/admin/pages/ — CRUD + bulk-delete

Портал (любой авторизованный):
- /api/catalog/sports/ и т.д. — полные списки без пагинации для форм
"""
from rest_framework import viewsets

from core.viewsets import AdminModelViewSet

from .models import Facility, Gender, Page, SpokenLanguage, Sport
from .serializers import (
    FacilitySerializer,
    GenderSerializer,
    PageDetailSerializer,
    PageSerializer,
    SpokenLanguageDetailSerializer,
    SpokenLanguageSerializer,
    SportDetailSerializer,
    SportSerializer,
)


class AdminSportViewSet(AdminModelViewSet):
    queryset = Sport.objects.prefetch_related('translations')
    serializer_class = SportSerializer
    detail_serializer_class = SportDetailSerializer


class AdminSpokenLanguageViewSet(AdminModelViewSet):
    queryset = SpokenLanguage.objects.prefetch_related('translations')
    serializer_class = SpokenLanguageSerializer
    detail_serializer_class = SpokenLanguageDetailSerializer


class AdminGenderViewSet(AdminModelViewSet):
    queryset = Gender.objects.prefetch_related('translations')
    serializer_class = GenderSerializer


class AdminFacilityViewSet(AdminModelViewSet):
    queryset = Facility.objects.prefetch_related('translations')
    serializer_class = FacilitySerializer


class AdminPageViewSet(AdminModelViewSet):
    queryset = Page.objects.prefetch_related('translations')
    serializer_class = PageSerializer
    detail_serializer_class = PageDetailSerializer
    search_lookup = 'translations__title__icontains'


class CatalogListViewSet(viewsets.ReadOnlyModelViewSet):
    pagination_class = None


class SportListViewSet(CatalogListViewSet):
    queryset = Sport.objects.prefetch_related('translations')
    serializer_class = SportSerializer


class SpokenLanguageListViewSet(CatalogListViewSet):
    queryset = SpokenLanguage.objects.prefetch_related('translations')
    serializer_class = SpokenLanguageSerializer


class GenderListViewSet(CatalogListViewSet):
    queryset = Gender.objects.prefetch_related('translations')
    serializer_class = GenderSerializer


class FacilityListViewSet(CatalogListViewSet):
    queryset = Facility.objects.prefetch_related('translations')
    serializer_class = FacilitySerializer
