"""
География (back-office).

- /api/admin/countries/ — страны (+ states_count)
- /api/admin/states/    — регионы, ?country_id= фильтр (+ cities_count)
- /api/admin/cities/    — города, ?state_id= фильтр
- <entity>/<id>/translations/ — переводы сущности
"""
from django.db.models import Count

from core.mixins import TranslationsMixin
from core.viewsets import AdminModelViewSet

from .models import City, Country, State
from .serializers import (
    CityDetailSerializer,
    CitySerializer,
    CityTranslationSerializer,
    CountryDetailSerializer,
    CountrySerializer,
    CountryTranslationSerializer,
    StateDetailSerializer,
    StateSerializer,
    StateTranslationSerializer,
)


class CountryViewSet(TranslationsMixin, AdminModelViewSet):
    serializer_class = CountrySerializer
    detail_serializer_class = CountryDetailSerializer
    translation_serializer_class = CountryTranslationSerializer

    def get_queryset(self):
        # annotate() + GROUP BY сбрасывает Meta.ordering
        return Country.objects.prefetch_related('translations').annotate(
            states_count=Count('states', distinct=True),
        ).order_by('id')


class StateViewSet(TranslationsMixin, AdminModelViewSet):
    serializer_class = StateSerializer
    detail_serializer_class = StateDetailSerializer
    translation_serializer_class = StateTranslationSerializer

    def get_queryset(self):
        qs = State.objects.select_related('country').prefetch_related(
            'translations', 'country__translations',
        ).annotate(cities_count=Count('cities', distinct=True)).order_by('id')
        country_id = self.request.query_params.get('country_id')
        if country_id:
            qs = qs.filter(country_id=country_id)
        return qs


class CityViewSet(TranslationsMixin, AdminModelViewSet):
    serializer_class = CitySerializer
    detail_serializer_class = CityDetailSerializer
    translation_serializer_class = CityTranslationSerializer

    def get_queryset(self):
        qs = City.objects.select_related('state__country').prefetch_related(
            'translations', 'state__translations', 'state__country__translations',
        )
        state_id = self.request.query_params.get('state_id')
        if state_id:
            qs = qs.filter(state_id=state_id)
        return qs
