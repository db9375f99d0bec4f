import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from .exceptions import FieldValidationError

logger = logging.getLogger(__name__)


def parse_ids(raw_ids, field='ids'):
    if not raw_ids or not isinstance(raw_ids, (list, tuple)):
        raise FieldValidationError('No items selected', field=field)
    try:
        return [int(value) for value in raw_ids]
    except (TypeError, ValueError):
        raise FieldValidationError('Invalid ids', field=field)


class BulkDeleteMixin:
    """
    Массовое удаление для ViewSet.

    POST <list>/bulk-delete/  {"ids": [1, 2, 3]}
    Удаляются только объекты, видимые через get_queryset() (в т.ч. scope академии).
    """

    @action(detail=False, methods=['post'], url_path='bulk-delete')
    def bulk_delete(self, request):
        ids = parse_ids(request.data.get('ids'))
        queryset = self.get_queryset().filter(pk__in=ids)
        deleted = self.perform_bulk_delete(queryset)
        logger.info(
            'Bulk delete %s: requested=%s deleted=%s user=%s',
            queryset.model.__name__, len(ids), deleted, request.user.pk,
        )
        return Response({'deleted': deleted})

    def perform_bulk_delete(self, queryset):
        pks = list(queryset.values_list('pk', flat=True))
        queryset.model.objects.filter(pk__in=pks).delete()
        return len(pks)


class TranslatedSearchMixin:
    """?search= по переводам (любая локаль)."""

    search_param = 'search'
    search_lookup = 'translations__name__icontains'

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        term = self.request.query_params.get(self.search_param, '').strip()
        if term:
            queryset = queryset.filter(**{self.search_lookup: term}).distinct()
        return queryset


class TranslationsMixin:
    """
    Переводы сущности как вложенный ресурс.

    GET/POST      <detail>/translations/
    PATCH/DELETE  <detail>/translations/<translation_id>/
    POST          <detail>/translations/bulk-delete/  {"ids": [...]}

    У сущности всегда остаётся хотя бы один перевод.
    """

    translation_serializer_class = None

    def get_translation_serializer(self, parent, *args, **kwargs):
        context = self.get_serializer_context()
        context['parent'] = parent
        return self.translation_serializer_class(*args, context=context, **kwargs)

    def get_translation_queryset(self, parent):
        serializer_class = self.translation_serializer_class
        return serializer_class.Meta.model.objects.filter(**{serializer_class.parent_field: parent})

    @action(detail=True, methods=['get', 'post'], url_path='translations')
    def translations(self, request, pk=None):
        parent = self.get_object()
        if request.method == 'GET':
            serializer = self.get_translation_serializer(parent, self.get_translation_queryset(parent), many=True)
            return Response(serializer.data)

        serializer = self.get_translation_serializer(parent, data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(
            'Translation added: %s=%s locale=%s user=%s',
            type(parent).__name__, parent.pk, serializer.instance.locale, request.user.pk,
        )
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=['patch', 'delete'],
        url_path=r'translations/(?P<translation_id>[0-9]+)',
        url_name='translation-detail',
    )
    def translation_detail(self, request, pk=None, translation_id=None):
        parent = self.get_object()
        translation = get_object_or_404(self.get_translation_queryset(parent), pk=translation_id)
        if request.method == 'DELETE':
            self.perform_translations_delete(parent, [translation.pk])
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = self.get_translation_serializer(parent, translation, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @action(
        detail=True,
        methods=['post'],
        url_path='translations/bulk-delete',
        url_name='translations-bulk-delete',
    )
    def translations_bulk_delete(self, request, pk=None):
        parent = self.get_object()
        ids = parse_ids(request.data.get('ids'))
        deleted = self.perform_translations_delete(parent, ids)
        return Response({'deleted': deleted})

    def perform_translations_delete(self, parent, ids):
        translations = self.get_translation_queryset(parent)
        if not translations.exclude(pk__in=ids).exists():
            raise FieldValidationError('At least one translation must remain', field='ids')
        deleted, _ = translations.filter(pk__in=ids).delete()
        logger.info('Translations deleted: %s=%s count=%s', type(parent).__name__, parent.pk, deleted)
        return deleted
