"""Переиспользуемые поля сериализаторов."""
from rest_framework import serializers

from .storage import resolve_image_url
from .translations import translated_value


class TranslatedField(serializers.Field):
    """
    Read-only: значение перевода (en, либо первая локаль по алфавиту).

    source_attr — путь до связанного объекта ('state.country'),
    по умолчанию переводится сам объект.
    """

    def __init__(self, field='name', source_attr=None, related_name='translations', **kwargs):
        kwargs['source'] = '*'
        kwargs['read_only'] = True
        self.translation_field = field
        self.source_attr = source_attr
        self.related_name = related_name
        super().__init__(**kwargs)

    def to_representation(self, instance):
        target = instance
        if self.source_attr:
            for attr in self.source_attr.split('.'):
                target = getattr(target, attr, None)
                if target is None:
                    return ''
        return translated_value(target, self.translation_field, related_name=self.related_name)


class TranslationsField(serializers.Field):
    """Read-only: все переводы сущности [{id, locale, <fields>...}]."""

    def __init__(self, fields=('name',), related_name='translations', **kwargs):
        kwargs['source'] = '*'
        kwargs['read_only'] = True
        self.translation_fields = fields
        self.related_name = related_name
        super().__init__(**kwargs)

    def to_representation(self, instance):
        return [
            {
                'id': item.pk,
                'locale': item.locale,
                **{field: getattr(item, field) for field in self.translation_fields},
            }
            for item in getattr(instance, self.related_name).all()
        ]


class ImageUrlField(serializers.ReadOnlyField):
    """Путь в хранилище → публичный URL (http-ссылки отдаются как есть)."""

    def to_representation(self, value):
        return resolve_image_url(value)
