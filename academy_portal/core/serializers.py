"""
Базовые сериализаторы для сущностей с таблицей переводов.
"""
from django.db import transaction
from rest_framework import serializers

from .exceptions import FieldValidationError
from .translations import default_locale, save_translation, translated_value


class TranslatableModelSerializer(serializers.ModelSerializer):
    """
    ModelSerializer, у которого часть полей живёт в <Model>Translation.

    Подкласс объявляет write_only поля из translation_fields;
    при чтении они подставляются по правилу выбора перевода.
    """

    translation_fields = ('name',)
    duplicate_name_message = None
    duplicate_scope = None

    locale = serializers.CharField(write_only=True, required=False, max_length=10)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        name = attrs.get('name')
        if self.duplicate_name_message and name:
            queryset = self.Meta.model.objects.filter(
                translations__name__iexact=name,
                translations__locale=attrs.get('locale') or default_locale(),
            )
            if self.duplicate_scope:
                queryset = queryset.filter(**{self.duplicate_scope: self.get_duplicate_scope_value(attrs)})
            if self.instance is not None:
                queryset = queryset.exclude(pk=self.instance.pk)
            if queryset.exists():
                raise FieldValidationError(self.duplicate_name_message, field='name')
        return attrs

    def get_duplicate_scope_value(self, attrs):
        scope_value = attrs.get(self.duplicate_scope)
        if scope_value is None and self.instance is not None:
            scope_value = getattr(self.instance, self.duplicate_scope)
        if scope_value is None and self.duplicate_scope == 'academy':
            request = self.context.get('request')
            scope_value = getattr(request, 'academy', None)
        return scope_value

    def _pop_translation(self, validated_data):
        locale = validated_data.pop('locale', None)
        values = {
            field: validated_data.pop(field)
            for field in self.translation_fields
            if field in validated_data
        }
        return locale, values

    @transaction.atomic
    def create(self, validated_data):
        locale, values = self._pop_translation(validated_data)
        instance = super().create(validated_data)
        save_translation(instance, locale, **values)
        return instance

    @transaction.atomic
    def update(self, instance, validated_data):
        locale, values = self._pop_translation(validated_data)
        instance = super().update(instance, validated_data)
        if values:
            save_translation(instance, locale, **values)
        return instance

    def to_representation(self, instance):
        data = super().to_representation(instance)
        for field in self.translation_fields:
            data[field] = translated_value(instance, field)
        return data


class TranslationSerializer(serializers.ModelSerializer):
    """
    Одна строка <Model>Translation как отдельный ресурс.

    Родительская сущность передаётся в context['parent'].
    Подкласс задаёт Meta.model, Meta.fields и parent_field.
    """

    parent_field = None
    duplicate_name_message = None
    duplicate_scope = None

    locale = serializers.CharField(required=False, max_length=10)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        parent = self.context['parent']
        locale = attrs.get('locale') or getattr(self.instance, 'locale', None) or default_locale()

        siblings = self.Meta.model.objects.filter(**{self.parent_field: parent}, locale=locale)
        if self.instance is not None:
            siblings = siblings.exclude(pk=self.instance.pk)
        if siblings.exists():
            raise FieldValidationError('A translation for this locale already exists', field='locale')

        name = attrs.get('name')
        if self.duplicate_name_message and name:
            others = type(parent).objects.filter(
                translations__name__iexact=name,
                translations__locale=locale,
            ).exclude(pk=parent.pk)
            if self.duplicate_scope:
                others = others.filter(**{self.duplicate_scope: getattr(parent, self.duplicate_scope)})
            if others.exists():
                raise FieldValidationError(self.duplicate_name_message, field='name')
        return attrs

    def create(self, validated_data):
        validated_data.setdefault('locale', default_locale())
        validated_data[self.parent_field] = self.context['parent']
        return super().create(validated_data)
