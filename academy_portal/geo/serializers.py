from rest_framework import serializers

from core.fields import TranslatedField, TranslationsField
from core.serializers import TranslatableModelSerializer, TranslationSerializer

from .models import City, CityTranslation, Country, CountryTranslation, State, StateTranslation


class CountrySerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)
    states_count = serializers.IntegerField(read_only=True, default=0)

    duplicate_name_message = 'A country with this name already exists'

    class Meta:
        model = Country
        fields = ['id', 'name', 'locale', 'states_count', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class CountryDetailSerializer(CountrySerializer):
    translations = TranslationsField()

    class Meta(CountrySerializer.Meta):
        fields = CountrySerializer.Meta.fields + ['translations']


class StateSerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)
    country_id = serializers.PrimaryKeyRelatedField(
        source='country',
        queryset=Country.objects.all(),
        error_messages={'does_not_exist': 'Country not found'},
    )
    country_name = TranslatedField(source_attr='country')
    cities_count = serializers.IntegerField(read_only=True, default=0)

    duplicate_name_message = 'A state with this name already exists in this country'
    duplicate_scope = 'country'

    class Meta:
        model = State
        fields = ['id', 'name', 'locale', 'country_id', 'country_name', 'cities_count', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class StateDetailSerializer(StateSerializer):
    translations = TranslationsField()

    class Meta(StateSerializer.Meta):
        fields = StateSerializer.Meta.fields + ['translations']


class CitySerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)
    state_id = serializers.PrimaryKeyRelatedField(
        source='state',
        queryset=State.objects.all(),
        error_messages={'does_not_exist': 'State not found'},
    )
    state_name = TranslatedField(source_attr='state')
    country_name = TranslatedField(source_attr='state.country')

    duplicate_name_message = 'A city with this name already exists in this state'
    duplicate_scope = 'state'

    class Meta:
        model = City
        fields = ['id', 'name', 'locale', 'state_id', 'state_name', 'country_name', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class CityDetailSerializer(CitySerializer):
    translations = TranslationsField()

    class Meta(CitySerializer.Meta):
        fields = CitySerializer.Meta.fields + ['translations']


class CountryTranslationSerializer(TranslationSerializer):
    parent_field = 'country'
    duplicate_name_message = CountrySerializer.duplicate_name_message

    class Meta:
        model = CountryTranslation
        fields = ['id', 'locale', 'name', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class StateTranslationSerializer(TranslationSerializer):
    parent_field = 'state'
    duplicate_name_message = StateSerializer.duplicate_name_message
    duplicate_scope = 'country'

    class Meta:
        model = StateTranslation
        fields = ['id', 'locale', 'name', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class CityTranslationSerializer(TranslationSerializer):
    parent_field = 'city'
    duplicate_name_message = CitySerializer.duplicate_name_message
    duplicate_scope = 'state'

    class Meta:
        model = CityTranslation
        fields = ['id', 'locale', 'name', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
