from rest_framework import serializers

from core.fields import ImageUrlField, TranslationsField
from core.serializers import TranslatableModelSerializer
from core.utils import unique_slug

from .models import Facility, Gender, Page, SpokenLanguage, Sport


class SportSerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)
    slug = serializers.SlugField(max_length=255, required=False)
    image_url = ImageUrlField(source='image')

    duplicate_name_message = 'A sport with this name already exists'

    class Meta:
        model = Sport
        fields = ['id', 'name', 'locale', 'slug', 'image', 'image_url', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'image': {'required': False}}

    def validate_slug(self, value):
        queryset = Sport.objects.filter(slug=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError('A sport with this slug already exists')
        return value

    def create(self, validated_data):
        if not validated_data.get('slug'):
            validated_data['slug'] = unique_slug(Sport, validated_data.get('name', ''))
        return super().create(validated_data)


class SportDetailSerializer(SportSerializer):
    translations = TranslationsField()

    class Meta(SportSerializer.Meta):
        fields = SportSerializer.Meta.fields + ['translations']


class SpokenLanguageSerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)

    duplicate_name_message = 'A spoken language with this name already exists'

    class Meta:
        model = SpokenLanguage
        fields = ['id', 'name', 'locale', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class SpokenLanguageDetailSerializer(SpokenLanguageSerializer):
    translations = TranslationsField()

    class Meta(SpokenLanguageSerializer.Meta):
        fields = SpokenLanguageSerializer.Meta.fields + ['translations']


class GenderSerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)

    duplicate_name_message = 'A gender with this name already exists'

    class Meta:
        model = Gender
        fields = ['id', 'name', 'locale', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class FacilitySerializer(TranslatableModelSerializer):
    name = serializers.CharField(max_length=255, write_only=True)

    duplicate_name_message = 'A facility with this name already exists'

    class Meta:
        model = Facility
        fields = ['id', 'name', 'locale', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class PageSerializer(TranslatableModelSerializer):
    translation_fields = ('title', 'content')

    title = serializers.CharField(max_length=255, write_only=True)
    content = serializers.CharField(write_only=True, required=False, allow_blank=True)
    image_url = ImageUrlField(source='image')

    class Meta:
        model = Page
        fields = ['id', 'title', 'content', 'locale', 'order_by', 'image', 'image_url', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {'image': {'required': False}}


class PageDetailSerializer(PageSerializer):
    translations = TranslationsField(fields=('title', 'content'))

    class Meta(PageSerializer.Meta):
        fields = PageSerializer.Meta.fields + ['translations']
