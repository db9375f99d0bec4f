from rest_framework import serializers

from catalog.models import Sport
from core.fields import ImageUrlField, TranslatedField
from core.storage import resolve_image_url
from core.translations import translated_value

from .models import Academy


class AcademyListSerializer(serializers.ModelSerializer):
    """Строка списка академий в back-office."""
    name = TranslatedField()
    owner_name = serializers.CharField(source='user.name', read_only=True, default='')
    owner_email = serializers.CharField(source='user.email', read_only=True, default='')
    image_url = ImageUrlField(source='image')

    class Meta:
        model = Academy
        fields = [
            'id', 'slug', 'name', 'owner_name', 'owner_email', 'status',
            'onboarded', 'hidden', 'image_url', 'created_at',
        ]
        read_only_fields = fields


class AcademyDetailsSerializer(serializers.ModelSerializer):
    """
    Профиль академии для портала.

    На запись: name, description, sports (ids), image, gallery (пути), policy,
    entry_fees, extra. Сохранение — AcademyService.update_details().
    """
    name = serializers.CharField(max_length=255, required=False, write_only=True)
    description = serializers.CharField(required=False, allow_blank=True, write_only=True)
    locale = serializers.CharField(max_length=10, required=False, write_only=True)
    sports = serializers.PrimaryKeyRelatedField(
        queryset=Sport.objects.all(),
        many=True,
        required=False,
        error_messages={'does_not_exist': 'Sport not found'},
    )
    gallery = serializers.ListField(
        child=serializers.CharField(max_length=500),
        required=False,
        write_only=True,
    )
    image_url = ImageUrlField(source='image')

    class Meta:
        model = Academy
        fields = [
            'id', 'slug', 'name', 'description', 'locale', 'sports', 'image', 'image_url',
            'gallery', 'policy', 'entry_fees', 'extra', 'status', 'onboarded', 'hidden',
        ]
        read_only_fields = ['id', 'slug', 'status', 'onboarded', 'hidden']
        extra_kwargs = {
            'image': {'required': False},
            'policy': {'required': False},
            'extra': {'required': False},
            'entry_fees': {'required': False, 'min_value': 0},
        }

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['name'] = translated_value(instance, 'name')
        data['description'] = translated_value(instance, 'description')
        data['gallery'] = [
            {'path': item.url, 'url': resolve_image_url(item.url)}
            for item in instance.gallery.all()
        ]
        return data
