from rest_framework import serializers

from academies.models import Academy
from core.translations import translated_value

from .models import PromoCode
from .services import GENERAL_ACADEMY_NAME, SELECTION_GENERAL, SELECTION_SPECIFIC


class PromoCodeSerializer(serializers.ModelSerializer):
    """Промокоды академии (портал). Проверки — PromoCodeService."""
    discount_type = serializers.CharField(max_length=20)

    class Meta:
        model = PromoCode
        fields = [
            'id', 'code', 'discount_type', 'discount_value', 'start_date', 'end_date',
            'can_be_used', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']
        # Уникальность (code, academy) проверяет сервис с понятным сообщением
        validators = []


class AdminPromoCodeSerializer(PromoCodeSerializer):
    academy_id = serializers.PrimaryKeyRelatedField(
        source='academy',
        queryset=Academy.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Academy not found'},
    )
    academy_name = serializers.SerializerMethodField()
    selection_mode = serializers.ChoiceField(
        choices=[SELECTION_GENERAL, SELECTION_SPECIFIC],
        required=False,
        write_only=True,
        default=SELECTION_GENERAL,
    )
    academy_ids = serializers.ListField(
        child=serializers.IntegerField(),
        required=False,
        write_only=True,
    )

    class Meta(PromoCodeSerializer.Meta):
        fields = PromoCodeSerializer.Meta.fields + [
            'academy_id', 'academy_name', 'selection_mode', 'academy_ids',
        ]

    def get_academy_name(self, obj):
        if obj.is_general:
            return GENERAL_ACADEMY_NAME
        return translated_value(obj.academy, 'name')

    def validate_academy_ids(self, value):
        found = set(Academy.objects.filter(pk__in=value).values_list('pk', flat=True))
        if len(found) != len(set(value)):
            raise serializers.ValidationError('Academy not found')
        return value
