from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    is_read = serializers.BooleanField(read_only=True)
    profile_name = serializers.CharField(source='profile.name', read_only=True, default=None)

    class Meta:
        model = Notification
        fields = ['id', 'title', 'description', 'profile_id', 'profile_name', 'is_read', 'read_at', 'created_at']
        read_only_fields = fields
