from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'academy', 'user', 'read_at', 'created_at')
    list_filter = ('read_at',)
    search_fields = ('title', 'description')
    raw_id_fields = ('user', 'profile', 'academy')
