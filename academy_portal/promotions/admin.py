from django.contrib import admin

from .models import PromoCode


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = ('code', 'academy', 'discount_type', 'discount_value', 'start_date', 'end_date', 'can_be_used')
    list_filter = ('discount_type',)
    search_fields = ('code',)
    raw_id_fields = ('academy',)
