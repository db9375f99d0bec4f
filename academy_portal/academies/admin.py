from django.contrib import admin

from .models import Academy, AcademyGalleryImage, AcademyTranslation


class AcademyTranslationInline(admin.TabularInline):
    model = AcademyTranslation
    extra = 0


class AcademyGalleryImageInline(admin.TabularInline):
    model = AcademyGalleryImage
    extra = 0


@admin.register(Academy)
class AcademyAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'slug', 'user', 'status', 'onboarded', 'hidden', 'created_at')
    list_filter = ('status', 'onboarded', 'hidden')
    search_fields = ('slug', 'translations__name', 'user__email')
    raw_id_fields = ('user',)
    filter_horizontal = ('sports',)
    inlines = [AcademyTranslationInline, AcademyGalleryImageInline]
    actions = ['accept_academies', 'reject_academies']

    @admin.action(description='Одобрить выбранные академии')
    def accept_academies(self, request, queryset):
        updated = queryset.update(status=Academy.STATUS_ACCEPTED)
        self.message_user(request, f'Одобрено: {updated}')

    @admin.action(description='Отклонить выбранные академии')
    def reject_academies(self, request, queryset):
        updated = queryset.update(status=Academy.STATUS_REJECTED)
        self.message_user(request, f'Отклонено: {updated}')
