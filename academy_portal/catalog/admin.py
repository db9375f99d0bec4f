from django.contrib import admin

from .models import (
    Facility, FacilityTranslation,
    Gender, GenderTranslation,
    Page, PageTranslation,
    SpokenLanguage, SpokenLanguageTranslation,
    Sport, SportTranslation,
)


class SportTranslationInline(admin.TabularInline):
    model = SportTranslation
    extra = 0


class SpokenLanguageTranslationInline(admin.TabularInline):
    model = SpokenLanguageTranslation
    extra = 0


class GenderTranslationInline(admin.TabularInline):
    model = GenderTranslation
    extra = 0


class FacilityTranslationInline(admin.TabularInline):
    model = FacilityTranslation
    extra = 0


class PageTranslationInline(admin.StackedInline):
    model = PageTranslation
    extra = 0


@admin.register(Sport)
class SportAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'slug', 'created_at')
    search_fields = ('slug', 'translations__name')
    readonly_fields = ('created_at', 'updated_at')
    inlines = [SportTranslationInline]


@admin.register(SpokenLanguage)
class SpokenLanguageAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'created_at')
    search_fields = ('translations__name',)
    inlines = [SpokenLanguageTranslationInline]


@admin.register(Gender)
class GenderAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'created_at')
    inlines = [GenderTranslationInline]


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'created_at')
    search_fields = ('translations__name',)
    inlines = [FacilityTranslationInline]


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'order_by', 'updated_at')
    ordering = ('order_by',)
    inlines = [PageTranslationInline]
