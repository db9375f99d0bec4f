from django.contrib import admin

from .models import City, CityTranslation, Country, CountryTranslation, State, StateTranslation


class CountryTranslationInline(admin.TabularInline):
    model = CountryTranslation
    extra = 0


class StateTranslationInline(admin.TabularInline):
    model = StateTranslation
    extra = 0


class CityTranslationInline(admin.TabularInline):
    model = CityTranslation
    extra = 0


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'created_at')
    search_fields = ('translations__name',)
    inlines = [CountryTranslationInline]


@admin.register(State)
class StateAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'country', 'created_at')
    list_filter = ('country',)
    search_fields = ('translations__name',)
    inlines = [StateTranslationInline]


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'state', 'created_at')
    search_fields = ('translations__name',)
    raw_id_fields = ('state',)
    inlines = [CityTranslationInline]
