from django.contrib import admin

from .models import Branch, BranchTranslation, Coach, Discount, Package, Program, Review, Schedule


class BranchTranslationInline(admin.TabularInline):
    model = BranchTranslation
    extra = 0


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'academy', 'is_default', 'hidden', 'rate', 'reviews')
    list_filter = ('is_default', 'hidden')
    search_fields = ('slug', 'translations__name', 'name_in_google_map')
    raw_id_fields = ('academy',)
    filter_horizontal = ('sports', 'facilities')
    inlines = [BranchTranslationInline]


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('author_name', 'branch', 'rating', 'relative_time_description')
    raw_id_fields = ('branch',)


class PackageInline(admin.StackedInline):
    model = Package
    extra = 0


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ('name', 'academy', 'type', 'branch', 'sport', 'number_of_seats')
    list_filter = ('type',)
    search_fields = ('name',)
    raw_id_fields = ('academy', 'branch', 'sport')
    inlines = [PackageInline]


class ScheduleInline(admin.TabularInline):
    model = Schedule
    extra = 0


@admin.register(Package)
class PackageAdmin(admin.ModelAdmin):
    list_display = ('name', 'program', 'price', 'start_date', 'end_date', 'capacity')
    search_fields = ('name', 'program__name')
    raw_id_fields = ('program',)
    inlines = [ScheduleInline]


@admin.register(Coach)
class CoachAdmin(admin.ModelAdmin):
    list_display = ('name', 'title', 'academy', 'gender')
    search_fields = ('name', 'title')
    raw_id_fields = ('academy',)
    filter_horizontal = ('sports', 'spoken_languages', 'programs', 'packages')


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = ('program', 'type', 'value', 'start_date', 'end_date')
    list_filter = ('type',)
    raw_id_fields = ('program',)
    filter_horizontal = ('packages',)
