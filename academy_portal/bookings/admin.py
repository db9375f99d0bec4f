from django.contrib import admin

from .models import AcademicAthlete, Block, Booking, BookingSession, EntryFeesHistory


@admin.register(AcademicAthlete)
class AcademicAthleteAdmin(admin.ModelAdmin):
    list_display = ('id', '__str__', 'academy', 'type', 'sport', 'created_at')
    list_filter = ('type',)
    search_fields = ('profile__name', 'user__email', 'user__phone_number', 'first_guardian_phone')
    raw_id_fields = ('academy', 'user', 'profile', 'sport')


class BookingSessionInline(admin.TabularInline):
    model = BookingSession
    extra = 0


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'profile', 'package', 'status', 'price', 'entry_fees_paid', 'created_at')
    list_filter = ('status', 'entry_fees_paid')
    search_fields = ('profile__name', 'package__name', 'package__program__name')
    raw_id_fields = ('profile', 'package', 'coach', 'assessment_deduction')
    inlines = [BookingSessionInline]


@admin.register(EntryFeesHistory)
class EntryFeesHistoryAdmin(admin.ModelAdmin):
    list_display = ('profile', 'sport', 'program', 'paid_at')
    raw_id_fields = ('profile', 'sport', 'program')


@admin.register(Block)
class BlockAdmin(admin.ModelAdmin):
    list_display = ('date', 'start_time', 'end_time', 'academy', 'branch_scope', 'sport_scope')
    list_filter = ('date',)
    raw_id_fields = ('academy',)
    filter_horizontal = ('branches', 'sports', 'packages', 'programs')
