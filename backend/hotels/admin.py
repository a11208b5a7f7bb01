from django.contrib import admin

from bookings.models import Booking
from .models import Facility, Hotel


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    search_fields = ("name",)


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0
    fields = ("email", "check_in", "check_out", "adult_count", "child_count", "total_cost")
    readonly_fields = fields
    can_delete = False


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "country", "type", "star_rating", "price_per_night", "last_updated")
    list_filter = ("type", "star_rating", "country")
    search_fields = ("name", "city", "country", "owner__email")
    filter_horizontal = ("facilities",)
    inlines = [BookingInline]
