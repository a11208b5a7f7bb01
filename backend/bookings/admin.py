from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("hotel", "email", "check_in", "check_out", "total_cost", "created_at")
    list_filter = ("check_in",)
    search_fields = ("hotel__name", "email", "last_name", "payment_intent_id")
    readonly_fields = ("payment_intent_id", "total_cost", "created_at")
