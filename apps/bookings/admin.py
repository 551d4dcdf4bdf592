"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Read-mostly view; status changes go through the API so the lifecycle applies."""

    list_display = (
        "id",
        "house",
        "tenant",
        "status",
        "start_date",
        "end_date",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("id", "house__title", "tenant__email")
    readonly_fields = (
        "id",
        "house",
        "tenant",
        "start_date",
        "end_date",
        "total_amount",
        "status",
        "rejection_reason",
        "created_at",
        "updated_at",
    )
