"""Admin registrations for the properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import House


@admin.register(House)
class HouseAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "city",
        "property_type",
        "availability_status",
        "price_per_month",
        "owner",
    )
    list_filter = ("availability_status", "city", "property_type")
    search_fields = ("title", "city", "address", "owner__email")
    readonly_fields = ("created_at", "updated_at")
