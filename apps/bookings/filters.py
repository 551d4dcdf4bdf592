"""FilterSet definitions for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Filters for the booking list: status, house and date window."""

    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    house = django_filters.NumberFilter(field_name="house_id", lookup_expr="exact")
    starts_after = django_filters.DateFilter(field_name="start_date", lookup_expr="gte")
    ends_before = django_filters.DateFilter(field_name="end_date", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "house"]
