"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.models import House

from .domain.entities import NOTES_MAX_LENGTH, REJECTION_REASON_MAX_LENGTH
from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request submitted by a tenant."""

    house = serializers.PrimaryKeyRelatedField(queryset=House.objects.all())
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    notes = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        max_length=NOTES_MAX_LENGTH,
    )

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError("End date must be after start date.")
        return attrs


class BookingRejectSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(max_length=REJECTION_REASON_MAX_LENGTH)


class AvailabilityQuerySerializer(serializers.Serializer):
    house = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError("End date must be after start date.")
        return attrs


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    house_id = serializers.ReadOnlyField(source="house.id")
    house_title = serializers.ReadOnlyField(source="house.title")
    tenant_id = serializers.ReadOnlyField(source="tenant.id")

    class Meta:
        model = Booking
        fields = [
            "id",
            "house_id",
            "house_title",
            "tenant_id",
            "start_date",
            "end_date",
            "total_amount",
            "status",
            "rejection_reason",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
