"""Booking persistence model.

Rows are read and written through ``apps.bookings.repositories`` which
maps them to immutable domain snapshots. Status changes go through the
lifecycle in ``apps.bookings.domain.lifecycle``; nothing here mutates a
booking on its own.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.entities import (
    NOTES_MAX_LENGTH,
    OCCUPYING_STATUSES,
    REJECTION_REASON_MAX_LENGTH,
    BookingStatus,
)


class Booking(models.Model):
    """A tenant's booking of a house."""

    class Status(models.TextChoices):
        PENDING = BookingStatus.PENDING.value, _("Pending")
        APPROVED = BookingStatus.APPROVED.value, _("Approved")
        REJECTED = BookingStatus.REJECTED.value, _("Rejected")
        ACTIVE = BookingStatus.ACTIVE.value, _("Active")
        COMPLETED = BookingStatus.COMPLETED.value, _("Completed")
        CANCELLED = BookingStatus.CANCELLED.value, _("Cancelled")

    OCCUPYING = tuple(status.value for status in OCCUPYING_STATUSES)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    house = models.ForeignKey(
        "properties.House",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    rejection_reason = models.CharField(
        max_length=REJECTION_REASON_MAX_LENGTH,
        null=True,
        blank=True,
    )
    notes = models.TextField(max_length=NOTES_MAX_LENGTH, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gt=models.F("start_date")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(total_amount__gt=Decimal("0")),
                name="booking_amount_positive",
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(status="rejected", rejection_reason__isnull=False)
                    & ~models.Q(rejection_reason="")
                )
                | (
                    ~models.Q(status="rejected")
                    & (models.Q(rejection_reason__isnull=True) | models.Q(rejection_reason=""))
                ),
                name="booking_rejection_reason_iff_rejected",
            ),
        ]
        indexes = [
            models.Index(fields=["house", "start_date", "end_date"], name="booking_house_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} for house {self.house_id} ({self.status})"
