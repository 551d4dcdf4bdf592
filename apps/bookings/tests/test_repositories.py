from dataclasses import replace
from datetime import date, timedelta

import pytest
from django.db import IntegrityError
from django.db.models.query import QuerySet

from apps.bookings.domain.entities import BookingStatus
from apps.bookings.domain.exceptions import ConflictError
from apps.bookings.models import Booking
from apps.bookings.repositories import OVERLAP_CONSTRAINT_NAME

pytestmark = pytest.mark.django_db

START = date(2030, 2, 1)


def _fail_updates_with(monkeypatch, message):
    def update(self, **kwargs):
        raise IntegrityError(message)

    monkeypatch.setattr(QuerySet, "update", update)


def test_exclusion_violation_becomes_conflict(booking_repo, make_booking, monkeypatch):
    occupying = make_booking(START, START + timedelta(days=10), Booking.Status.APPROVED)
    make_booking(START + timedelta(days=20), START + timedelta(days=25), Booking.Status.APPROVED)
    make_booking(START + timedelta(days=2), START + timedelta(days=4), Booking.Status.CANCELLED)
    request = make_booking(START + timedelta(days=5), START + timedelta(days=12))

    pending = booking_repo.get_by_id(request.id)
    approved = replace(pending, status=BookingStatus.APPROVED)
    _fail_updates_with(
        monkeypatch,
        f'conflicting key value violates exclusion constraint "{OVERLAP_CONSTRAINT_NAME}"',
    )

    with pytest.raises(ConflictError) as exc_info:
        booking_repo.save(approved, expected_status=BookingStatus.PENDING)

    assert exc_info.value.conflicting_booking_ids == (occupying.id,)
    assert isinstance(exc_info.value.__cause__, IntegrityError)


def test_other_integrity_errors_propagate(booking_repo, make_booking, monkeypatch):
    make_booking(START, START + timedelta(days=10), Booking.Status.APPROVED)
    request = make_booking(START + timedelta(days=5), START + timedelta(days=12))

    approved = replace(booking_repo.get_by_id(request.id), status=BookingStatus.APPROVED)
    _fail_updates_with(monkeypatch, "NOT NULL constraint failed: bookings_booking.house_id")

    with pytest.raises(IntegrityError, match="NOT NULL constraint failed"):
        booking_repo.save(approved, expected_status=BookingStatus.PENDING)
