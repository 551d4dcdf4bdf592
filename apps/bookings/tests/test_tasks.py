from datetime import timedelta

import pytest
from django.utils import timezone

from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingRepository
from apps.bookings.tasks import activate_started_bookings, complete_finished_bookings

pytestmark = pytest.mark.django_db


def test_started_bookings_become_active(make_booking):
    today = timezone.localdate()
    started = make_booking(today, today + timedelta(days=30), Booking.Status.APPROVED)
    late = make_booking(today - timedelta(days=60), today - timedelta(days=31), Booking.Status.APPROVED)
    upcoming = make_booking(today + timedelta(days=1), today + timedelta(days=30), Booking.Status.PENDING)

    result = activate_started_bookings()

    assert result == {"activated": 2}
    started.refresh_from_db()
    late.refresh_from_db()
    upcoming.refresh_from_db()
    assert started.status == Booking.Status.ACTIVE
    assert late.status == Booking.Status.ACTIVE
    assert upcoming.status == Booking.Status.PENDING


def test_future_approved_bookings_wait(make_booking):
    today = timezone.localdate()
    make_booking(today + timedelta(days=2), today + timedelta(days=30), Booking.Status.APPROVED)

    assert activate_started_bookings() == {"activated": 0}


def test_finished_bookings_are_completed(make_booking):
    today = timezone.localdate()
    finished = make_booking(today - timedelta(days=30), today, Booking.Status.ACTIVE)
    ongoing = make_booking(today + timedelta(days=1), today + timedelta(days=40), Booking.Status.ACTIVE)

    result = complete_finished_bookings()

    assert result == {"completed": 1}
    finished.refresh_from_db()
    ongoing.refresh_from_db()
    assert finished.status == Booking.Status.COMPLETED
    assert ongoing.status == Booking.Status.ACTIVE


def test_failed_booking_does_not_stop_the_run(make_booking, monkeypatch):
    today = timezone.localdate()
    cancelled_meanwhile = make_booking(today - timedelta(days=1), today + timedelta(days=20), Booking.Status.APPROVED)
    started = make_booking(today, today + timedelta(days=30), Booking.Status.APPROVED)

    original_list_due = DjangoBookingRepository.list_due

    def list_then_cancel(self, *args, **kwargs):
        due = original_list_due(self, *args, **kwargs)
        Booking.objects.filter(pk=cancelled_meanwhile.pk).update(status=Booking.Status.CANCELLED)
        return due

    monkeypatch.setattr(DjangoBookingRepository, "list_due", list_then_cancel)

    result = activate_started_bookings()

    assert result == {"activated": 1}
    cancelled_meanwhile.refresh_from_db()
    started.refresh_from_db()
    assert cancelled_meanwhile.status == Booking.Status.CANCELLED
    assert started.status == Booking.Status.ACTIVE
