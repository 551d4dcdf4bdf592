from datetime import date, timedelta

import pytest
from structlog.testing import capture_logs

from apps.bookings.application.command_handlers import ChangeBookingStatusCommand
from apps.bookings.domain.entities import BookingStatus

pytestmark = pytest.mark.django_db

TODAY = date(2030, 1, 10)


def test_status_change_is_audited_after_commit(
    status_handler, owner, make_booking, django_capture_on_commit_callbacks
):
    row = make_booking(TODAY + timedelta(days=5), TODAY + timedelta(days=20))
    command = ChangeBookingStatusCommand(
        booking_id=row.id,
        target_status=BookingStatus.APPROVED,
        acting_user_id=owner.id,
    )

    with capture_logs() as logs:
        with django_capture_on_commit_callbacks() as callbacks:
            status_handler.handle(command)

        assert not [entry for entry in logs if entry["event"] == "booking_status_changed"]
        for callback in callbacks:
            callback()

    audit = [entry for entry in logs if entry["event"] == "booking_status_changed"]
    assert len(audit) == 1
    assert audit[0]["log_level"] == "info"
    assert audit[0]["booking_id"] == str(row.id)
    assert audit[0]["old_status"] == "pending"
    assert audit[0]["new_status"] == "approved"
    assert audit[0]["actor_role"] == "owner"
