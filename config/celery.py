import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("house_rental")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Approved bookings whose start date arrived become active - hourly
    "activate-started-bookings": {
        "task": "bookings.activate_started_bookings",
        "schedule": crontab(minute=0),
    },
    # Active bookings whose end date arrived are completed - hourly at :15
    "complete-finished-bookings": {
        "task": "bookings.complete_finished_bookings",
        "schedule": crontab(minute=15),
    },
}
