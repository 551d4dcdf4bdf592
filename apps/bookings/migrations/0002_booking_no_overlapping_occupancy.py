"""Forbid overlapping approved/active bookings of the same house.

PostgreSQL only: other backends rely on the per-house row lock taken by
the command handlers.
"""

from django.db import migrations

CREATE_SQL = """
CREATE EXTENSION IF NOT EXISTS btree_gist;
ALTER TABLE bookings_booking
    ADD CONSTRAINT booking_no_overlapping_occupancy
    EXCLUDE USING gist (
        house_id WITH =,
        daterange(start_date, end_date, '[)') WITH &&
    )
    WHERE (status IN ('approved', 'active'));
"""

DROP_SQL = """
ALTER TABLE bookings_booking DROP CONSTRAINT IF EXISTS booking_no_overlapping_occupancy;
"""


def add_exclusion_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute(CREATE_SQL)


def drop_exclusion_constraint(apps, schema_editor):
    if schema_editor.connection.vendor != "postgresql":
        return
    schema_editor.execute(DROP_SQL)


class Migration(migrations.Migration):

    dependencies = [
        ("bookings", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(add_exclusion_constraint, drop_exclusion_constraint),
    ]
