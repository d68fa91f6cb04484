"""PostgreSQL-only exclusion constraint: no two blocking reservations of a
hall may overlap on the same date. Other backends rely on the row lock."""

from django.db import migrations

CONSTRAINT_NAME = "reservation_no_overlap"

CREATE_SQL = f"""
CREATE EXTENSION IF NOT EXISTS btree_gist;
ALTER TABLE bookings_reservation
    ADD CONSTRAINT {CONSTRAINT_NAME}
    EXCLUDE USING gist (
        hall_id WITH =,
        tsrange(date + start_time, date + end_time, '[)') WITH &&
    )
    WHERE (status IN ('approved', 'pending'));
"""

DROP_SQL = f"ALTER TABLE bookings_reservation DROP CONSTRAINT IF EXISTS {CONSTRAINT_NAME};"


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
