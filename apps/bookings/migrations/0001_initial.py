import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("halls", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("event_name", models.CharField(max_length=255, verbose_name="Event")),
                ("date", models.DateField(verbose_name="Date")),
                ("start_time", models.TimeField(verbose_name="Start time")),
                ("end_time", models.TimeField(verbose_name="End time")),
                ("department", models.CharField(blank=True, max_length=150, verbose_name="Department")),
                ("faculty_incharge", models.CharField(blank=True, max_length=150, verbose_name="Faculty in-charge")),
                ("expected_audience", models.PositiveIntegerField(default=0, verbose_name="Expected audience")),
                ("chairs_required", models.PositiveIntegerField(default=0, verbose_name="Chairs required")),
                ("needs_projector", models.BooleanField(default=False, verbose_name="Needs projector")),
                ("needs_mic", models.BooleanField(default=False, verbose_name="Needs microphone")),
                ("needs_sound_system", models.BooleanField(default=False, verbose_name="Needs sound system")),
                ("additional_requirements", models.TextField(blank=True, verbose_name="Additional requirements")),
                (
                    "status",
                    models.CharField(
                        choices=[("approved", "Approved"), ("pending", "Pending"), ("rejected", "Rejected")],
                        default="approved",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "hall",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="halls.hall",
                    ),
                ),
                (
                    "requester",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Reservation",
                "verbose_name_plural": "Reservations",
                "ordering": ["-date", "-start_time"],
                "indexes": [
                    models.Index(fields=["hall", "date"], name="reservation_hall_date_idx"),
                    models.Index(fields=["date", "start_time"], name="reservation_date_start_idx"),
                    models.Index(fields=["status"], name="reservation_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_time__gt", models.F("start_time"))),
                        name="reservation_valid_times",
                    ),
                ],
            },
        ),
    ]
