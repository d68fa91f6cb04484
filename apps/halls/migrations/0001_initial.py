import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Hall",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, unique=True, verbose_name="Name")),
                ("capacity", models.PositiveIntegerField(verbose_name="Seating capacity")),
                ("total_chairs", models.PositiveIntegerField(default=0, verbose_name="Chair inventory")),
                ("has_projector", models.BooleanField(default=False, verbose_name="Projector")),
                ("has_sound_system", models.BooleanField(default=False, verbose_name="Sound system")),
                ("has_ac", models.BooleanField(default=False, verbose_name="Air conditioning")),
                ("has_stage", models.BooleanField(default=False, verbose_name="Stage")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Hall",
                "verbose_name_plural": "Halls",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="SystemHandler",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, verbose_name="Name")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="Email")),
                (
                    "system_type",
                    models.CharField(
                        choices=[("projector", "Projector"), ("mic", "Microphone"), ("sound_system", "Sound system")],
                        max_length=20,
                        verbose_name="System type",
                    ),
                ),
                (
                    "phone",
                    models.CharField(
                        blank=True,
                        max_length=20,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Invalid phone number. Use international format without spaces.",
                                regex="^\\+?\\d{7,15}$",
                            )
                        ],
                        verbose_name="Phone",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "System handler",
                "verbose_name_plural": "System handlers",
                "ordering": ["system_type", "name"],
                "indexes": [models.Index(fields=["system_type"], name="halls_handler_type_idx")],
            },
        ),
    ]
