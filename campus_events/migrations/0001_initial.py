import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("venue", models.CharField(max_length=255)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("technical", "Technical"),
                            ("cultural", "Cultural"),
                            ("sports", "Sports"),
                            ("academic", "Academic"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("date", models.DateTimeField()),
                ("registration_deadline", models.DateTimeField()),
                ("max_participants", models.PositiveIntegerField(default=100)),
                ("created_by", models.CharField(max_length=64)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["date"],
                "indexes": [
                    models.Index(
                        fields=["is_active", "date"],
                        name="event_active_date_idx",
                    ),
                    models.Index(
                        fields=["created_by", "-created_at"],
                        name="event_owner_created_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("registration_deadline__lt", models.F("date"))
                        ),
                        name="event_deadline_before_date",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("max_participants__gte", 1)),
                        name="event_max_participants_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("student_id", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("email", models.CharField(max_length=254)),
                ("phone", models.CharField(max_length=32)),
                ("department", models.CharField(max_length=255)),
                ("roll_number", models.CharField(max_length=64)),
                ("year", models.CharField(max_length=16)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("registered", "Registered"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="registered",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registrations",
                        to="campus_events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["event", "status"],
                        name="reg_event_status_idx",
                    ),
                    models.Index(
                        fields=["student_id", "status"],
                        name="reg_student_status_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "registered")),
                        fields=("event", "student_id"),
                        name="unique_active_registration",
                    )
                ],
            },
        ),
    ]
