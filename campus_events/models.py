"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.db.models import F, Q


class Event(models.Model):
    """Persistence model for events."""

    class Category(models.TextChoices):
        TECHNICAL = "technical", "Technical"
        CULTURAL = "cultural", "Cultural"
        SPORTS = "sports", "Sports"
        ACADEMIC = "academic", "Academic"
        OTHER = "other", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    venue = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=Category.choices)
    date = models.DateTimeField()
    registration_deadline = models.DateTimeField()
    max_participants = models.PositiveIntegerField(default=100)
    created_by = models.CharField(max_length=64)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(fields=["is_active", "date"], name="event_active_date_idx"),
            models.Index(
                fields=["created_by", "-created_at"], name="event_owner_created_idx"
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(registration_deadline__lt=F("date")),
                name="event_deadline_before_date",
            ),
            models.CheckConstraint(
                condition=Q(max_participants__gte=1),
                name="event_max_participants_positive",
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Registration(models.Model):
    """Persistence model for registrations."""

    class Status(models.TextChoices):
        REGISTERED = "registered", "Registered"
        CANCELLED = "cancelled", "Cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="registrations"
    )
    student_id = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=254)
    phone = models.CharField(max_length=32)
    department = models.CharField(max_length=255)
    roll_number = models.CharField(max_length=64)
    year = models.CharField(max_length=16)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.REGISTERED
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event", "status"], name="reg_event_status_idx"),
            models.Index(fields=["student_id", "status"], name="reg_student_status_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "student_id"],
                condition=Q(status="registered"),
                name="unique_active_registration",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.event.title}"
