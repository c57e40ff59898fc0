"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in campus_events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from campus_events.domain.errors import ValidationError
from campus_events.domain.value_objects import (
    Capacity,
    Category,
    EventId,
    RegistrationId,
    RegistrationStatus,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    title: str
    description: str
    venue: str
    category: Category
    date: datetime
    registration_deadline: datetime
    max_participants: Capacity
    created_by: str
    created_at: datetime
    updated_at: datetime
    is_active: bool = True

    def is_owned_by(self, principal_id: str) -> bool:
        return self.created_by == principal_id

    def accepts_registrations_at(self, instant: datetime) -> bool:
        """The deadline itself is still inside the registration window."""
        return instant <= self.registration_deadline


@dataclass(frozen=True)
class EventWithCount:
    """An event annotated with its number of active registrations."""

    event: Event
    registration_count: int

    @property
    def spots_left(self) -> int:
        return max(self.event.max_participants.value - self.registration_count, 0)


@dataclass(frozen=True)
class EventSummary:
    """Minimal event details shown next to a student's registration."""

    id: EventId
    title: str
    date: datetime
    venue: str
    category: Category
    is_active: bool

    @classmethod
    def of(cls, event: Event) -> "EventSummary":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            venue=event.venue,
            category=event.category,
            is_active=event.is_active,
        )


REGISTRATION_FORM_FIELDS = ("name", "email", "phone", "department", "roll_number", "year")


@dataclass(frozen=True)
class RegistrationForm:
    """Student details captured at registration time.

    Values are kept verbatim; every field is required.
    """

    name: str
    email: str
    phone: str
    department: str
    roll_number: str
    year: str

    def __post_init__(self) -> None:
        for name in REGISTRATION_FORM_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(name, f"{name} is required")

    @classmethod
    def from_mapping(cls, data: dict) -> "RegistrationForm":
        missing = [name for name in REGISTRATION_FORM_FIELDS if name not in data]
        if missing:
            raise ValidationError(missing[0], f"{missing[0]} is required")
        return cls(**{name: data[name] for name in REGISTRATION_FORM_FIELDS})


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration."""

    id: RegistrationId
    event_id: EventId
    student_id: str
    form: RegistrationForm
    created_at: datetime
    status: RegistrationStatus = RegistrationStatus.REGISTERED

    @property
    def is_active(self) -> bool:
        return self.status is RegistrationStatus.REGISTERED


@dataclass(frozen=True)
class RegistrationWithEvent:
    """A registration joined with a summary of its event."""

    registration: Registration
    event: EventSummary
