from campus_events.domain.models import (
    Event,
    EventSummary,
    EventWithCount,
    Registration,
    RegistrationForm,
    RegistrationWithEvent,
)
from campus_events.domain.value_objects import (
    Capacity,
    Category,
    EventId,
    EventPolicy,
    Principal,
    RegistrationId,
    RegistrationStatus,
    Role,
)

__all__ = [
    "Event",
    "EventSummary",
    "EventWithCount",
    "Registration",
    "RegistrationForm",
    "RegistrationWithEvent",
    "Capacity",
    "Category",
    "EventId",
    "EventPolicy",
    "Principal",
    "RegistrationId",
    "RegistrationStatus",
    "Role",
]
