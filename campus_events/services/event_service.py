"""Event lifecycle service - business logic for events lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from campus_events.domain import (
    Capacity,
    Category,
    Event,
    EventId,
    EventPolicy,
    EventWithCount,
    Principal,
    Role,
)
from campus_events.domain.errors import (
    EventNotFoundError,
    ForbiddenError,
    ValidationError,
)
from campus_events.services.access import (
    Clock,
    parse_event_id,
    require_role,
    utc_now,
)
from campus_events.services.capacity import CapacityAccountant
from campus_events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("title", "description", "venue")
EDITABLE_FIELDS = TEXT_FIELDS + (
    "category",
    "date",
    "registration_deadline",
    "max_participants",
)
REQUIRED_FIELDS = TEXT_FIELDS + ("category", "date", "registration_deadline")


class EventLifecycleService:
    """Service for creating, changing and listing events."""

    def __init__(
        self,
        events: EventStore,
        capacity: CapacityAccountant,
        policy: EventPolicy | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._events = events
        self._capacity = capacity
        self._policy = policy or EventPolicy()
        self._clock = clock

    def create_event(self, owner: Principal, fields: Mapping[str, Any]) -> Event:
        """Create an active event owned by `owner`.

        Raises:
            ForbiddenError: If the owner is not a coordinator.
            ValidationError: If any field is missing, unknown or invalid.
        """
        require_role(owner, Role.COORDINATOR)
        self._reject_unknown(fields)
        for name in REQUIRED_FIELDS:
            if fields.get(name) is None:
                raise ValidationError(name, f"{name} is required")

        values = {"max_participants": self._policy.default_max_participants}
        values.update(fields)
        now = self._clock()
        event = Event(
            id=EventId.new(),
            created_by=owner.id,
            created_at=now,
            updated_at=now,
            is_active=True,
            **self._validated(values, now),
        )
        self._events.add(event)
        logger.info("Event %s created by %s", event.id, owner.id)
        return event

    def update_event(
        self, owner: Principal, event_id: str | EventId, fields: Mapping[str, Any]
    ) -> Event:
        """Apply a partial update to an event the owner created.

        The merged result is validated exactly like a new event.

        Raises:
            ValidationError: If the ID is malformed or a merged field is invalid.
            EventNotFoundError: If the event does not exist.
            ForbiddenError: If the caller is not the event's coordinator.
        """
        require_role(owner, Role.COORDINATOR)
        event = self._owned_event(owner, parse_event_id(event_id))
        self._reject_unknown(fields)

        merged = {
            "title": event.title,
            "description": event.description,
            "venue": event.venue,
            "category": event.category,
            "date": event.date,
            "registration_deadline": event.registration_deadline,
            "max_participants": event.max_participants.value,
        }
        merged.update({name: value for name, value in fields.items() if value is not None})
        now = self._clock()
        stored = self._events.save(
            replace(event, updated_at=now, **self._validated(merged, now))
        )
        if stored is None:
            raise EventNotFoundError(str(event.id))
        logger.info("Event %s updated by %s", event.id, owner.id)
        return stored

    def deactivate_event(self, owner: Principal, event_id: str | EventId) -> None:
        """Soft-delete an event. Deactivating an inactive event is a no-op."""
        require_role(owner, Role.COORDINATOR)
        event = self._owned_event(owner, parse_event_id(event_id))
        if not self._events.deactivate(event.id, self._clock()):
            return
        logger.info("Event %s deactivated by %s", event.id, owner.id)

    def list_active_events(self) -> list[Event]:
        """Return active events, soonest first."""
        return self._events.list_active()

    def get_event(self, event_id: str | EventId) -> EventWithCount:
        """Return any event, active or not, with its registration count.

        Raises:
            ValidationError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        event = self._events.get(parsed)
        if event is None:
            raise EventNotFoundError(str(parsed))
        return self._capacity.annotate(event)

    def list_events_by_owner(self, owner: Principal) -> list[EventWithCount]:
        """Return the owner's active events, newest first, with counts."""
        require_role(owner, Role.COORDINATOR)
        return self._capacity.annotate_many(self._events.list_active_by_owner(owner.id))

    def _owned_event(self, owner: Principal, event_id: EventId) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        if not event.is_owned_by(owner.id):
            raise ForbiddenError("Not authorized to modify this event")
        return event

    @staticmethod
    def _reject_unknown(fields: Mapping[str, Any]) -> None:
        for name in fields:
            if name not in EDITABLE_FIELDS:
                raise ValidationError(name, f"{name} cannot be set")

    def _validated(self, values: Mapping[str, Any], now: datetime) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for name in TEXT_FIELDS:
            value = values.get(name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(name, f"{name} cannot be empty")
            cleaned[name] = value.strip()

        cleaned["category"] = _category(values.get("category"))

        date = _aware_datetime("date", values.get("date"))
        if date <= now:
            raise ValidationError("date", "Event date must be in the future")
        deadline = _aware_datetime(
            "registration_deadline", values.get("registration_deadline")
        )
        if deadline >= date:
            raise ValidationError(
                "registration_deadline",
                "Registration deadline must be before the event date",
            )
        if deadline <= now:
            raise ValidationError(
                "registration_deadline", "Registration deadline must be in the future"
            )
        cleaned["date"] = date
        cleaned["registration_deadline"] = deadline

        limit = self._policy.max_participants_limit
        max_participants = values.get("max_participants")
        if (
            isinstance(max_participants, bool)
            or not isinstance(max_participants, int)
            or not 1 <= max_participants <= limit
        ):
            raise ValidationError(
                "max_participants", f"max_participants must be between 1 and {limit}"
            )
        cleaned["max_participants"] = Capacity(max_participants)
        return cleaned


def _category(value: Any) -> Category:
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError as exc:
        allowed = ", ".join(category.value for category in Category)
        raise ValidationError("category", f"category must be one of: {allowed}") from exc


def _aware_datetime(name: str, value: Any) -> datetime:
    if not isinstance(value, datetime):
        raise ValidationError(name, f"{name} must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(name, f"{name} must include a timezone")
    return value
