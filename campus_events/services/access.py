"""Checks shared by services at each operation boundary."""

from collections.abc import Callable
from datetime import datetime, timezone

from campus_events.domain import EventId, Principal, RegistrationId, Role
from campus_events.domain.errors import ForbiddenError, ValidationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_role(principal: Principal, role: Role) -> None:
    """Raise ForbiddenError unless the principal has exactly `role`."""
    if principal.role is role:
        return
    match principal.role:
        case Role.STUDENT:
            raise ForbiddenError("Students cannot perform this action")
        case Role.COORDINATOR:
            raise ForbiddenError("Coordinators cannot perform this action")


def parse_event_id(event_id: str | EventId) -> EventId:
    if isinstance(event_id, EventId):
        return event_id
    try:
        return EventId.from_string(str(event_id))
    except ValueError as exc:
        raise ValidationError("event_id", "Invalid event ID format") from exc


def parse_registration_id(registration_id: str | RegistrationId) -> RegistrationId:
    if isinstance(registration_id, RegistrationId):
        return registration_id
    try:
        return RegistrationId.from_string(str(registration_id))
    except ValueError as exc:
        raise ValidationError("registration_id", "Invalid registration ID format") from exc
