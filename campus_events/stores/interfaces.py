"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Iterable

from campus_events.domain import Event, EventId, Registration, RegistrationId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def add(self, event: Event) -> None:
        """Persist a new event."""
        ...

    @abstractmethod
    def save(self, event: Event) -> Event | None:
        """Overwrite the editable fields of an existing event.

        The active flag is left as stored; only `deactivate` changes it.
        Returns the event as stored after the write, or None if it is gone.
        """
        ...

    @abstractmethod
    def deactivate(self, event_id: EventId, at: datetime) -> bool:
        """Atomically mark an active event inactive.

        Returns False if the event is missing or already inactive.
        """
        ...

    @abstractmethod
    def get(self, event_id: EventId) -> Event | None:
        """Return an event by ID (active or not), or None if not found."""
        ...

    @abstractmethod
    def get_many(self, event_ids: Iterable[EventId]) -> dict[EventId, Event]:
        """Return the events that exist among `event_ids`, keyed by ID."""
        ...

    @abstractmethod
    def list_active(self) -> list[Event]:
        """Return active events ordered by date ascending."""
        ...

    @abstractmethod
    def list_active_by_owner(self, owner_id: str) -> list[Event]:
        """Return an owner's active events ordered by created_at descending."""
        ...


class RegistrationStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    def admission_scope(self, event_id: EventId) -> AbstractContextManager[None]:
        """Return a scope that serializes admissions for one event.

        Everything read and written inside the scope commits together or not
        at all. Scopes for different events never block each other.
        """
        ...

    @abstractmethod
    def add(self, registration: Registration) -> None:
        """Persist a new registration.

        Raises:
            DuplicateRegistrationError: If the student already holds an active
                registration for the event.
        """
        ...

    @abstractmethod
    def get(self, registration_id: RegistrationId) -> Registration | None:
        """Return a registration by ID, or None if not found."""
        ...

    @abstractmethod
    def find_active(self, event_id: EventId, student_id: str) -> Registration | None:
        """Return the student's active registration for an event, if any."""
        ...

    @abstractmethod
    def mark_cancelled(self, registration_id: RegistrationId) -> bool:
        """Move a registration from registered to cancelled.

        Returns False when the registration was not in the registered state.
        """
        ...

    @abstractmethod
    def count_active(self, event_id: EventId) -> int:
        """Return the number of active registrations for an event."""
        ...

    @abstractmethod
    def count_active_many(self, event_ids: Iterable[EventId]) -> dict[EventId, int]:
        """Return active registration counts keyed by event ID (zero included)."""
        ...

    @abstractmethod
    def list_active_for_student(self, student_id: str) -> list[Registration]:
        """Return a student's active registrations, newest first."""
        ...

    @abstractmethod
    def list_active_for_event(self, event_id: EventId) -> list[Registration]:
        """Return an event's active registrations, newest first."""
        ...
