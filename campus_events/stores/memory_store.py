"""Thread-safe in-memory stores.

Used by unit tests and local runs. Admission scopes are keyed locks, one per
event, so admissions for different events proceed in parallel.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from campus_events.domain import (
    Event,
    EventId,
    Registration,
    RegistrationId,
    RegistrationStatus,
)
from campus_events.domain.errors import DuplicateRegistrationError
from campus_events.stores.interfaces import EventStore, RegistrationStore


class KeyedLock:
    """A lazily created lock per key.

    Locks are never evicted, so memory grows with the number of distinct keys.
    That is bounded by the events a test or local run creates.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[object, threading.Lock] = {}

    def for_key(self, key: object) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


class InMemoryEventStore(EventStore):
    """Event store backed by a dict."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: dict[EventId, Event] = {}

    def add(self, event: Event) -> None:
        with self._lock:
            if event.id in self._events:
                raise ValueError(f"Event {event.id} already exists")
            self._events[event.id] = event

    def save(self, event: Event) -> Event | None:
        with self._lock:
            current = self._events.get(event.id)
            if current is None:
                return None
            stored = replace(event, is_active=current.is_active)
            self._events[event.id] = stored
            return stored

    def deactivate(self, event_id: EventId, at: datetime) -> bool:
        with self._lock:
            current = self._events.get(event_id)
            if current is None or not current.is_active:
                return False
            self._events[event_id] = replace(current, is_active=False, updated_at=at)
            return True

    def get(self, event_id: EventId) -> Event | None:
        with self._lock:
            return self._events.get(event_id)

    def get_many(self, event_ids: Iterable[EventId]) -> dict[EventId, Event]:
        with self._lock:
            return {
                event_id: self._events[event_id]
                for event_id in event_ids
                if event_id in self._events
            }

    def list_active(self) -> list[Event]:
        with self._lock:
            active = [event for event in self._events.values() if event.is_active]
        return sorted(active, key=lambda event: event.date)

    def list_active_by_owner(self, owner_id: str) -> list[Event]:
        with self._lock:
            owned = [
                event
                for event in reversed(list(self._events.values()))
                if event.is_active and event.created_by == owner_id
            ]
        return sorted(owned, key=lambda event: event.created_at, reverse=True)


class InMemoryRegistrationStore(RegistrationStore):
    """Registration store backed by a dict, with per-event admission locks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._admission_locks = KeyedLock()
        self._registrations: dict[RegistrationId, Registration] = {}

    @contextmanager
    def admission_scope(self, event_id: EventId) -> Iterator[None]:
        with self._admission_locks.for_key(event_id):
            yield

    def add(self, registration: Registration) -> None:
        with self._lock:
            for existing in self._registrations.values():
                if (
                    existing.is_active
                    and existing.event_id == registration.event_id
                    and existing.student_id == registration.student_id
                ):
                    raise DuplicateRegistrationError(str(registration.event_id))
            self._registrations[registration.id] = registration

    def get(self, registration_id: RegistrationId) -> Registration | None:
        with self._lock:
            return self._registrations.get(registration_id)

    def find_active(self, event_id: EventId, student_id: str) -> Registration | None:
        with self._lock:
            for registration in self._registrations.values():
                if (
                    registration.is_active
                    and registration.event_id == event_id
                    and registration.student_id == student_id
                ):
                    return registration
        return None

    def mark_cancelled(self, registration_id: RegistrationId) -> bool:
        with self._lock:
            registration = self._registrations.get(registration_id)
            if registration is None or not registration.is_active:
                return False
            self._registrations[registration_id] = replace(
                registration, status=RegistrationStatus.CANCELLED
            )
            return True

    def count_active(self, event_id: EventId) -> int:
        with self._lock:
            return sum(
                1
                for registration in self._registrations.values()
                if registration.is_active and registration.event_id == event_id
            )

    def count_active_many(self, event_ids: Iterable[EventId]) -> dict[EventId, int]:
        counts = {event_id: 0 for event_id in event_ids}
        with self._lock:
            for registration in self._registrations.values():
                if registration.is_active and registration.event_id in counts:
                    counts[registration.event_id] += 1
        return counts

    def list_active_for_student(self, student_id: str) -> list[Registration]:
        return self._newest_first(
            lambda registration: registration.student_id == student_id
        )

    def list_active_for_event(self, event_id: EventId) -> list[Registration]:
        return self._newest_first(lambda registration: registration.event_id == event_id)

    def _newest_first(self, predicate) -> list[Registration]:
        with self._lock:
            matching = [
                registration
                for registration in reversed(list(self._registrations.values()))
                if registration.is_active and predicate(registration)
            ]
        return sorted(matching, key=lambda registration: registration.created_at, reverse=True)
