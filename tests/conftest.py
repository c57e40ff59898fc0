"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from campus_events.domain import Principal, RegistrationForm, Role
from campus_events.services import (
    AdmissionService,
    CapacityAccountant,
    EventLifecycleService,
)
from campus_events.stores import InMemoryEventStore, InMemoryRegistrationStore

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def registration_store() -> InMemoryRegistrationStore:
    return InMemoryRegistrationStore()


@pytest.fixture
def capacity(registration_store) -> CapacityAccountant:
    return CapacityAccountant(registration_store)


@pytest.fixture
def lifecycle(event_store, capacity, clock) -> EventLifecycleService:
    return EventLifecycleService(event_store, capacity, clock=clock)


@pytest.fixture
def admission(event_store, registration_store, capacity, clock) -> AdmissionService:
    return AdmissionService(event_store, registration_store, capacity, clock=clock)


@pytest.fixture
def django_events():
    from campus_events.stores.django_store import DjangoEventStore
    return DjangoEventStore()


@pytest.fixture
def django_registrations():
    from campus_events.stores.django_store import DjangoRegistrationStore
    return DjangoRegistrationStore()


@pytest.fixture
def db_lifecycle(django_events, django_registrations, clock) -> EventLifecycleService:
    return EventLifecycleService(
        django_events, CapacityAccountant(django_registrations), clock=clock
    )


@pytest.fixture
def db_admission(django_events, django_registrations, clock) -> AdmissionService:
    return AdmissionService(
        django_events,
        django_registrations,
        CapacityAccountant(django_registrations),
        clock=clock,
    )


@pytest.fixture
def coordinator() -> Principal:
    return Principal(id="coordinator-1", role=Role.COORDINATOR)


@pytest.fixture
def other_coordinator() -> Principal:
    return Principal(id="coordinator-2", role=Role.COORDINATOR)


@pytest.fixture
def student() -> Principal:
    return Principal(id="student-1", role=Role.STUDENT)


@pytest.fixture
def make_student():
    def make(index: int) -> Principal:
        return Principal(id=f"student-{index:03d}", role=Role.STUDENT)

    return make


@pytest.fixture
def make_form():
    def make(**overrides) -> RegistrationForm:
        values = {
            "name": "Asha Verma",
            "email": "asha@campus.example",
            "phone": "9876543210",
            "department": "Computer Science",
            "roll_number": "CS21-042",
            "year": "3",
        }
        values.update(overrides)
        return RegistrationForm(**values)

    return make


@pytest.fixture
def event_fields(clock):
    """Build valid event fields relative to the fixed clock."""

    def make(**overrides) -> dict:
        fields = {
            "title": "Robotics Workshop",
            "description": "Build a line follower in an afternoon.",
            "venue": "Lab 3",
            "category": "technical",
            "date": clock.now + timedelta(days=10),
            "registration_deadline": clock.now + timedelta(days=5),
            "max_participants": 30,
        }
        fields.update(overrides)
        return fields

    return make


@pytest.fixture
def open_event(lifecycle, coordinator, event_fields):
    """Factory for active events owned by `coordinator`."""

    def make(**overrides):
        return lifecycle.create_event(coordinator, event_fields(**overrides))

    return make
