"""Service wiring for handlers."""

from django.conf import settings

from campus_events.domain import EventPolicy
from campus_events.services import (
    AdmissionService,
    CapacityAccountant,
    EventLifecycleService,
)
from campus_events.stores.django_store import DjangoEventStore, DjangoRegistrationStore


def event_policy() -> EventPolicy:
    config = settings.CAMPUS_EVENTS
    return EventPolicy(
        max_participants_limit=config["MAX_PARTICIPANTS_LIMIT"],
        default_max_participants=config["DEFAULT_MAX_PARTICIPANTS"],
    )


def cache_ttl() -> int:
    return settings.CAMPUS_EVENTS["CACHE_TTL"]


def lifecycle_service() -> EventLifecycleService:
    capacity = CapacityAccountant(DjangoRegistrationStore())
    return EventLifecycleService(DjangoEventStore(), capacity, policy=event_policy())


def admission_service() -> AdmissionService:
    registrations = DjangoRegistrationStore()
    return AdmissionService(
        DjangoEventStore(), registrations, CapacityAccountant(registrations)
    )
