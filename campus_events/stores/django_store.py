"""Django ORM implementation of the event and registration stores.

Admission scopes are database transactions holding a row lock on the event
(SELECT ... FOR UPDATE), so concurrent admissions for one event serialize while
other events are untouched. SQLite has no row locks; its IMMEDIATE
transaction mode (set in settings) serializes the scopes instead. The partial
unique constraint on active registrations backs up the duplicate check at the
storage layer.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count

from campus_events import models as orm
from campus_events.domain import (
    Capacity,
    Category,
    Event,
    EventId,
    Registration,
    RegistrationForm,
    RegistrationId,
    RegistrationStatus,
)
from campus_events.domain.errors import DuplicateRegistrationError, InfrastructureError
from campus_events.stores.interfaces import EventStore, RegistrationStore

logger = logging.getLogger(__name__)

ACTIVE_REGISTRATION_CONSTRAINT = "unique_active_registration"


@contextmanager
def database_errors() -> Iterator[None]:
    """Translate database failures into InfrastructureError.

    Integrity errors are left alone; callers that expect them handle them.
    """
    try:
        yield
    except IntegrityError:
        raise
    except DatabaseError as exc:
        logger.exception("Database failure in campus events store")
        raise InfrastructureError() from exc


def _to_event(record: orm.Event) -> Event:
    return Event(
        id=EventId(record.id),
        title=record.title,
        description=record.description,
        venue=record.venue,
        category=Category(record.category),
        date=record.date,
        registration_deadline=record.registration_deadline,
        max_participants=Capacity(record.max_participants),
        created_by=record.created_by,
        created_at=record.created_at,
        updated_at=record.updated_at,
        is_active=record.is_active,
    )


def _to_registration(record: orm.Registration) -> Registration:
    return Registration(
        id=RegistrationId(record.id),
        event_id=EventId(record.event_id),
        student_id=record.student_id,
        form=RegistrationForm(
            name=record.name,
            email=record.email,
            phone=record.phone,
            department=record.department,
            roll_number=record.roll_number,
            year=record.year,
        ),
        created_at=record.created_at,
        status=RegistrationStatus(record.status),
    )


def _event_fields(event: Event) -> dict:
    return {
        "title": event.title,
        "description": event.description,
        "venue": event.venue,
        "category": event.category.value,
        "date": event.date,
        "registration_deadline": event.registration_deadline,
        "max_participants": event.max_participants.value,
        "updated_at": event.updated_at,
    }


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    @database_errors()
    def add(self, event: Event) -> None:
        orm.Event.objects.create(
            id=event.id.value,
            created_by=event.created_by,
            created_at=event.created_at,
            is_active=event.is_active,
            **_event_fields(event),
        )

    @database_errors()
    def save(self, event: Event) -> Event | None:
        fields = _event_fields(event)
        with transaction.atomic():
            record = orm.Event.objects.select_for_update().filter(pk=event.id.value).first()
            if record is None:
                return None
            for name, value in fields.items():
                setattr(record, name, value)
            record.save(update_fields=list(fields))
        return _to_event(record)

    @database_errors()
    def deactivate(self, event_id: EventId, at: datetime) -> bool:
        with transaction.atomic():
            record = (
                orm.Event.objects.select_for_update()
                .filter(pk=event_id.value, is_active=True)
                .first()
            )
            if record is None:
                return False
            record.is_active = False
            record.updated_at = at
            # save() rather than update() so the cache signals fire.
            record.save(update_fields=["is_active", "updated_at"])
        return True

    @database_errors()
    def get(self, event_id: EventId) -> Event | None:
        record = orm.Event.objects.filter(pk=event_id.value).first()
        return _to_event(record) if record is not None else None

    @database_errors()
    def get_many(self, event_ids: Iterable[EventId]) -> dict[EventId, Event]:
        pks = [event_id.value for event_id in event_ids]
        return {
            EventId(record.id): _to_event(record)
            for record in orm.Event.objects.filter(pk__in=pks)
        }

    @database_errors()
    def list_active(self) -> list[Event]:
        records = orm.Event.objects.filter(is_active=True).order_by("date")
        return [_to_event(record) for record in records]

    @database_errors()
    def list_active_by_owner(self, owner_id: str) -> list[Event]:
        records = orm.Event.objects.filter(
            created_by=owner_id, is_active=True
        ).order_by("-created_at")
        return [_to_event(record) for record in records]


class DjangoRegistrationStore(RegistrationStore):
    """Relational registration store using Django ORM."""

    @contextmanager
    def admission_scope(self, event_id: EventId) -> Iterator[None]:
        with database_errors(), transaction.atomic():
            # Evaluated so the row lock is taken before any admission check runs.
            list(
                orm.Event.objects.select_for_update()
                .filter(pk=event_id.value)
                .values_list("pk", flat=True)
            )
            yield

    @database_errors()
    def add(self, registration: Registration) -> None:
        form = registration.form
        try:
            with transaction.atomic():
                orm.Registration.objects.create(
                    id=registration.id.value,
                    event_id=registration.event_id.value,
                    student_id=registration.student_id,
                    name=form.name,
                    email=form.email,
                    phone=form.phone,
                    department=form.department,
                    roll_number=form.roll_number,
                    year=form.year,
                    status=registration.status.value,
                    created_at=registration.created_at,
                )
        except IntegrityError as exc:
            if ACTIVE_REGISTRATION_CONSTRAINT in str(exc) or self.find_active(
                registration.event_id, registration.student_id
            ):
                raise DuplicateRegistrationError(str(registration.event_id)) from exc
            raise

    @database_errors()
    def get(self, registration_id: RegistrationId) -> Registration | None:
        record = orm.Registration.objects.filter(pk=registration_id.value).first()
        return _to_registration(record) if record is not None else None

    @database_errors()
    def find_active(self, event_id: EventId, student_id: str) -> Registration | None:
        record = orm.Registration.objects.filter(
            event_id=event_id.value,
            student_id=student_id,
            status=orm.Registration.Status.REGISTERED,
        ).first()
        return _to_registration(record) if record is not None else None

    @database_errors()
    def mark_cancelled(self, registration_id: RegistrationId) -> bool:
        with transaction.atomic():
            record = (
                orm.Registration.objects.select_for_update()
                .filter(
                    pk=registration_id.value,
                    status=orm.Registration.Status.REGISTERED,
                )
                .first()
            )
            if record is None:
                return False
            record.status = orm.Registration.Status.CANCELLED
            record.save(update_fields=["status", "updated_at"])
            return True

    @database_errors()
    def count_active(self, event_id: EventId) -> int:
        return orm.Registration.objects.filter(
            event_id=event_id.value,
            status=orm.Registration.Status.REGISTERED,
        ).count()

    @database_errors()
    def count_active_many(self, event_ids: Iterable[EventId]) -> dict[EventId, int]:
        counts = {event_id: 0 for event_id in event_ids}
        if not counts:
            return counts
        rows = (
            orm.Registration.objects.filter(
                event_id__in=[event_id.value for event_id in counts],
                status=orm.Registration.Status.REGISTERED,
            )
            .order_by()
            .values("event_id")
            .annotate(active=Count("id"))
        )
        for row in rows:
            counts[EventId(row["event_id"])] = row["active"]
        return counts

    @database_errors()
    def list_active_for_student(self, student_id: str) -> list[Registration]:
        records = orm.Registration.objects.filter(
            student_id=student_id,
            status=orm.Registration.Status.REGISTERED,
        ).order_by("-created_at")
        return [_to_registration(record) for record in records]

    @database_errors()
    def list_active_for_event(self, event_id: EventId) -> list[Registration]:
        records = orm.Registration.objects.filter(
            event_id=event_id.value,
            status=orm.Registration.Status.REGISTERED,
        ).order_by("-created_at")
        return [_to_registration(record) for record in records]
