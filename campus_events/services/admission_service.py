"""Admission service - decides whether a registration attempt succeeds.

All admission checks and the insert run inside the registration store's
admission scope for the event, so for any one event they behave as if
serialized. Checks run in a fixed order and the first failure wins:

1. the event exists and is active
2. the registration deadline has not passed (the deadline itself is allowed)
3. the student holds no active registration for the event
4. the event has a free slot
"""

import logging

from campus_events.domain import (
    EventId,
    EventSummary,
    Principal,
    Registration,
    RegistrationForm,
    RegistrationId,
    RegistrationWithEvent,
    Role,
)
from campus_events.domain.errors import (
    CapacityExceededError,
    DeadlineExpiredError,
    DomainError,
    DuplicateRegistrationError,
    EventNotFoundError,
    ForbiddenError,
    RegistrationNotFoundError,
)
from campus_events.services.access import (
    Clock,
    parse_event_id,
    parse_registration_id,
    require_role,
    utc_now,
)
from campus_events.services.capacity import CapacityAccountant
from campus_events.stores.interfaces import EventStore, RegistrationStore

logger = logging.getLogger(__name__)


class AdmissionService:
    """Service for registering students and cancelling registrations."""

    def __init__(
        self,
        events: EventStore,
        registrations: RegistrationStore,
        capacity: CapacityAccountant,
        clock: Clock = utc_now,
    ) -> None:
        self._events = events
        self._registrations = registrations
        self._capacity = capacity
        self._clock = clock

    def register(
        self, student: Principal, event_id: str | EventId, form: RegistrationForm
    ) -> Registration:
        """Admit a student to an event.

        Not idempotent: repeating a successful call fails as a duplicate.

        Raises:
            ForbiddenError: If the caller is not a student.
            ValidationError: If the event_id is malformed.
            EventNotFoundError: If the event is missing or inactive.
            DeadlineExpiredError: If the registration window has closed.
            DuplicateRegistrationError: If the student is already registered.
            CapacityExceededError: If the event is full.
            InfrastructureError: If the store fails; nothing is persisted.
        """
        require_role(student, Role.STUDENT)
        parsed = parse_event_id(event_id)

        with self._registrations.admission_scope(parsed):
            event = self._events.get(parsed)
            if event is None or not event.is_active:
                raise self._rejected(student, EventNotFoundError(str(parsed)))

            now = self._clock()
            if not event.accepts_registrations_at(now):
                raise self._rejected(student, DeadlineExpiredError(str(parsed)))

            if self._registrations.find_active(parsed, student.id) is not None:
                raise self._rejected(student, DuplicateRegistrationError(str(parsed)))

            if not self._capacity.has_room(event):
                raise self._rejected(student, CapacityExceededError(str(parsed)))

            registration = Registration(
                id=RegistrationId.new(),
                event_id=parsed,
                student_id=student.id,
                form=form,
                created_at=now,
            )
            try:
                self._registrations.add(registration)
            except DuplicateRegistrationError as exc:
                self._rejected(student, exc)
                raise

        logger.info(
            "Registration %s admitted student %s to event %s",
            registration.id,
            student.id,
            parsed,
        )
        return registration

    def cancel(self, student: Principal, registration_id: str | RegistrationId) -> None:
        """Cancel one of the student's registrations, freeing its slot.

        Cancelling an already cancelled registration succeeds without change.

        Raises:
            RegistrationNotFoundError: If no such registration belongs to the student.
        """
        require_role(student, Role.STUDENT)
        parsed = parse_registration_id(registration_id)
        registration = self._registrations.get(parsed)
        if registration is None or registration.student_id != student.id:
            raise RegistrationNotFoundError(str(parsed))

        if self._registrations.mark_cancelled(parsed):
            logger.info(
                "Registration %s for event %s cancelled by %s",
                parsed,
                registration.event_id,
                student.id,
            )
        else:
            logger.debug("Registration %s was already cancelled", parsed)

    def list_my_registrations(self, student: Principal) -> list[RegistrationWithEvent]:
        """Return the student's active registrations, newest first.

        Registrations for deactivated events are included.
        """
        require_role(student, Role.STUDENT)
        registrations = self._registrations.list_active_for_student(student.id)
        events = self._events.get_many({r.event_id for r in registrations})
        joined = []
        for registration in registrations:
            event = events.get(registration.event_id)
            if event is None:
                logger.warning(
                    "Registration %s references missing event %s",
                    registration.id,
                    registration.event_id,
                )
                continue
            joined.append(
                RegistrationWithEvent(
                    registration=registration, event=EventSummary.of(event)
                )
            )
        return joined

    def list_event_registrations(
        self, owner: Principal, event_id: str | EventId
    ) -> list[Registration]:
        """Return active registrations for an event the owner created.

        Raises:
            EventNotFoundError: If the event does not exist.
            ForbiddenError: If the caller did not create the event.
        """
        require_role(owner, Role.COORDINATOR)
        parsed = parse_event_id(event_id)
        event = self._events.get(parsed)
        if event is None:
            raise EventNotFoundError(str(parsed))
        if not event.is_owned_by(owner.id):
            raise ForbiddenError("Not authorized to view registrations for this event")
        return self._registrations.list_active_for_event(parsed)

    @staticmethod
    def _rejected(student: Principal, error: DomainError) -> DomainError:
        logger.info(
            "Registration rejected for student %s: %s", student.id, error.code.value
        )
        return error
