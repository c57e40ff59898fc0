"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from campus_events.domain import (
    Capacity,
    Category,
    Event,
    EventId,
    EventPolicy,
    EventWithCount,
    Principal,
    RegistrationForm,
    RegistrationId,
    Role,
)
from campus_events.domain.errors import (
    ErrorCode,
    InfrastructureError,
    ValidationError,
)


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_positive_value(self):
        """Capacity can be created with positive value."""
        assert Capacity(5).value == 5

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)

    def test_capacity_rejects_bool(self):
        with pytest.raises(ValueError):
            Capacity(True)

    def test_admits_while_below_limit(self):
        """A slot is free only while taken < capacity."""
        capacity = Capacity(2)
        assert capacity.admits(1)
        assert not capacity.admits(2)
        assert not Capacity(0).admits(0)


class TestIdentifiers:
    """Tests for EventId and RegistrationId value objects."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        raw = "4f7c2a8e-1f1a-4c8b-9d55-1c2e3f4a5b6c"
        assert EventId.from_string(raw).value == UUID(raw)
        assert str(RegistrationId.from_string(raw)) == raw

    def test_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")

    def test_new_ids_are_distinct(self):
        assert EventId.new() != EventId.new()
        assert RegistrationId.new() != RegistrationId.new()


class TestPrincipal:
    def test_role_flags(self):
        assert Principal(id="s1", role=Role.STUDENT).is_student
        assert Principal(id="c1", role=Role.COORDINATOR).is_coordinator

    def test_rejects_empty_id(self):
        with pytest.raises(ValueError):
            Principal(id="", role=Role.STUDENT)

    def test_rejects_role_string(self):
        """Roles must be the closed Role enum, not ad hoc strings."""
        with pytest.raises(ValueError):
            Principal(id="s1", role="student")


class TestRegistrationForm:
    """Tests for the registration form snapshot."""

    FIELDS = {
        "name": "Ravi",
        "email": "ravi@campus.example",
        "phone": "12345",
        "department": "Physics",
        "roll_number": "PH-7",
        "year": "2",
    }

    def test_keeps_values_verbatim(self):
        form = RegistrationForm(**{**self.FIELDS, "name": "  Ravi  "})
        assert form.name == "  Ravi  "

    @pytest.mark.parametrize("field", sorted(FIELDS))
    def test_blank_field_names_the_field(self, field):
        with pytest.raises(ValidationError) as excinfo:
            RegistrationForm(**{**self.FIELDS, field: "   "})
        assert excinfo.value.field == field
        assert excinfo.value.code is ErrorCode.VALIDATION_FAILED

    def test_from_mapping_reports_missing_field(self):
        data = dict(self.FIELDS)
        del data["roll_number"]
        with pytest.raises(ValidationError) as excinfo:
            RegistrationForm.from_mapping(data)
        assert excinfo.value.field == "roll_number"

    def test_from_mapping_ignores_extra_keys(self):
        form = RegistrationForm.from_mapping({**self.FIELDS, "event_id": "x"})
        assert form.year == "2"


class TestEvent:
    def _event(self, deadline: datetime) -> Event:
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        return Event(
            id=EventId.new(),
            title="Chess",
            description="Open tournament",
            venue="Hall A",
            category=Category.SPORTS,
            date=deadline + timedelta(days=1),
            registration_deadline=deadline,
            max_participants=Capacity(4),
            created_by="c1",
            created_at=now,
            updated_at=now,
        )

    def test_deadline_is_inclusive(self):
        deadline = datetime(2026, 2, 1, 18, 0, tzinfo=timezone.utc)
        event = self._event(deadline)
        assert event.accepts_registrations_at(deadline)
        assert not event.accepts_registrations_at(deadline + timedelta(microseconds=1))

    def test_spots_left_never_negative(self):
        event = self._event(datetime(2026, 2, 1, tzinfo=timezone.utc))
        assert EventWithCount(event=event, registration_count=1).spots_left == 3
        assert EventWithCount(event=event, registration_count=9).spots_left == 0


class TestEventPolicy:
    def test_defaults(self):
        policy = EventPolicy()
        assert policy.max_participants_limit == 1000
        assert policy.default_max_participants == 100

    def test_default_must_fit_limit(self):
        with pytest.raises(ValueError):
            EventPolicy(max_participants_limit=50, default_max_participants=100)


class TestErrors:
    def test_only_infrastructure_errors_are_retriable(self):
        assert InfrastructureError().retriable
        assert not ValidationError("title", "title cannot be empty").retriable

    def test_str_includes_code(self):
        assert str(InfrastructureError()).startswith("INFRASTRUCTURE_FAILURE:")
