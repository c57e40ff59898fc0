"""Unit tests for EventLifecycleService.

These test validation, ownership checks and domain error mapping.
Run with: pytest tests/test_event_service.py -v
"""

from datetime import timedelta

import pytest

from campus_events.domain import Category, EventPolicy
from campus_events.domain.errors import (
    EventNotFoundError,
    ForbiddenError,
    ValidationError,
)
from campus_events.services import CapacityAccountant, EventLifecycleService


class TestCreateEvent:
    """Tests for create_event."""

    def test_creates_active_event_owned_by_caller(self, lifecycle, coordinator, event_fields, clock):
        event = lifecycle.create_event(coordinator, event_fields())
        assert event.is_active
        assert event.created_by == coordinator.id
        assert event.category is Category.TECHNICAL
        assert event.max_participants.value == 30
        assert event.created_at == clock.now

    def test_trims_text_fields(self, lifecycle, coordinator, event_fields):
        event = lifecycle.create_event(coordinator, event_fields(title="  Hackathon  "))
        assert event.title == "Hackathon"

    def test_defaults_max_participants(self, lifecycle, coordinator, event_fields):
        fields = event_fields()
        del fields["max_participants"]
        assert lifecycle.create_event(coordinator, fields).max_participants.value == 100

    def test_deadline_equal_to_date_rejected(self, lifecycle, coordinator, event_fields, clock):
        """registration_deadline == date fails with ValidationError."""
        date = clock.now + timedelta(days=3)
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.create_event(
                coordinator, event_fields(date=date, registration_deadline=date)
            )
        assert excinfo.value.field == "registration_deadline"

    def test_deadline_one_second_before_date_accepted(self, lifecycle, coordinator, event_fields, clock):
        date = clock.now + timedelta(days=3)
        event = lifecycle.create_event(
            coordinator,
            event_fields(date=date, registration_deadline=date - timedelta(seconds=1)),
        )
        assert event.registration_deadline == date - timedelta(seconds=1)

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"title": "   "}, "title"),
            ({"description": ""}, "description"),
            ({"venue": None}, "venue"),
            ({"category": "party"}, "category"),
            ({"max_participants": 0}, "max_participants"),
            ({"max_participants": 1001}, "max_participants"),
            ({"max_participants": "10"}, "max_participants"),
            ({"max_participants": True}, "max_participants"),
            ({"organizer": "someone"}, "organizer"),
        ],
    )
    def test_invalid_fields_are_named(self, lifecycle, coordinator, event_fields, overrides, field):
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.create_event(coordinator, event_fields(**overrides))
        assert excinfo.value.field == field

    def test_date_must_be_in_future(self, lifecycle, coordinator, event_fields, clock):
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.create_event(
                coordinator,
                event_fields(
                    date=clock.now,
                    registration_deadline=clock.now - timedelta(hours=1),
                ),
            )
        assert excinfo.value.field == "date"

    def test_deadline_must_be_in_future(self, lifecycle, coordinator, event_fields, clock):
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.create_event(
                coordinator, event_fields(registration_deadline=clock.now)
            )
        assert excinfo.value.field == "registration_deadline"

    def test_naive_datetime_rejected(self, lifecycle, coordinator, event_fields, clock):
        naive = (clock.now + timedelta(days=3)).replace(tzinfo=None)
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.create_event(coordinator, event_fields(date=naive))
        assert excinfo.value.field == "date"

    def test_missing_required_field(self, lifecycle, coordinator, event_fields):
        fields = event_fields()
        del fields["venue"]
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.create_event(coordinator, fields)
        assert excinfo.value.field == "venue"

    def test_students_cannot_create(self, lifecycle, student, event_fields):
        with pytest.raises(ForbiddenError):
            lifecycle.create_event(student, event_fields())

    def test_policy_limit_is_configurable(self, event_store, registration_store, coordinator, event_fields, clock):
        service = EventLifecycleService(
            event_store,
            CapacityAccountant(registration_store),
            policy=EventPolicy(max_participants_limit=50, default_max_participants=20),
            clock=clock,
        )
        with pytest.raises(ValidationError):
            service.create_event(coordinator, event_fields(max_participants=51))
        fields = event_fields()
        del fields["max_participants"]
        assert service.create_event(coordinator, fields).max_participants.value == 20


class TestUpdateEvent:
    """Tests for update_event."""

    def test_merges_partial_update(self, lifecycle, coordinator, open_event, clock):
        event = open_event()
        clock.advance(minutes=5)
        updated = lifecycle.update_event(coordinator, str(event.id), {"venue": "Main Hall"})
        assert updated.venue == "Main Hall"
        assert updated.title == event.title
        assert updated.updated_at == clock.now
        assert updated.created_at == event.created_at
        assert lifecycle.get_event(event.id).event.venue == "Main Hall"

    def test_revalidates_merged_result(self, lifecycle, coordinator, open_event):
        event = open_event()
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.update_event(
                coordinator, event.id, {"registration_deadline": event.date}
            )
        assert excinfo.value.field == "registration_deadline"

    def test_not_found(self, lifecycle, coordinator):
        with pytest.raises(EventNotFoundError):
            lifecycle.update_event(
                coordinator, "4f7c2a8e-1f1a-4c8b-9d55-1c2e3f4a5b6c", {"title": "x"}
            )

    def test_malformed_id(self, lifecycle, coordinator):
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.update_event(coordinator, "nope", {"title": "x"})
        assert excinfo.value.field == "event_id"

    def test_only_owner_may_update(self, lifecycle, other_coordinator, open_event):
        event = open_event()
        with pytest.raises(ForbiddenError):
            lifecycle.update_event(other_coordinator, event.id, {"title": "Mine now"})

    def test_cannot_change_owner(self, lifecycle, coordinator, open_event):
        event = open_event()
        with pytest.raises(ValidationError) as excinfo:
            lifecycle.update_event(coordinator, event.id, {"created_by": "someone"})
        assert excinfo.value.field == "created_by"

    def test_does_not_reactivate_event_deactivated_mid_update(
        self, lifecycle, event_store, coordinator, open_event, clock, monkeypatch
    ):
        """A deactivation landing between the read and the write is kept."""
        event = open_event()
        save = event_store.save

        def deactivate_then_save(updated):
            lifecycle.deactivate_event(coordinator, event.id)
            return save(updated)

        monkeypatch.setattr(event_store, "save", deactivate_then_save)
        updated = lifecycle.update_event(coordinator, event.id, {"title": "Renamed"})

        stored = event_store.get(event.id)
        assert stored.title == "Renamed"
        assert stored.is_active is False
        assert updated.is_active is False
        assert lifecycle.list_active_events() == []


class TestDeactivateEvent:
    """Tests for deactivate_event."""

    def test_hides_event_from_active_listing(self, lifecycle, coordinator, open_event):
        event = open_event()
        lifecycle.deactivate_event(coordinator, event.id)
        assert lifecycle.list_active_events() == []
        assert not lifecycle.get_event(event.id).event.is_active

    def test_is_idempotent(self, lifecycle, coordinator, open_event):
        event = open_event()
        lifecycle.deactivate_event(coordinator, event.id)
        lifecycle.deactivate_event(coordinator, event.id)
        assert not lifecycle.get_event(event.id).event.is_active

    def test_only_owner_may_deactivate(self, lifecycle, other_coordinator, open_event):
        event = open_event()
        with pytest.raises(ForbiddenError):
            lifecycle.deactivate_event(other_coordinator, event.id)

    def test_not_found(self, lifecycle, coordinator):
        with pytest.raises(EventNotFoundError):
            lifecycle.deactivate_event(coordinator, "4f7c2a8e-1f1a-4c8b-9d55-1c2e3f4a5b6c")


class TestListings:
    """Tests for list_active_events, get_event and list_events_by_owner."""

    def test_active_events_ordered_by_date(self, lifecycle, open_event, clock):
        later = open_event(title="Later", date=clock.now + timedelta(days=20))
        sooner = open_event(title="Sooner", date=clock.now + timedelta(days=7))
        assert [event.id for event in lifecycle.list_active_events()] == [sooner.id, later.id]

    def test_get_event_attaches_count(self, lifecycle, admission, open_event, student, make_form):
        event = open_event()
        admission.register(student, event.id, make_form())
        detail = lifecycle.get_event(str(event.id))
        assert detail.registration_count == 1
        assert detail.spots_left == 29

    def test_get_event_not_found(self, lifecycle):
        with pytest.raises(EventNotFoundError):
            lifecycle.get_event("4f7c2a8e-1f1a-4c8b-9d55-1c2e3f4a5b6c")

    def test_owner_listing_newest_first_active_only(
        self, lifecycle, coordinator, other_coordinator, open_event, event_fields, clock
    ):
        first = open_event(title="First")
        clock.advance(hours=1)
        second = open_event(title="Second")
        clock.advance(hours=1)
        retired = open_event(title="Retired")
        lifecycle.deactivate_event(coordinator, retired.id)
        lifecycle.create_event(other_coordinator, event_fields(title="Not mine"))

        listing = lifecycle.list_events_by_owner(coordinator)
        assert [item.event.id for item in listing] == [second.id, first.id]
        assert all(item.registration_count == 0 for item in listing)

    def test_owner_listing_requires_coordinator(self, lifecycle, student):
        with pytest.raises(ForbiddenError):
            lifecycle.list_events_by_owner(student)
