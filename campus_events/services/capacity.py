"""Capacity accounting.

The registration count is always computed from active registrations in the
registration store; nothing stores it separately.
"""

from typing import Iterable

from campus_events.domain import Event, EventId, EventWithCount
from campus_events.stores.interfaces import RegistrationStore


class CapacityAccountant:
    """Reads active registration counts for events."""

    def __init__(self, registrations: RegistrationStore) -> None:
        self._registrations = registrations

    def registration_count(self, event_id: EventId) -> int:
        return self._registrations.count_active(event_id)

    def has_room(self, event: Event) -> bool:
        """Whether one more registration fits.

        Only meaningful inside the event's admission scope; outside it the
        answer can change before it is acted on.
        """
        return event.max_participants.admits(self.registration_count(event.id))

    def annotate(self, event: Event) -> EventWithCount:
        return EventWithCount(
            event=event, registration_count=self.registration_count(event.id)
        )

    def annotate_many(self, events: Iterable[Event]) -> list[EventWithCount]:
        events = list(events)
        counts = self._registrations.count_active_many(event.id for event in events)
        return [
            EventWithCount(event=event, registration_count=counts.get(event.id, 0))
            for event in events
        ]
