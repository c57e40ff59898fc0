from campus_events.stores.interfaces import EventStore, RegistrationStore
from campus_events.stores.memory_store import InMemoryEventStore, InMemoryRegistrationStore

__all__ = [
    "EventStore",
    "RegistrationStore",
    "InMemoryEventStore",
    "InMemoryRegistrationStore",
]
