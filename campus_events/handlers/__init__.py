from campus_events.handlers.views import (
    EventDetailView,
    EventListView,
    EventRegistrationListView,
    MyRegistrationListView,
    OwnedEventListView,
    RegistrationDetailView,
    RegistrationListView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "EventRegistrationListView",
    "MyRegistrationListView",
    "OwnedEventListView",
    "RegistrationDetailView",
    "RegistrationListView",
]
