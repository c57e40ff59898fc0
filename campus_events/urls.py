from django.urls import path

from campus_events.handlers import (
    EventDetailView,
    EventListView,
    EventRegistrationListView,
    MyRegistrationListView,
    OwnedEventListView,
    RegistrationDetailView,
    RegistrationListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/mine", OwnedEventListView.as_view(), name="event-mine"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/registrations",
        EventRegistrationListView.as_view(),
        name="event-registration-list",
    ),
    path("registrations", RegistrationListView.as_view(), name="registration-list"),
    path(
        "registrations/mine",
        MyRegistrationListView.as_view(),
        name="registration-mine",
    ),
    path(
        "registrations/<str:registration_id>",
        RegistrationDetailView.as_view(),
        name="registration-detail",
    ),
]
