"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let domain errors propagate to the exception handler in handlers/errors.py
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from campus_events.cache import EVENT_LIST_KEY, event_detail_key
from campus_events.domain import RegistrationForm
from campus_events.handlers.dependencies import (
    admission_service,
    cache_ttl,
    lifecycle_service,
)
from campus_events.handlers.identity import principal_from_request
from campus_events.handlers.serializers import (
    EventInputSerializer,
    EventSerializer,
    EventWithCountSerializer,
    RegistrationInputSerializer,
    RegistrationSerializer,
    RegistrationWithEventSerializer,
)
from campus_events.services.access import parse_event_id


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request: Request) -> Response:
        data = cache.get(EVENT_LIST_KEY)
        if data is None:
            events = lifecycle_service().list_active_events()
            data = list(EventSerializer(events, many=True).data)
            cache.set(EVENT_LIST_KEY, data, timeout=cache_ttl())
        return Response(data)

    def post(self, request: Request) -> Response:
        principal = principal_from_request(request)
        serializer = EventInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = lifecycle_service().create_event(principal, serializer.validated_data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class OwnedEventListView(APIView):
    """Handler for GET /api/events/mine"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        principal = principal_from_request(request)
        events = lifecycle_service().list_events_by_owner(principal)
        return Response(EventWithCountSerializer(events, many=True).data)


class EventDetailView(APIView):
    """Handler for GET/PATCH/DELETE /api/events/{event_id}"""

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request: Request, event_id: str) -> Response:
        parsed = parse_event_id(event_id)
        key = event_detail_key(parsed)
        data = cache.get(key)
        if data is None:
            event = lifecycle_service().get_event(parsed)
            data = dict(EventWithCountSerializer(event).data)
            cache.set(key, data, timeout=cache_ttl())
        return Response(data)

    def patch(self, request: Request, event_id: str) -> Response:
        principal = principal_from_request(request)
        serializer = EventInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        event = lifecycle_service().update_event(
            principal, event_id, serializer.validated_data
        )
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        principal = principal_from_request(request)
        lifecycle_service().deactivate_event(principal, event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventRegistrationListView(APIView):
    """Handler for GET /api/events/{event_id}/registrations"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, event_id: str) -> Response:
        principal = principal_from_request(request)
        registrations = admission_service().list_event_registrations(principal, event_id)
        return Response(RegistrationSerializer(registrations, many=True).data)


class RegistrationListView(APIView):
    """Handler for POST /api/registrations"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        principal = principal_from_request(request)
        serializer = RegistrationInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        event_id = data.pop("event_id")
        registration = admission_service().register(
            principal, event_id, RegistrationForm.from_mapping(data)
        )
        return Response(
            RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED
        )


class MyRegistrationListView(APIView):
    """Handler for GET /api/registrations/mine"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        principal = principal_from_request(request)
        registrations = admission_service().list_my_registrations(principal)
        return Response(RegistrationWithEventSerializer(registrations, many=True).data)


class RegistrationDetailView(APIView):
    """Handler for DELETE /api/registrations/{registration_id}"""

    permission_classes = [IsAuthenticated]

    def delete(self, request: Request, registration_id: str) -> Response:
        principal = principal_from_request(request)
        admission_service().cancel(principal, registration_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
