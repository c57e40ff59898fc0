"""Serializers for parsing requests and transforming domain models to responses.

Input serializers check format only; business rules are enforced by services.
"""

from rest_framework import serializers


class EventInputSerializer(serializers.Serializer):
    """Event fields accepted on create (all) and update (partial)."""

    title = serializers.CharField(max_length=255, allow_blank=True)
    description = serializers.CharField(allow_blank=True)
    venue = serializers.CharField(max_length=255, allow_blank=True)
    category = serializers.CharField(max_length=20)
    date = serializers.DateTimeField()
    registration_deadline = serializers.DateTimeField()
    max_participants = serializers.IntegerField(required=False)


class RegistrationInputSerializer(serializers.Serializer):
    """Registration request: the event plus the student's form snapshot."""

    event_id = serializers.CharField()
    name = serializers.CharField(max_length=255, allow_blank=True)
    email = serializers.CharField(max_length=254, allow_blank=True)
    phone = serializers.CharField(max_length=32, allow_blank=True)
    department = serializers.CharField(max_length=255, allow_blank=True)
    roll_number = serializers.CharField(max_length=64, allow_blank=True)
    year = serializers.CharField(max_length=16, allow_blank=True)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    venue = serializers.CharField()
    category = serializers.CharField(source="category.value")
    date = serializers.DateTimeField()
    registration_deadline = serializers.DateTimeField()
    max_participants = serializers.IntegerField(source="max_participants.value")
    created_by = serializers.CharField()
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class EventWithCountSerializer(serializers.Serializer):
    """Serializer for EventWithCount: the event fields plus its counts."""

    def to_representation(self, instance):
        data = EventSerializer(instance.event).data
        data["registration_count"] = instance.registration_count
        data["spots_left"] = instance.spots_left
        return data


class EventSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    date = serializers.DateTimeField()
    venue = serializers.CharField()
    category = serializers.CharField(source="category.value")
    is_active = serializers.BooleanField()


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    student_id = serializers.CharField()
    name = serializers.CharField(source="form.name")
    email = serializers.CharField(source="form.email")
    phone = serializers.CharField(source="form.phone")
    department = serializers.CharField(source="form.department")
    roll_number = serializers.CharField(source="form.roll_number")
    year = serializers.CharField(source="form.year")
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class RegistrationWithEventSerializer(serializers.Serializer):
    """A student's registration with the summary of its event."""

    def to_representation(self, instance):
        data = RegistrationSerializer(instance.registration).data
        data["event"] = EventSummarySerializer(instance.event).data
        return data
