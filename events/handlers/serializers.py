"""Serializers for request input and for rendering domain models."""

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    creator_id = serializers.IntegerField(source="creator_id.value")
    creator_name = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField(format="%H:%M")
    location = serializers.CharField()
    address = serializers.CharField()
    image_url = serializers.CharField()
    capacity = serializers.IntegerField(source="capacity.value")
    attendees = serializers.SerializerMethodField()
    attendee_count = serializers.IntegerField()
    spots_left = serializers.IntegerField()
    created_at = serializers.DateTimeField()

    def get_attendees(self, event) -> list[int]:
        return sorted(user_id.value for user_id in event.attendees)


class EventUpdateSerializer(serializers.Serializer):
    """Input shape for owner edits. Only descriptive fields are accepted."""

    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False)
    date = serializers.DateField(required=False)
    time = serializers.TimeField(required=False)
    location = serializers.CharField(max_length=255, required=False)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    image_url = serializers.URLField(max_length=500, required=False)
    creator_name = serializers.CharField(max_length=255, required=False, allow_blank=True)


class EventCreateSerializer(EventUpdateSerializer):
    """Input shape for new events."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField()
    location = serializers.CharField(max_length=255)
    image_url = serializers.URLField(max_length=500)
    capacity = serializers.IntegerField(min_value=1)
