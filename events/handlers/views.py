"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let domain errors reach the exception handler in handlers/errors.py
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.serializers import Serializer
from rest_framework.views import APIView

from events.cache import EventCache
from events.domain import Caller, UserId
from events.domain.errors import ValidationFailedError
from events.handlers.serializers import EventCreateSerializer, EventSerializer, EventUpdateSerializer
from events.services import EventService, get_event_service


def caller_from(request: Request) -> Caller:
    """Identity of the authenticated user; never read from the request body."""
    user = request.user
    return Caller(user_id=UserId(user.pk), display_name=user.get_full_name() or user.get_username())


def validated(serializer: Serializer) -> dict:
    if not serializer.is_valid():
        raise ValidationFailedError(serializer.errors)
    return serializer.validated_data


class EventAPIView(APIView):
    """Base view wiring the event service and the read cache."""

    permission_classes = [IsAuthenticatedOrReadOnly]

    @property
    def service(self) -> EventService:
        return get_event_service()

    @property
    def cache(self) -> EventCache:
        return EventCache()


class EventListView(EventAPIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        payload = self.cache.get_list()
        if payload is None:
            payload = EventSerializer(self.service.list_events(), many=True).data
            self.cache.set_list(payload)
        return Response(payload)

    def post(self, request: Request) -> Response:
        data = validated(EventCreateSerializer(data=request.data))
        event = self.service.create_event(caller_from(request), data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(EventAPIView):
    """Handler for GET/PUT/PATCH/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        payload = self.cache.get_detail(event_id.lower())
        if payload is None:
            payload = EventSerializer(self.service.get_event(event_id)).data
            self.cache.set_detail(payload["id"], payload)
        return Response(payload)

    def patch(self, request: Request, event_id: str) -> Response:
        caller = caller_from(request)
        # existence and ownership are reported before payload errors
        self.service.get_editable_event(caller, event_id)
        data = validated(EventUpdateSerializer(data=request.data))
        event = self.service.update_event(caller, event_id, data)
        return Response(EventSerializer(event).data)

    put = patch

    def delete(self, request: Request, event_id: str) -> Response:
        self.service.delete_event(caller_from(request), event_id)
        return Response({"msg": "Event removed"})


class RsvpView(EventAPIView):
    """Handler for POST /api/events/{event_id}/rsvp"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, event_id: str) -> Response:
        self.service.rsvp(caller_from(request), event_id)
        return Response({"success": True})


class CancelRsvpView(EventAPIView):
    """Handler for POST /api/events/{event_id}/cancel-rsvp"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, event_id: str) -> Response:
        self.service.cancel_rsvp(caller_from(request), event_id)
        return Response({"success": True})
