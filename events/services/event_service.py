"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

import structlog

from events.cache import EventCache
from events.domain import Caller, Event, EventDraft, EventId, EventPatch
from events.domain.errors import DomainError, EventNotFoundError, InvalidEventIdError
from events.domain.models import DEFAULT_CREATOR_NAME
from events.services.capacity_guard import CapacityGuard
from events.services.ownership import authorize_mutation
from events.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)


class EventService:
    """Service for event hosting and RSVP operations."""

    def __init__(self, store: EventStore, cache: EventCache | None = None) -> None:
        self._store = store
        self._guard = CapacityGuard(store)
        self._cache = cache

    def _parse_event_id(self, event_id: str) -> EventId:
        try:
            return EventId.from_string(event_id)
        except (AttributeError, TypeError, ValueError):
            raise InvalidEventIdError() from None

    def _invalidate(self, event_id: EventId | None = None) -> None:
        if self._cache is not None:
            self._cache.invalidate(str(event_id) if event_id is not None else None)

    def _load(self, event_id: EventId) -> Event:
        event = self._store.get_event(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def list_events(self) -> list[Event]:
        """Return all events, newest first."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        return self._load(self._parse_event_id(event_id))

    def get_editable_event(self, caller: Caller, event_id: str) -> Event:
        """Return an event the caller is allowed to change.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            NotAuthorizedError: If the caller did not create the event.
        """
        event = self._load(self._parse_event_id(event_id))
        authorize_mutation(event, caller)
        return event

    def create_event(self, caller: Caller, payload: Mapping[str, Any]) -> Event:
        """Create an event owned by the caller, with no attendees.

        Identity and attendance keys in the payload are ignored.

        Raises:
            ValidationFailedError: If required fields are missing or malformed.
        """
        draft = EventDraft.from_payload(payload)
        if not draft.creator_name:
            draft = replace(draft, creator_name=caller.display_name or DEFAULT_CREATOR_NAME)
        event = self._store.create_event(caller.user_id, draft)
        self._invalidate()
        logger.info("event_created", event_id=str(event.id), user_id=caller.user_id.value, capacity=event.capacity.value)
        return event

    def update_event(self, caller: Caller, event_id: str, payload: Mapping[str, Any]) -> Event:
        """Apply an owner edit to an event's descriptive fields.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            NotAuthorizedError: If the caller did not create the event.
            ValidationFailedError: If an editable field carries a malformed value.
        """
        parsed_id = self.get_editable_event(caller, event_id).id
        patch = EventPatch.from_payload(payload)
        updated = self._store.update_event(parsed_id, patch)
        if updated is None:
            raise EventNotFoundError(event_id)
        self._invalidate(parsed_id)
        logger.info("event_updated", event_id=event_id, fields=sorted(patch.changes()))
        return updated

    def delete_event(self, caller: Caller, event_id: str) -> None:
        """Delete an event and every RSVP it held.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            NotAuthorizedError: If the caller did not create the event.
        """
        parsed_id = self.get_editable_event(caller, event_id).id
        if not self._store.delete_event(parsed_id):
            raise EventNotFoundError(event_id)
        self._invalidate(parsed_id)
        logger.info("event_deleted", event_id=event_id)

    def rsvp(self, caller: Caller, event_id: str) -> None:
        """Reserve a spot for the caller.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            DuplicateRsvpError: If the caller already holds a spot.
            CapacityExceededError: If the event is full.
        """
        parsed_id = self._parse_event_id(event_id)
        try:
            self._guard.admit(parsed_id, caller.user_id)
        except DomainError as exc:
            logger.info("rsvp_rejected", event_id=event_id, user_id=caller.user_id.value, reason=exc.code.value)
            raise
        self._invalidate(parsed_id)
        logger.info("rsvp_admitted", event_id=event_id, user_id=caller.user_id.value)

    def cancel_rsvp(self, caller: Caller, event_id: str) -> None:
        """Release the caller's spot. Cancelling without a spot succeeds.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed_id = self._parse_event_id(event_id)
        self._guard.release(parsed_id, caller.user_id)
        self._invalidate(parsed_id)
        logger.info("rsvp_cancelled", event_id=event_id, user_id=caller.user_id.value)
