"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from enum import Enum

from events.domain import Event, EventDraft, EventId, EventPatch, UserId


class AdmissionOutcome(Enum):
    """Terminal result of a single admission attempt."""

    ADMITTED = "ADMITTED"
    ALREADY_ATTENDING = "ALREADY_ATTENDING"
    FULL = "FULL"
    NOT_FOUND = "NOT_FOUND"


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending, then by id."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def create_event(self, creator_id: UserId, draft: EventDraft) -> Event:
        """Persist a new event owned by `creator_id` with no attendees."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, patch: EventPatch) -> Event | None:
        """Merge the patch into the event, or return None if not found.

        Performs no authorization.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete the event and its attendances. False if it did not exist."""
        ...

    @abstractmethod
    def try_add_attendee(self, event_id: EventId, user_id: UserId) -> AdmissionOutcome:
        """Add `user_id` to the attendees if absent and a spot is free.

        The membership check, the capacity check and the write happen as one
        indivisible step with respect to every other try_add_attendee and
        remove_attendee call on the same event. ALREADY_ATTENDING takes
        precedence over FULL.
        """
        ...

    @abstractmethod
    def remove_attendee(self, event_id: EventId, user_id: UserId) -> bool:
        """Remove `user_id` from the attendees if present.

        Returns False only when the event does not exist; removing an absent
        attendee is a successful no-op.
        """
        ...
