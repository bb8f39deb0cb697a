"""Capacity guard: turns a raw admission attempt into a caller-facing outcome.

The store's atomic primitive is the only authority on whether a user gets a
spot. The guard never inspects a separately fetched event before calling it.
"""

from typing import assert_never

from events.domain import EventId, UserId
from events.domain.errors import CapacityExceededError, DuplicateRsvpError, EventNotFoundError
from events.stores.interfaces import AdmissionOutcome, EventStore


class CapacityGuard:
    """Admits and releases attendees through a single store call each."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def admit(self, event_id: EventId, user_id: UserId) -> None:
        """Reserve a spot for `user_id`.

        Raises:
            EventNotFoundError: If the event does not exist.
            DuplicateRsvpError: If the user already holds a spot.
            CapacityExceededError: If no spot is free.
        """
        outcome = self._store.try_add_attendee(event_id, user_id)
        match outcome:
            case AdmissionOutcome.ADMITTED:
                return
            case AdmissionOutcome.NOT_FOUND:
                raise EventNotFoundError(str(event_id))
            case AdmissionOutcome.ALREADY_ATTENDING:
                raise DuplicateRsvpError(str(event_id))
            case AdmissionOutcome.FULL:
                raise CapacityExceededError(str(event_id))
            case _:
                assert_never(outcome)

    def release(self, event_id: EventId, user_id: UserId) -> None:
        """Give up the spot held by `user_id`, if any.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        if not self._store.remove_attendee(event_id, user_id):
            raise EventNotFoundError(str(event_id))
