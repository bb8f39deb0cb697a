"""Ownership guard for creator-only mutations."""

from events.domain import Caller, Event
from events.domain.errors import NotAuthorizedError


def authorize_mutation(event: Event, caller: Caller) -> None:
    """Raise NotAuthorizedError unless the caller created the event."""
    if event.creator_id != caller.user_id:
        raise NotAuthorizedError(str(event.id))
