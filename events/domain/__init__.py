from events.domain.models import Caller, Event, EventDraft, EventPatch
from events.domain.value_objects import Capacity, EventId, UserId

__all__ = [
    "Caller",
    "Event",
    "EventDraft",
    "EventPatch",
    "EventId",
    "UserId",
    "Capacity",
]
