from events.cache import EventCache
from events.services.event_service import EventService
from events.stores import get_event_store


def get_event_service() -> EventService:
    """Build the service over the configured store and the default cache."""
    return EventService(get_event_store(), cache=EventCache())
