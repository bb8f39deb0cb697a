import functools

from django.conf import settings
from django.utils.module_loading import import_string

from events.stores.interfaces import AdmissionOutcome, EventStore

__all__ = ["AdmissionOutcome", "EventStore", "get_event_store"]


@functools.cache
def _load_store(path: str) -> EventStore:
    store_class = import_string(path)
    return store_class()


def get_event_store() -> EventStore:
    """Return the process-wide store configured by settings.EVENT_STORE."""
    return _load_store(settings.EVENT_STORE)
