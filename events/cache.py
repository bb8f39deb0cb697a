"""Read-through cache for serialized event payloads.

Holds what the list and detail endpoints return. Any write to an event
drops its detail key together with the list key. Admission decisions never
read from here.
"""

from typing import Any

from django.conf import settings
from django.core.cache import BaseCache, cache

LIST_KEY = "events:list"


def detail_key(event_id: str) -> str:
    return f"events:{event_id}"


class EventCache:
    """Thin wrapper over the Django cache with the events key layout."""

    def __init__(self, backend: BaseCache | None = None, timeout: int | None = None) -> None:
        self._backend = backend if backend is not None else cache
        self._timeout = timeout if timeout is not None else settings.EVENT_CACHE_TIMEOUT

    def get_list(self) -> list[dict[str, Any]] | None:
        return self._backend.get(LIST_KEY)

    def set_list(self, payload: list[dict[str, Any]]) -> None:
        self._backend.set(LIST_KEY, payload, self._timeout)

    def get_detail(self, event_id: str) -> dict[str, Any] | None:
        return self._backend.get(detail_key(event_id))

    def set_detail(self, event_id: str, payload: dict[str, Any]) -> None:
        self._backend.set(detail_key(event_id), payload, self._timeout)

    def invalidate(self, event_id: str | None = None) -> None:
        keys = [LIST_KEY]
        if event_id is not None:
            keys.append(detail_key(event_id))
        self._backend.delete_many(keys)
