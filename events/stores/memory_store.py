"""In-process implementation of the EventStore.

Each event has its own mutex, so admissions on one event never wait on
another event. Stored values are frozen domain objects; every mutation
swaps in a new snapshot. Lock order is event lock, then registry lock.
"""

from __future__ import annotations

import datetime
import threading
import uuid
from collections.abc import Callable
from dataclasses import replace

from events.domain import Event, EventDraft, EventId, EventPatch, UserId
from events.stores.interfaces import AdmissionOutcome, EventStore


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class InMemoryEventStore(EventStore):
    """Dictionary-backed event store guarded by per-event locks."""

    def __init__(self, clock: Callable[[], datetime.datetime] = _utcnow) -> None:
        self._clock = clock
        self._events: dict[EventId, Event] = {}
        self._locks: dict[EventId, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, event_id: EventId) -> threading.Lock | None:
        with self._registry_lock:
            return self._locks.get(event_id)

    def list_events(self) -> list[Event]:
        with self._registry_lock:
            events = list(self._events.values())
        events.sort(key=lambda event: str(event.id))
        events.sort(key=lambda event: event.created_at, reverse=True)
        return events

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def create_event(self, creator_id: UserId, draft: EventDraft) -> Event:
        event = Event(
            id=EventId(uuid.uuid4()),
            creator_id=creator_id,
            creator_name=draft.creator_name,
            title=draft.title,
            description=draft.description,
            date=draft.date,
            time=draft.time,
            location=draft.location,
            address=draft.address,
            image_url=draft.image_url,
            capacity=draft.capacity,
            created_at=self._clock(),
        )
        with self._registry_lock:
            self._locks[event.id] = threading.Lock()
            self._events[event.id] = event
        return event

    def update_event(self, event_id: EventId, patch: EventPatch) -> Event | None:
        lock = self._lock_for(event_id)
        if lock is None:
            return None
        with lock:
            event = self._events.get(event_id)
            if event is None:
                return None
            updated = event.with_changes(patch)
            self._events[event_id] = updated
            return updated

    def delete_event(self, event_id: EventId) -> bool:
        lock = self._lock_for(event_id)
        if lock is None:
            return False
        with lock, self._registry_lock:
            self._locks.pop(event_id, None)
            return self._events.pop(event_id, None) is not None

    def try_add_attendee(self, event_id: EventId, user_id: UserId) -> AdmissionOutcome:
        lock = self._lock_for(event_id)
        if lock is None:
            return AdmissionOutcome.NOT_FOUND
        with lock:
            event = self._events.get(event_id)
            if event is None:
                return AdmissionOutcome.NOT_FOUND
            if event.is_attending(user_id):
                return AdmissionOutcome.ALREADY_ATTENDING
            if event.is_full:
                return AdmissionOutcome.FULL
            self._events[event_id] = replace(event, attendees=event.attendees | {user_id})
            return AdmissionOutcome.ADMITTED

    def remove_attendee(self, event_id: EventId, user_id: UserId) -> bool:
        lock = self._lock_for(event_id)
        if lock is None:
            return False
        with lock:
            event = self._events.get(event_id)
            if event is None:
                return False
            if event.is_attending(user_id):
                self._events[event_id] = replace(event, attendees=event.attendees - {user_id})
            return True
