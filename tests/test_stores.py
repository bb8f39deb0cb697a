"""Contract tests for the EventStore implementations.

Run with: pytest tests/test_stores.py -v
"""

import datetime
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from unittest import mock

import pytest
from django.db import OperationalError, connection

from events import models
from events.domain import EventDraft, EventId, EventPatch, UserId
from events.domain.errors import StoreUnavailableError
from events.stores import get_event_store
from events.stores.django_store import DjangoEventStore
from events.stores.interfaces import AdmissionOutcome
from events.stores.memory_store import InMemoryEventStore


@pytest.fixture
def draft(event_payload) -> EventDraft:
    return EventDraft.from_payload({**event_payload, "capacity": 2, "creator_name": "Olivia"})


@pytest.fixture
def users(django_user_model):
    return [UserId(django_user_model.objects.create_user(username=f"user{i}", password="pw").pk) for i in range(4)]


@pytest.fixture(params=["memory", "django"])
def store(request):
    if request.param == "memory":
        return InMemoryEventStore()
    return DjangoEventStore()


@pytest.mark.django_db
class TestStoreContract:
    """Behaviour every store must share."""

    def test_create_starts_empty(self, store, draft, users):
        event = store.create_event(users[0], draft)

        assert event.creator_id == users[0]
        assert event.attendees == frozenset()
        assert store.get_event(event.id) == event

    def test_get_missing_event(self, store):
        assert store.get_event(EventId(uuid.uuid4())) is None

    def test_admission_outcomes(self, store, draft, users):
        event = store.create_event(users[0], draft)

        assert store.try_add_attendee(event.id, users[1]) is AdmissionOutcome.ADMITTED
        assert store.try_add_attendee(event.id, users[1]) is AdmissionOutcome.ALREADY_ATTENDING
        assert store.try_add_attendee(event.id, users[2]) is AdmissionOutcome.ADMITTED
        assert store.try_add_attendee(event.id, users[3]) is AdmissionOutcome.FULL
        assert store.try_add_attendee(event.id, users[2]) is AdmissionOutcome.ALREADY_ATTENDING
        assert store.get_event(event.id).attendees == frozenset({users[1], users[2]})

    def test_admission_to_missing_event(self, store, users):
        assert store.try_add_attendee(EventId(uuid.uuid4()), users[1]) is AdmissionOutcome.NOT_FOUND

    def test_remove_reopens_a_spot(self, store, draft, users):
        event = store.create_event(users[0], draft)
        store.try_add_attendee(event.id, users[1])
        store.try_add_attendee(event.id, users[2])

        assert store.remove_attendee(event.id, users[1]) is True
        assert store.try_add_attendee(event.id, users[3]) is AdmissionOutcome.ADMITTED
        assert store.get_event(event.id).attendees == frozenset({users[2], users[3]})

    def test_remove_absent_attendee_is_noop(self, store, draft, users):
        event = store.create_event(users[0], draft)

        assert store.remove_attendee(event.id, users[1]) is True
        assert store.get_event(event.id).attendees == frozenset()

    def test_remove_from_missing_event(self, store, users):
        assert store.remove_attendee(EventId(uuid.uuid4()), users[1]) is False

    def test_update_merges_patch(self, store, draft, users):
        event = store.create_event(users[0], draft)
        store.try_add_attendee(event.id, users[1])

        updated = store.update_event(event.id, EventPatch(title="New title", time=datetime.time(21, 0)))

        assert updated.title == "New title"
        assert updated.time == datetime.time(21, 0)
        assert updated.description == event.description
        assert updated.attendees == frozenset({users[1]})
        assert updated.creator_id == users[0]

    def test_update_missing_event(self, store):
        assert store.update_event(EventId(uuid.uuid4()), EventPatch(title="x")) is None

    def test_delete(self, store, draft, users):
        event = store.create_event(users[0], draft)
        store.try_add_attendee(event.id, users[1])

        assert store.delete_event(event.id) is True
        assert store.get_event(event.id) is None
        assert store.delete_event(event.id) is False
        assert store.try_add_attendee(event.id, users[2]) is AdmissionOutcome.NOT_FOUND


@pytest.mark.django_db
class TestDjangoEventStore:
    def test_list_events_newest_first(self, draft, users):
        store = DjangoEventStore()
        older = store.create_event(users[0], draft)
        newer = store.create_event(users[0], draft)
        base = datetime.datetime(2026, 3, 1, tzinfo=datetime.UTC)
        models.Event.objects.filter(pk=older.id.value).update(created_at=base)
        models.Event.objects.filter(pk=newer.id.value).update(created_at=base + datetime.timedelta(hours=1))

        assert [e.id for e in store.list_events()] == [newer.id, older.id]

    def test_list_events_ties_ordered_by_id(self, draft, users):
        store = DjangoEventStore()
        created = [store.create_event(users[0], draft) for _ in range(3)]
        models.Event.objects.update(created_at=datetime.datetime(2026, 3, 1, tzinfo=datetime.UTC))

        assert [e.id for e in store.list_events()] == sorted((e.id for e in created), key=lambda i: i.value)

    def test_delete_cascades_attendances(self, draft, users):
        store = DjangoEventStore()
        event = store.create_event(users[0], draft)
        store.try_add_attendee(event.id, users[1])

        store.delete_event(event.id)

        assert not models.Attendance.objects.exists()

    def test_database_failure_is_translated(self, draft, users):
        store = DjangoEventStore()

        with mock.patch.object(models.Event.objects, "create", side_effect=OperationalError("connection lost")):
            with pytest.raises(StoreUnavailableError):
                store.create_event(users[0], draft)

        assert not models.Event.objects.exists()


def race_for_spots(store: DjangoEventStore, event_id: EventId, users: list[UserId]) -> list[AdmissionOutcome]:
    """Release one admission per user from a barrier, each on its own connection."""
    barrier = threading.Barrier(len(users))

    def attempt(user_id: UserId) -> AdmissionOutcome:
        try:
            barrier.wait()
            return store.try_add_attendee(event_id, user_id)
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(users)) as executor:
        return list(executor.map(attempt, users))


@pytest.mark.django_db(transaction=True)
class TestDjangoEventStoreConcurrency:
    """Admissions from concurrent database connections."""

    @pytest.fixture
    def crowd(self, django_user_model) -> list[UserId]:
        return [
            UserId(django_user_model.objects.create_user(username=f"fan{i}", password="pw").pk) for i in range(12)
        ]

    def test_capacity_never_exceeded(self, draft, crowd):
        store = DjangoEventStore()
        event = store.create_event(crowd[0], draft)

        results = race_for_spots(store, event.id, crowd[1:])

        assert results.count(AdmissionOutcome.ADMITTED) == 2
        assert results.count(AdmissionOutcome.FULL) == 9
        assert models.Attendance.objects.filter(event_id=event.id.value).count() == 2

    def test_same_user_admitted_once(self, draft, crowd):
        store = DjangoEventStore()
        event = store.create_event(crowd[0], draft)

        results = race_for_spots(store, event.id, [crowd[1]] * 8)

        assert results.count(AdmissionOutcome.ADMITTED) == 1
        assert results.count(AdmissionOutcome.ALREADY_ATTENDING) == 7
        assert store.get_event(event.id).attendees == frozenset({crowd[1]})


class TestInMemoryEventStore:
    def test_list_events_newest_first(self, memory_store, draft):
        first = memory_store.create_event(UserId(1), draft)
        second = memory_store.create_event(UserId(1), draft)

        assert [e.id for e in memory_store.list_events()] == [second.id, first.id]

    def test_list_events_ties_ordered_by_id(self, draft):
        frozen = datetime.datetime(2026, 3, 1, tzinfo=datetime.UTC)
        store = InMemoryEventStore(clock=lambda: frozen)
        created = [store.create_event(UserId(1), draft) for _ in range(3)]

        assert [e.id for e in store.list_events()] == sorted((e.id for e in created), key=str)

    def test_each_event_gets_its_own_lock(self, memory_store, draft):
        first = memory_store.create_event(UserId(1), draft)
        second = memory_store.create_event(UserId(1), draft)

        assert memory_store._lock_for(EventId(uuid.uuid4())) is None
        assert memory_store._lock_for(first.id) is not memory_store._lock_for(second.id)

        memory_store.delete_event(first.id)

        assert memory_store._lock_for(first.id) is None


class TestStoreFactory:
    def test_loads_configured_store(self, settings):
        settings.EVENT_STORE = "events.stores.memory_store.InMemoryEventStore"

        store = get_event_store()

        assert isinstance(store, InMemoryEventStore)
        assert get_event_store() is store
