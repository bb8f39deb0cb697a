"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import datetime

import pytest
from django.core.cache import cache

from events import models
from events.cache import LIST_KEY, EventCache, detail_key


@pytest.fixture
def event(django_user_model) -> models.Event:
    creator = django_user_model.objects.create_user(username="host", password="pw")
    return models.Event.objects.create(
        creator=creator,
        creator_name="Host",
        title="Board Games",
        description="Bring your favourite",
        date=datetime.date(2026, 5, 2),
        time=datetime.time(18, 0),
        location="Library",
        image_url="https://example.com/games.jpg",
        capacity=4,
    )


def prime(event_id: str) -> None:
    cache.set(LIST_KEY, [{"id": event_id}])
    cache.set(detail_key(event_id), {"id": event_id})


class TestEventCache:
    def test_round_trip_and_invalidate(self):
        events_cache = EventCache(timeout=30)
        events_cache.set_list([{"id": "a"}])
        events_cache.set_detail("a", {"id": "a"})

        assert events_cache.get_list() == [{"id": "a"}]
        assert events_cache.get_detail("a") == {"id": "a"}

        events_cache.invalidate("a")

        assert events_cache.get_list() is None
        assert events_cache.get_detail("a") is None

    def test_invalidate_without_id_only_drops_list(self):
        events_cache = EventCache(timeout=30)
        events_cache.set_list([{"id": "a"}])
        events_cache.set_detail("a", {"id": "a"})

        events_cache.invalidate()

        assert events_cache.get_list() is None
        assert events_cache.get_detail("a") == {"id": "a"}


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_event_save_invalidates_list_and_detail_cache(self, event):
        prime(str(event.pk))

        event.title = "Board Games Night"
        event.save()

        assert cache.get(LIST_KEY) is None
        assert cache.get(detail_key(str(event.pk))) is None

    def test_event_delete_invalidates_cache(self, event):
        event_id = str(event.pk)
        prime(event_id)

        event.delete()

        assert cache.get(LIST_KEY) is None
        assert cache.get(detail_key(event_id)) is None

    def test_attendance_save_invalidates_event_cache(self, event, django_user_model):
        guest = django_user_model.objects.create_user(username="guest", password="pw")
        prime(str(event.pk))

        models.Attendance.objects.create(event=event, user=guest)

        assert cache.get(LIST_KEY) is None
        assert cache.get(detail_key(str(event.pk))) is None

    def test_attendance_delete_invalidates_event_cache(self, event, django_user_model):
        guest = django_user_model.objects.create_user(username="guest", password="pw")
        attendance = models.Attendance.objects.create(event=event, user=guest)
        prime(str(event.pk))

        attendance.delete()

        assert cache.get(detail_key(str(event.pk))) is None
