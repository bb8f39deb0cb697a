"""Pytest configuration and shared fixtures."""

import datetime
import itertools
from typing import Any

import pytest
from rest_framework.test import APIClient

from events.domain import Caller, UserId
from events.services.event_service import EventService
from events.stores.memory_store import InMemoryEventStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def event_payload() -> dict[str, Any]:
    return {
        "title": "Rooftop Jazz Night",
        "description": "Live quartet and sunset views.",
        "date": "2026-11-20",
        "time": "19:30",
        "location": "Skyline Terrace",
        "address": "12 Harbour Street",
        "image_url": "https://example.com/jazz.jpg",
        "capacity": 3,
    }


@pytest.fixture
def ticking_clock():
    """A clock that advances one second per call."""
    start = datetime.datetime(2026, 1, 1, tzinfo=datetime.UTC)
    ticks = itertools.count()
    return lambda: start + datetime.timedelta(seconds=next(ticks))


@pytest.fixture
def memory_store(ticking_clock) -> InMemoryEventStore:
    return InMemoryEventStore(clock=ticking_clock)


@pytest.fixture
def service(memory_store: InMemoryEventStore) -> EventService:
    return EventService(memory_store)


@pytest.fixture
def owner() -> Caller:
    return Caller(user_id=UserId(1), display_name="Olivia Owner")


@pytest.fixture
def guest() -> Caller:
    return Caller(user_id=UserId(2), display_name="Gus Guest")
