"""Tests for the seed_events management command.

Run with: pytest tests/test_seed_events.py -v
"""

import datetime
from io import StringIO

import pytest
from django.core.management import call_command

from events import models
from events.management.commands.seed_events import SAMPLE_EVENTS


def seed() -> str:
    out = StringIO()
    call_command("seed_events", stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestSeedEvents:
    def test_creates_organizer_and_events(self, django_user_model):
        output = seed()

        organizer = django_user_model.objects.get(username="demo")
        assert organizer.check_password("password123")
        assert organizer.get_full_name() == "Demo Organizer"
        assert models.Event.objects.filter(creator=organizer).count() == len(SAMPLE_EVENTS)
        assert f"Seeded {len(SAMPLE_EVENTS)} events" in output

    def test_events_start_empty_with_organizer_name(self):
        seed()

        summit = models.Event.objects.get(title="Tech Innovation Summit 2024")
        assert summit.creator_name == "Demo Organizer"
        assert summit.capacity == 500
        assert summit.time == datetime.time(9, 0)
        assert not models.Attendance.objects.exists()

    def test_second_run_adds_nothing(self, django_user_model):
        seed()

        output = seed()

        assert django_user_model.objects.filter(username="demo").count() == 1
        assert models.Event.objects.count() == len(SAMPLE_EVENTS)
        assert "Seeded 0 events" in output

    def test_reuses_existing_organizer(self, django_user_model):
        existing = django_user_model.objects.create_user(username="demo", password="kept", first_name="Dana")

        seed()

        existing.refresh_from_db()
        assert existing.check_password("kept")
        assert set(models.Event.objects.values_list("creator_id", flat=True)) == {existing.pk}
