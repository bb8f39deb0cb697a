"""Populate the database with a demo organizer and a handful of sample events."""

import typing as t

import structlog
from decouple import config
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from events import models
from events.cache import EventCache
from events.domain import Caller, UserId
from events.domain.errors import DomainError
from events.services.event_service import EventService
from events.stores.django_store import DjangoEventStore

logger = structlog.get_logger(__name__)

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password123"
DEMO_NAME = ("Demo", "Organizer")

SAMPLE_EVENTS: list[dict[str, t.Any]] = [
    {
        "title": "Tech Innovation Summit 2024",
        "description": (
            "Join us for an extraordinary day of innovation and discovery at the Tech Innovation Summit 2024. "
            "This premier event brings together industry leaders, visionary entrepreneurs, and tech "
            "enthusiasts from around the globe."
        ),
        "date": "2024-01-15",
        "time": "09:00",
        "location": "San Francisco Convention Center",
        "address": "747 Howard Street, San Francisco, CA 94103",
        "capacity": 500,
        "image_url": "https://images.unsplash.com/photo-1540575467063-178a50c2df87?w=800&auto=format&fit=crop&q=60",
    },
    {
        "title": "Creative Design Workshop",
        "description": (
            "Hands-on workshop exploring modern design principles and tools with expert mentors. "
            "Learn UI/UX design, branding, and visual communication strategies."
        ),
        "date": "2024-01-20",
        "time": "14:00",
        "location": "Design Hub NYC",
        "address": "123 Creative Street, New York, NY 10001",
        "capacity": 50,
        "image_url": "https://images.unsplash.com/photo-1475721027785-f74eccf877e2?w=800&auto=format&fit=crop&q=60",
    },
    {
        "title": "Startup Networking Night",
        "description": (
            "Connect with fellow entrepreneurs, investors, and innovators in a relaxed atmosphere. "
            "Great opportunity to pitch your ideas and find potential partners."
        ),
        "date": "2024-01-25",
        "time": "18:00",
        "location": "The Innovation Loft, Austin",
        "address": "456 Startup Lane, Austin, TX 78701",
        "capacity": 150,
        "image_url": "https://images.unsplash.com/photo-1511795409834-ef04bbd61622?w=800&auto=format&fit=crop&q=60",
    },
    {
        "title": "Photography Masterclass",
        "description": (
            "Learn advanced photography techniques from award-winning photographers in this intensive "
            "workshop. Bring your camera and get hands-on experience."
        ),
        "date": "2024-02-01",
        "time": "10:00",
        "location": "Art Center Los Angeles",
        "address": "789 Art Blvd, Los Angeles, CA 90001",
        "capacity": 30,
        "image_url": "https://images.unsplash.com/photo-1516035069371-29a1b244cc32?w=800&auto=format&fit=crop&q=60",
    },
    {
        "title": "Music Festival Preview",
        "description": (
            "Get an exclusive preview of this year's biggest music festival with live performances "
            "from headlining artists."
        ),
        "date": "2024-02-10",
        "time": "19:00",
        "location": "Downtown Miami Arena",
        "address": "321 Music Way, Miami, FL 33101",
        "capacity": 1000,
        "image_url": "https://images.unsplash.com/photo-1459749411175-04bf5292ceea?w=800&auto=format&fit=crop&q=60",
    },
]


class Command(BaseCommand):
    help = "Seeds the database with a demo organizer and sample events."

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        """Handle."""
        service = EventService(DjangoEventStore(), cache=EventCache())

        with transaction.atomic():
            organizer = self._get_or_create_organizer()
            caller = Caller(user_id=UserId(organizer.pk), display_name=organizer.get_full_name())
            hosted = set(models.Event.objects.filter(creator=organizer).values_list("title", flat=True))

            created = 0
            for payload in SAMPLE_EVENTS:
                if payload["title"] in hosted:
                    continue
                try:
                    service.create_event(caller, payload)
                except DomainError as exc:
                    raise CommandError(f"Could not seed '{payload['title']}': {exc.message}") from exc
                created += 1

        logger.info("events_seeded", organizer_id=organizer.pk, created=created)
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} events for '{organizer.get_username()}'."))

    def _get_or_create_organizer(self) -> t.Any:
        username = config("DEMO_ORGANIZER_USERNAME", default=DEMO_USERNAME)
        user_model = get_user_model()

        organizer = user_model.objects.filter(username=username).first()
        if organizer is not None:
            self.stdout.write(self.style.WARNING(f"Using existing demo organizer '{username}'."))
            return organizer

        password = config("DEMO_ORGANIZER_PASSWORD", default=DEMO_PASSWORD)
        first_name, last_name = DEMO_NAME
        organizer = user_model.objects.create_user(
            username=username,
            email=DEMO_EMAIL,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        self.stdout.write(self.style.SUCCESS(f"Demo organizer '{username}' created."))
        if password == DEMO_PASSWORD:
            self.stdout.write(self.style.WARNING("The default demo password is being used. Please change it."))
        return organizer
