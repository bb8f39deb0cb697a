"""Django ORM implementation of the EventStore.

Attendance changes lock the event row with SELECT ... FOR UPDATE for the
length of one transaction, which serializes admissions per event while
leaving other events untouched. On SQLite the row lock is a no-op and the
IMMEDIATE transaction mode configured in settings provides the same
exclusion.
"""

import functools
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import structlog
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Prefetch, QuerySet

from events import models
from events.domain import Capacity, Event, EventDraft, EventId, EventPatch, UserId
from events.domain.errors import StoreUnavailableError
from events.stores.interfaces import AdmissionOutcome, EventStore

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _translate_database_errors(method: Callable[P, R]) -> Callable[P, R]:
    """Surface substrate failures as StoreUnavailableError."""

    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("event_store_failure", operation=method.__name__)
            raise StoreUnavailableError() from exc

    return wrapper


def _to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        creator_id=UserId(row.creator_id),
        creator_name=row.creator_name,
        title=row.title,
        description=row.description,
        date=row.date,
        time=row.time,
        location=row.location,
        address=row.address,
        image_url=row.image_url,
        capacity=Capacity(row.capacity),
        created_at=row.created_at,
        attendees=frozenset(UserId(attendance.user_id) for attendance in row.attendances.all()),
    )


class DjangoEventStore(EventStore):
    """Relational event store using the Django ORM."""

    def _queryset(self) -> QuerySet[models.Event]:
        return models.Event.objects.prefetch_related(
            Prefetch("attendances", queryset=models.Attendance.objects.only("event", "user"))
        )

    def _locked_capacity(self, event_id: EventId) -> int | None:
        return (
            models.Event.objects.select_for_update()
            .filter(pk=event_id.value)
            .values_list("capacity", flat=True)
            .first()
        )

    @_translate_database_errors
    def list_events(self) -> list[Event]:
        return [_to_domain(row) for row in self._queryset().order_by("-created_at", "id")]

    @_translate_database_errors
    def get_event(self, event_id: EventId) -> Event | None:
        row = self._queryset().filter(pk=event_id.value).first()
        return _to_domain(row) if row is not None else None

    @_translate_database_errors
    def create_event(self, creator_id: UserId, draft: EventDraft) -> Event:
        row = models.Event.objects.create(
            creator_id=creator_id.value,
            creator_name=draft.creator_name,
            title=draft.title,
            description=draft.description,
            date=draft.date,
            time=draft.time,
            location=draft.location,
            address=draft.address,
            image_url=draft.image_url,
            capacity=draft.capacity.value,
        )
        return _to_domain(row)

    @_translate_database_errors
    def update_event(self, event_id: EventId, patch: EventPatch) -> Event | None:
        changes = patch.changes()
        with transaction.atomic():
            row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
            if row is None:
                return None
            if changes:
                for name, value in changes.items():
                    setattr(row, name, value)
                row.save(update_fields=[*changes, "updated_at"])
        return self.get_event(event_id)

    @_translate_database_errors
    def delete_event(self, event_id: EventId) -> bool:
        with transaction.atomic():
            if self._locked_capacity(event_id) is None:
                return False
            deleted, _ = models.Event.objects.filter(pk=event_id.value).delete()
        return deleted > 0

    @_translate_database_errors
    def try_add_attendee(self, event_id: EventId, user_id: UserId) -> AdmissionOutcome:
        with transaction.atomic():
            capacity = self._locked_capacity(event_id)
            if capacity is None:
                return AdmissionOutcome.NOT_FOUND

            attendances = models.Attendance.objects.filter(event_id=event_id.value)
            if attendances.filter(user_id=user_id.value).exists():
                return AdmissionOutcome.ALREADY_ATTENDING
            if not Capacity(capacity).admits(attendances.count()):
                return AdmissionOutcome.FULL

            try:
                with transaction.atomic():
                    models.Attendance.objects.create(event_id=event_id.value, user_id=user_id.value)
            except IntegrityError:
                if not attendances.filter(user_id=user_id.value).exists():
                    raise
                return AdmissionOutcome.ALREADY_ATTENDING
        return AdmissionOutcome.ADMITTED

    @_translate_database_errors
    def remove_attendee(self, event_id: EventId, user_id: UserId) -> bool:
        with transaction.atomic():
            if self._locked_capacity(event_id) is None:
                return False
            models.Attendance.objects.filter(event_id=event_id.value, user_id=user_id.value).delete()
        return True
