"""Domain models representing persisted state and caller input.

These are pure domain objects with no HTTP concerns.
Django ORM models are in events/models.py (persistence layer).
"""

import datetime
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, Self

from events.domain.errors import ValidationFailedError
from events.domain.value_objects import Capacity, EventId, UserId

DEFAULT_CREATOR_NAME = "Organizer"


@dataclass(frozen=True)
class Caller:
    """Authenticated identity on whose behalf an operation runs."""

    user_id: UserId
    display_name: str | None = None


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    creator_id: UserId
    creator_name: str
    title: str
    description: str
    date: datetime.date
    time: datetime.time
    location: str
    address: str
    image_url: str
    capacity: Capacity
    created_at: datetime.datetime
    attendees: frozenset[UserId] = field(default_factory=frozenset)

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)

    @property
    def spots_left(self) -> int:
        return max(self.capacity.value - self.attendee_count, 0)

    @property
    def is_full(self) -> bool:
        return not self.capacity.admits(self.attendee_count)

    def is_attending(self, user_id: UserId) -> bool:
        return user_id in self.attendees

    def with_changes(self, patch: "EventPatch") -> Self:
        """Return a copy with the patch's set fields merged in."""
        return replace(self, **patch.changes())


def _text(value: Any, *, allow_blank: bool = False) -> str:
    if not isinstance(value, str):
        raise ValueError("Must be a string")
    value = value.strip()
    if not value and not allow_blank:
        raise ValueError("This field may not be blank")
    return value


def _optional_text(value: Any) -> str:
    return "" if value is None else _text(value, allow_blank=True)


def _date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return datetime.date.fromisoformat(value)
    raise ValueError("Must be a date in YYYY-MM-DD format")


def _time(value: Any) -> datetime.time:
    if isinstance(value, str):
        value = datetime.time.fromisoformat(value)
    if not isinstance(value, datetime.time):
        raise ValueError("Must be a time in HH:MM format")
    if value.second or value.microsecond:
        raise ValueError("Must be a time in HH:MM format, without seconds")
    return value


def _capacity(value: Any) -> Capacity:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    return Capacity(value)


Parser = Callable[[Any], Any]

_REQUIRED: dict[str, Parser] = {
    "title": _text,
    "description": _text,
    "date": _date,
    "time": _time,
    "location": _text,
    "image_url": _text,
    "capacity": _capacity,
}

_OPTIONAL: dict[str, Parser] = {
    "address": _optional_text,
    "creator_name": _optional_text,
}


def _parse(payload: Mapping[str, Any], parsers: Mapping[str, Parser], *, required: bool) -> dict[str, Any]:
    values: dict[str, Any] = {}
    errors: dict[str, str] = {}
    for name, parse in parsers.items():
        if name not in payload:
            if required:
                errors[name] = "This field is required"
            continue
        try:
            values[name] = parse(payload[name])
        except (TypeError, ValueError) as exc:
            errors[name] = str(exc)
    if errors:
        raise ValidationFailedError(errors)
    return values


@dataclass(frozen=True)
class EventDraft:
    """Validated payload for a new event.

    Carries no identity or attendance: the creator comes from the caller and
    every event starts with an empty attendee set.
    """

    title: str
    description: str
    date: datetime.date
    time: datetime.time
    location: str
    image_url: str
    capacity: Capacity
    address: str = ""
    creator_name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Self:
        """Build a draft from loosely typed input.

        Raises:
            ValidationFailedError: If a required field is missing or malformed.
        """
        values = _parse(payload, _REQUIRED, required=True) | _parse(payload, _OPTIONAL, required=False)
        return cls(**values)


@dataclass(frozen=True)
class EventPatch:
    """Owner edit of descriptive fields.

    Only the fields declared here can ever be changed after creation;
    creator, capacity and attendance are not representable.
    """

    title: str | None = None
    description: str | None = None
    date: datetime.date | None = None
    time: datetime.time | None = None
    location: str | None = None
    address: str | None = None
    image_url: str | None = None
    creator_name: str | None = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Self:
        """Build a patch from loosely typed input, ignoring unknown keys.

        Raises:
            ValidationFailedError: If an allowed field carries a malformed value.
        """
        parsers = {name: parse for name, parse in (_REQUIRED | _OPTIONAL).items() if name in cls.field_names()}
        return cls(**_parse(payload, parsers, required=False))

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names() if getattr(self, name) is not None}

    def is_empty(self) -> bool:
        return not self.changes()
