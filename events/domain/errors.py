"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    DUPLICATE_RSVP = "DUPLICATE_RSVP"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class ValidationFailedError(DomainError):
    """Raised when an event payload is malformed or incomplete."""

    def __init__(self, details: dict[str, Any]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Invalid event data",
        )
        self.details = details


class NotAuthorizedError(DomainError):
    """Raised when a caller attempts a creator-only mutation on someone else's event."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHORIZED,
            message="Not authorized",
        )
        self.event_id = event_id


class DuplicateRsvpError(DomainError):
    """Raised when the caller is already attending the event."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_RSVP,
            message="Already attending",
        )
        self.event_id = event_id


class CapacityExceededError(DomainError):
    """Raised when the event has no free spots left."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Event full",
        )
        self.event_id = event_id


class StoreUnavailableError(DomainError):
    """Raised when the persistence substrate fails; nothing was changed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Service temporarily unavailable",
        )
