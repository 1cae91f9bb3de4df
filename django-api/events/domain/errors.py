"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    NOT_EVENT_OWNER = "NOT_EVENT_OWNER"
    EVENT_LOCKED = "EVENT_LOCKED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    LEDGER_INCONSISTENT = "LEDGER_INCONSISTENT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: Enum
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


class NotEventOwnerError(DomainError):
    """Raised when a user manages an event they do not own."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_EVENT_OWNER,
            message="Only the organizer of this event can do that",
        )
        self.event_id = event_id


class EventLockedError(DomainError):
    """Raised when a change is blocked because tickets have been issued."""

    def __init__(self, event_id: str, message: str) -> None:
        super().__init__(code=ErrorCode.EVENT_LOCKED, message=message)
        self.event_id = event_id


class EventValidationError(DomainError):
    """Raised when organizer input breaks an event rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class CapacityExceededError(DomainError):
    """Raised by the capacity ledger when a reservation does not fit."""

    def __init__(self, event_id: str, requested: int, available: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Not enough tickets left for this event",
        )
        self.event_id = event_id
        self.requested = requested
        self.available = available


class LedgerInconsistencyError(DomainError):
    """Raised when a release or confirm exceeds the seats held."""

    def __init__(self, event_id: str, operation: str, count: int) -> None:
        super().__init__(
            code=ErrorCode.LEDGER_INCONSISTENT,
            message="Ticket accounting is inconsistent",
        )
        self.event_id = event_id
        self.operation = operation
        self.count = count


class StoreUnavailableError(DomainError):
    """Raised when the persistence layer fails."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Service temporarily unavailable, please try again",
        )
        self.operation = operation
