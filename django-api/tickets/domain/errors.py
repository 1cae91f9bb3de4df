"""Domain error codes for the tickets module."""

from enum import Enum

from events.domain.errors import DomainError
from tickets.domain.status import TicketStatus


class TicketErrorCode(Enum):
    """Domain error codes."""

    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_TICKET_ID = "INVALID_TICKET_ID"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SOLD_OUT = "SOLD_OUT"
    ALREADY_RESOLVED = "ALREADY_RESOLVED"
    STATE_CONFLICT = "STATE_CONFLICT"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    INVITEE_MISMATCH = "INVITEE_MISMATCH"


class TicketNotFoundError(DomainError):
    """Raised when a ticket is not found or not visible to the caller."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=TicketErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_id = ticket_id


class InvalidTicketIdError(DomainError):
    """Raised when a ticket ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=TicketErrorCode.INVALID_TICKET_ID,
            message="Invalid ticket ID format",
        )


class TicketValidationError(DomainError):
    """Raised when a purchase or listing request has a bad shape."""

    def __init__(self, message: str) -> None:
        super().__init__(code=TicketErrorCode.VALIDATION_ERROR, message=message)


class SoldOutError(DomainError):
    """Raised when an event cannot fit the requested tickets."""

    def __init__(self, event_id: str, requested: int, available: int) -> None:
        super().__init__(
            code=TicketErrorCode.SOLD_OUT,
            message=f"Only {max(available, 0)} ticket(s) left for this event",
        )
        self.event_id = event_id
        self.requested = requested
        self.available = available


class StateConflictError(DomainError):
    """Raised by the ticket store when a compare-and-swap loses."""

    def __init__(self, ticket_id: str, expected: TicketStatus, actual: TicketStatus) -> None:
        super().__init__(
            code=TicketErrorCode.STATE_CONFLICT,
            message="Ticket was changed by another request",
        )
        self.ticket_id = ticket_id
        self.expected = expected
        self.actual = actual


class AlreadyResolvedError(DomainError):
    """Raised when an invitation was already accepted, declined or expired."""

    def __init__(self, ticket_id: str, status: TicketStatus) -> None:
        super().__init__(
            code=TicketErrorCode.ALREADY_RESOLVED,
            message=f"This ticket has already been handled ({status.value})",
        )
        self.ticket_id = ticket_id
        self.status = status


class InvalidTransitionError(DomainError):
    """Raised for a status change missing from the transition table."""

    def __init__(self, current: TicketStatus, target: TicketStatus) -> None:
        super().__init__(
            code=TicketErrorCode.INVALID_TRANSITION,
            message=f"Cannot move a ticket from {current.value} to {target.value}",
        )
        self.current = current
        self.target = target


class InviteeMismatchError(DomainError):
    """Raised when someone other than the invitee answers an invitation."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=TicketErrorCode.INVITEE_MISMATCH,
            message="This invitation was sent to a different email address",
        )
        self.ticket_id = ticket_id
