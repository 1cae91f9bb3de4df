from tickets.domain.models import AuditEntry, Ticket, TicketWithEvent
from tickets.domain.status import TicketStatus
from tickets.domain.value_objects import InviteeEmail, TicketId, TicketScope

__all__ = [
    "AuditEntry",
    "Ticket",
    "TicketWithEvent",
    "TicketStatus",
    "InviteeEmail",
    "TicketId",
    "TicketScope",
]
