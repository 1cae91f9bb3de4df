"""Domain models representing persisted ticket state.

Django ORM models are in tickets/models.py (persistence layer).
"""

import hashlib
from dataclasses import dataclass
from datetime import datetime

from events.domain import Event, EventId
from tickets.domain.status import CLOSED, TicketStatus
from tickets.domain.value_objects import InviteeEmail, TicketId, TicketScope


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket.

    ``holder_id`` stays None until an invitation is accepted; until then
    ``invitee_email`` identifies who the ticket is for.
    """

    id: TicketId
    event_id: EventId
    purchaser_id: int
    holder_id: int | None
    invitee_email: InviteeEmail | None
    status: TicketStatus
    created_at: datetime
    expires_at: datetime | None = None
    audit_hash: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is TicketStatus.PENDING_ACCEPTANCE

    def is_expired(self, now: datetime) -> bool:
        """True when a pending invitation's deadline has passed."""
        return self.is_pending and self.expires_at is not None and now >= self.expires_at

    def is_invitee(self, email: str | None) -> bool:
        return self.invitee_email is not None and self.invitee_email.matches(email)

    def is_visible_to(self, user_id: int, email: str | None) -> bool:
        return user_id in (self.holder_id, self.purchaser_id) or self.is_invitee(email)


@dataclass(frozen=True)
class AuditEntry:
    """One recorded status change. ``old_status`` is None for creation."""

    ticket_id: TicketId
    old_status: TicketStatus | None
    new_status: TicketStatus
    actor: str
    created_at: datetime


@dataclass(frozen=True)
class TicketWithEvent:
    """A ticket together with the event summary the client renders."""

    ticket: Ticket
    event: Event


def compute_audit_hash(
    ticket_id: TicketId, event_id: EventId, holder_id: int, confirmed_at: datetime
) -> str:
    payload = f"{ticket_id}:{event_id}:{holder_id}:{confirmed_at.isoformat()}"
    return hashlib.sha256(payload.encode()).hexdigest()


def in_scope(
    status: TicketStatus, event_date: datetime, now: datetime, scope: TicketScope
) -> bool:
    """Classify a ticket for the upcoming/past views.

    Both conditions are evaluated independently, so a pending invitation for
    an event that already happened shows under both scopes.
    """
    if scope is TicketScope.ALL:
        return True
    if scope is TicketScope.UPCOMING:
        open_and_ahead = event_date >= now and status not in CLOSED
        return open_and_ahead or status is TicketStatus.PENDING_ACCEPTANCE
    return event_date < now or status in CLOSED


def user_actor(user_id: int) -> str:
    return f"user:{user_id}"


SYSTEM_EXPIRY_ACTOR = "system:expiry"
SYSTEM_FINALIZE_ACTOR = "system:finalize"
