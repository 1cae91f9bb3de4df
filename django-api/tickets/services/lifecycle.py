"""Invitation lifecycle engine.

    pending_acceptance --accept--> accepted --finalize--> confirmed
    pending_acceptance --decline--> declined   (seat released)
    pending_acceptance --expiry---> expired    (seat released)
    confirmed --check-in--> used

Every step is a compare-and-swap in the ticket store, so when accept,
decline and the expiry sweep race on one ticket exactly one of them wins.
Only the winner touches the capacity ledger.
"""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

import structlog
from django.utils import timezone

from events.domain.errors import NotEventOwnerError
from events.stores.interfaces import CapacityLedger, EventStore
from tickets.domain import Ticket, TicketId, TicketStatus
from tickets.domain.errors import (
    AlreadyResolvedError,
    InvalidTicketIdError,
    InviteeMismatchError,
    StateConflictError,
    TicketNotFoundError,
)
from tickets.domain.models import (
    SYSTEM_EXPIRY_ACTOR,
    SYSTEM_FINALIZE_ACTOR,
    compute_audit_hash,
    user_actor,
)
from tickets.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)


def parse_ticket_id(ticket_id: str) -> TicketId:
    try:
        return TicketId.from_string(ticket_id)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidTicketIdError() from exc


class InvitationLifecycleEngine:
    """Drives pending invitations to a final status."""

    def __init__(
        self,
        tickets: TicketStore,
        ledger: CapacityLedger,
        events: EventStore,
        *,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._tickets = tickets
        self._ledger = ledger
        self._events = events
        self._clock = clock

    def accept(self, ticket_id: str, user_id: int, email: str | None) -> Ticket:
        """Accept an invitation and finalize the ticket.

        Raises:
            TicketNotFoundError: If the ticket is missing or not visible.
            InviteeMismatchError: If the caller's email is not the invited one.
            AlreadyResolvedError: If the invitation was already resolved.
        """
        ticket = self._get_invitation(ticket_id, user_id, email)
        self._ensure_not_expired(ticket)
        try:
            self._tickets.update_status(
                ticket.id,
                TicketStatus.PENDING_ACCEPTANCE,
                TicketStatus.ACCEPTED,
                actor=user_actor(user_id),
                holder_id=user_id,
            )
        except StateConflictError as exc:
            logger.info(
                "invitation_already_resolved", ticket_id=ticket_id, status=exc.actual.value
            )
            raise AlreadyResolvedError(ticket_id, exc.actual) from exc

        # The winner of the swap above is the only caller that gets here.
        self._ledger.confirm(ticket.event_id, 1)
        confirmed_at = self._clock()
        confirmed = self._tickets.update_status(
            ticket.id,
            TicketStatus.ACCEPTED,
            TicketStatus.CONFIRMED,
            actor=SYSTEM_FINALIZE_ACTOR,
            at=confirmed_at,
        )
        # hashed with the timestamp of the confirmation audit entry
        audit_hash = compute_audit_hash(ticket.id, ticket.event_id, user_id, confirmed_at)
        self._tickets.set_audit_hash(ticket.id, audit_hash)

        logger.info(
            "invitation_accepted",
            ticket_id=ticket_id,
            user_id=user_id,
            event_id=str(ticket.event_id),
        )
        return replace(confirmed, audit_hash=audit_hash)

    def decline(self, ticket_id: str, user_id: int, email: str | None) -> Ticket:
        """Decline an invitation and release its seat. Irrevocable.

        Raises:
            TicketNotFoundError: If the ticket is missing or not visible.
            InviteeMismatchError: If the caller's email is not the invited one.
            AlreadyResolvedError: If the invitation was already resolved.
        """
        ticket = self._get_invitation(ticket_id, user_id, email)
        self._ensure_not_expired(ticket)
        try:
            declined = self._tickets.update_status(
                ticket.id,
                TicketStatus.PENDING_ACCEPTANCE,
                TicketStatus.DECLINED,
                actor=user_actor(user_id),
            )
        except StateConflictError as exc:
            logger.info(
                "invitation_already_resolved", ticket_id=ticket_id, status=exc.actual.value
            )
            raise AlreadyResolvedError(ticket_id, exc.actual) from exc

        self._ledger.release(ticket.event_id, 1)
        logger.info(
            "invitation_declined",
            ticket_id=ticket_id,
            user_id=user_id,
            event_id=str(ticket.event_id),
        )
        return declined

    def expire(self, ticket: Ticket, now: datetime | None = None) -> bool:
        """Expire one overdue invitation. Returns True if this call expired it."""
        now = now or self._clock()
        if not ticket.is_expired(now):
            return False
        try:
            self._tickets.update_status(
                ticket.id,
                TicketStatus.PENDING_ACCEPTANCE,
                TicketStatus.EXPIRED,
                actor=SYSTEM_EXPIRY_ACTOR,
            )
        except StateConflictError:
            return False
        self._ledger.release(ticket.event_id, 1)
        logger.info("invitation_expired", ticket_id=str(ticket.id), event_id=str(ticket.event_id))
        return True

    def sweep_expired(self, limit: int | None = None) -> int:
        """Expire every overdue invitation; returns how many this run expired."""
        now = self._clock()
        overdue = self._tickets.list_expired_pending(now, limit)
        expired = sum(1 for ticket in overdue if self.expire(ticket, now))
        if expired:
            logger.info("expiry_sweep_finished", expired=expired)
        return expired

    def check_in(self, ticket_id: str, organizer_id: int) -> Ticket:
        """Mark a confirmed ticket as used at the door.

        Raises:
            TicketNotFoundError: If the ticket or its event does not exist.
            NotEventOwnerError: If the caller does not organize the event.
            AlreadyResolvedError: If the ticket is not confirmed.
        """
        ticket = self._tickets.get(parse_ticket_id(ticket_id))
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        event = self._events.get_event(ticket.event_id)
        if event is None:
            raise TicketNotFoundError(ticket_id)
        if not event.is_owned_by(organizer_id):
            raise NotEventOwnerError(str(ticket.event_id))
        try:
            used = self._tickets.update_status(
                ticket.id,
                TicketStatus.CONFIRMED,
                TicketStatus.USED,
                actor=user_actor(organizer_id),
            )
        except StateConflictError as exc:
            raise AlreadyResolvedError(ticket_id, exc.actual) from exc
        logger.info("ticket_checked_in", ticket_id=ticket_id, event_id=str(ticket.event_id))
        return used

    def _get_invitation(self, ticket_id: str, user_id: int, email: str | None) -> Ticket:
        ticket = self._tickets.get(parse_ticket_id(ticket_id))
        if ticket is None or not ticket.is_visible_to(user_id, email):
            raise TicketNotFoundError(ticket_id)
        if ticket.invitee_email is None:
            raise AlreadyResolvedError(ticket_id, ticket.status)
        if not ticket.is_invitee(email):
            raise InviteeMismatchError(ticket_id)
        return ticket

    def _ensure_not_expired(self, ticket: Ticket) -> None:
        now = self._clock()
        if not ticket.is_expired(now):
            return
        self.expire(ticket, now)
        current = self._tickets.get(ticket.id)
        status = current.status if current is not None else TicketStatus.EXPIRED
        raise AlreadyResolvedError(str(ticket.id), status)
