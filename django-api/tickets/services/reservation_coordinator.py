"""Reservation coordinator - turns purchase requests into ledger and store writes.

Every purchase follows reserve -> create -> confirm. A failure after the
reserve step discards any tickets already written and releases the held
seats again (saga compensation); that release is the only step retried
here.
"""

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

import structlog
from django.utils import timezone

from events.domain import EventId
from events.domain.errors import (
    CapacityExceededError,
    LedgerInconsistencyError,
    StoreUnavailableError,
)
from events.services.event_service import parse_event_id
from events.stores.interfaces import CapacityLedger
from tickets.domain import InviteeEmail, Ticket, TicketId, TicketStatus
from tickets.domain.errors import SoldOutError, TicketValidationError
from tickets.domain.models import compute_audit_hash, user_actor
from tickets.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)

MAX_GROUP_SIZE = 5


class ReservationCoordinator:
    """Service for solo and group ticket purchases."""

    def __init__(
        self,
        tickets: TicketStore,
        ledger: CapacityLedger,
        *,
        invitation_ttl: timedelta,
        release_retries: int = 3,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._tickets = tickets
        self._ledger = ledger
        self._invitation_ttl = invitation_ttl
        self._release_retries = max(release_retries, 1)
        self._clock = clock

    def purchase_solo(self, user_id: int, event_id: str) -> Ticket:
        """Buy one confirmed ticket for the caller.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            SoldOutError: If no seat is left.
        """
        parsed = parse_event_id(event_id)
        self._reserve(parsed, 1)

        ticket = self._purchaser_ticket(parsed, user_id, self._clock())
        self._issue([ticket], parsed, 1, user_id)

        logger.info(
            "ticket_purchased",
            ticket_id=str(ticket.id),
            event_id=event_id,
            user_id=user_id,
        )
        return ticket

    def purchase_group(
        self,
        user_id: int,
        user_email: str | None,
        event_id: str,
        invitee_emails: Sequence[str],
    ) -> list[Ticket]:
        """Buy a ticket for the caller and invite up to four others.

        The purchaser's ticket is confirmed immediately; each invitee gets a
        pending ticket that expires after the invitation window. Seats for the
        whole group are held in one reservation, so either every ticket is
        created or none is.

        Raises:
            TicketValidationError: If the invitee list is empty, too long,
                contains malformed or duplicate emails, or the caller's own.
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            SoldOutError: If the group does not fit.
        """
        invitees = self._validate_invitees(user_email, invitee_emails)
        parsed = parse_event_id(event_id)
        count = len(invitees) + 1
        self._reserve(parsed, count)

        now = self._clock()
        expires_at = now + self._invitation_ttl
        tickets = [self._purchaser_ticket(parsed, user_id, now)]
        tickets.extend(
            Ticket(
                id=TicketId.new(),
                event_id=parsed,
                purchaser_id=user_id,
                holder_id=None,
                invitee_email=email,
                status=TicketStatus.PENDING_ACCEPTANCE,
                created_at=now,
                expires_at=expires_at,
            )
            for email in invitees
        )
        self._issue(tickets, parsed, count, user_id)

        logger.info(
            "group_reservation_created",
            event_id=event_id,
            user_id=user_id,
            invitees=len(invitees),
            expires_at=expires_at.isoformat(),
        )
        return tickets

    def _validate_invitees(
        self, user_email: str | None, raw_emails: Sequence[str]
    ) -> list[InviteeEmail]:
        if isinstance(raw_emails, str) or not isinstance(raw_emails, Sequence):
            raise TicketValidationError("attendeeEmails must be a list of email addresses")
        if not raw_emails:
            raise TicketValidationError("Add at least one friend's email for a group booking")
        if len(raw_emails) + 1 > MAX_GROUP_SIZE:
            raise TicketValidationError(f"A group booking is limited to {MAX_GROUP_SIZE} tickets")

        invitees: list[InviteeEmail] = []
        for raw in raw_emails:
            if not isinstance(raw, str) or not raw.strip():
                raise TicketValidationError("Please fill out all email fields for your friends")
            try:
                email = InviteeEmail.parse(raw)
            except ValueError as exc:
                message = f"'{raw.strip()}' is not a valid email address"
                raise TicketValidationError(message) from exc
            if email in invitees:
                raise TicketValidationError(f"{email} is listed more than once")
            if email.matches(user_email):
                raise TicketValidationError("Your own ticket is already included in the group")
            invitees.append(email)
        return invitees

    def _reserve(self, event_id: EventId, count: int) -> None:
        try:
            self._ledger.reserve(event_id, count)
        except CapacityExceededError as exc:
            raise SoldOutError(str(event_id), requested=count, available=exc.available) from exc

    def _purchaser_ticket(self, event_id: EventId, user_id: int, now: datetime) -> Ticket:
        ticket_id = TicketId.new()
        return Ticket(
            id=ticket_id,
            event_id=event_id,
            purchaser_id=user_id,
            holder_id=user_id,
            invitee_email=None,
            status=TicketStatus.CONFIRMED,
            created_at=now,
            audit_hash=compute_audit_hash(ticket_id, event_id, user_id, now),
        )

    def _issue(self, tickets: list[Ticket], event_id: EventId, count: int, user_id: int) -> None:
        """Write the tickets and sell the purchaser's seat, or undo both.

        The first ticket is the purchaser's confirmed one; its seat moves from
        reserved to sold. Any failure discards the written tickets and hands
        the whole reservation back before the error propagates.
        """
        created = False
        try:
            self._tickets.create_many(tickets, actor=user_actor(user_id))
            created = True
            self._ledger.confirm(event_id, 1)
        except Exception:
            logger.exception(
                "ticket_issue_failed",
                event_id=str(event_id),
                count=count,
                stage="confirm" if created else "create",
            )
            if created and not self._discard(tickets, event_id):
                raise
            self._release_reservation(event_id, count)
            raise

    def _discard(self, tickets: list[Ticket], event_id: EventId) -> bool:
        try:
            self._tickets.discard([ticket.id for ticket in tickets])
        except Exception:
            # the tickets still exist, so their seats stay reserved
            logger.exception("ticket_discard_failed", event_id=str(event_id), count=len(tickets))
            return False
        return True

    def _release_reservation(self, event_id: EventId, count: int) -> None:
        for attempt in range(1, self._release_retries + 1):
            try:
                self._ledger.release(event_id, count)
            except StoreUnavailableError:
                logger.warning(
                    "reservation_release_retry",
                    event_id=str(event_id),
                    count=count,
                    attempt=attempt,
                )
                continue
            except LedgerInconsistencyError:
                logger.exception(
                    "reservation_release_abandoned", event_id=str(event_id), count=count
                )
                return
            logger.info("reservation_released", event_id=str(event_id), count=count)
            return
        logger.error("reservation_release_abandoned", event_id=str(event_id), count=count)
