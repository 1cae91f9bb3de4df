"""Read-side service for the client's ticket wallet."""

from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from events.stores.interfaces import EventStore
from tickets.domain import AuditEntry, Ticket, TicketScope, TicketWithEvent
from tickets.domain.errors import TicketNotFoundError, TicketValidationError
from tickets.domain.models import in_scope
from tickets.services.lifecycle import InvitationLifecycleEngine, parse_ticket_id
from tickets.stores.interfaces import TicketStore


class TicketQueryService:
    """Serves filtered ticket views, expiring overdue invitations on the way."""

    def __init__(
        self,
        tickets: TicketStore,
        events: EventStore,
        lifecycle: InvitationLifecycleEngine,
        *,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._tickets = tickets
        self._events = events
        self._lifecycle = lifecycle
        self._clock = clock

    def list_my_tickets(
        self, user_id: int, email: str | None, scope: str | None
    ) -> list[TicketWithEvent]:
        """Return the caller's tickets for the given scope.

        Raises:
            TicketValidationError: If ``scope`` is not all, upcoming or past.
        """
        try:
            parsed_scope = TicketScope.from_string(scope)
        except ValueError as exc:
            raise TicketValidationError("status must be one of: all, upcoming, past") from exc

        now = self._clock()
        tickets = self._tickets.list_for_user(user_id, email)
        overdue = [ticket for ticket in tickets if ticket.is_expired(now)]
        if overdue:
            for ticket in overdue:
                self._lifecycle.expire(ticket, now)
            tickets = self._tickets.list_for_user(user_id, email)

        events = self._events.get_events({ticket.event_id for ticket in tickets})
        views = [
            TicketWithEvent(ticket=ticket, event=events[ticket.event_id])
            for ticket in tickets
            if ticket.event_id in events
            and in_scope(ticket.status, events[ticket.event_id].date, now, parsed_scope)
        ]
        if parsed_scope is TicketScope.UPCOMING:
            views.sort(key=lambda view: view.event.date)
        elif parsed_scope is TicketScope.PAST:
            views.sort(key=lambda view: view.event.date, reverse=True)
        return views

    def get_ticket(self, ticket_id: str, user_id: int, email: str | None) -> TicketWithEvent:
        ticket = self._get_visible(ticket_id, user_id, email)
        event = self._events.get_event(ticket.event_id)
        if event is None:
            raise TicketNotFoundError(ticket_id)
        return TicketWithEvent(ticket=ticket, event=event)

    def get_history(self, ticket_id: str, user_id: int, email: str | None) -> list[AuditEntry]:
        ticket = self._get_visible(ticket_id, user_id, email)
        return self._tickets.list_audit_entries(ticket.id)

    def _get_visible(self, ticket_id: str, user_id: int, email: str | None) -> Ticket:
        ticket = self._tickets.get(parse_ticket_id(ticket_id))
        if ticket is None or not ticket.is_visible_to(user_id, email):
            raise TicketNotFoundError(ticket_id)
        return ticket
