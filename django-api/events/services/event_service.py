"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from datetime import datetime
from decimal import Decimal

import structlog

from events.domain import Capacity, Event, EventAnalytics, EventDraft, EventId, Money
from events.domain.errors import (
    EventLockedError,
    EventNotFoundError,
    EventValidationError,
    InvalidEventIdError,
    NotEventOwnerError,
)
from events.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)


def parse_event_id(event_id: str) -> EventId:
    """Parse a client-supplied event ID.

    Raises:
        InvalidEventIdError: If the value is not a valid UUID.
    """
    try:
        return EventId.from_string(event_id)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidEventIdError() from exc


def build_draft(
    *,
    name: str,
    description: str,
    date: datetime,
    location: str,
    ticket_price: Decimal,
    capacity: int,
) -> EventDraft:
    """Build an EventDraft, mapping primitive violations to domain errors."""
    if not name.strip():
        raise EventValidationError("Event name is required")
    if not location.strip():
        raise EventValidationError("Event location is required")
    try:
        price = Money.of(ticket_price)
        seats = Capacity(int(capacity))
    except ValueError as exc:
        raise EventValidationError(str(exc)) from exc
    return EventDraft(
        name=name.strip(),
        description=description,
        date=date,
        location=location.strip(),
        ticket_price=price,
        capacity=seats,
    )


class EventService:
    """Service for event catalog and organizer operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        event = self._store.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def list_my_events(self, organizer_id: int) -> list[Event]:
        return self._store.list_events_by_organizer(organizer_id)

    def create_event(self, organizer_id: int, draft: EventDraft) -> Event:
        event = self._store.create_event(organizer_id, draft)
        logger.info("event_created", event_id=str(event.id), organizer_id=organizer_id)
        return event

    def update_event(self, organizer_id: int, event_id: str, draft: EventDraft) -> Event:
        """Update an event owned by ``organizer_id``.

        Raises:
            NotEventOwnerError: If the caller does not own the event.
            EventLockedError: If the price changes after tickets have sold.
            EventValidationError: If capacity drops below issued seats.
        """
        event = self._get_owned(organizer_id, event_id)
        if event.has_sales and draft.ticket_price != event.ticket_price:
            raise EventLockedError(event_id, "Ticket price cannot change once tickets have sold")
        issued = event.tickets_sold + event.tickets_reserved
        if draft.capacity.value < issued:
            raise EventValidationError(
                f"Capacity cannot be lower than the {issued} tickets already issued"
            )

        updated = self._store.update_event(event.id, draft)
        if updated is None:
            # counters moved between the read and the guarded write
            raise EventLockedError(event_id, "Event changed while saving, please retry")
        logger.info("event_updated", event_id=event_id, organizer_id=organizer_id)
        return updated

    def delete_event(self, organizer_id: int, event_id: str) -> None:
        """Delete an event that has not issued any tickets.

        Raises:
            NotEventOwnerError: If the caller does not own the event.
            EventLockedError: If tickets were sold, reserved or issued.
        """
        event = self._get_owned(organizer_id, event_id)
        if event.has_sales or event.tickets_reserved:
            raise EventLockedError(event_id, "Events with sold tickets cannot be deleted")
        if not self._store.delete_event(event.id):
            raise EventLockedError(event_id, "Events with issued tickets cannot be deleted")
        logger.info("event_deleted", event_id=event_id, organizer_id=organizer_id)

    def get_analytics(self, organizer_id: int, event_id: str) -> EventAnalytics:
        event = self._get_owned(organizer_id, event_id)
        capacity = event.capacity.value
        percent = event.capacity.percent_taken(event.tickets_sold)
        return EventAnalytics(
            event_id=event.id,
            tickets_sold=event.tickets_sold,
            tickets_reserved=event.tickets_reserved,
            capacity=capacity,
            revenue=event.ticket_price.times(event.tickets_sold),
            percent_sold=percent,
        )

    def _get_owned(self, organizer_id: int, event_id: str) -> Event:
        event = self.get_event(event_id)
        if not event.is_owned_by(organizer_id):
            raise NotEventOwnerError(event_id)
        return event
