"""Django ORM implementation of the EventStore."""

from collections.abc import Iterable
from contextlib import contextmanager

import structlog
from django.db import DatabaseError
from django.db.models import F, ProtectedError, Value
from django.utils import timezone

from events import models
from events.cache import invalidate_event
from events.domain import Capacity, Event, EventDraft, EventId, Money
from events.domain.errors import StoreUnavailableError
from events.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)


@contextmanager
def database_errors(operation: str):
    """Translate driver failures into StoreUnavailableError."""
    try:
        yield
    except DatabaseError as exc:
        logger.error("store_operation_failed", operation=operation, error=str(exc))
        raise StoreUnavailableError(operation) from exc


def to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        organizer_id=row.organizer_id,
        name=row.name,
        description=row.description,
        date=row.date,
        location=row.location,
        ticket_price=Money(row.ticket_price),
        capacity=Capacity(row.capacity),
        tickets_sold=row.tickets_sold,
        tickets_reserved=row.tickets_reserved,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    def list_events(self) -> list[Event]:
        with database_errors("list_events"):
            return [to_domain(row) for row in models.Event.objects.order_by("-date")]

    def list_events_by_organizer(self, organizer_id: int) -> list[Event]:
        with database_errors("list_events_by_organizer"):
            rows = models.Event.objects.filter(organizer_id=organizer_id).order_by("-date")
            return [to_domain(row) for row in rows]

    def get_event(self, event_id: EventId) -> Event | None:
        with database_errors("get_event"):
            row = models.Event.objects.filter(pk=event_id.value).first()
        return to_domain(row) if row is not None else None

    def get_events(self, event_ids: Iterable[EventId]) -> dict[EventId, Event]:
        ids = {event_id.value for event_id in event_ids}
        if not ids:
            return {}
        with database_errors("get_events"):
            rows = models.Event.objects.filter(pk__in=ids)
            return {EventId(row.id): to_domain(row) for row in rows}

    def create_event(self, organizer_id: int, draft: EventDraft) -> Event:
        with database_errors("create_event"):
            row = models.Event.objects.create(
                organizer_id=organizer_id,
                name=draft.name,
                description=draft.description,
                date=draft.date,
                location=draft.location,
                ticket_price=draft.ticket_price.amount,
                capacity=draft.capacity.value,
            )
        return to_domain(row)

    def update_event(self, event_id: EventId, draft: EventDraft) -> Event | None:
        with database_errors("update_event"):
            current = (
                models.Event.objects.filter(pk=event_id.value)
                .values_list("ticket_price", flat=True)
                .first()
            )
            if current is None:
                return None
            guarded = models.Event.objects.filter(
                pk=event_id.value,
                tickets_sold__lte=Value(draft.capacity.value) - F("tickets_reserved"),
            )
            if current != draft.ticket_price.amount:
                guarded = guarded.filter(tickets_sold=0)
            # save() would write back stale ledger counters
            updated = guarded.update(
                name=draft.name,
                description=draft.description,
                date=draft.date,
                location=draft.location,
                ticket_price=draft.ticket_price.amount,
                capacity=draft.capacity.value,
                updated_at=timezone.now(),
            )
            if not updated:
                return None
            row = models.Event.objects.get(pk=event_id.value)
        invalidate_event(event_id.value)
        return to_domain(row)

    def delete_event(self, event_id: EventId) -> bool:
        with database_errors("delete_event"):
            rows = models.Event.objects.filter(
                pk=event_id.value,
                tickets_sold=0,
                tickets_reserved=0,
            )
            try:
                deleted, _ = rows.delete()
            except ProtectedError:
                return False
        return deleted > 0

    def event_exists(self, event_id: EventId) -> bool:
        with database_errors("event_exists"):
            return models.Event.objects.filter(pk=event_id.value).exists()
