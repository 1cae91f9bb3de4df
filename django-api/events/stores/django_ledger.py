"""Django ORM implementation of the CapacityLedger.

Each operation is a single conditional UPDATE on the event row, so the
database serialises concurrent reservations on the same event and a
reservation that does not fit changes nothing.
"""

import structlog
from django.db.models import F

from events import models
from events.cache import invalidate_event
from events.domain import EventId
from events.domain.errors import (
    CapacityExceededError,
    EventNotFoundError,
    LedgerInconsistencyError,
)
from events.stores.django_store import database_errors
from events.stores.interfaces import CapacityLedger

logger = structlog.get_logger(__name__)


def _check_count(count: int) -> None:
    if count <= 0:
        raise ValueError("Seat count must be positive")


class DjangoCapacityLedger(CapacityLedger):
    """Seat counters stored on the event row."""

    def reserve(self, event_id: EventId, count: int) -> None:
        _check_count(count)
        with database_errors("ledger_reserve"):
            updated = models.Event.objects.filter(
                pk=event_id.value,
                capacity__gte=F("tickets_sold") + F("tickets_reserved") + count,
            ).update(tickets_reserved=F("tickets_reserved") + count)
            if not updated:
                available = self._headroom_or_none(event_id)
        if not updated:
            if available is None:
                raise EventNotFoundError(str(event_id))
            logger.info(
                "capacity_exceeded",
                event_id=str(event_id),
                requested=count,
                available=available,
            )
            raise CapacityExceededError(str(event_id), requested=count, available=available)
        invalidate_event(event_id.value)
        logger.debug("seats_reserved", event_id=str(event_id), count=count)

    def release(self, event_id: EventId, count: int) -> None:
        _check_count(count)
        with database_errors("ledger_release"):
            updated = models.Event.objects.filter(
                pk=event_id.value,
                tickets_reserved__gte=count,
            ).update(tickets_reserved=F("tickets_reserved") - count)
        if not updated:
            logger.error("ledger_release_rejected", event_id=str(event_id), count=count)
            raise LedgerInconsistencyError(str(event_id), operation="release", count=count)
        invalidate_event(event_id.value)
        logger.debug("seats_released", event_id=str(event_id), count=count)

    def confirm(self, event_id: EventId, count: int) -> None:
        _check_count(count)
        with database_errors("ledger_confirm"):
            updated = models.Event.objects.filter(
                pk=event_id.value,
                tickets_reserved__gte=count,
            ).update(
                tickets_reserved=F("tickets_reserved") - count,
                tickets_sold=F("tickets_sold") + count,
            )
        if not updated:
            logger.error("ledger_confirm_rejected", event_id=str(event_id), count=count)
            raise LedgerInconsistencyError(str(event_id), operation="confirm", count=count)
        invalidate_event(event_id.value)
        logger.debug("seats_confirmed", event_id=str(event_id), count=count)

    def headroom(self, event_id: EventId) -> int:
        with database_errors("ledger_headroom"):
            available = self._headroom_or_none(event_id)
        if available is None:
            raise EventNotFoundError(str(event_id))
        return available

    def _headroom_or_none(self, event_id: EventId) -> int | None:
        counters = (
            models.Event.objects.filter(pk=event_id.value)
            .values("capacity", "tickets_sold", "tickets_reserved")
            .first()
        )
        if counters is None:
            return None
        return counters["capacity"] - counters["tickets_sold"] - counters["tickets_reserved"]
