"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import Capacity, EventId, Money


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    ``tickets_sold`` counts confirmed seats only; ``tickets_reserved`` counts
    provisional holds that are neither confirmed nor released yet.
    """

    id: EventId
    organizer_id: int
    name: str
    description: str
    date: datetime
    location: str
    ticket_price: Money
    capacity: Capacity
    tickets_sold: int
    tickets_reserved: int
    created_at: datetime
    updated_at: datetime

    @property
    def headroom(self) -> int:
        return self.capacity.remaining(self.tickets_sold, self.tickets_reserved)

    @property
    def has_sales(self) -> bool:
        return self.tickets_sold > 0

    def is_owned_by(self, user_id: int) -> bool:
        return self.organizer_id == user_id


@dataclass(frozen=True)
class EventDraft:
    """Organizer-supplied fields for creating or updating an Event."""

    name: str
    description: str
    date: datetime
    location: str
    ticket_price: Money
    capacity: Capacity


@dataclass(frozen=True)
class EventAnalytics:
    """Sales summary shown on the organizer dashboard."""

    event_id: EventId
    tickets_sold: int
    tickets_reserved: int
    capacity: int
    revenue: Money
    percent_sold: int
