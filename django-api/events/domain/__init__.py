from events.domain.models import Event, EventAnalytics, EventDraft
from events.domain.value_objects import Capacity, EventId, Money

__all__ = [
    "Event",
    "EventDraft",
    "EventAnalytics",
    "EventId",
    "Money",
    "Capacity",
]
