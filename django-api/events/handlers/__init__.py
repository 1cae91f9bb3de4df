from events.handlers.views import (
    EventAnalyticsView,
    EventDetailView,
    EventListView,
    MyEventsView,
)

__all__ = [
    "EventAnalyticsView",
    "EventDetailView",
    "EventListView",
    "MyEventsView",
]
