from django.urls import path

from events.handlers import EventAnalyticsView, EventDetailView, EventListView, MyEventsView

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/myevents", MyEventsView.as_view(), name="event-mine"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/analytics",
        EventAnalyticsView.as_view(),
        name="event-analytics",
    ),
]
