"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to config.exception_handler
- Never contain business logic
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.handlers.permissions import IsOrganizer
from events.cache import EVENT_LIST_KEY, cache_timeout, event_detail_key
from events.domain import Event, EventDraft
from events.handlers.serializers import (
    EventAnalyticsSerializer,
    EventInputSerializer,
    EventSerializer,
)
from events.services.event_service import EventService, build_draft, parse_event_id
from events.stores.django_store import DjangoEventStore


def get_event_service() -> EventService:
    return EventService(DjangoEventStore())


def parse_draft(data: dict, base: Event | None = None) -> EventDraft:
    """Validate a request body; with ``base``, missing fields keep its values."""
    serializer = EventInputSerializer(data=data, partial=base is not None)
    serializer.is_valid(raise_exception=True)
    fields = serializer.validated_data
    if base is None:
        return build_draft(
            name=fields["name"],
            description=fields.get("description", ""),
            date=fields["date"],
            location=fields["location"],
            ticket_price=fields["ticketPrice"],
            capacity=fields["capacity"],
        )
    return build_draft(
        name=fields.get("name", base.name),
        description=fields.get("description", base.description),
        date=fields.get("date", base.date),
        location=fields.get("location", base.location),
        ticket_price=fields.get("ticketPrice", base.ticket_price.amount),
        capacity=fields.get("capacity", base.capacity.value),
    )


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    permission_classes = [IsAuthenticated, IsOrganizer]

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return super().get_permissions()

    def get(self, request: Request) -> Response:
        data = cache.get(EVENT_LIST_KEY)
        if data is None:
            events = get_event_service().list_events()
            data = EventSerializer(events, many=True).data
            cache.set(EVENT_LIST_KEY, data, cache_timeout())
        return Response(data)

    def post(self, request: Request) -> Response:
        draft = parse_draft(request.data)
        event = get_event_service().create_event(request.user.id, draft)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class MyEventsView(APIView):
    """Handler for GET /api/events/myevents"""

    permission_classes = [IsAuthenticated, IsOrganizer]

    def get(self, request: Request) -> Response:
        events = get_event_service().list_my_events(request.user.id)
        return Response(EventSerializer(events, many=True).data)


class EventDetailView(APIView):
    """Handler for GET/PUT/PATCH/DELETE /api/events/{event_id}"""

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return super().get_permissions()

    def get(self, request: Request, event_id: str) -> Response:
        key = event_detail_key(parse_event_id(event_id).value)
        data = cache.get(key)
        if data is None:
            event = get_event_service().get_event(event_id)
            data = EventSerializer(event).data
            cache.set(key, data, cache_timeout())
        return Response(data)

    def put(self, request: Request, event_id: str) -> Response:
        draft = parse_draft(request.data)
        event = get_event_service().update_event(request.user.id, event_id, draft)
        return Response(EventSerializer(event).data)

    def patch(self, request: Request, event_id: str) -> Response:
        service = get_event_service()
        draft = parse_draft(request.data, base=service.get_event(event_id))
        event = service.update_event(request.user.id, event_id, draft)
        return Response(EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        get_event_service().delete_event(request.user.id, event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventAnalyticsView(APIView):
    """Handler for GET /api/events/{event_id}/analytics"""

    def get(self, request: Request, event_id: str) -> Response:
        analytics = get_event_service().get_analytics(request.user.id, event_id)
        return Response(EventAnalyticsSerializer(analytics).data)
