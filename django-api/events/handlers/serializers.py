"""Serializers for transforming domain models to API responses.

Field names follow the camelCase contract the mobile client consumes.
"""

from decimal import Decimal

from rest_framework import serializers


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    organizerId = serializers.IntegerField(source="organizer_id")
    name = serializers.CharField()
    description = serializers.CharField()
    date = serializers.DateTimeField()
    location = serializers.CharField()
    ticketPrice = serializers.DecimalField(
        source="ticket_price.amount", max_digits=10, decimal_places=2
    )
    capacity = serializers.IntegerField(source="capacity.value")
    ticketsSold = serializers.IntegerField(source="tickets_sold")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class EventSummarySerializer(serializers.Serializer):
    """Event fields embedded in ticket responses."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    date = serializers.DateTimeField()
    location = serializers.CharField()
    ticketPrice = serializers.DecimalField(
        source="ticket_price.amount", max_digits=10, decimal_places=2
    )


class EventAnalyticsSerializer(serializers.Serializer):
    """Serializer for EventAnalytics domain model."""

    eventId = serializers.UUIDField(source="event_id.value")
    ticketsSold = serializers.IntegerField(source="tickets_sold")
    ticketsReserved = serializers.IntegerField(source="tickets_reserved")
    capacity = serializers.IntegerField()
    totalRevenue = serializers.DecimalField(
        source="revenue.amount", max_digits=12, decimal_places=2
    )
    percentSold = serializers.IntegerField(source="percent_sold")


class EventInputSerializer(serializers.Serializer):
    """Request body for creating or updating an event."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    date = serializers.DateTimeField()
    location = serializers.CharField(max_length=255)
    ticketPrice = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    capacity = serializers.IntegerField(min_value=0)
