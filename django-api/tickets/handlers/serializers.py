"""Serializers for ticket requests and responses."""

from rest_framework import serializers

from events.handlers.serializers import EventSummarySerializer
from tickets.domain import TicketWithEvent


class PurchaseRequestSerializer(serializers.Serializer):
    eventId = serializers.CharField()


class GroupRequestSerializer(serializers.Serializer):
    # Email syntax and group size are domain rules checked by the coordinator.
    eventId = serializers.CharField()
    attendeeEmails = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False)
    )


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    status = serializers.CharField(source="status.value")
    purchaserId = serializers.IntegerField(source="purchaser_id")
    holderId = serializers.IntegerField(source="holder_id", allow_null=True)
    inviteeEmail = serializers.CharField(
        source="invitee_email.value", allow_null=True, default=None
    )
    createdAt = serializers.DateTimeField(source="created_at")
    expiresAt = serializers.DateTimeField(source="expires_at", allow_null=True)
    auditHash = serializers.CharField(source="audit_hash", allow_null=True)


class AuditEntrySerializer(serializers.Serializer):
    oldStatus = serializers.CharField(source="old_status.value", allow_null=True, default=None)
    newStatus = serializers.CharField(source="new_status.value")
    actor = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")


def ticket_with_event(view: TicketWithEvent) -> dict:
    data = dict(TicketSerializer(view.ticket).data)
    data["event"] = EventSummarySerializer(view.event).data
    return data
