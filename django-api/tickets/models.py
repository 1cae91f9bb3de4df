"""Django ORM models (persistence layer).

Domain logic lives in tickets/domain. Expiry and decline are statuses; the
only delete is the purchase rollback, for tickets never handed out.
"""

import uuid

from django.conf import settings
from django.db import models

from events.models import Event
from tickets.domain.status import TicketStatus

STATUS_CHOICES = [(status.value, status.value.replace("_", " ")) for status in TicketStatus]


class Ticket(models.Model):
    """Persistence model for tickets and pending invitations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="tickets")
    purchaser = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="purchased_tickets",
    )
    holder = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="held_tickets",
        null=True,
        blank=True,
    )
    invitee_email = models.CharField(max_length=254, null=True, blank=True)
    status = models.CharField(max_length=32, choices=STATUS_CHOICES)
    expires_at = models.DateTimeField(null=True, blank=True)
    audit_hash = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "expires_at"], name="tickets_status_expiry_idx"),
            models.Index(fields=["invitee_email"], name="tickets_invitee_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_id} - {self.status}"


class TicketAuditEntry(models.Model):
    """Append-only record of every ticket status change."""

    ticket = models.ForeignKey(Ticket, on_delete=models.PROTECT, related_name="audit_entries")
    old_status = models.CharField(max_length=32, choices=STATUS_CHOICES, null=True, blank=True)
    new_status = models.CharField(max_length=32, choices=STATUS_CHOICES)
    actor = models.CharField(max_length=64)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name_plural = "ticket audit entries"

    def __str__(self) -> str:
        return f"{self.ticket_id}: {self.old_status} -> {self.new_status}"
