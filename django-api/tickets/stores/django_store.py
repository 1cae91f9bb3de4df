"""Django ORM implementation of the TicketStore."""

from collections.abc import Collection, Sequence
from datetime import datetime

import structlog
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from events.domain import EventId
from events.stores.django_store import database_errors
from tickets import models
from tickets.domain import AuditEntry, InviteeEmail, Ticket, TicketId, TicketStatus
from tickets.domain.errors import InvalidTransitionError, StateConflictError, TicketNotFoundError
from tickets.domain.status import can_transition
from tickets.stores.interfaces import TicketStore

logger = structlog.get_logger(__name__)


def to_domain(row: models.Ticket) -> Ticket:
    return Ticket(
        id=TicketId(row.id),
        event_id=EventId(row.event_id),
        purchaser_id=row.purchaser_id,
        holder_id=row.holder_id,
        invitee_email=InviteeEmail(row.invitee_email) if row.invitee_email else None,
        status=TicketStatus(row.status),
        created_at=row.created_at,
        expires_at=row.expires_at,
        audit_hash=row.audit_hash,
    )


def to_row(ticket: Ticket) -> models.Ticket:
    return models.Ticket(
        id=ticket.id.value,
        event_id=ticket.event_id.value,
        purchaser_id=ticket.purchaser_id,
        holder_id=ticket.holder_id,
        invitee_email=str(ticket.invitee_email) if ticket.invitee_email else None,
        status=ticket.status.value,
        expires_at=ticket.expires_at,
        audit_hash=ticket.audit_hash,
        created_at=ticket.created_at,
        updated_at=ticket.created_at,
    )


class DjangoTicketStore(TicketStore):
    """PostgreSQL-backed ticket store using Django ORM."""

    def create(self, ticket: Ticket, *, actor: str) -> TicketId:
        return self.create_many([ticket], actor=actor)[0]

    def create_many(self, tickets: Sequence[Ticket], *, actor: str) -> list[TicketId]:
        rows = [to_row(ticket) for ticket in tickets]
        entries = [
            models.TicketAuditEntry(
                ticket_id=ticket.id.value,
                old_status=None,
                new_status=ticket.status.value,
                actor=actor,
                created_at=ticket.created_at,
            )
            for ticket in tickets
        ]
        with database_errors("create_tickets"), transaction.atomic():
            models.Ticket.objects.bulk_create(rows)
            models.TicketAuditEntry.objects.bulk_create(entries)
        return [ticket.id for ticket in tickets]

    def get(self, ticket_id: TicketId) -> Ticket | None:
        with database_errors("get_ticket"):
            row = models.Ticket.objects.filter(pk=ticket_id.value).first()
        return to_domain(row) if row is not None else None

    def list_for_user(
        self,
        user_id: int,
        email: str | None,
        statuses: Collection[TicketStatus] | None = None,
    ) -> list[Ticket]:
        visible = Q(holder_id=user_id) | Q(purchaser_id=user_id)
        if email:
            visible |= Q(invitee_email=email.strip().lower())
        rows = models.Ticket.objects.filter(visible)
        if statuses is not None:
            rows = rows.filter(status__in=[status.value for status in statuses])
        with database_errors("list_tickets"):
            return [to_domain(row) for row in rows.order_by("-created_at")]

    def list_expired_pending(self, now: datetime, limit: int | None = None) -> list[Ticket]:
        rows = models.Ticket.objects.filter(
            status=TicketStatus.PENDING_ACCEPTANCE.value,
            expires_at__lte=now,
        ).order_by("expires_at")
        if limit is not None:
            rows = rows[:limit]
        with database_errors("list_expired_pending"):
            return [to_domain(row) for row in rows]

    def update_status(
        self,
        ticket_id: TicketId,
        from_status: TicketStatus,
        to_status: TicketStatus,
        *,
        actor: str,
        holder_id: int | None = None,
        at: datetime | None = None,
    ) -> Ticket:
        if not can_transition(from_status, to_status):
            raise InvalidTransitionError(from_status, to_status)
        now = at or timezone.now()
        changes: dict[str, object] = {"status": to_status.value, "updated_at": now}
        if holder_id is not None:
            changes["holder_id"] = holder_id

        with database_errors("update_ticket_status"), transaction.atomic():
            updated = models.Ticket.objects.filter(
                pk=ticket_id.value,
                status=from_status.value,
            ).update(**changes)
            if updated:
                models.TicketAuditEntry.objects.create(
                    ticket_id=ticket_id.value,
                    old_status=from_status.value,
                    new_status=to_status.value,
                    actor=actor,
                    created_at=now,
                )
            row = models.Ticket.objects.filter(pk=ticket_id.value).first()

        if row is None:
            raise TicketNotFoundError(str(ticket_id))
        if not updated:
            logger.info(
                "ticket_status_conflict",
                ticket_id=str(ticket_id),
                expected=from_status.value,
                actual=row.status,
            )
            raise StateConflictError(
                str(ticket_id),
                expected=from_status,
                actual=TicketStatus(row.status),
            )
        return to_domain(row)

    def set_audit_hash(self, ticket_id: TicketId, audit_hash: str) -> None:
        with database_errors("set_audit_hash"):
            updated = models.Ticket.objects.filter(
                pk=ticket_id.value,
                audit_hash__isnull=True,
            ).update(audit_hash=audit_hash)
            if updated:
                return
            status = (
                models.Ticket.objects.filter(pk=ticket_id.value)
                .values_list("status", flat=True)
                .first()
            )
        if status is None:
            raise TicketNotFoundError(str(ticket_id))
        current = TicketStatus(status)
        raise StateConflictError(str(ticket_id), expected=current, actual=current)

    def list_audit_entries(self, ticket_id: TicketId) -> list[AuditEntry]:
        with database_errors("list_audit_entries"):
            rows = models.TicketAuditEntry.objects.filter(
                ticket_id=ticket_id.value,
            ).order_by("created_at", "id")
            return [
                AuditEntry(
                    ticket_id=ticket_id,
                    old_status=TicketStatus(row.old_status) if row.old_status else None,
                    new_status=TicketStatus(row.new_status),
                    actor=row.actor,
                    created_at=row.created_at,
                )
                for row in rows
            ]

    def discard(self, ticket_ids: Collection[TicketId]) -> None:
        pks = [ticket_id.value for ticket_id in ticket_ids]
        with database_errors("discard_tickets"), transaction.atomic():
            models.TicketAuditEntry.objects.filter(ticket_id__in=pks).delete()
            models.Ticket.objects.filter(pk__in=pks).delete()
        logger.info("tickets_discarded", count=len(pks))
