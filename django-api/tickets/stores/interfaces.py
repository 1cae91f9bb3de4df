"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection, Sequence
from datetime import datetime

from tickets.domain import AuditEntry, Ticket, TicketId, TicketStatus


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def create(self, ticket: Ticket, *, actor: str) -> TicketId:
        """Persist a new ticket and its creation audit entry."""
        ...

    @abstractmethod
    def create_many(self, tickets: Sequence[Ticket], *, actor: str) -> list[TicketId]:
        """Persist several tickets, all or none."""
        ...

    @abstractmethod
    def get(self, ticket_id: TicketId) -> Ticket | None:
        """Return a ticket by ID, or None if not found."""
        ...

    @abstractmethod
    def list_for_user(
        self,
        user_id: int,
        email: str | None,
        statuses: Collection[TicketStatus] | None = None,
    ) -> list[Ticket]:
        """Return tickets the user holds, purchased, or was invited to.

        Ordered by created_at descending. ``statuses`` narrows the result
        when given.
        """
        ...

    @abstractmethod
    def list_expired_pending(self, now: datetime, limit: int | None = None) -> list[Ticket]:
        """Return pending invitations whose deadline is at or before ``now``."""
        ...

    @abstractmethod
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
        """Compare-and-swap the status and append an audit entry.

        ``holder_id``, when given, is written in the same swap. ``at`` stamps
        the change and its audit entry; it defaults to the current time.

        Raises:
            InvalidTransitionError: If the pair is not in the transition table.
            TicketNotFoundError: If the ticket does not exist.
            StateConflictError: If the stored status is not ``from_status``.
        """
        ...

    @abstractmethod
    def set_audit_hash(self, ticket_id: TicketId, audit_hash: str) -> None:
        """Set the audit hash once.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            StateConflictError: If a hash is already set.
        """
        ...

    @abstractmethod
    def list_audit_entries(self, ticket_id: TicketId) -> list[AuditEntry]:
        """Return the audit trail of a ticket, oldest first."""
        ...

    @abstractmethod
    def discard(self, ticket_ids: Collection[TicketId]) -> None:
        """Remove tickets whose purchase was rolled back, with their audit trail.

        Only the purchase saga calls this, before the tickets were ever
        reported to anyone.
        """
        ...
