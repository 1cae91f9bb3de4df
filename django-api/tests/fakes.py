"""In-memory stores for service unit tests.

Each store serialises its operations with a lock, standing in for the
atomic conditional updates the Django stores rely on.
"""

import threading
from collections.abc import Collection, Iterable, Sequence
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from accounts.domain import KycSubmission, Profile, Registration, Role
from accounts.stores.interfaces import AccountStore
from events.domain import Capacity, Event, EventDraft, EventId, Money
from events.domain.errors import (
    CapacityExceededError,
    EventNotFoundError,
    LedgerInconsistencyError,
    StoreUnavailableError,
)
from events.stores.interfaces import CapacityLedger, EventStore
from tickets.domain import AuditEntry, Ticket, TicketId, TicketStatus
from tickets.domain.errors import InvalidTransitionError, StateConflictError, TicketNotFoundError
from tickets.domain.status import can_transition
from tickets.stores.interfaces import TicketStore

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self.events: dict[EventId, Event] = {}
        self.lock = threading.RLock()

    def add(
        self,
        *,
        organizer_id: int = 1,
        capacity: int = 10,
        price: str = "25.00",
        date: datetime | None = None,
        sold: int = 0,
        reserved: int = 0,
    ) -> Event:
        event = Event(
            id=EventId(uuid4()),
            organizer_id=organizer_id,
            name="Sunburn Arena",
            description="Live set",
            date=date or NOW + timedelta(days=30),
            location="Goa",
            ticket_price=Money(Decimal(price)),
            capacity=Capacity(capacity),
            tickets_sold=sold,
            tickets_reserved=reserved,
            created_at=NOW,
            updated_at=NOW,
        )
        self.events[event.id] = event
        return event

    def list_events(self) -> list[Event]:
        return sorted(self.events.values(), key=lambda event: event.date, reverse=True)

    def list_events_by_organizer(self, organizer_id: int) -> list[Event]:
        return [event for event in self.list_events() if event.organizer_id == organizer_id]

    def get_event(self, event_id: EventId) -> Event | None:
        return self.events.get(event_id)

    def get_events(self, event_ids: Iterable[EventId]) -> dict[EventId, Event]:
        return {event_id: self.events[event_id] for event_id in event_ids if event_id in self.events}

    def create_event(self, organizer_id: int, draft: EventDraft) -> Event:
        event = Event(
            id=EventId(uuid4()),
            organizer_id=organizer_id,
            name=draft.name,
            description=draft.description,
            date=draft.date,
            location=draft.location,
            ticket_price=draft.ticket_price,
            capacity=draft.capacity,
            tickets_sold=0,
            tickets_reserved=0,
            created_at=NOW,
            updated_at=NOW,
        )
        self.events[event.id] = event
        return event

    def update_event(self, event_id: EventId, draft: EventDraft) -> Event | None:
        with self.lock:
            event = self.events.get(event_id)
            if event is None:
                return None
            if event.tickets_sold > draft.capacity.value - event.tickets_reserved:
                return None
            if event.ticket_price != draft.ticket_price and event.tickets_sold:
                return None
            updated = replace(
                event,
                name=draft.name,
                description=draft.description,
                date=draft.date,
                location=draft.location,
                ticket_price=draft.ticket_price,
                capacity=draft.capacity,
            )
            self.events[event_id] = updated
            return updated

    def delete_event(self, event_id: EventId) -> bool:
        with self.lock:
            event = self.events.get(event_id)
            if event is None or event.tickets_sold or event.tickets_reserved:
                return False
            del self.events[event_id]
            return True

    def event_exists(self, event_id: EventId) -> bool:
        return event_id in self.events


class InMemoryCapacityLedger(CapacityLedger):
    def __init__(self, events: InMemoryEventStore) -> None:
        self.events = events
        self.failing_releases = 0
        self.release_attempts = 0
        self.failing_confirms = 0

    def reserve(self, event_id: EventId, count: int) -> None:
        with self.events.lock:
            event = self._get(event_id)
            if event.headroom < count:
                raise CapacityExceededError(str(event_id), requested=count, available=event.headroom)
            self.events.events[event_id] = replace(
                event, tickets_reserved=event.tickets_reserved + count
            )

    def release(self, event_id: EventId, count: int) -> None:
        with self.events.lock:
            self.release_attempts += 1
            if self.failing_releases:
                self.failing_releases -= 1
                raise StoreUnavailableError("ledger_release")
            event = self._get(event_id)
            if event.tickets_reserved < count:
                raise LedgerInconsistencyError(str(event_id), operation="release", count=count)
            self.events.events[event_id] = replace(
                event, tickets_reserved=event.tickets_reserved - count
            )

    def confirm(self, event_id: EventId, count: int) -> None:
        with self.events.lock:
            if self.failing_confirms:
                self.failing_confirms -= 1
                raise StoreUnavailableError("ledger_confirm")
            event = self._get(event_id)
            if event.tickets_reserved < count:
                raise LedgerInconsistencyError(str(event_id), operation="confirm", count=count)
            self.events.events[event_id] = replace(
                event,
                tickets_reserved=event.tickets_reserved - count,
                tickets_sold=event.tickets_sold + count,
            )

    def headroom(self, event_id: EventId) -> int:
        return self._get(event_id).headroom

    def _get(self, event_id: EventId) -> Event:
        event = self.events.events.get(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event


class InMemoryTicketStore(TicketStore):
    def __init__(self) -> None:
        self.tickets: dict[TicketId, Ticket] = {}
        self.audit: list[AuditEntry] = []
        self.lock = threading.RLock()
        self.fail_creates = False
        self.fail_discards = False

    def add(self, ticket: Ticket) -> Ticket:
        self.tickets[ticket.id] = ticket
        return ticket

    def create(self, ticket: Ticket, *, actor: str) -> TicketId:
        return self.create_many([ticket], actor=actor)[0]

    def create_many(self, tickets: Sequence[Ticket], *, actor: str) -> list[TicketId]:
        with self.lock:
            if self.fail_creates:
                raise StoreUnavailableError("create_tickets")
            for ticket in tickets:
                self.tickets[ticket.id] = ticket
                self.audit.append(AuditEntry(ticket.id, None, ticket.status, actor, ticket.created_at))
            return [ticket.id for ticket in tickets]

    def get(self, ticket_id: TicketId) -> Ticket | None:
        return self.tickets.get(ticket_id)

    def list_for_user(
        self,
        user_id: int,
        email: str | None,
        statuses: Collection[TicketStatus] | None = None,
    ) -> list[Ticket]:
        found = [
            ticket
            for ticket in self.tickets.values()
            if ticket.is_visible_to(user_id, email) and (statuses is None or ticket.status in statuses)
        ]
        return sorted(found, key=lambda ticket: ticket.created_at, reverse=True)

    def list_expired_pending(self, now: datetime, limit: int | None = None) -> list[Ticket]:
        expired = [ticket for ticket in self.tickets.values() if ticket.is_expired(now)]
        return expired[:limit] if limit is not None else expired

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
        with self.lock:
            ticket = self.tickets.get(ticket_id)
            if ticket is None:
                raise TicketNotFoundError(str(ticket_id))
            if ticket.status is not from_status:
                raise StateConflictError(str(ticket_id), expected=from_status, actual=ticket.status)
            changes: dict[str, object] = {"status": to_status}
            if holder_id is not None:
                changes["holder_id"] = holder_id
            updated = replace(ticket, **changes)
            self.tickets[ticket_id] = updated
            self.audit.append(AuditEntry(ticket_id, from_status, to_status, actor, at or NOW))
            return updated

    def set_audit_hash(self, ticket_id: TicketId, audit_hash: str) -> None:
        with self.lock:
            ticket = self.tickets.get(ticket_id)
            if ticket is None:
                raise TicketNotFoundError(str(ticket_id))
            if ticket.audit_hash is not None:
                raise StateConflictError(str(ticket_id), expected=ticket.status, actual=ticket.status)
            self.tickets[ticket_id] = replace(ticket, audit_hash=audit_hash)

    def list_audit_entries(self, ticket_id: TicketId) -> list[AuditEntry]:
        return [entry for entry in self.audit if entry.ticket_id == ticket_id]

    def discard(self, ticket_ids: Collection[TicketId]) -> None:
        with self.lock:
            if self.fail_discards:
                raise StoreUnavailableError("discard_tickets")
            for ticket_id in ticket_ids:
                self.tickets.pop(ticket_id, None)
            self.audit = [entry for entry in self.audit if entry.ticket_id not in ticket_ids]

    def transitions(self, ticket_id: TicketId) -> list[tuple[TicketStatus | None, TicketStatus]]:
        return [(entry.old_status, entry.new_status) for entry in self.list_audit_entries(ticket_id)]


class InMemoryAccountStore(AccountStore):
    def __init__(self) -> None:
        self.profiles: dict[int, Profile] = {}
        self.passwords: dict[int, str] = {}
        self.kyc: dict[int, KycSubmission] = {}
        self.lock = threading.RLock()

    def add(
        self,
        *,
        name: str = "Asha",
        email: str = "asha@example.com",
        role: Role = Role.ATTENDEE,
    ) -> Profile:
        registration = Registration(name=name, email=email, password="long-password", role=role)
        return self.create_account(registration)

    def email_taken(self, email: str) -> bool:
        return any(profile.email.lower() == email.lower() for profile in self.profiles.values())

    def create_account(self, registration: Registration) -> Profile | None:
        with self.lock:
            if self.email_taken(registration.email):
                return None
            user_id = len(self.profiles) + 1
            profile = Profile(user_id, registration.name, registration.email, registration.role)
            self.profiles[user_id] = profile
            self.passwords[user_id] = registration.password
            return profile

    def authenticate(self, email: str, password: str) -> Profile | None:
        for user_id, profile in self.profiles.items():
            if profile.email.lower() == email.lower() and self.passwords[user_id] == password:
                return profile
        return None

    def get_profile(self, user_id: int) -> Profile | None:
        return self.profiles.get(user_id)

    def mark_verified(self, user_id: int, submission: KycSubmission, at: datetime) -> Profile | None:
        with self.lock:
            profile = self.profiles[user_id]
            if profile.is_verified:
                return None
            self.kyc[user_id] = submission
            self.profiles[user_id] = replace(profile, verified_at=at)
            return self.profiles[user_id]
