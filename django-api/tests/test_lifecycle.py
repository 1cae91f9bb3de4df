"""Unit tests for InvitationLifecycleEngine.

Run with: pytest tests/test_lifecycle.py -v
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from uuid import uuid4

import pytest

from events.domain.errors import NotEventOwnerError
from tickets.domain import InviteeEmail, Ticket, TicketId, TicketStatus
from tickets.domain.errors import (
    AlreadyResolvedError,
    InvalidTicketIdError,
    InviteeMismatchError,
    TicketNotFoundError,
)
from tickets.domain.models import compute_audit_hash

FRIEND = "friend@example.com"


@pytest.fixture
def event(event_store):
    return event_store.add(organizer_id=99, capacity=10)


@pytest.fixture
def invitation(coordinator, event):
    _, pending = coordinator.purchase_group(1, "buyer@example.com", str(event.id), [FRIEND])
    return pending


def seats(event_store, event):
    stored = event_store.get_event(event.id)
    return stored.tickets_sold, stored.tickets_reserved


class TestAccept:
    """Tests for accepting invitations."""

    def test_accept_confirms_ticket_and_sets_holder(
        self, lifecycle, invitation, event_store, event
    ):
        ticket = lifecycle.accept(str(invitation.id), 2, FRIEND)

        assert ticket.status is TicketStatus.CONFIRMED
        assert ticket.holder_id == 2
        assert ticket.audit_hash is not None
        assert seats(event_store, event) == (2, 0)

    def test_accept_records_both_steps(self, lifecycle, invitation, ticket_store):
        lifecycle.accept(str(invitation.id), 2, FRIEND)

        assert ticket_store.transitions(invitation.id) == [
            (None, TicketStatus.PENDING_ACCEPTANCE),
            (TicketStatus.PENDING_ACCEPTANCE, TicketStatus.ACCEPTED),
            (TicketStatus.ACCEPTED, TicketStatus.CONFIRMED),
        ]

    def test_audit_hash_uses_recorded_confirmation_time(
        self, lifecycle, invitation, ticket_store, clock
    ):
        clock.advance(hours=1)
        ticket = lifecycle.accept(str(invitation.id), 2, FRIEND)

        confirmation = ticket_store.list_audit_entries(invitation.id)[-1]
        assert confirmation.new_status is TicketStatus.CONFIRMED
        assert confirmation.created_at == clock.now
        expected = compute_audit_hash(ticket.id, ticket.event_id, 2, confirmation.created_at)
        assert ticket.audit_hash == expected
        assert ticket_store.get(invitation.id).audit_hash == ticket.audit_hash

    def test_second_accept_reports_already_resolved(self, lifecycle, invitation, ticket_store):
        lifecycle.accept(str(invitation.id), 2, FRIEND)

        with pytest.raises(AlreadyResolvedError) as excinfo:
            lifecycle.accept(str(invitation.id), 2, FRIEND)

        assert excinfo.value.status is TicketStatus.CONFIRMED
        transitions = ticket_store.transitions(invitation.id)
        confirmations = [t for t in transitions if t[1] is TicketStatus.CONFIRMED]
        assert len(confirmations) == 1

    def test_concurrent_accepts_confirm_once(self, lifecycle, invitation, event_store, event):
        def attempt(_):
            try:
                lifecycle.accept(str(invitation.id), 2, FRIEND)
            except AlreadyResolvedError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=4) as pool:
            wins = list(pool.map(attempt, range(8)))

        assert wins.count(True) == 1
        assert seats(event_store, event) == (2, 0)

    def test_email_comparison_ignores_case(self, lifecycle, invitation):
        ticket = lifecycle.accept(str(invitation.id), 2, "Friend@Example.com")
        assert ticket.status is TicketStatus.CONFIRMED

    def test_purchaser_cannot_accept_on_friends_behalf(self, lifecycle, invitation):
        with pytest.raises(InviteeMismatchError):
            lifecycle.accept(str(invitation.id), 1, "buyer@example.com")

    def test_stranger_cannot_see_invitation(self, lifecycle, invitation):
        with pytest.raises(TicketNotFoundError):
            lifecycle.accept(str(invitation.id), 3, "stranger@example.com")

    def test_unknown_ticket(self, lifecycle):
        with pytest.raises(TicketNotFoundError):
            lifecycle.accept(str(uuid4()), 2, FRIEND)

    def test_malformed_ticket_id(self, lifecycle):
        with pytest.raises(InvalidTicketIdError):
            lifecycle.accept("ticket-1", 2, FRIEND)

    def test_purchaser_ticket_is_not_an_invitation(self, lifecycle, coordinator, event):
        ticket = coordinator.purchase_solo(1, str(event.id))
        with pytest.raises(AlreadyResolvedError):
            lifecycle.accept(str(ticket.id), 1, "buyer@example.com")


class TestDecline:
    """Tests for declining invitations."""

    def test_decline_releases_seat(self, lifecycle, invitation, event_store, event):
        ticket = lifecycle.decline(str(invitation.id), 2, FRIEND)

        assert ticket.status is TicketStatus.DECLINED
        assert seats(event_store, event) == (1, 0)

    def test_decline_is_irrevocable(self, lifecycle, invitation):
        lifecycle.decline(str(invitation.id), 2, FRIEND)
        with pytest.raises(AlreadyResolvedError):
            lifecycle.accept(str(invitation.id), 2, FRIEND)

    def test_decline_after_accept_rejected(self, lifecycle, invitation, event_store, event):
        lifecycle.accept(str(invitation.id), 2, FRIEND)
        with pytest.raises(AlreadyResolvedError):
            lifecycle.decline(str(invitation.id), 2, FRIEND)
        assert seats(event_store, event) == (2, 0)


class TestExpiry:
    """Tests for invitations that run out of time."""

    def test_accept_after_deadline_expires_invitation(
        self, lifecycle, invitation, clock, event_store, event, ticket_store
    ):
        clock.advance(hours=24)

        with pytest.raises(AlreadyResolvedError) as excinfo:
            lifecycle.accept(str(invitation.id), 2, FRIEND)

        assert excinfo.value.status is TicketStatus.EXPIRED
        assert ticket_store.get(invitation.id).status is TicketStatus.EXPIRED
        assert seats(event_store, event) == (1, 0)

    def test_accept_just_before_deadline_succeeds(self, lifecycle, invitation, clock):
        clock.advance(hours=23, minutes=59)
        assert lifecycle.accept(str(invitation.id), 2, FRIEND).status is TicketStatus.CONFIRMED

    def test_expire_is_idempotent(
        self, lifecycle, invitation, clock, event_store, event, ticket_store
    ):
        clock.advance(days=2)
        assert lifecycle.expire(invitation) is True
        assert lifecycle.expire(invitation) is False
        assert seats(event_store, event) == (1, 0)
        last = ticket_store.transitions(invitation.id)[-1]
        assert last == (TicketStatus.PENDING_ACCEPTANCE, TicketStatus.EXPIRED)

    def test_expire_ignores_live_invitation(self, lifecycle, invitation):
        assert lifecycle.expire(invitation) is False

    def test_sweep_expires_only_overdue_invitations(
        self, lifecycle, coordinator, event, clock, event_store, ticket_store
    ):
        coordinator.purchase_group(
            1, "buyer@example.com", str(event.id), ["a@example.com", "b@example.com"]
        )
        clock.advance(hours=12)
        coordinator.purchase_group(3, "other@example.com", str(event.id), ["c@example.com"])
        clock.advance(hours=13)

        assert lifecycle.sweep_expired() == 2
        assert lifecycle.sweep_expired() == 0
        pending = [
            t for t in ticket_store.tickets.values() if t.status is TicketStatus.PENDING_ACCEPTANCE
        ]
        assert [str(t.invitee_email) for t in pending] == ["c@example.com"]
        assert seats(event_store, event) == (2, 1)

    def test_sweep_respects_limit(self, lifecycle, coordinator, event, clock):
        coordinator.purchase_group(
            1, "buyer@example.com", str(event.id), ["a@example.com", "b@example.com"]
        )
        clock.advance(days=1)
        assert lifecycle.sweep_expired(limit=1) == 1
        assert lifecycle.sweep_expired() == 1


class TestCapacitySymmetry:
    """Reserved seats always return to the pool or become sold."""

    def test_mixed_outcomes_balance_the_ledger(
        self, lifecycle, coordinator, event, clock, event_store
    ):
        _, a, b, c = coordinator.purchase_group(
            1, "buyer@example.com", str(event.id), ["a@example.com", "b@example.com", "c@example.com"]
        )
        assert seats(event_store, event) == (1, 3)

        lifecycle.accept(str(a.id), 2, "a@example.com")
        lifecycle.decline(str(b.id), 3, "b@example.com")
        clock.advance(days=1)
        lifecycle.sweep_expired()

        assert seats(event_store, event) == (2, 0)
        assert event_store.get_event(event.id).headroom == 8

    def test_reserve_three_then_decline_expire_accept(
        self, lifecycle, ledger, ticket_store, event, clock, event_store
    ):
        ledger.reserve(event.id, 3)
        emails = ["a@example.com", "b@example.com", "c@example.com"]
        a, b, c = (
            ticket_store.add(
                Ticket(
                    id=TicketId.new(),
                    event_id=event.id,
                    purchaser_id=1,
                    holder_id=None,
                    invitee_email=InviteeEmail.parse(email),
                    status=TicketStatus.PENDING_ACCEPTANCE,
                    created_at=clock.now,
                    expires_at=clock.now + timedelta(hours=1 if email.startswith("b") else 24),
                )
            )
            for email in emails
        )
        assert ledger.headroom(event.id) == 7

        lifecycle.decline(str(a.id), 2, "a@example.com")
        clock.advance(hours=2)
        assert lifecycle.sweep_expired() == 1
        lifecycle.accept(str(c.id), 4, "c@example.com")

        assert seats(event_store, event) == (1, 0)
        assert ledger.headroom(event.id) == 9


class TestCheckIn:
    """Tests for marking tickets used at the venue."""

    def test_owner_checks_in_confirmed_ticket(self, lifecycle, coordinator, event):
        ticket = coordinator.purchase_solo(1, str(event.id))
        assert lifecycle.check_in(str(ticket.id), 99).status is TicketStatus.USED

    def test_second_check_in_rejected(self, lifecycle, coordinator, event):
        ticket = coordinator.purchase_solo(1, str(event.id))
        lifecycle.check_in(str(ticket.id), 99)
        with pytest.raises(AlreadyResolvedError):
            lifecycle.check_in(str(ticket.id), 99)

    def test_pending_ticket_cannot_be_checked_in(self, lifecycle, invitation):
        with pytest.raises(AlreadyResolvedError):
            lifecycle.check_in(str(invitation.id), 99)

    def test_non_owner_rejected(self, lifecycle, coordinator, event):
        ticket = coordinator.purchase_solo(1, str(event.id))
        with pytest.raises(NotEventOwnerError):
            lifecycle.check_in(str(ticket.id), 1)
