"""Ticket status state machine.

Transitions are one-directional; anything absent from TRANSITIONS is
rejected before storage is touched.
"""

from enum import Enum


class TicketStatus(Enum):
    PENDING_ACCEPTANCE = "pending_acceptance"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"
    CONFIRMED = "confirmed"
    USED = "used"


TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    TicketStatus.PENDING_ACCEPTANCE: frozenset(
        {TicketStatus.ACCEPTED, TicketStatus.DECLINED, TicketStatus.EXPIRED}
    ),
    TicketStatus.ACCEPTED: frozenset({TicketStatus.CONFIRMED}),
    TicketStatus.CONFIRMED: frozenset({TicketStatus.USED}),
    TicketStatus.DECLINED: frozenset(),
    TicketStatus.EXPIRED: frozenset(),
    TicketStatus.USED: frozenset(),
}

# A ticket in one of these is finished from the attendee's point of view.
CLOSED = frozenset({TicketStatus.USED, TicketStatus.DECLINED, TicketStatus.EXPIRED})


def can_transition(current: TicketStatus, target: TicketStatus) -> bool:
    return target in TRANSITIONS[current]
