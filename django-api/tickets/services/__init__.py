from tickets.services.lifecycle import InvitationLifecycleEngine
from tickets.services.query import TicketQueryService
from tickets.services.reservation_coordinator import ReservationCoordinator

__all__ = [
    "InvitationLifecycleEngine",
    "ReservationCoordinator",
    "TicketQueryService",
]
