from tickets.handlers.views import (
    AcceptInvitationView,
    CheckInView,
    DeclineInvitationView,
    GroupTicketRequestView,
    MyTicketsView,
    PurchaseTicketView,
    TicketDetailView,
    TicketHistoryView,
)

__all__ = [
    "AcceptInvitationView",
    "CheckInView",
    "DeclineInvitationView",
    "GroupTicketRequestView",
    "MyTicketsView",
    "PurchaseTicketView",
    "TicketDetailView",
    "TicketHistoryView",
]
