from django.urls import path

from tickets.handlers import (
    AcceptInvitationView,
    CheckInView,
    DeclineInvitationView,
    GroupTicketRequestView,
    MyTicketsView,
    PurchaseTicketView,
    TicketDetailView,
    TicketHistoryView,
)

urlpatterns = [
    path("tickets/purchase", PurchaseTicketView.as_view(), name="ticket-purchase"),
    path("tickets/request-group", GroupTicketRequestView.as_view(), name="ticket-request-group"),
    path("tickets/mytickets", MyTicketsView.as_view(), name="ticket-mine"),
    path("tickets/accept/<str:ticket_id>", AcceptInvitationView.as_view(), name="ticket-accept"),
    path(
        "tickets/decline/<str:ticket_id>",
        DeclineInvitationView.as_view(),
        name="ticket-decline",
    ),
    path("tickets/checkin/<str:ticket_id>", CheckInView.as_view(), name="ticket-checkin"),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("tickets/<str:ticket_id>/history", TicketHistoryView.as_view(), name="ticket-history"),
]
