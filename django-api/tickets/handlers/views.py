"""HTTP handlers (views) for the ticket wallet and group invitations.

Domain errors raised by the services are mapped to responses by
config.exception_handler.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tickets.handlers.serializers import (
    AuditEntrySerializer,
    GroupRequestSerializer,
    PurchaseRequestSerializer,
    TicketSerializer,
    ticket_with_event,
)
from tickets.services.factory import (
    get_lifecycle_engine,
    get_query_service,
    get_reservation_coordinator,
)


class PurchaseTicketView(APIView):
    """Handler for POST /api/tickets/purchase"""

    def post(self, request: Request) -> Response:
        serializer = PurchaseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = get_reservation_coordinator().purchase_solo(
            request.user.id,
            serializer.validated_data["eventId"],
        )
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class GroupTicketRequestView(APIView):
    """Handler for POST /api/tickets/request-group"""

    def post(self, request: Request) -> Response:
        serializer = GroupRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tickets = get_reservation_coordinator().purchase_group(
            request.user.id,
            request.user.email,
            serializer.validated_data["eventId"],
            serializer.validated_data["attendeeEmails"],
        )
        return Response(TicketSerializer(tickets, many=True).data, status=status.HTTP_201_CREATED)


class MyTicketsView(APIView):
    """Handler for GET /api/tickets/mytickets?status={all|upcoming|past}"""

    def get(self, request: Request) -> Response:
        views = get_query_service().list_my_tickets(
            request.user.id,
            request.user.email,
            request.query_params.get("status"),
        )
        return Response([ticket_with_event(view) for view in views])


class TicketDetailView(APIView):
    """Handler for GET /api/tickets/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        view = get_query_service().get_ticket(ticket_id, request.user.id, request.user.email)
        return Response(ticket_with_event(view))


class TicketHistoryView(APIView):
    """Handler for GET /api/tickets/{ticket_id}/history"""

    def get(self, request: Request, ticket_id: str) -> Response:
        entries = get_query_service().get_history(ticket_id, request.user.id, request.user.email)
        return Response(AuditEntrySerializer(entries, many=True).data)


class AcceptInvitationView(APIView):
    """Handler for POST /api/tickets/accept/{ticket_id}"""

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = get_lifecycle_engine().accept(ticket_id, request.user.id, request.user.email)
        return Response(TicketSerializer(ticket).data)


class DeclineInvitationView(APIView):
    """Handler for POST /api/tickets/decline/{ticket_id}"""

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = get_lifecycle_engine().decline(ticket_id, request.user.id, request.user.email)
        return Response(TicketSerializer(ticket).data)


class CheckInView(APIView):
    """Handler for POST /api/tickets/checkin/{ticket_id}"""

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = get_lifecycle_engine().check_in(ticket_id, request.user.id)
        return Response(TicketSerializer(ticket).data)
