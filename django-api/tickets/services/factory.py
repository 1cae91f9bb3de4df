"""Wire ticket services to the Django stores and settings."""

from datetime import timedelta

from django.conf import settings

from events.stores.django_ledger import DjangoCapacityLedger
from events.stores.django_store import DjangoEventStore
from tickets.services.lifecycle import InvitationLifecycleEngine
from tickets.services.query import TicketQueryService
from tickets.services.reservation_coordinator import ReservationCoordinator
from tickets.stores.django_store import DjangoTicketStore


def get_reservation_coordinator() -> ReservationCoordinator:
    return ReservationCoordinator(
        DjangoTicketStore(),
        DjangoCapacityLedger(),
        invitation_ttl=timedelta(hours=settings.INVITATION_TTL_HOURS),
        release_retries=settings.LEDGER_RELEASE_RETRIES,
    )


def get_lifecycle_engine() -> InvitationLifecycleEngine:
    return InvitationLifecycleEngine(
        DjangoTicketStore(), DjangoCapacityLedger(), DjangoEventStore()
    )


def get_query_service() -> TicketQueryService:
    return TicketQueryService(DjangoTicketStore(), DjangoEventStore(), get_lifecycle_engine())
