"""Pytest configuration and shared fixtures."""

from datetime import timedelta

import pytest
from rest_framework.test import APIClient

from accounts.domain import Role
from tests.fakes import FakeClock, InMemoryCapacityLedger, InMemoryEventStore, InMemoryTicketStore
from tickets.services import InvitationLifecycleEngine, ReservationCoordinator, TicketQueryService


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def ledger(event_store: InMemoryEventStore) -> InMemoryCapacityLedger:
    return InMemoryCapacityLedger(event_store)


@pytest.fixture
def ticket_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def coordinator(ticket_store, ledger, clock) -> ReservationCoordinator:
    return ReservationCoordinator(
        ticket_store,
        ledger,
        invitation_ttl=timedelta(hours=24),
        release_retries=3,
        clock=clock,
    )


@pytest.fixture
def lifecycle(ticket_store, ledger, event_store, clock) -> InvitationLifecycleEngine:
    return InvitationLifecycleEngine(ticket_store, ledger, event_store, clock=clock)


@pytest.fixture
def query(ticket_store, event_store, lifecycle, clock) -> TicketQueryService:
    return TicketQueryService(ticket_store, event_store, lifecycle, clock=clock)


@pytest.fixture
def organizer(django_user_model):
    from accounts.models import Profile

    user = django_user_model.objects.create_user(
        username="organizer", email="org@example.com", password="p"
    )
    Profile.objects.create(user=user, name="Sunburn Live", role=Role.ORGANIZER.value)
    return user


@pytest.fixture
def buyer(django_user_model):
    return django_user_model.objects.create_user(
        username="buyer", email="buyer@example.com", password="p"
    )


@pytest.fixture
def friend(django_user_model):
    return django_user_model.objects.create_user(
        username="friend", email="friend@example.com", password="p"
    )


@pytest.fixture
def client_for():
    def make(user) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return make
