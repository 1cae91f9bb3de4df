"""Tests for registration, login, profiles and identity verification.

Run with: pytest tests/test_accounts.py -v
"""

import pytest

from accounts.domain import KycSubmission, Role
from accounts.domain.errors import (
    AccountNotFoundError,
    AccountValidationError,
    AlreadyVerifiedError,
    EmailTakenError,
    InvalidCredentialsError,
)
from accounts.models import Profile as ProfileRow
from accounts.services import AccountService
from tests.fakes import NOW, InMemoryAccountStore


@pytest.fixture
def account_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def service(account_store, clock) -> AccountService:
    return AccountService(account_store, clock=clock)


def register_body(**overrides) -> dict:
    body = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "password": "festival-season-2026",
        "role": "Organizer",
    }
    body.update(overrides)
    return body


def kyc_body(**overrides) -> dict:
    body = {"fullName": "Asha Rao", "address": "12 MG Road, Pune", "governmentId": "ABCD1234X"}
    body.update(overrides)
    return body


class TestKycSubmission:
    """Tests for the KycSubmission value object."""

    @pytest.mark.parametrize("field", ["full_name", "address", "government_id"])
    def test_blank_field_rejected(self, field):
        fields = dict(full_name="Asha Rao", address="Pune", government_id="ABCD1234")
        fields[field] = "  "
        with pytest.raises(ValueError):
            KycSubmission(**fields)

    def test_only_id_suffix_is_kept(self):
        assert KycSubmission("Asha Rao", "Pune", " ABCD1234 ").government_id_suffix == "1234"


class TestRole:
    def test_parse_ignores_case(self):
        assert Role.parse(" organizer ") is Role.ORGANIZER
        assert Role.parse("ATTENDEE") is Role.ATTENDEE

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            Role.parse("admin")


class TestAccountService:
    """Tests for AccountService."""

    def test_register_normalises_email(self, service):
        profile = service.register(" Asha ", "Asha@Example.COM ", "pw-long-enough", "organizer")

        assert profile.email == "asha@example.com"
        assert profile.name == "Asha"
        assert profile.is_organizer
        assert not profile.is_verified

    def test_register_rejects_email_in_any_case(self, service, account_store):
        account_store.add(email="asha@example.com")
        with pytest.raises(EmailTakenError):
            service.register("Asha", "ASHA@example.com", "pw-long-enough", "Attendee")

    @pytest.mark.parametrize("name, role", [("", "Attendee"), ("Asha", "Superuser")])
    def test_register_validates_name_and_role(self, service, name, role):
        with pytest.raises(AccountValidationError):
            service.register(name, "asha@example.com", "pw-long-enough", role)

    def test_authenticate_matches_email_case_insensitively(self, service, account_store):
        created = account_store.add(email="asha@example.com")
        assert service.authenticate("ASHA@example.com", "long-password") == created

    def test_authenticate_wrong_password(self, service, account_store):
        account_store.add(email="asha@example.com")
        with pytest.raises(InvalidCredentialsError):
            service.authenticate("asha@example.com", "nope")

    def test_get_profile_unknown_user(self, service):
        with pytest.raises(AccountNotFoundError):
            service.get_profile(42)

    def test_submit_kyc_verifies_immediately(self, service, account_store):
        user = account_store.add()

        profile = service.submit_kyc(user.user_id, "Asha Rao", "Pune", "ABCD1234")

        assert profile.is_verified
        assert profile.verified_at == NOW
        assert account_store.kyc[user.user_id].government_id_suffix == "1234"

    def test_submit_kyc_twice_rejected(self, service, account_store):
        user = account_store.add()
        service.submit_kyc(user.user_id, "Asha Rao", "Pune", "ABCD1234")

        with pytest.raises(AlreadyVerifiedError):
            service.submit_kyc(user.user_id, "Asha Rao", "Pune", "ABCD1234")

    def test_submit_kyc_blank_field(self, service, account_store):
        user = account_store.add()
        with pytest.raises(AccountValidationError):
            service.submit_kyc(user.user_id, "Asha Rao", "", "ABCD1234")

    def test_is_organizer(self, service, account_store):
        organizer = account_store.add(email="org@example.com", role=Role.ORGANIZER)
        attendee = account_store.add(email="fan@example.com")

        assert service.is_organizer(organizer.user_id)
        assert not service.is_organizer(attendee.user_id)
        assert not service.is_organizer(99)


@pytest.mark.django_db
class TestRegisterApi:
    """Tests for POST /api/users/register and /api/users/login"""

    def test_register_returns_tokens_and_profile(self, api_client):
        response = api_client.post("/api/users/register", register_body(), format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["refresh"]
        assert body["user"]["role"] == "Organizer"
        assert body["user"]["isVerified"] is False
        assert ProfileRow.objects.get(user_id=body["user"]["id"]).role == "Organizer"

    def test_registered_organizer_can_create_event(self, api_client):
        token = api_client.post("/api/users/register", register_body(), format="json").json()["token"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = api_client.post(
            "/api/events",
            {
                "name": "Indie Night",
                "date": "2030-01-01T20:00:00Z",
                "location": "Pune",
                "ticketPrice": "300.00",
                "capacity": 50,
            },
            format="json",
        )

        assert response.status_code == 201

    def test_short_password_rejected(self, api_client):
        response = api_client.post("/api/users/register", register_body(password="short"), format="json")

        assert response.status_code == 400
        assert "password" in response.json()["details"]

    def test_unknown_role_rejected(self, api_client):
        response = api_client.post("/api/users/register", register_body(role="Admin"), format="json")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_duplicate_email_conflicts(self, api_client, buyer):
        response = api_client.post(
            "/api/users/register", register_body(email="BUYER@example.com"), format="json"
        )
        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_TAKEN"

    def test_login_with_email(self, api_client):
        api_client.post("/api/users/register", register_body(role="Attendee"), format="json")

        response = api_client.post(
            "/api/users/login",
            {"email": "ASHA@example.com", "password": "festival-season-2026"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "Attendee"

    def test_login_wrong_password(self, api_client):
        api_client.post("/api/users/register", register_body(), format="json")

        response = api_client.post(
            "/api/users/login",
            {"email": "asha@example.com", "password": "not-the-password"},
            format="json",
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"


@pytest.mark.django_db
class TestProfileApi:
    """Tests for GET /api/users/profile and POST /api/users/submit-kyc"""

    def test_profile_requires_authentication(self, api_client):
        assert api_client.get("/api/users/profile").status_code == 401

    def test_organizer_profile(self, client_for, organizer):
        response = client_for(organizer).get("/api/users/profile")

        assert response.status_code == 200
        assert response.json()["role"] == "Organizer"
        assert response.json()["email"] == "org@example.com"

    def test_user_without_profile_reads_as_attendee(self, client_for, buyer):
        body = client_for(buyer).get("/api/users/profile").json()
        assert (body["role"], body["isVerified"]) == ("Attendee", False)

    def test_submit_kyc_marks_profile_verified(self, client_for, buyer):
        client = client_for(buyer)

        response = client.post("/api/users/submit-kyc", kyc_body(), format="json")

        assert response.status_code == 200
        assert response.json()["isVerified"] is True
        assert client.get("/api/users/profile").json()["isVerified"] is True
        row = ProfileRow.objects.get(user=buyer)
        assert row.kyc_government_id_suffix == "234X"
        assert row.kyc_full_name == "Asha Rao"

    def test_second_submission_conflicts(self, client_for, buyer):
        client = client_for(buyer)
        client.post("/api/users/submit-kyc", kyc_body(), format="json")

        response = client.post("/api/users/submit-kyc", kyc_body(), format="json")

        assert response.status_code == 409
        assert response.json()["code"] == "ALREADY_VERIFIED"

    def test_missing_kyc_field_rejected(self, client_for, buyer):
        response = client_for(buyer).post("/api/users/submit-kyc", kyc_body(address=""), format="json")
        assert response.status_code == 400
        assert not ProfileRow.objects.filter(user=buyer, verified_at__isnull=False).exists()
