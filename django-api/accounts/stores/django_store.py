"""Django ORM implementation of the AccountStore."""

from datetime import datetime

import structlog
from django.contrib import auth
from django.db import IntegrityError, transaction

from accounts import models
from accounts.domain import KycSubmission, Profile, Registration, Role
from accounts.stores.interfaces import AccountStore
from events.stores.django_store import database_errors

logger = structlog.get_logger(__name__)


def to_domain(user, row: models.Profile | None) -> Profile:
    if row is None:
        return Profile(
            user_id=user.id,
            name=user.get_full_name() or user.get_username(),
            email=user.email,
            role=Role.ATTENDEE,
        )
    return Profile(
        user_id=user.id,
        name=row.name,
        email=user.email,
        role=Role(row.role),
        verified_at=row.verified_at,
    )


class DjangoAccountStore(AccountStore):
    """Accounts on Django's user model plus a profile row."""

    def __init__(self) -> None:
        self._users = auth.get_user_model()

    def email_taken(self, email: str) -> bool:
        with database_errors("email_taken"):
            return self._users.objects.filter(email__iexact=email).exists()

    def create_account(self, registration: Registration) -> Profile | None:
        with database_errors("create_account"):
            try:
                with transaction.atomic():
                    # username carries the email so the unique index guards it
                    user = self._users.objects.create_user(
                        username=registration.email,
                        email=registration.email,
                        password=registration.password,
                    )
                    row = models.Profile.objects.create(
                        user=user,
                        name=registration.name,
                        role=registration.role.value,
                    )
            except IntegrityError:
                logger.info("account_email_conflict")
                return None
        return to_domain(user, row)

    def authenticate(self, email: str, password: str) -> Profile | None:
        with database_errors("authenticate"):
            user = self._users.objects.filter(email__iexact=email).order_by("id").first()
            if user is None:
                return None
            user = auth.authenticate(username=user.get_username(), password=password)
            if user is None:
                return None
            return to_domain(user, models.Profile.objects.filter(user=user).first())

    def get_profile(self, user_id: int) -> Profile | None:
        with database_errors("get_profile"):
            user = self._users.objects.filter(pk=user_id).first()
            if user is None:
                return None
            return to_domain(user, models.Profile.objects.filter(user=user).first())

    def mark_verified(
        self, user_id: int, submission: KycSubmission, at: datetime
    ) -> Profile | None:
        with database_errors("mark_verified"), transaction.atomic():
            user = self._users.objects.get(pk=user_id)
            models.Profile.objects.get_or_create(
                user=user,
                defaults={"name": user.get_full_name() or user.get_username()},
            )
            updated = models.Profile.objects.filter(user=user, verified_at__isnull=True).update(
                kyc_full_name=submission.full_name.strip(),
                kyc_address=submission.address.strip(),
                kyc_government_id_suffix=submission.government_id_suffix,
                verified_at=at,
            )
            if not updated:
                return None
            return to_domain(user, models.Profile.objects.get(user=user))
