"""Account service - registration, login, profiles and identity checks.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Return domain models or domain errors
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from django.utils import timezone

from accounts.domain import KycSubmission, Profile, Registration, Role
from accounts.domain.errors import (
    AccountNotFoundError,
    AccountValidationError,
    AlreadyVerifiedError,
    EmailTakenError,
    InvalidCredentialsError,
)
from accounts.stores.interfaces import AccountStore

logger = structlog.get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Service for user accounts."""

    def __init__(
        self,
        store: AccountStore,
        *,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._clock = clock

    def register(self, name: str, email: str, password: str, role: str) -> Profile:
        """Create an organizer or attendee account.

        Raises:
            AccountValidationError: If the name is blank or the role unknown.
            EmailTakenError: If the email is registered already, in any case.
        """
        if not name.strip():
            raise AccountValidationError("Name is required")
        try:
            parsed_role = Role.parse(role)
        except ValueError as exc:
            raise AccountValidationError(str(exc)) from exc

        normalized = normalize_email(email)
        if self._store.email_taken(normalized):
            raise EmailTakenError()
        profile = self._store.create_account(
            Registration(name=name.strip(), email=normalized, password=password, role=parsed_role)
        )
        if profile is None:
            raise EmailTakenError()

        logger.info("account_registered", user_id=profile.user_id, role=parsed_role.value)
        return profile

    def authenticate(self, email: str, password: str) -> Profile:
        """Check login credentials.

        Raises:
            InvalidCredentialsError: If no active account matches.
        """
        profile = self._store.authenticate(normalize_email(email), password)
        if profile is None:
            logger.info("login_failed")
            raise InvalidCredentialsError()
        logger.info("login_succeeded", user_id=profile.user_id)
        return profile

    def get_profile(self, user_id: int) -> Profile:
        profile = self._store.get_profile(user_id)
        if profile is None:
            raise AccountNotFoundError(user_id)
        return profile

    def submit_kyc(
        self, user_id: int, full_name: str, address: str, government_id: str
    ) -> Profile:
        """Verify the caller's identity from the submitted details.

        Verification completes on submission; there is no review queue.

        Raises:
            AccountValidationError: If any field is blank.
            AccountNotFoundError: If the user does not exist.
            AlreadyVerifiedError: If the account is verified already.
        """
        try:
            submission = KycSubmission(
                full_name=full_name, address=address, government_id=government_id
            )
        except ValueError as exc:
            raise AccountValidationError(str(exc)) from exc

        if self.get_profile(user_id).is_verified:
            raise AlreadyVerifiedError(user_id)
        verified = self._store.mark_verified(user_id, submission, self._clock())
        if verified is None:
            raise AlreadyVerifiedError(user_id)

        logger.info("identity_verified", user_id=user_id)
        return verified

    def is_organizer(self, user_id: int) -> bool:
        profile = self._store.get_profile(user_id)
        return profile is not None and profile.is_organizer
