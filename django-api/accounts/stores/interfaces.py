"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from accounts.domain import KycSubmission, Profile, Registration


class AccountStore(ABC):
    """Interface for account persistence operations."""

    @abstractmethod
    def email_taken(self, email: str) -> bool:
        """Check if any account uses ``email``, ignoring case."""
        ...

    @abstractmethod
    def create_account(self, registration: Registration) -> Profile | None:
        """Persist a user and its profile together.

        Returns None when another account claimed the email first.
        """
        ...

    @abstractmethod
    def authenticate(self, email: str, password: str) -> Profile | None:
        """Return the active account matching the credentials, or None."""
        ...

    @abstractmethod
    def get_profile(self, user_id: int) -> Profile | None:
        """Return a profile by user ID, or None if the user does not exist.

        Users created outside registration read as unverified attendees.
        """
        ...

    @abstractmethod
    def mark_verified(
        self, user_id: int, submission: KycSubmission, at: datetime
    ) -> Profile | None:
        """Record the KYC details and verify the account once.

        Returns None if the account was already verified.
        """
        ...
