"""Account domain models.

A user's role decides what they may do: organizers publish events,
attendees buy tickets. Identity verification (KYC) is tracked per user.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(Enum):
    ORGANIZER = "Organizer"
    ATTENDEE = "Attendee"

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role name, ignoring case and surrounding whitespace."""
        wanted = value.strip().lower()
        for role in cls:
            if role.value.lower() == wanted:
                return role
        raise ValueError(f"Role must be one of: {', '.join(role.value for role in cls)}")


@dataclass(frozen=True)
class Profile:
    """Domain representation of a user account."""

    user_id: int
    name: str
    email: str
    role: Role
    verified_at: datetime | None = None

    @property
    def is_verified(self) -> bool:
        return self.verified_at is not None

    @property
    def is_organizer(self) -> bool:
        return self.role is Role.ORGANIZER


@dataclass(frozen=True)
class Registration:
    """Sign-up fields, with the email already normalised."""

    name: str
    email: str
    password: str
    role: Role


@dataclass(frozen=True)
class KycSubmission:
    """Identity details supplied for verification."""

    full_name: str
    address: str
    government_id: str

    def __post_init__(self) -> None:
        for label, value in (
            ("Full name", self.full_name),
            ("Address", self.address),
            ("Government ID", self.government_id),
        ):
            if not value.strip():
                raise ValueError(f"{label} is required")

    @property
    def government_id_suffix(self) -> str:
        """Last four characters; the full number is never stored."""
        return self.government_id.strip()[-4:]
