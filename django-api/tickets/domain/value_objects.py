"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID, uuid4

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class TicketId:
    """Unique identifier for a Ticket."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class InviteeEmail:
    """Normalised email address an invitation is earmarked for."""

    value: str

    def __post_init__(self) -> None:
        if not _EMAIL_PATTERN.match(self.value):
            raise ValueError("Invalid email address")

    @classmethod
    def parse(cls, raw: str) -> Self:
        return cls(value=(raw or "").strip().lower())

    def matches(self, email: str | None) -> bool:
        return bool(email) and email.strip().lower() == self.value

    def __str__(self) -> str:
        return self.value


class TicketScope(Enum):
    """Views of a user's tickets served to the client."""

    ALL = "all"
    UPCOMING = "upcoming"
    PAST = "past"

    @classmethod
    def from_string(cls, value: str | None) -> "TicketScope":
        if not value:
            return cls.ALL
        return cls(value.strip().lower())
