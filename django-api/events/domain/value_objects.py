"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Non-negative ticket price or revenue amount."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: object) -> Self:
        try:
            return cls(amount=Decimal(str(value)))
        except InvalidOperation as exc:
            raise ValueError("Money amount must be numeric") from exc

    def times(self, count: int) -> "Money":
        return Money(amount=self.amount * count)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Seat limit of an event; sold and reserved seats both count against it."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")

    def remaining(self, sold: int, reserved: int) -> int:
        return self.value - sold - reserved

    def percent_taken(self, sold: int) -> int:
        """Whole-number share of seats sold; an event with no seats reports 0."""
        if not self.value:
            return 0
        return round(sold * 100 / self.value)
