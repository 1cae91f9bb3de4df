"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from events.domain import Event, EventDraft, EventId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by date descending."""
        ...

    @abstractmethod
    def list_events_by_organizer(self, organizer_id: int) -> list[Event]:
        """Return the events owned by an organizer, ordered by date descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_events(self, event_ids: Iterable[EventId]) -> dict[EventId, Event]:
        """Return the events that exist among ``event_ids``, keyed by ID."""
        ...

    @abstractmethod
    def create_event(self, organizer_id: int, draft: EventDraft) -> Event:
        """Persist a new event with zero sold and reserved seats."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, draft: EventDraft) -> Event | None:
        """Apply ``draft`` only while the seat counters still allow it.

        The write must not happen if the price changes on an event with sold
        tickets, or if the new capacity is below sold plus reserved seats.
        Returns None when the event is missing or the guard rejected the write.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete an event with no sold, reserved or issued tickets.

        Returns False when the event is missing or still has tickets.
        """
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...


class CapacityLedger(ABC):
    """Interface for the per-event seat counters.

    This is the only writer of ``tickets_sold`` and ``tickets_reserved``.
    Every method must be atomic with respect to concurrent calls on the
    same event.
    """

    @abstractmethod
    def reserve(self, event_id: EventId, count: int) -> None:
        """Hold ``count`` seats, all or nothing.

        Raises:
            EventNotFoundError: If the event does not exist.
            CapacityExceededError: If fewer than ``count`` seats are free.
        """
        ...

    @abstractmethod
    def release(self, event_id: EventId, count: int) -> None:
        """Return ``count`` held seats to the available headroom.

        Raises:
            LedgerInconsistencyError: If fewer than ``count`` seats are held.
        """
        ...

    @abstractmethod
    def confirm(self, event_id: EventId, count: int) -> None:
        """Move ``count`` held seats into the sold count.

        Raises:
            LedgerInconsistencyError: If fewer than ``count`` seats are held.
        """
        ...

    @abstractmethod
    def headroom(self, event_id: EventId) -> int:
        """Return capacity minus sold and reserved seats."""
        ...
