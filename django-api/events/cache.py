"""Cache keys for event catalog responses."""

from django.conf import settings
from django.core.cache import cache

EVENT_LIST_KEY = "events:list"


def event_detail_key(event_id: object) -> str:
    return f"events:{event_id}"


def cache_timeout() -> int:
    return settings.EVENT_CACHE_TIMEOUT


def invalidate_event(event_id: object) -> None:
    """Drop the list and detail entries touched by a change to one event."""
    cache.delete_many([EVENT_LIST_KEY, event_detail_key(event_id)])
