"""Cache keys for read-side event responses."""

from django.core.cache import cache
from django.db import transaction

EVENT_LIST_KEY = "events:list"


def event_detail_key(event_id) -> str:
    return f"events:{event_id}"


def invalidate(*keys: str) -> None:
    """Drop keys now and again once the surrounding transaction commits.

    The second delete covers readers that refilled the cache from data the
    transaction had not committed yet.
    """
    cache.delete_many(keys)
    transaction.on_commit(lambda: cache.delete_many(keys))
