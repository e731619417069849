"""
Time helpers shared by the in-memory stores.

Stores never read the wall clock directly. They take a ``Clock`` (any
zero-argument callable returning an aware datetime) so tests can freeze or
advance time deterministically.

Usage:
    from app.core.typing import Clock, utc_now

    store = MessageStore(clock=utc_now)
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]

# Reference point for views that have never been counted
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """
    Get current UTC time (timezone-aware).

    Replaces deprecated datetime.utcnow() which returns naive datetime.
    """
    return datetime.now(timezone.utc)


__all__ = [
    "Clock",
    "EPOCH",
    "utc_now",
]
