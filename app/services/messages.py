"""
Day-bucketed message store.

Messages live in memory, grouped by a bucket key derived from the calendar
date at call time. Each operation works on the bucket that is active when it
is called, so a new day starts with an empty collection while earlier
buckets stay held (and unreachable through the public operations) for the
lifetime of the process.

Ids are assigned from a per-bucket counter rather than from the collection
length: after deleting id 2 from [1, 2, 3] the next message gets id 4, never
a second id 3. Clearing a bucket resets its counter to 1.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from threading import Lock
from typing import Callable

from app.core.errors import InvalidInputError, NotFoundError
from app.core.typing import Clock, utc_now

BucketKeyFunc = Callable[[datetime], str]


def current_bucket_key(now: datetime) -> str:
    """Return the day bucket key for ``now`` as ``day_month_year`` (no padding)."""
    return f"{now.day}_{now.month}_{now.year}"


@dataclass
class Message:
    id: int
    body: str
    created_at: datetime
    updated_at: datetime


@dataclass
class _Bucket:
    messages: list[Message] = field(default_factory=list)
    next_id: int = 1


class MessageStore:
    """
    In-memory register of short text messages for the active day bucket.

    All operations hold a single lock for their full read-check-mutate
    sequence and return copies, so callers can serialize results without
    racing concurrent updates.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        bucket_key_func: BucketKeyFunc = current_bucket_key,
    ):
        self._clock = clock
        self._bucket_key_func = bucket_key_func
        self._buckets: dict[str, _Bucket] = {}
        self._lock = Lock()

    def bucket_key(self) -> str:
        """Key of the bucket active right now."""
        return self._bucket_key_func(self._clock())

    def _active_bucket(self) -> _Bucket:
        # Must be called while holding self._lock
        key = self.bucket_key()
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = _Bucket()
            self._buckets[key] = bucket
        return bucket

    def list(self) -> list[Message]:
        """All messages of the active bucket in insertion order."""
        with self._lock:
            bucket = self._buckets.get(self.bucket_key())
            if bucket is None:
                return []
            return [replace(m) for m in bucket.messages]

    def create(self, body: str) -> Message:
        if not body:
            raise InvalidInputError("Message is required.")

        with self._lock:
            bucket = self._active_bucket()
            now = self._clock()
            message = Message(id=bucket.next_id, body=body, created_at=now, updated_at=now)
            bucket.next_id += 1
            bucket.messages.append(message)
            return replace(message)

    def update(self, message_id: int, body: str) -> Message:
        """
        Replace the body of an existing message and refresh ``updated_at``.

        Raises:
            InvalidInputError: body is empty
            NotFoundError: no message with that id in the active bucket
        """
        if not body:
            raise InvalidInputError("Message is required.")

        with self._lock:
            bucket = self._buckets.get(self.bucket_key())
            if bucket is not None:
                for message in bucket.messages:
                    if message.id == message_id:
                        message.body = body
                        message.updated_at = self._clock()
                        return replace(message)

        raise NotFoundError(f"Message with ID {message_id} not found.")

    def delete(self, message_id: int) -> bool:
        """Remove a message by id. Raises NotFoundError when there is no match."""
        with self._lock:
            bucket = self._buckets.get(self.bucket_key())
            if bucket is not None:
                for index, message in enumerate(bucket.messages):
                    if message.id == message_id:
                        del bucket.messages[index]
                        return True

        raise NotFoundError(f"Message with ID {message_id} not found.")

    def delete_all(self) -> None:
        with self._lock:
            bucket = self._buckets.get(self.bucket_key())
            if bucket is not None:
                bucket.messages.clear()
                bucket.next_id = 1

    def clear(self) -> None:
        """Drop every bucket. Used for testing."""
        with self._lock:
            self._buckets.clear()
