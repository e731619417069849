"""
Blog page-view counter.

Two counting policies:

- simple: every view increments the count.
- deduplicated: a view carrying a visitor id is counted only when that
  visitor has not been counted before, or when more than the dedup window has
  elapsed since ``last_viewed``.

``last_viewed`` is refreshed on every view, counted or not, and it is shared
by all visitors of a slug. A second visitor arriving within the window
therefore pushes the window forward for the first visitor too, and a known
visitor is only re-counted after the slug has been quiet for longer than the
window.

The visitor set is kept for the lifetime of the process with no eviction,
so memory grows with the number of distinct visitors per slug.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from threading import Lock
from typing import Optional

from app.core.errors import InvalidInputError, NotFoundError
from app.core.typing import EPOCH, Clock, utc_now

DEFAULT_DEDUP_WINDOW = timedelta(hours=24)


@dataclass
class BlogView:
    slug: str
    count: int = 0
    last_viewed: datetime = EPOCH
    visitors: set[str] = field(default_factory=set)

    @property
    def unique_visitors(self) -> int:
        return len(self.visitors)

    def snapshot(self) -> "BlogView":
        return replace(self, visitors=set(self.visitors))


class ViewCounter:
    """Per-slug view counts guarded by a single lock."""

    def __init__(self, clock: Clock = utc_now, window: timedelta = DEFAULT_DEDUP_WINDOW):
        self._clock = clock
        self.window = window
        self._views: dict[str, BlogView] = {}
        self._lock = Lock()

    def _get_or_create(self, slug: str) -> BlogView:
        # Must be called while holding self._lock
        view = self._views.get(slug)
        if view is None:
            view = BlogView(slug=slug)
            self._views[slug] = view
        return view

    def get_or_create(self, slug: str) -> BlogView:
        """Return the view record for ``slug``, creating a zeroed one on first access."""
        if not slug:
            raise InvalidInputError("Slug is required.")
        with self._lock:
            return self._get_or_create(slug).snapshot()

    def record_view(self, slug: str, visitor_id: Optional[str] = None) -> BlogView:
        """
        Record one view of ``slug``.

        Args:
            slug: Page identifier
            visitor_id: When given, the deduplicated policy applies

        Returns:
            A copy of the record after the view was applied
        """
        if not slug:
            raise InvalidInputError("Slug is required.")
        if visitor_id is not None and not visitor_id:
            raise InvalidInputError("Visitor ID is required.")

        with self._lock:
            view = self._get_or_create(slug)
            now = self._clock()

            if visitor_id is None:
                view.count += 1
            elif visitor_id not in view.visitors or now - view.last_viewed > self.window:
                view.count += 1
                view.visitors.add(visitor_id)

            view.last_viewed = now
            return view.snapshot()

    def get(self, slug: str) -> BlogView:
        """Read-only lookup. Raises NotFoundError if the slug was never viewed."""
        if not slug:
            raise InvalidInputError("Slug is required.")
        with self._lock:
            view = self._views.get(slug)
            if view is None:
                raise NotFoundError(f"No views recorded for slug '{slug}'.")
            return view.snapshot()

    def clear(self) -> None:
        """Drop all view records. Used for testing."""
        with self._lock:
            self._views.clear()
