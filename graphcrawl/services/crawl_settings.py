from __future__ import annotations

import logging
import threading
from typing import Optional

from graphcrawl.domain import CrawlOptions, LinkFilter, TraversalMode

logger = logging.getLogger(__name__)


class CrawlSettings:
    """Thread-safe live configuration shared by the crawl loop and the controller.

    Each accessor reads or writes a single field under one lock; the crawl
    loop never needs a consistent snapshot of several fields. Pausing is a
    condition variable: `resume()` notifies the waiting loop instead of the
    loop polling a flag.
    """

    def __init__(
        self,
        *,
        traversal_mode: TraversalMode = TraversalMode.QUEUE,
        page_limit: int = 0,
        height_limit: Optional[int] = None,
        include_cyclic: bool = False,
        link_filter: LinkFilter = LinkFilter.ALL,
        search_term: Optional[str] = None,
        delay_ms: int = 0,
    ):
        self._lock = threading.Lock()
        self._resumed = threading.Condition(self._lock)
        self._paused = False
        self._stop_requested = False
        self._traversal_mode = traversal_mode
        self._page_limit = int(page_limit)
        self._height_limit = height_limit
        self._include_cyclic = bool(include_cyclic)
        self._link_filter = link_filter
        self._delay_ms = int(delay_ms)
        self._search_term: Optional[str] = None
        self.set_search_term(search_term)

    @classmethod
    def from_options(cls, options: CrawlOptions) -> "CrawlSettings":
        return cls(
            traversal_mode=options.traversal_mode,
            page_limit=options.page_limit,
            height_limit=options.height_limit,
            include_cyclic=options.include_cyclic,
            link_filter=options.link_filter,
            search_term=options.search_term,
            delay_ms=options.delay_ms,
        )

    # Pause / resume / stop

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    def pause(self) -> None:
        with self._lock:
            self._paused = True

    def resume(self) -> None:
        with self._resumed:
            self._paused = False
            self._resumed.notify_all()

    def wait_if_paused(self, timeout: Optional[float] = None) -> bool:
        """Block while paused. Returns False if `timeout` expired first."""
        with self._resumed:
            return self._resumed.wait_for(lambda: not self._paused, timeout=timeout)

    def request_stop(self) -> None:
        """Cooperative stop: the loop exits at its next page-limit check."""
        with self._resumed:
            self._page_limit = 0
            self._stop_requested = True
            self._paused = False
            self._resumed.notify_all()

    @property
    def stop_requested(self) -> bool:
        with self._lock:
            return self._stop_requested

    # Single-field cells

    @property
    def traversal_mode(self) -> TraversalMode:
        with self._lock:
            return self._traversal_mode

    @traversal_mode.setter
    def traversal_mode(self, mode: TraversalMode) -> None:
        with self._lock:
            self._traversal_mode = mode

    @property
    def page_limit(self) -> int:
        with self._lock:
            return self._page_limit

    @page_limit.setter
    def page_limit(self, value: int) -> None:
        if value < 0:
            logger.debug("Ignoring negative page limit %s", value)
            return
        with self._lock:
            self._page_limit = int(value)

    @property
    def height_limit(self) -> Optional[int]:
        with self._lock:
            return self._height_limit

    @height_limit.setter
    def height_limit(self, value: Optional[int]) -> None:
        if value is not None and value < 0:
            logger.debug("Ignoring negative height limit %s", value)
            return
        with self._lock:
            self._height_limit = value

    @property
    def include_cyclic(self) -> bool:
        with self._lock:
            return self._include_cyclic

    @include_cyclic.setter
    def include_cyclic(self, value: bool) -> None:
        with self._lock:
            self._include_cyclic = bool(value)

    @property
    def link_filter(self) -> LinkFilter:
        with self._lock:
            return self._link_filter

    @link_filter.setter
    def link_filter(self, value: LinkFilter) -> None:
        with self._lock:
            self._link_filter = value

    @property
    def delay_ms(self) -> int:
        with self._lock:
            return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, value: int) -> None:
        if value < 0:
            logger.debug("Ignoring negative delay %s", value)
            return
        with self._lock:
            self._delay_ms = int(value)

    @property
    def search_term(self) -> Optional[str]:
        """The active search term, or None when term matching is off."""
        with self._lock:
            return self._search_term

    def set_search_term(self, term: Optional[str]) -> None:
        value = term.strip() if isinstance(term, str) else None
        if not value or value.lower() in ("false", "true"):
            value = None
        with self._lock:
            self._search_term = value

    def height_within_limit(self, height: int) -> bool:
        limit = self.height_limit
        return limit is None or height <= limit

    def __repr__(self):
        with self._lock:
            return (
                f"<CrawlSettings mode={self._traversal_mode.value} paused={self._paused} "
                f"page_limit={self._page_limit} height_limit={self._height_limit}>"
            )
