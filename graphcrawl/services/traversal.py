import random
from typing import List, Optional

from graphcrawl.domain import Page, TraversalMode


class TraversalStructure:
    """Container of pages waiting to be visited whose removal order can change mid-crawl.

    - QUEUE removes at a floating index (0 for a plain breadth-first crawl),
      clamped to the last element.
    - STACK removes the last element.
    - BAG removes at a random index. The index is drawn when pages are inserted
      or removed, so `peek_next()` and the following `remove()` see the same page.

    Not thread-safe: the crawl loop is the only owner.
    """

    def __init__(self, mode: TraversalMode = TraversalMode.QUEUE, rng: Optional[random.Random] = None):
        self._mode = mode
        self._pages: List[Page] = []
        self._rng = rng or random.Random()
        self._next_random = 0
        self._next = 0

    @property
    def mode(self) -> TraversalMode:
        return self._mode

    @mode.setter
    def mode(self, mode: TraversalMode) -> None:
        if mode is self._mode:
            return
        self._mode = mode
        if mode is TraversalMode.BAG:
            self._draw_random(len(self._pages))

    @property
    def queue_position(self) -> int:
        return self._next

    def insert(self, page: Page) -> None:
        self._pages.append(page)
        self._draw_random(len(self._pages))

    def peek_next(self) -> Page:
        return self._pages[self._index_for_removal()]

    def remove(self) -> Page:
        index = self._index_for_removal()
        if self._mode is TraversalMode.BAG:
            self._draw_random(len(self._pages) - 1)
        return self._pages.pop(index)

    def is_empty(self) -> bool:
        return not self._pages

    def clear(self) -> None:
        self._pages.clear()

    def mark_last_remove_position(self) -> None:
        """Point QUEUE mode at the newest part of the frontier.

        Pages inserted while in STACK or BAG mode sit at the end of the list;
        switching back to QUEUE resumes near them instead of replaying the
        whole history from index 0.
        """
        if self._mode in (TraversalMode.STACK, TraversalMode.BAG):
            size = len(self._pages)
            self._next = 0 if size <= 2 else size - 2

    def _index_for_removal(self) -> int:
        if not self._pages:
            raise IndexError("traversal structure is empty")
        if self._mode is TraversalMode.QUEUE:
            if self._next >= len(self._pages):
                self._next = len(self._pages) - 1
            return self._next
        if self._mode is TraversalMode.STACK:
            return len(self._pages) - 1
        return self._next_random

    def _draw_random(self, limit: int) -> None:
        self._next_random = self._rng.randrange(limit) if limit >= 1 else 0

    def __len__(self):
        return len(self._pages)
