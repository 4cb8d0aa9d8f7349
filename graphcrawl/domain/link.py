from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphcrawl.domain.page import Page


class Link:
    """Directed edge between two pages.

    A link is never both cyclic and bidirectional: upgrading it to
    bidirectional clears the cyclic flag.
    """

    def __init__(self, source: "Page", target: "Page", is_cyclic: bool = False):
        self.source = source
        self.target = target
        self.is_cyclic = bool(is_cyclic)
        self.is_bidirectional = False

    @property
    def source_id(self) -> int:
        return self.source.page_id

    @property
    def target_id(self) -> int:
        return self.target.page_id

    def mark_bidirectional(self) -> None:
        self.is_cyclic = False
        self.is_bidirectional = True

    def is_reverse_of(self, source: "Page", target: "Page") -> bool:
        """True when this link runs target -> source."""
        return self.source_id == target.page_id and self.target_id == source.page_id

    def to_record(self) -> dict:
        return {
            "sourceId": self.source_id,
            "targetId": self.target_id,
            "isCyclic": self.is_cyclic,
            "isBidirectional": self.is_bidirectional,
        }

    def __repr__(self):
        marker = "#" if self.is_cyclic else ("*" if self.is_bidirectional else "")
        return f"<Link{marker} {self.source_id} -> {self.target_id}>"
