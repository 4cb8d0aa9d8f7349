"""Crawl result data model."""
from typing import NamedTuple

from graphcrawl.domain.options import StopReason


class CrawlResult(NamedTuple):
    """Result of a crawl operation.

    Lets callers report on the graph and tell a natural end of the crawl
    apart from a stop command.
    """
    graph: object
    """The `WebGraph` built by the run"""

    pages_crawled: int
    """Number of pages indexed and emitted"""

    stop_reason: StopReason
    """Why the crawl loop exited"""

    @property
    def stopped(self) -> bool:
        return self.stop_reason is StopReason.STOPPED
