import logging
from typing import Optional

from graphcrawl.domain import LinkFilter, Page, StopReason
from graphcrawl.repository.web_graph import WebGraph
from graphcrawl.services.crawl_settings import CrawlSettings
from graphcrawl.services.traversal import TraversalStructure

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl decision rules: page and height limits, and the ABS domain filter.

    Every rule reads the live settings, so a controller command takes effect
    at the next check.
    """

    def __init__(self, settings: CrawlSettings):
        self.settings = settings

    def stop_reason(self, structure: TraversalStructure, pages_crawled: int) -> Optional[StopReason]:
        """Return why the loop must stop before the next page, or None to continue."""
        if structure.is_empty():
            return StopReason.EXHAUSTED
        if not self.settings.height_within_limit(structure.peek_next().height):
            return StopReason.HEIGHT_LIMIT
        if pages_crawled >= self.settings.page_limit:
            return StopReason.STOPPED if self.settings.stop_requested else StopReason.PAGE_LIMIT
        return None

    def is_last_page(self, page: Page, pages_crawled: int) -> bool:
        """True when `page` is the last one the page or height limit lets us deepen from."""
        if pages_crawled == self.settings.page_limit - 1:
            return True
        return page.height == self.settings.height_limit

    def should_skip_due_to_domain(self, page: Page, graph: WebGraph) -> bool:
        """ABS mode never deepens into a domain that is already in the graph.

        Checked before fetching: a skipped page costs no request and is not
        recorded as an invalid URL.
        """
        if self.settings.link_filter is not LinkFilter.ABS:
            return False
        if graph.contains_domain(page.hostname):
            logger.debug("Skipping (domain already graphed) %s", page.url)
            return True
        return False
