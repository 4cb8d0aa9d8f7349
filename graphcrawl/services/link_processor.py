import logging
from typing import List

from graphcrawl.domain import Link, LinkFilter, Page
from graphcrawl.repository.web_graph import WebGraph
from graphcrawl.services.crawl_settings import CrawlSettings

logger = logging.getLogger(__name__)


class LinkProcessor:
    """Resolves the outbound links of a freshly indexed page against the graph.

    A link to an indexed page either closes a bidirectional pair (the page is
    the source's discoverer) or becomes a cyclic link when cyclic links are
    included. A link to an unseen URL creates a new page one level deeper,
    unless only backward links are wanted.
    """

    def __init__(self, settings: CrawlSettings):
        self.settings = settings

    def filter_links(self, source: Page, links: List[str]) -> List[str]:
        if self.settings.link_filter is not LinkFilter.REL:
            return list(links)
        kept = []
        for link_url in links:
            if not source.has_same_domain(link_url):
                logger.debug("Skipping (external) %s -> not same host as %s", link_url, source.url)
                continue
            kept.append(link_url)
        return kept

    def attach_links(self, source: Page, graph: WebGraph, links: List[str], only_backward: bool) -> List[Page]:
        """Attach `links` to `source` and return the pages created for new URLs."""
        created: List[Page] = []
        for link_url in self.filter_links(source, links):
            target = graph.find_page(link_url)
            if target is not None:
                self._attach_backward(source, target, graph)
            elif not only_backward:
                created.append(self._discover(source, link_url, graph))
        return created

    def resolve_duplicate(self, duplicate: Page, existing: Page, graph: WebGraph) -> None:
        """Redirect the discovery link of a second copy of `existing` to the indexed page.

        The copy is dropped; its discoverer's link is resolved like any link to
        an indexed page. The discoverer's record has already been written, so
        the resolved link only reaches the graph.
        """
        parent_link = duplicate.first_predecessor_link()
        if parent_link is None:
            return
        source = parent_link.source
        if duplicate in source.target_links:
            source.target_links.remove(duplicate)
        self._attach_backward(source, existing, graph)

    def _attach_backward(self, source: Page, target: Page, graph: WebGraph) -> None:
        parent_link = source.first_predecessor_link()
        if parent_link is not None and parent_link.is_reverse_of(source, target):
            parent_link.mark_bidirectional()
            logger.debug("Bidirectional %s <-> %s", target.page_id, source.page_id)
        elif self.settings.include_cyclic:
            link = Link(source, target, is_cyclic=True)
            graph.add_link(link)
            source.add_predecessor_link(link)
            logger.debug("Cyclic %s -> %s", source.page_id, target.page_id)

    def _discover(self, source: Page, link_url: str, graph: WebGraph) -> Page:
        target = Page(graph.next_page_id(), link_url, height=source.height + 1)
        target.add_predecessor_link(Link(source, target, is_cyclic=False))
        source.add_target_link(target)
        return target
