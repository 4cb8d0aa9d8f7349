import logging
import random
import time
from typing import Callable, List, Optional, Sequence

from graphcrawl.domain import CrawlResult, IndexedContent, Page, StopReason
from graphcrawl.exceptions import PageIndexError
from graphcrawl.repository.web_graph import WebGraph
from graphcrawl.services.crawl_policy import CrawlPolicy
from graphcrawl.services.crawl_settings import CrawlSettings
from graphcrawl.services.link_processor import LinkProcessor
from graphcrawl.services.page_indexer import PageIndexer
from graphcrawl.services.record_sink import PageRecordSerializer, RecordSink
from graphcrawl.services.traversal import TraversalStructure

logger = logging.getLogger(__name__)


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    This class owns the crawl control-flow: choosing the next page from the
    traversal structure, applying the limits and filters from the live
    settings, indexing pages into the graph and emitting one record per
    indexed page. Pages are processed strictly one at a time, because
    cyclic and bidirectional resolution depends on the exact graph state at
    discovery time.
    """

    def __init__(
        self,
        *,
        page_indexer: PageIndexer,
        settings: CrawlSettings,
        link_processor: LinkProcessor,
        crawl_policy: CrawlPolicy,
        serializer: Optional[PageRecordSerializer] = None,
        sinks: Sequence[RecordSink] = (),
        randomize: bool = True,
        rng: Optional[random.Random] = None,
        shutdown_grace_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.page_indexer = page_indexer
        self.settings = settings
        self.link_processor = link_processor
        self.crawl_policy = crawl_policy
        self.serializer = serializer or PageRecordSerializer()
        self.sinks: List[RecordSink] = list(sinks)
        self.randomize = randomize
        self.rng = rng or random.Random()
        self.shutdown_grace_seconds = shutdown_grace_seconds
        self._sleep = sleep

    def crawl(self, source_url: str, supervised: bool = False) -> CrawlResult:
        """Crawl from `source_url` until a limit, the search term or an empty frontier stops it.

        With `supervised=True` a controller shares `settings`: the loop waits
        while paused, follows traversal-mode switches, and announces the end of
        the crawl with the shutdown sentinel.
        """
        graph = WebGraph()
        structure = TraversalStructure(self.settings.traversal_mode, rng=self.rng)
        structure.insert(graph.create_source(source_url))

        pages_crawled = 0
        term_found = False
        try:
            while True:
                if supervised:
                    structure.mode = self.settings.traversal_mode
                stop_reason = self.crawl_policy.stop_reason(structure, pages_crawled)
                if stop_reason is not None:
                    break

                if supervised:
                    self.settings.wait_if_paused()
                    # commands sent while paused apply before the next page
                    structure.mode = self.settings.traversal_mode
                    stop_reason = self.crawl_policy.stop_reason(structure, pages_crawled)
                    if stop_reason is not None:
                        break
                    structure.mark_last_remove_position()

                page = structure.remove()
                if graph.contains_invalid_url(page.url):
                    logger.debug("Skipping (invalid) %s", page.url)
                    continue
                existing = graph.find_page(page.url)
                if existing is not None:
                    logger.debug("Already indexed %s, keeping the link from its discoverer", page.url)
                    self.link_processor.resolve_duplicate(page, existing, graph)
                    continue
                if self.crawl_policy.should_skip_due_to_domain(page, graph):
                    continue

                content = self._index(page, graph)
                if content is None:
                    self._optional_delay()
                    continue

                term_found = self._process_page(page, content, graph, structure, pages_crawled)
                pages_crawled += 1
                self._emit(page)
                self._optional_delay()
        finally:
            self._finish(supervised)

        if term_found:
            stop_reason = StopReason.SEARCH_TERM_FOUND
        logger.info(
            "Crawl of %s finished: %s pages, %s links, reason=%s",
            source_url, pages_crawled, graph.link_count, stop_reason.value,
        )
        return CrawlResult(graph=graph, pages_crawled=pages_crawled, stop_reason=stop_reason)

    def _index(self, page: Page, graph: WebGraph) -> Optional[IndexedContent]:
        try:
            return self.page_indexer.index(page.url)
        except PageIndexError as e:
            logger.info("Invalid URL %s: %s", page.url, e.reason)
        except Exception as e:
            logger.error("Index error for %s: %s", page.url, e, exc_info=True)
        graph.add_invalid_url(page.url)
        return None

    def _process_page(
        self,
        page: Page,
        content: IndexedContent,
        graph: WebGraph,
        structure: TraversalStructure,
        pages_crawled: int,
    ) -> bool:
        """Index `page` and resolve its links. Returns True when the search term was found."""
        links = list(content.links)
        if self.randomize:
            self.rng.shuffle(links)

        if content.contains_term(self.settings.search_term):
            self._index_page(page, content, graph)
            self.link_processor.attach_links(page, graph, links, only_backward=True)
            page.search_term_found = True
            structure.clear()
            logger.info("Search term found at %s", page.url)
            return True

        if self.crawl_policy.is_last_page(page, pages_crawled):
            self._index_page(page, content, graph)
            self.link_processor.attach_links(page, graph, links, only_backward=True)
            return False

        self._index_page(page, content, graph)
        for target in self.link_processor.attach_links(page, graph, links, only_backward=False):
            structure.insert(target)
        return False

    def _index_page(self, page: Page, content: IndexedContent, graph: WebGraph) -> None:
        page.apply_index(content)
        graph.add_page(page)
        page.group_id = graph.add_domain(page.hostname)
        for link in page.predecessor_links:
            graph.add_link(link)
        logger.info("Indexed %s (id=%s, height=%s)", page.url, page.page_id, page.height)

    def _emit(self, page: Page) -> None:
        if not self.sinks:
            return
        record = self.serializer.to_json(page)
        for sink in self.sinks:
            sink.write(record)

    def _optional_delay(self) -> None:
        delay_ms = self.settings.delay_ms
        if delay_ms > 0:
            self._sleep(delay_ms / 1000.0)

    def _finish(self, supervised: bool) -> None:
        if supervised:
            for sink in self.sinks:
                sink.write_sentinel()
            if self.shutdown_grace_seconds > 0:
                self._sleep(self.shutdown_grace_seconds)
        for sink in self.sinks:
            try:
                sink.close()
            except Exception:
                logger.exception("Error closing record sink %r", sink)
