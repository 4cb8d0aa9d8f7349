import logging
import threading
from typing import Iterable

from graphcrawl.domain import CrawlResult
from graphcrawl.services.crawl_controller import CrawlController
from graphcrawl.services.crawl_executor import CrawlExecutor

logger = logging.getLogger(__name__)


class CrawlRunner:
    """Runs a supervised crawl: commands on a reader thread, the crawl loop on the caller's."""

    def __init__(self, executor: CrawlExecutor, command_stream: Iterable[str], join_timeout: float = 1.0):
        self.executor = executor
        self.command_stream = command_stream
        self.join_timeout = join_timeout

    def run(self, source_url: str) -> CrawlResult:
        controller = CrawlController(self.executor.settings, self.command_stream)
        reader = threading.Thread(target=controller.run, name="graphcrawl-controller", daemon=True)
        reader.start()

        result = self.executor.crawl(source_url, supervised=True)

        reader.join(timeout=self.join_timeout)
        if reader.is_alive():
            logger.debug("Controller still waiting for input; leaving daemon thread behind")
        return result
