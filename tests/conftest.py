from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from graphcrawl.domain import CrawlOptions, TraversalMode
from graphcrawl.services.crawl_executor import CrawlExecutor
from graphcrawl.services.crawl_policy import CrawlPolicy
from graphcrawl.services.crawl_settings import CrawlSettings
from graphcrawl.services.http_service import HttpService
from graphcrawl.services.link_processor import LinkProcessor
from graphcrawl.services.page_indexer import HtmlPageIndexer
from graphcrawl.services.record_sink import PageRecordSerializer
from graphcrawl.services.user_agents import UserAgentProvider

BASE = "http://localhost:3000/"

# Outbound links of the 14-page test site, in document order.
TOPOLOGY = {
    "A": ["B", "C", "D"],
    "B": ["E"],
    "C": ["F", "G", "H"],
    "D": ["I", "J"],
    "E": ["K", "B"],
    "F": [],
    "G": [],
    "H": [],
    "I": ["L"],
    "J": ["M"],
    "K": ["E"],
    "L": ["A"],
    "M": ["N", "D"],
    "N": ["H", "A"],
}


def url_of(name):
    return BASE + name


def page_html(name, links, body_extra=""):
    anchors = "".join(f'<a href="{url_of(target)}">{target}</a>' for target in links)
    return (
        f"<html><head><title>{name}</title></head>"
        f"<body><p>test{name}</p>{body_extra}{anchors}</body></html>"
    )


class FakeSite:
    """Serves a dict of page name -> outbound links as HTML; anything else is a 404."""

    def __init__(self, topology, extra_pages=None):
        self.pages = {url_of(name): page_html(name, links) for name, links in topology.items()}
        self.pages.update(extra_pages or {})
        self.requests = []

    def __call__(self, url, headers=None, timeout=None):
        self.requests.append(url)
        text = self.pages.get(url)
        if text is None:
            return SimpleNamespace(status_code=404, text="not found", headers={"Content-Type": "text/html"}, url=url)
        return SimpleNamespace(
            status_code=200,
            text=text,
            headers={"Content-Type": "text/html; charset=utf-8"},
            url=url,
        )

    def request_count(self, url):
        return self.requests.count(url)


def visit_order(graph):
    return [page.url[len(BASE):] for page in graph.pages]


@pytest.fixture
def site():
    return FakeSite(TOPOLOGY)


@pytest.fixture
def make_executor(site):
    """Build a CrawlExecutor over the fake site; keyword args become CrawlOptions."""

    def _make(sinks=(), **option_values):
        option_values.setdefault("source_url", url_of("A"))
        option_values.setdefault("randomize", False)
        options = CrawlOptions(**option_values)
        settings = CrawlSettings.from_options(options)
        http_service = HttpService(user_agent="TestAgent", http_client=site)
        indexer = HtmlPageIndexer(http_service, UserAgentProvider("TestAgent"))
        return CrawlExecutor(
            page_indexer=indexer,
            settings=settings,
            link_processor=LinkProcessor(settings),
            crawl_policy=CrawlPolicy(settings),
            serializer=PageRecordSerializer(resolve_ip=lambda host: None),
            sinks=sinks,
            randomize=options.randomize,
            shutdown_grace_seconds=0,
            sleep=Mock(),
        )

    return _make


@pytest.fixture
def bfs_options():
    return dict(traversal_mode=TraversalMode.QUEUE, page_limit=14, height_limit=3, include_cyclic=True)


@pytest.fixture
def dfs_options():
    return dict(traversal_mode=TraversalMode.STACK, page_limit=14, include_cyclic=True)
