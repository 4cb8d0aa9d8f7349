from graphcrawl.domain import LinkFilter, Page, StopReason
from graphcrawl.repository.web_graph import WebGraph
from graphcrawl.services.crawl_policy import CrawlPolicy
from graphcrawl.services.crawl_settings import CrawlSettings
from graphcrawl.services.traversal import TraversalStructure


def _structure_with(*pages):
    structure = TraversalStructure()
    for page in pages:
        structure.insert(page)
    return structure


def test_stop_reason_exhausted_when_structure_empty():
    policy = CrawlPolicy(CrawlSettings(page_limit=10))
    assert policy.stop_reason(TraversalStructure(), 0) is StopReason.EXHAUSTED


def test_stop_reason_height_limit_checks_next_candidate():
    policy = CrawlPolicy(CrawlSettings(page_limit=10, height_limit=1))
    structure = _structure_with(Page(1, "http://example.com/a", height=2))
    assert policy.stop_reason(structure, 0) is StopReason.HEIGHT_LIMIT


def test_stop_reason_page_limit():
    settings = CrawlSettings(page_limit=2)
    policy = CrawlPolicy(settings)
    structure = _structure_with(Page(1, "http://example.com/a"))
    assert policy.stop_reason(structure, 1) is None
    assert policy.stop_reason(structure, 2) is StopReason.PAGE_LIMIT


def test_stop_reason_after_stop_request():
    settings = CrawlSettings(page_limit=20)
    settings.request_stop()
    policy = CrawlPolicy(settings)
    structure = _structure_with(Page(1, "http://example.com/a"))
    assert policy.stop_reason(structure, 0) is StopReason.STOPPED


def test_is_last_page_by_page_limit_uses_live_value():
    settings = CrawlSettings(page_limit=5)
    policy = CrawlPolicy(settings)
    page = Page(1, "http://example.com/a", height=1)
    assert not policy.is_last_page(page, 3)
    settings.page_limit = 4
    assert policy.is_last_page(page, 3)


def test_is_last_page_by_height():
    policy = CrawlPolicy(CrawlSettings(page_limit=100, height_limit=2))
    assert policy.is_last_page(Page(1, "http://example.com/a", height=2), 0)
    assert not policy.is_last_page(Page(2, "http://example.com/b", height=1), 0)


def test_no_height_limit_never_last_by_height():
    policy = CrawlPolicy(CrawlSettings(page_limit=100))
    assert not policy.is_last_page(Page(1, "http://example.com/a", height=0), 0)


def test_abs_skips_known_domain_only():
    settings = CrawlSettings(page_limit=10, link_filter=LinkFilter.ABS)
    policy = CrawlPolicy(settings)
    graph = WebGraph()
    graph.add_domain("example.com")

    assert policy.should_skip_due_to_domain(Page(1, "http://www.example.com/x"), graph)
    assert not policy.should_skip_due_to_domain(Page(2, "http://other.org/"), graph)

    settings.link_filter = LinkFilter.ALL
    assert not policy.should_skip_due_to_domain(Page(3, "http://example.com/y"), graph)
