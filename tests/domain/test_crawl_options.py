import pytest

from graphcrawl.domain import CrawlOptions, CrawlResult, StopReason, UserAgentMode


def test_defaults():
    options = CrawlOptions(source_url="http://example.com")
    assert options.page_limit == 0
    assert options.height_limit is None
    assert options.send_to_stdout
    assert options.controlled


@pytest.mark.parametrize(
    "kwargs",
    [
        {"source_url": " "},
        {"source_url": "http://example.com", "page_limit": -1},
        {"source_url": "http://example.com", "height_limit": -2},
        {"source_url": "http://example.com", "delay_ms": -5},
        {"source_url": "http://example.com", "user_agent_mode": UserAgentMode.CUSTOM},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        CrawlOptions(**kwargs)


def test_crawl_result_stopped():
    assert CrawlResult(graph=None, pages_crawled=0, stop_reason=StopReason.STOPPED).stopped
    assert not CrawlResult(graph=None, pages_crawled=3, stop_reason=StopReason.EXHAUSTED).stopped
