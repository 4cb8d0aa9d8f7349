import threading

from graphcrawl.domain import CrawlOptions, LinkFilter, TraversalMode
from graphcrawl.services.crawl_settings import CrawlSettings


def test_from_options_copies_live_fields():
    options = CrawlOptions(
        source_url="http://example.com",
        traversal_mode=TraversalMode.STACK,
        page_limit=7,
        height_limit=2,
        include_cyclic=True,
        link_filter=LinkFilter.REL,
        search_term="needle",
        delay_ms=50,
    )
    settings = CrawlSettings.from_options(options)
    assert settings.traversal_mode is TraversalMode.STACK
    assert settings.page_limit == 7
    assert settings.height_limit == 2
    assert settings.include_cyclic
    assert settings.link_filter is LinkFilter.REL
    assert settings.search_term == "needle"
    assert settings.delay_ms == 50


def test_negative_values_are_ignored():
    settings = CrawlSettings(page_limit=5, height_limit=3, delay_ms=10)
    settings.page_limit = -1
    settings.height_limit = -1
    settings.delay_ms = -1
    assert settings.page_limit == 5
    assert settings.height_limit == 3
    assert settings.delay_ms == 10


def test_search_term_false_or_blank_disables():
    settings = CrawlSettings(search_term="x")
    settings.set_search_term("false")
    assert settings.search_term is None
    settings.set_search_term("word")
    assert settings.search_term == "word"
    settings.set_search_term("   ")
    assert settings.search_term is None


def test_height_within_limit():
    assert CrawlSettings().height_within_limit(1000)
    settings = CrawlSettings(height_limit=2)
    assert settings.height_within_limit(2)
    assert not settings.height_within_limit(3)


def test_request_stop_zeroes_page_limit_and_releases_pause():
    settings = CrawlSettings(page_limit=10)
    settings.pause()
    settings.request_stop()
    assert settings.page_limit == 0
    assert settings.stop_requested
    assert not settings.paused
    assert settings.wait_if_paused(timeout=0)


def test_wait_if_paused_times_out_while_paused():
    settings = CrawlSettings()
    settings.pause()
    assert settings.wait_if_paused(timeout=0.01) is False


def test_resume_wakes_waiting_thread():
    settings = CrawlSettings()
    settings.pause()
    released = []
    waiter = threading.Thread(target=lambda: released.append(settings.wait_if_paused(timeout=5)))
    waiter.start()
    settings.resume()
    waiter.join(timeout=5)
    assert released == [True]
