"""Custom exceptions for GraphCrawl services."""


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class PageIndexError(Exception):
    """Raised when a URL cannot be fetched or indexed.

    The crawl executor treats this as an invalid URL: the URL is recorded in
    the graph's invalid set and never attempted again during the run.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot index '{url}': {reason}")


class CrawlOptionsError(Exception):
    """Raised when a crawl options file is missing or does not validate."""

    def __init__(self, config_path: str, reason: str = "not found"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Crawl options '{config_path}' {reason}")
