import requests
from typing import Callable, Optional

from graphcrawl.domain.http_response import HttpResponse
from graphcrawl.exceptions import HttpFetchError


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection so tests can serve
    pages without a network and the HTTP library can be swapped.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str, user_agent: Optional[str] = None) -> HttpResponse:
        """Fetch URL and return the final URL, status code, body text and Content-Type."""
        headers = {"User-Agent": user_agent or self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        # Extract Content-Type if response has headers; let real exceptions bubble up.
        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        final_url = getattr(resp, 'url', None)
        if not isinstance(final_url, str) or not final_url:
            final_url = url
        return HttpResponse(final_url, resp.status_code, resp.text, ct)
