from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Protocol
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from graphcrawl.domain import IndexedContent
from graphcrawl.exceptions import HttpFetchError, PageIndexError
from graphcrawl.services.http_service import HttpService
from graphcrawl.services.user_agents import UserAgentProvider

logger = logging.getLogger(__name__)

IMAGE_SRC_PATTERN = re.compile(r"\.(png|jpe?g|gif)", re.IGNORECASE)


class PageIndexer(Protocol):
    """Fetch a URL and describe its content, or raise `PageIndexError`."""

    def index(self, url: str) -> IndexedContent: ...


class HtmlPageIndexer:
    """Fetches a page over HTTP and indexes its HTML with BeautifulSoup.

    - malformed / non-http(s) URLs, transport failures and non-200 statuses
      raise `PageIndexError` (the crawl records the URL as invalid);
    - a response that is not HTML is a dead end: indexed, but without links
      or counts.
    """

    def __init__(
        self,
        http_service: HttpService,
        user_agent_provider: UserAgentProvider,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self.http_service = http_service
        self.user_agent_provider = user_agent_provider
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def index(self, url: str) -> IndexedContent:
        self._validate_url(url)
        user_agent = self.user_agent_provider.next_user_agent()

        try:
            response = self.http_service.fetch(url, user_agent=user_agent)
        except HttpFetchError as e:
            raise PageIndexError(url, str(e.original)) from e

        if response.status_code != 200:
            raise PageIndexError(url, f"status {response.status_code}")

        ct = (response.content_type or "").lower()
        if "text/html" not in ct:
            logger.debug("Dead end (content type %s) %s", ct or "unknown", url)
            return IndexedContent.dead_end(user_agent)

        soup = self._soup_factory(response.text or "")
        body_text = self._body_text(soup)
        return IndexedContent(
            user_agent=user_agent,
            title=self._title(soup),
            keywords=self._keywords(soup),
            word_count=len(body_text.split(" ")) if body_text else 0,
            char_count=len(body_text),
            byte_count=len(str(soup)),
            image_count=self._image_count(soup),
            is_dead_end=False,
            links=self.extract_links(url, response.url or url, soup),
            body_text=body_text,
        )

    def _validate_url(self, url: str) -> None:
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise PageIndexError(url, f"malformed url: {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise PageIndexError(url, "not an absolute http(s) url")

    def extract_links(self, url: str, base_url: str, soup: BeautifulSoup) -> List[str]:
        """Absolute outbound links in document order, without duplicates or self links."""
        links: List[str] = []
        seen = set()
        own = url.lower()
        for a in soup.find_all("a", href=True):
            href = (a.get("href") or "").strip()
            if not href:
                continue
            abs_url = urljoin(base_url, href)
            if not abs_url.strip() or abs_url in seen or abs_url.lower() == own:
                continue
            seen.add(abs_url)
            links.append(abs_url)
        return links

    def _title(self, soup: BeautifulSoup) -> str:
        if soup.title is None:
            return ""
        return soup.title.get_text(strip=True)

    def _keywords(self, soup: BeautifulSoup) -> Optional[List[str]]:
        meta = soup.find("meta", attrs={"name": "keywords"})
        if meta is None:
            return None
        return (meta.get("content") or "").split(" ")

    def _body_text(self, soup: BeautifulSoup) -> str:
        body = soup.body
        if body is None:
            return ""
        return " ".join(body.get_text(separator=" ").split())

    def _image_count(self, soup: BeautifulSoup) -> int:
        return sum(1 for img in soup.find_all("img", src=True) if IMAGE_SRC_PATTERN.search(img["src"]))
