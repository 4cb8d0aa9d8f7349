from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from graphcrawl.domain.indexed_content import IndexedContent
from graphcrawl.domain.link import Link

ABBREVIATED_URL_LIMIT = 50


class PageState(Enum):
    DISCOVERED = "discovered"
    INDEXED = "indexed"


def normalize_hostname(url: Optional[str]) -> Optional[str]:
    """Return the lower-cased host of `url` without a leading `www.`."""
    if not url:
        return None
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    if len(host) > 4 and host.startswith("www."):
        return host[4:]
    return host


class Page:
    def __init__(self, page_id: int, url: str, height: int = 0):
        self.page_id = page_id
        self.url = url
        self.hostname = normalize_hostname(url)
        self.height = height
        self.state = PageState.DISCOVERED

        self.group_id = 0
        self.title: Optional[str] = ""
        self.user_agent: Optional[str] = None
        self.search_term_found = False
        self.keywords: Optional[List[str]] = []
        self.word_count = 0
        self.char_count = 0
        self.byte_count = 0
        self.image_count = 0
        self.is_dead_end = False

        self.target_links: List["Page"] = []
        self.predecessor_links: List[Link] = []

    @property
    def is_indexed(self) -> bool:
        return self.state is PageState.INDEXED

    @property
    def target_link_count(self) -> int:
        return len(self.target_links)

    @property
    def abbreviated_url(self) -> str:
        if len(self.url) > ABBREVIATED_URL_LIMIT:
            return f"{self.url[:ABBREVIATED_URL_LIMIT]}... ({len(self.url)})"
        return self.url

    def add_target_link(self, page: "Page") -> None:
        self.target_links.append(page)

    def add_predecessor_link(self, link: Link) -> None:
        self.predecessor_links.append(link)

    def first_predecessor_link(self) -> Optional[Link]:
        return self.predecessor_links[0] if self.predecessor_links else None

    def has_same_domain(self, url: str) -> bool:
        other = normalize_hostname(url)
        return other is not None and self.hostname is not None and other == self.hostname

    def apply_index(self, content: IndexedContent) -> None:
        """Copy indexed values onto the page; DISCOVERED -> INDEXED happens once."""
        if self.state is PageState.INDEXED:
            raise ValueError(f"page {self.page_id} ({self.url}) is already indexed")

        self.user_agent = content.user_agent
        if content.is_dead_end:
            self.is_dead_end = True
        else:
            self.title = content.title
            self.keywords = content.keywords
            self.word_count = content.word_count
            self.char_count = content.char_count
            self.byte_count = content.byte_count
            self.image_count = content.image_count
            self.is_dead_end = False
        self.state = PageState.INDEXED

    def __str__(self):
        return f"{self.page_id} - {self.abbreviated_url}"

    def __repr__(self):
        return f"<Page id={self.page_id} url={self.url} height={self.height}>"
