import itertools
from typing import Dict, List, Optional

from graphcrawl.domain import Domain, Link, Page


class WebGraph:
    """In-memory store for everything a single crawl run discovers.

    Pages are kept in indexing order. Nothing is ever removed; the only
    in-place mutation is the cyclic -> bidirectional upgrade of a link, which
    happens on the `Link` object itself. Lookups by URL, domain name and
    invalid URL are case-insensitive. Statistics are computed on demand.
    """

    def __init__(self):
        self.source: Optional[Page] = None
        self.pages: List[Page] = []
        self.links: List[Link] = []
        self.domains: List[Domain] = []
        self.invalid_urls: List[str] = []

        self._page_ids = itertools.count()
        self._pages_by_url: Dict[str, Page] = {}
        self._domains_by_name: Dict[str, Domain] = {}
        self._invalid_index = set()

    def next_page_id(self) -> int:
        return next(self._page_ids)

    def create_source(self, url: str) -> Page:
        self.source = Page(self.next_page_id(), url, height=0)
        return self.source

    # Pages

    def add_page(self, page: Page) -> None:
        self.pages.append(page)
        self._pages_by_url.setdefault(page.url.lower(), page)

    def find_page(self, url: str) -> Optional[Page]:
        return self._pages_by_url.get(url.lower())

    def contains_page(self, url: str) -> bool:
        return url.lower() in self._pages_by_url

    def search_term_page(self) -> Optional[Page]:
        for page in self.pages:
            if page.search_term_found:
                return page
        return None

    # Links

    def add_link(self, link: Link) -> None:
        self.links.append(link)

    def find_link(self, source_id: int, target_id: int) -> Optional[Link]:
        for link in self.links:
            if link.source_id == source_id and link.target_id == target_id:
                return link
        return None

    # Domains

    def add_domain(self, name: str) -> int:
        key = (name or "").lower()
        existing = self._domains_by_name.get(key)
        if existing is not None:
            return existing.domain_id
        domain = Domain(name=name or "", domain_id=len(self.domains))
        self.domains.append(domain)
        self._domains_by_name[key] = domain
        return domain.domain_id

    def contains_domain(self, name: Optional[str]) -> bool:
        return (name or "").lower() in self._domains_by_name

    # Invalid URLs

    def add_invalid_url(self, url: str) -> None:
        key = url.lower()
        if key in self._invalid_index:
            return
        self._invalid_index.add(key)
        self.invalid_urls.append(url)

    def contains_invalid_url(self, url: str) -> bool:
        return url.lower() in self._invalid_index

    # Statistics

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def link_count(self) -> int:
        return len(self.links)

    @property
    def cyclic_link_count(self) -> int:
        return sum(1 for link in self.links if link.is_cyclic)

    @property
    def acyclic_link_count(self) -> int:
        return self.link_count - self.cyclic_link_count

    @property
    def bidirectional_link_count(self) -> int:
        return sum(1 for link in self.links if link.is_bidirectional)

    @property
    def domain_count(self) -> int:
        return len(self.domains)

    @property
    def invalid_url_count(self) -> int:
        return len(self.invalid_urls)

    def __repr__(self):
        return (
            f"<WebGraph pages={self.page_count} links={self.link_count} "
            f"domains={self.domain_count} invalid={self.invalid_url_count}>"
        )
