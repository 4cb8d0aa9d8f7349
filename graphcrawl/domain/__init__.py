"""Domain objects for GraphCrawl - explicit re-exports to satisfy linters."""
from .page import Page as Page, PageState as PageState
from .link import Link as Link
from .domain_group import Domain as Domain
from .crawl_options import CrawlOptions as CrawlOptions
from .crawl_result import CrawlResult as CrawlResult
from .indexed_content import IndexedContent as IndexedContent
from .options import (
    LinkFilter as LinkFilter,
    StopReason as StopReason,
    TraversalMode as TraversalMode,
    UserAgentMode as UserAgentMode,
)

__all__ = [
    "Page",
    "PageState",
    "Link",
    "Domain",
    "CrawlOptions",
    "CrawlResult",
    "IndexedContent",
    "LinkFilter",
    "StopReason",
    "TraversalMode",
    "UserAgentMode",
]
