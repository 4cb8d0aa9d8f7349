from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from graphcrawl.domain.options import LinkFilter, TraversalMode, UserAgentMode


@dataclass(frozen=True)
class CrawlOptions:
    """Initial options for one crawl run.

    Everything the controller may change later (mode, limits, filters,
    delay, search term) only seeds the live `CrawlSettings`; the rest is
    fixed for the run.
    """

    source_url: str
    traversal_mode: TraversalMode = TraversalMode.QUEUE
    page_limit: int = 0
    height_limit: Optional[int] = None
    include_cyclic: bool = False
    link_filter: LinkFilter = LinkFilter.ALL
    search_term: Optional[str] = None
    delay_ms: int = 0
    randomize: bool = True
    user_agent_mode: UserAgentMode = UserAgentMode.DEFAULT
    custom_user_agent: Optional[str] = None
    send_to_stdout: bool = True
    output_file: Optional[str] = None
    controlled: bool = True

    def __post_init__(self):
        if not self.source_url or not self.source_url.strip():
            raise ValueError("source_url is required")
        if self.page_limit < 0:
            raise ValueError("page_limit must be >= 0")
        if self.height_limit is not None and self.height_limit < 0:
            raise ValueError("height_limit must be >= 0")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.user_agent_mode is UserAgentMode.CUSTOM and not self.custom_user_agent:
            raise ValueError("custom_user_agent is required for a custom user agent")
