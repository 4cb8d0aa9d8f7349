import random
from typing import Optional, Sequence

from graphcrawl.domain import CrawlOptions, UserAgentMode

RANDOM_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.4 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:125.0) Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36 Edg/124.0.2478.67",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Mobile/15E148 Safari/604.1",
)


class UserAgentProvider:
    """Chooses the User-Agent header for each page connection."""

    def __init__(
        self,
        default_user_agent: str,
        mode: UserAgentMode = UserAgentMode.DEFAULT,
        custom_user_agent: Optional[str] = None,
        pool: Sequence[str] = RANDOM_USER_AGENTS,
        rng: Optional[random.Random] = None,
    ):
        if mode is UserAgentMode.CUSTOM and not custom_user_agent:
            raise ValueError("custom_user_agent is required for UserAgentMode.CUSTOM")
        self.default_user_agent = default_user_agent
        self.mode = mode
        self.custom_user_agent = custom_user_agent
        self._pool = tuple(pool)
        self._rng = rng or random.Random()

    @classmethod
    def from_options(cls, options: CrawlOptions, default_user_agent: str) -> "UserAgentProvider":
        return cls(
            default_user_agent=default_user_agent,
            mode=options.user_agent_mode,
            custom_user_agent=options.custom_user_agent,
        )

    def next_user_agent(self) -> str:
        if self.mode is UserAgentMode.CUSTOM:
            return self.custom_user_agent
        if self.mode is UserAgentMode.RANDOM and self._pool:
            return self._rng.choice(self._pool)
        return self.default_user_agent
