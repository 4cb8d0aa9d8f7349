from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class IndexedContent:
    """What the fetch/index step learned about one URL."""

    user_agent: Optional[str] = None
    title: Optional[str] = ""
    keywords: Optional[List[str]] = None
    word_count: int = 0
    char_count: int = 0
    byte_count: int = 0
    image_count: int = 0
    is_dead_end: bool = False
    links: List[str] = field(default_factory=list)
    body_text: str = ""

    @classmethod
    def dead_end(cls, user_agent: Optional[str] = None) -> "IndexedContent":
        return cls(user_agent=user_agent, is_dead_end=True)

    def contains_term(self, term: Optional[str]) -> bool:
        """Case-insensitive whole-word match against the body text."""
        if not term or not self.body_text:
            return False
        words = set(self.body_text.lower().split(" "))
        return term.lower() in words
