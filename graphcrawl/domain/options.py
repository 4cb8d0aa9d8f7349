from enum import Enum


class TraversalMode(Enum):
    """Removal order of the traversal structure."""

    QUEUE = "queue"  # breadth-first
    STACK = "stack"  # depth-first
    BAG = "bag"      # random


class LinkFilter(Enum):
    ALL = "ALL"
    ABS = "ABS"
    REL = "REL"


class UserAgentMode(Enum):
    DEFAULT = "default"
    RANDOM = "random"
    CUSTOM = "custom"


class StopReason(Enum):
    PAGE_LIMIT = "page_limit"
    HEIGHT_LIMIT = "height_limit"
    EXHAUSTED = "exhausted"
    SEARCH_TERM_FOUND = "search_term_found"
    STOPPED = "stopped"
