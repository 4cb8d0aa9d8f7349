import logging
import os
from typing import Any, Dict, Optional

import yaml

from graphcrawl.domain import CrawlOptions, LinkFilter, TraversalMode, UserAgentMode
from graphcrawl.exceptions import CrawlOptionsError

logger = logging.getLogger(__name__)

_MODE_NAMES = {
    "b": TraversalMode.QUEUE,
    "queue": TraversalMode.QUEUE,
    "breadth": TraversalMode.QUEUE,
    "d": TraversalMode.STACK,
    "stack": TraversalMode.STACK,
    "depth": TraversalMode.STACK,
    "x": TraversalMode.BAG,
    "bag": TraversalMode.BAG,
    "random": TraversalMode.BAG,
}


class CrawlOptionsLoader:
    """Filesystem/YAML IO for crawl option files.

    Responsibility: read and parse the YAML document on disk.
    It does NOT validate the options.
    """

    def load_yaml_dict(self, config_path: str) -> dict:
        if not os.path.isfile(config_path):
            raise CrawlOptionsError(config_path)
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CrawlOptionsError(config_path, f"could not be read: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CrawlOptionsError(config_path, "must contain a mapping")
        return data


class CrawlOptionsParser:
    """Turn a YAML dict (plus overrides) into `CrawlOptions`.

    Responsibility: schema/validation. Overrides whose value is None are
    treated as not given, so command-line flags only replace what the user
    actually passed.
    """

    def parse(self, data: Dict[str, Any], *, config_path: str = "<options>", overrides: Optional[dict] = None) -> CrawlOptions:
        merged = dict(data or {})
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        try:
            return CrawlOptions(
                source_url=merged.get("source_url") or "",
                traversal_mode=self._mode(merged.get("traversal_mode", TraversalMode.QUEUE)),
                page_limit=int(merged.get("page_limit", 0)),
                height_limit=self._optional_int(merged.get("height_limit")),
                include_cyclic=bool(merged.get("include_cyclic", False)),
                link_filter=self._enum(LinkFilter, merged.get("link_filter", LinkFilter.ALL), upper=True),
                search_term=merged.get("search_term"),
                delay_ms=int(merged.get("delay_ms", 0)),
                randomize=bool(merged.get("randomize", True)),
                user_agent_mode=self._user_agent_mode(merged),
                custom_user_agent=merged.get("custom_user_agent"),
                send_to_stdout=bool(merged.get("send_to_stdout", True)),
                output_file=merged.get("output_file"),
                controlled=bool(merged.get("controlled", True)),
            )
        except (TypeError, ValueError) as e:
            raise CrawlOptionsError(config_path, f"is invalid: {e}") from e

    def _mode(self, value) -> TraversalMode:
        if isinstance(value, TraversalMode):
            return value
        mode = _MODE_NAMES.get(str(value).strip().lower())
        if mode is None:
            raise ValueError(f"unknown traversal mode {value!r}")
        return mode

    def _enum(self, enum_cls, value, upper: bool = False):
        if isinstance(value, enum_cls):
            return value
        text = str(value).strip()
        return enum_cls(text.upper() if upper else text.lower())

    def _optional_int(self, value) -> Optional[int]:
        if value is None:
            return None
        return int(value)

    def _user_agent_mode(self, merged: dict) -> UserAgentMode:
        if merged.get("user_agent_mode") is not None:
            return self._enum(UserAgentMode, merged["user_agent_mode"])
        if merged.get("custom_user_agent"):
            return UserAgentMode.CUSTOM
        return UserAgentMode.DEFAULT


def load_crawl_options(config_path: Optional[str], overrides: Optional[dict] = None) -> CrawlOptions:
    """Build `CrawlOptions` from an optional YAML file and command-line overrides."""
    data: dict = {}
    if config_path:
        data = CrawlOptionsLoader().load_yaml_dict(config_path)
        logger.info("Loaded crawl options from %s", config_path)
    return CrawlOptionsParser().parse(data, config_path=config_path or "<command line>", overrides=overrides)
