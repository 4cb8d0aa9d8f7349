import logging
from typing import Iterable, NamedTuple, Optional

from graphcrawl.domain import LinkFilter, TraversalMode
from graphcrawl.services.crawl_settings import CrawlSettings

logger = logging.getLogger(__name__)

SIMPLE_COMMANDS = ("P", "R", "ACK", "B", "D", "X", "C", "A", "ABS", "REL", "ALL")
INTEGER_COMMANDS = ("DM", "HL", "SL")
SEARCH_TERM_COMMAND = "ST"

_MODES = {"B": TraversalMode.QUEUE, "D": TraversalMode.STACK, "X": TraversalMode.BAG}
_FILTERS = {"ABS": LinkFilter.ABS, "REL": LinkFilter.REL, "ALL": LinkFilter.ALL}


class Command(NamedTuple):
    name: str
    argument: Optional[str] = None


def parse_integer(raw: Optional[str]) -> int:
    """Return `raw` as a non-negative int, or -1 when it is not one."""
    if raw is None:
        return -1
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return -1
    return int(raw)


def parse_command(line: str) -> Optional[Command]:
    """Parse one line of the command stream; None for anything unrecognized."""
    text = (line or "").strip()
    if not text:
        return None
    if text in SIMPLE_COMMANDS:
        return Command(text)
    for prefix in INTEGER_COMMANDS:
        if text.startswith(prefix):
            return Command(prefix, text[len(prefix):])
    if text.startswith(SEARCH_TERM_COMMAND):
        return Command(SEARCH_TERM_COMMAND, text[len(SEARCH_TERM_COMMAND):])
    return None


class CrawlController:
    """Applies commands read from a line stream to the live crawl settings.

    The controller never touches the graph or the traversal structure; the
    crawl loop picks every change up at its next iteration.
    """

    def __init__(self, settings: CrawlSettings, stream: Iterable[str]):
        self.settings = settings
        self.stream = stream
        self.commands_applied = 0

    def run(self) -> None:
        """Read commands until `ACK` or the end of the stream."""
        logger.info("Controller listening for commands")
        for line in self.stream:
            if not self.handle(line):
                break
        else:
            logger.info("Command stream closed")

    def handle(self, line: str) -> bool:
        """Apply one command line. Returns False once the controller should stop reading."""
        command = parse_command(line)
        if command is None:
            logger.debug("Ignoring unknown command %r", line)
            return True

        name, argument = command
        if name == "ACK":
            self.settings.request_stop()
            logger.info("Stop requested")
            self.commands_applied += 1
            return False

        if name == "P":
            self.settings.pause()
        elif name == "R":
            self.settings.resume()
        elif name in _MODES:
            self.settings.traversal_mode = _MODES[name]
        elif name == "C":
            self.settings.include_cyclic = True
        elif name == "A":
            self.settings.include_cyclic = False
        elif name in _FILTERS:
            self.settings.link_filter = _FILTERS[name]
        elif name == SEARCH_TERM_COMMAND:
            self.settings.set_search_term(argument)
        elif not self._apply_integer(name, argument):
            logger.debug("Ignoring %s with invalid value %r", name, argument)
            return True

        self.commands_applied += 1
        logger.info("Applied command %s%s", name, argument or "")
        return True

    def _apply_integer(self, name: str, argument: Optional[str]) -> bool:
        value = parse_integer(argument)
        if value < 0:
            return False
        if name == "DM":
            self.settings.delay_ms = value
        elif name == "HL":
            self.settings.height_limit = value
        elif name == "SL":
            self.settings.page_limit = value
        return True
