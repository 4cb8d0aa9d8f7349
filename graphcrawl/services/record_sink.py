from __future__ import annotations

import json
import logging
import socket
import sys
from typing import Callable, List, Optional, Protocol, TextIO
from urllib.parse import urlparse

from graphcrawl.domain import CrawlOptions, Page

logger = logging.getLogger(__name__)

RECORD_DELIMITER = "#!#"
SHUTDOWN_SENTINEL = "REQ_CONT_SHUTDOWN"


def resolve_ip_address(host: Optional[str]) -> Optional[str]:
    if not host:
        return None
    try:
        return socket.gethostbyname(host)
    except (OSError, UnicodeError):
        return None


class PageRecordSerializer:
    """Turns an indexed page into its incremental JSON record.

    The record carries the page's own backward links only; forward links and
    the indexing state are never serialized.
    """

    def __init__(self, resolve_ip: Optional[Callable[[Optional[str]], Optional[str]]] = None):
        self._resolve_ip = resolve_ip or resolve_ip_address

    def to_record(self, page: Page) -> dict:
        try:
            host = urlparse(page.url).hostname
        except ValueError:
            host = None
        return {
            "id": page.page_id,
            "url": page.url,
            "hostname": page.hostname,
            "ipAddress": self._resolve_ip(host),
            "groupId": page.group_id,
            "title": page.title,
            "userAgent": page.user_agent,
            "height": page.height,
            "searchTermFound": page.search_term_found,
            "keywords": page.keywords,
            "wordCount": page.word_count,
            "charCount": page.char_count,
            "byteCount": page.byte_count,
            "numberOfImages": page.image_count,
            "isDeadEnd": page.is_dead_end,
            "targetLinkCount": page.target_link_count,
            "predecessorLinks": [link.to_record() for link in page.predecessor_links],
        }

    def to_json(self, page: Page) -> str:
        try:
            return json.dumps(self.to_record(page)) + RECORD_DELIMITER
        except (TypeError, ValueError):
            logger.exception("JSON processing error @%s", page.url)
            return "{}" + RECORD_DELIMITER


class RecordSink(Protocol):
    def write(self, record: str) -> None: ...

    def write_sentinel(self) -> None: ...

    def close(self) -> None: ...


class StreamRecordSink:
    """Writes records back to back on a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, record: str) -> None:
        self.stream.write(record)
        self.stream.flush()

    def write_sentinel(self) -> None:
        self.stream.write(SHUTDOWN_SENTINEL)
        self.stream.flush()

    def close(self) -> None:
        self.stream.flush()


class FileRecordSink:
    """Writes one record per line to a file.

    If the file cannot be opened the sink logs the failure and drops records,
    so the crawl itself keeps going.
    """

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[TextIO] = None
        self._opened = False

    def _ensure_open(self) -> Optional[TextIO]:
        if not self._opened:
            self._opened = True
            try:
                self._file = open(self.path, "w", encoding="utf-8")
            except OSError:
                logger.exception("File %s could not be opened; records will not be saved", self.path)
                self._file = None
        return self._file

    def write(self, record: str) -> None:
        f = self._ensure_open()
        if f is None:
            return
        f.write(record + "\n")

    def write_sentinel(self) -> None:
        # The sentinel only matters to a process reading the live stream.
        pass

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


def build_record_sinks(options: CrawlOptions, stream: Optional[TextIO] = None) -> List[RecordSink]:
    sinks: List[RecordSink] = []
    if options.send_to_stdout:
        sinks.append(StreamRecordSink(stream))
    if options.output_file:
        sinks.append(FileRecordSink(options.output_file))
    return sinks
