import io
import json
import logging

from graphcrawl.domain import CrawlOptions, IndexedContent, Link, Page
from graphcrawl.services.record_sink import (
    RECORD_DELIMITER,
    SHUTDOWN_SENTINEL,
    FileRecordSink,
    PageRecordSerializer,
    StreamRecordSink,
    build_record_sinks,
)

FIELD_ORDER = [
    "id", "url", "hostname", "ipAddress", "groupId", "title", "userAgent", "height",
    "searchTermFound", "keywords", "wordCount", "charCount", "byteCount", "numberOfImages",
    "isDeadEnd", "targetLinkCount", "predecessorLinks",
]


def _indexed_child():
    parent = Page(0, "http://www.example.com/")
    child = Page(1, "http://www.example.com/a", height=1)
    child.add_predecessor_link(Link(parent, child))
    child.apply_index(IndexedContent(user_agent="ua", title="A", keywords=["k"], word_count=3,
                                     char_count=11, byte_count=40, image_count=1))
    child.add_target_link(Page(2, "http://www.example.com/b", height=2))
    return child


def test_record_fields_in_order():
    serializer = PageRecordSerializer(resolve_ip=lambda host: "127.0.0.1")
    record = serializer.to_record(_indexed_child())

    assert list(record) == FIELD_ORDER
    assert record["hostname"] == "example.com"
    assert record["ipAddress"] == "127.0.0.1"
    assert record["targetLinkCount"] == 1
    assert record["predecessorLinks"] == [
        {"sourceId": 0, "targetId": 1, "isCyclic": False, "isBidirectional": False}
    ]
    assert "state" not in record
    assert "targetLinks" not in record


def test_ip_resolved_from_full_host():
    seen = []
    serializer = PageRecordSerializer(resolve_ip=lambda host: seen.append(host))
    serializer.to_record(_indexed_child())
    assert seen == ["www.example.com"]


def test_to_json_appends_delimiter():
    serializer = PageRecordSerializer(resolve_ip=lambda host: None)
    text = serializer.to_json(_indexed_child())
    assert text.endswith(RECORD_DELIMITER)
    assert json.loads(text[: -len(RECORD_DELIMITER)])["id"] == 1


def test_to_json_falls_back_to_empty_object(caplog):
    serializer = PageRecordSerializer(resolve_ip=lambda host: object())
    with caplog.at_level(logging.ERROR):
        assert serializer.to_json(_indexed_child()) == "{}" + RECORD_DELIMITER
    assert "JSON processing error" in caplog.text


def test_stream_sink_writes_records_and_sentinel():
    stream = io.StringIO()
    sink = StreamRecordSink(stream)
    sink.write("{}#!#")
    sink.write("{}#!#")
    sink.write_sentinel()
    sink.close()
    assert stream.getvalue() == "{}#!#{}#!#" + SHUTDOWN_SENTINEL


def test_file_sink_writes_one_record_per_line(tmp_path):
    path = tmp_path / "records.txt"
    sink = FileRecordSink(str(path))
    sink.write('{"id": 0}#!#')
    sink.write('{"id": 1}#!#')
    sink.write_sentinel()
    sink.close()
    assert path.read_text(encoding="utf-8").splitlines() == ['{"id": 0}#!#', '{"id": 1}#!#']


def test_file_sink_degrades_when_file_cannot_be_opened(tmp_path, caplog):
    sink = FileRecordSink(str(tmp_path / "missing-dir" / "records.txt"))
    with caplog.at_level(logging.ERROR):
        sink.write("{}#!#")
        sink.write("{}#!#")
    sink.close()
    assert caplog.text.count("could not be opened") == 1


def test_build_record_sinks_from_options(tmp_path):
    options = CrawlOptions(source_url="http://example.com", send_to_stdout=True, output_file=str(tmp_path / "o.txt"))
    sinks = build_record_sinks(options)
    assert [type(s) for s in sinks] == [StreamRecordSink, FileRecordSink]

    quiet = CrawlOptions(source_url="http://example.com", send_to_stdout=False)
    assert build_record_sinks(quiet) == []
