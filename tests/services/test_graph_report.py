from conftest import url_of
from graphcrawl.services.graph_report import format_contents, format_summary


def test_summary_counts(make_executor, bfs_options):
    graph = make_executor(**bfs_options).crawl(url_of("A")).graph
    summary = format_summary(graph)

    assert "Pages: 13" in summary
    assert "Links: 14" in summary
    assert "Cyclic: 2" in summary
    assert "Bidirectional: 2" in summary
    assert "Search term found" not in summary


def test_summary_names_search_hit(make_executor):
    graph = make_executor(page_limit=5, search_term="testA").crawl(url_of("A")).graph
    assert f"Search term found: 0 - {url_of('A')}" in format_summary(graph)


def test_contents_marks_link_kinds(make_executor, bfs_options):
    graph = make_executor(**bfs_options).crawl(url_of("A")).graph
    contents = format_contents(graph)

    assert contents.startswith("Pages:")
    assert "Group 0 - localhost" in contents
    assert contents.count("#\n") == 2
    assert contents.count("*") == 2
    assert "Invalid URLs:" in contents
