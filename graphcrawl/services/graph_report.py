"""Human-readable views of a finished crawl graph."""
from typing import List

from graphcrawl.repository.web_graph import WebGraph


def format_summary(graph: WebGraph) -> str:
    lines = [
        f"Pages: {graph.page_count}",
        f"Domains: {graph.domain_count}",
        f"Invalid URLs: {graph.invalid_url_count}",
        f"Links: {graph.link_count}",
        f"  Acyclic: {graph.acyclic_link_count}",
        f"  Cyclic: {graph.cyclic_link_count}",
        f"  Bidirectional: {graph.bidirectional_link_count}",
    ]
    hit = graph.search_term_page()
    if hit is not None:
        lines.append(f"Search term found: {hit}")
    return "\n".join(lines)


def format_contents(graph: WebGraph) -> str:
    """List pages, links, domain groups and invalid URLs.

    Cyclic links are marked `#`, bidirectional links `*`.
    """
    lines: List[str] = ["Pages:"]
    lines.extend(f"  {page} (height {page.height}, group {page.group_id})" for page in graph.pages)

    lines.append("Links:")
    for link in graph.links:
        marker = "#" if link.is_cyclic else ("*" if link.is_bidirectional else "")
        lines.append(f"  {link.source_id} -> {link.target_id}{marker}")

    lines.append("Domains:")
    lines.extend(f"  {domain}" for domain in graph.domains)

    lines.append("Invalid URLs:")
    lines.extend(f"  {url}" for url in graph.invalid_urls)
    return "\n".join(lines)
