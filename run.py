import argparse
import logging
import sys
from typing import List, Optional, TextIO

from dependency_injector import providers

from graphcrawl import config
from graphcrawl.container import Container
from graphcrawl.exceptions import CrawlOptionsError
from graphcrawl.services.crawl_options_loader import load_crawl_options
from graphcrawl.services.graph_report import format_contents, format_summary

logger = logging.getLogger("graphcrawl")

_MODE_FLAGS = {"B": "queue", "D": "stack", "X": "bag"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphcrawl",
        description="Crawl a web graph from a source URL and stream one JSON record per indexed page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s http://localhost:3000/A B 20                 Breadth-first, 20 pages
  %(prog)s http://example.com D 50 --cyclic --no-stdout --file out.txt
  %(prog)s --config crawl.yml --search needle           Options from YAML, flags override

Commands read from stdin while a controlled crawl runs:
  P / R  pause / resume          B / D / X  breadth / depth / random
  C / A  cyclic links on / off   ABS / REL / ALL  link-type filter
  DM<ms> HL<n> SL<n>             delay, height limit, page limit
  ST<term>                       search term (STfalse disables)
  ACK                            stop the crawl
        """,
    )
    parser.add_argument("url", nargs="?", help="Source URL")
    parser.add_argument("mode", nargs="?", choices=sorted(_MODE_FLAGS), help="B=breadth-first, D=depth-first, X=random")
    parser.add_argument("limit", nargs="?", type=int, help="Maximum number of pages to index")
    parser.add_argument("--config", help="YAML file with crawl options")
    parser.add_argument("--stdout", dest="send_to_stdout", action=argparse.BooleanOptionalAction, default=None,
                        help="Stream records to stdout (default: on)")
    parser.add_argument("--file", dest="output_file", help="Also write records to this file")
    parser.add_argument("--search", dest="search_term", help="Stop when a page contains this word")
    parser.add_argument("--delay", dest="delay_ms", type=int, help="Delay between pages in milliseconds")
    parser.add_argument("--randomize", action=argparse.BooleanOptionalAction, default=None,
                        help="Shuffle the outbound links of each page (default: on)")
    parser.add_argument("--random-user-agent", action="store_true", help="Pick a random browser user agent per page")
    parser.add_argument("--user-agent", dest="custom_user_agent", help="Send this user agent")
    parser.add_argument("--cyclic", dest="include_cyclic", action=argparse.BooleanOptionalAction, default=None,
                        help="Record links back to already indexed pages")
    parser.add_argument("--link-type", dest="link_filter", choices=["ALL", "ABS", "REL"], help="Link-type filter")
    parser.add_argument("--height-limit", type=int, help="Do not deepen past this height")
    parser.add_argument("--controlled", action=argparse.BooleanOptionalAction, default=None,
                        help="Read control commands from stdin (default: on)")
    parser.add_argument("--summary", action="store_true", help="Print a graph summary to stderr when done")
    parser.add_argument("--contents", action="store_true", help="Print the whole graph to stderr when done")
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    user_agent_mode = None
    if args.custom_user_agent:
        user_agent_mode = "custom"
    elif args.random_user_agent:
        user_agent_mode = "random"
    return {
        "source_url": args.url,
        "traversal_mode": _MODE_FLAGS.get(args.mode) if args.mode else None,
        "page_limit": args.limit,
        "height_limit": args.height_limit,
        "include_cyclic": args.include_cyclic,
        "link_filter": args.link_filter,
        "search_term": args.search_term,
        "delay_ms": args.delay_ms,
        "randomize": args.randomize,
        "user_agent_mode": user_agent_mode,
        "custom_user_agent": args.custom_user_agent,
        "send_to_stdout": args.send_to_stdout,
        "output_file": args.output_file,
        "controlled": args.controlled,
    }


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None, stdin: Optional[TextIO] = None) -> int:
    """Run one crawl from the command line. Returns the process exit code.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        container: Optional DI container for testing. If None, creates default container.
        stdin: Command stream for a controlled crawl (defaults to sys.stdin)
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=config.log_level(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_crawl_options(args.config, _overrides(args))
    except CrawlOptionsError as e:
        print(f"graphcrawl: {e}", file=sys.stderr)
        return 2

    if container is None:
        container = Container()
    container.crawl_options.override(providers.Object(options))

    try:
        if options.controlled:
            container.command_stream.override(providers.Object(stdin if stdin is not None else sys.stdin))
            result = container.crawl_runner().run(options.source_url)
        else:
            result = container.crawl_executor().crawl(options.source_url)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    if args.summary:
        print(format_summary(result.graph), file=sys.stderr)
    if args.contents:
        print(format_contents(result.graph), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
