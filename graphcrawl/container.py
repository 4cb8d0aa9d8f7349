"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from graphcrawl.domain import CrawlOptions
from graphcrawl.services.crawl_executor import CrawlExecutor
from graphcrawl.services.crawl_policy import CrawlPolicy
from graphcrawl.services.crawl_runner import CrawlRunner
from graphcrawl.services.crawl_settings import CrawlSettings
from graphcrawl.services.http_service import HttpService
from graphcrawl.services.link_processor import LinkProcessor
from graphcrawl.services.page_indexer import HtmlPageIndexer
from graphcrawl.services.record_sink import PageRecordSerializer, build_record_sinks
from graphcrawl.services.user_agents import UserAgentProvider
from graphcrawl import config as env


# Environment variables used by the container (read via `graphcrawl.config` helpers).
#
# USER_AGENT (str, default: "GraphCrawl/0.1")
#   User-Agent header when no random or custom agent is configured.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for outbound HTTP requests.
#
# GRAPHCRAWL_SHUTDOWN_GRACE_SECONDS (float seconds, default: 0.2)
#   Pause after the shutdown sentinel so a reading process can catch up.
#
# GRAPHCRAWL_CONTROLLER_JOIN_SECONDS (float seconds, default: 1.0)
#   How long a finished crawl waits for the command reader thread.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "GRAPHCRAWL_SHUTDOWN_GRACE_SECONDS": env.shutdown_grace_seconds(),
    "GRAPHCRAWL_CONTROLLER_JOIN_SECONDS": env.controller_join_seconds(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for one GraphCrawl run."""

    config = providers.Configuration(default=ENV)

    # Per-run inputs, supplied by the caller
    crawl_options = providers.Dependency(instance_of=CrawlOptions)
    command_stream = providers.Dependency()

    # Live settings shared by the crawl loop and the controller
    crawl_settings = providers.Singleton(
        CrawlSettings.from_options,
        crawl_options,
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    user_agent_provider = providers.Singleton(
        UserAgentProvider.from_options,
        crawl_options,
        default_user_agent=config.USER_AGENT.as_(str),
    )

    page_indexer = providers.Singleton(
        HtmlPageIndexer,
        http_service=http_service,
        user_agent_provider=user_agent_provider,
    )

    link_processor = providers.Singleton(
        LinkProcessor,
        settings=crawl_settings,
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy,
        settings=crawl_settings,
    )

    record_serializer = providers.Singleton(
        PageRecordSerializer
    )

    record_sinks = providers.Callable(
        build_record_sinks,
        crawl_options,
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        page_indexer=page_indexer,
        settings=crawl_settings,
        link_processor=link_processor,
        crawl_policy=crawl_policy,
        serializer=record_serializer,
        sinks=record_sinks,
        randomize=crawl_options.provided.randomize,
        shutdown_grace_seconds=config.GRAPHCRAWL_SHUTDOWN_GRACE_SECONDS.as_(float),
    )

    crawl_runner = providers.Factory(
        CrawlRunner,
        executor=crawl_executor,
        command_stream=command_stream,
        join_timeout=config.GRAPHCRAWL_CONTROLLER_JOIN_SECONDS.as_(float),
    )
