"""CLI commands for feedrank."""

import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from feedrank import __version__
from feedrank.classifier import reclassify_by_keywords
from feedrank.config import ConfigValidationError, load_feed_config
from feedrank.config.schemas import FeedConfig
from feedrank.observability.logging import bind_run_context, configure_logging
from feedrank.personalize import is_vip_publication
from feedrank.ranker import RankerMetrics, RankingPipeline
from feedrank.selector import get_top_stories
from feedrank.settings import get_settings
from feedrank.store import ArticleStoreError, SqliteArticleStore


logger = structlog.get_logger()

COMPONENT_CLI = "cli"


@dataclass
class CliContext:
    """Options shared by every command."""

    db_path: Path | None
    config: FeedConfig
    run_id: str


def _load_config(config_path: Path | None) -> FeedConfig:
    """Load the feed configuration, exit on failure."""
    try:
        return load_feed_config(config_path)
    except ConfigValidationError as e:
        click.echo(f"Configuration validation failed: {e.file_path}", err=True)
        for error in e.errors:
            click.echo(f"  - {error['location']}: {error['message']}", err=True)
        sys.exit(1)


@contextmanager
def _store_session(
    db_path: Path | None, run_id: str
) -> Iterator[SqliteArticleStore | None]:
    """Open the article store for one command.

    Yields None when no database is configured or it cannot be opened, so
    commands degrade to empty results instead of failing.
    """
    log = logger.bind(component=COMPONENT_CLI, run_id=run_id)
    if db_path is None:
        log.warning("store_unavailable", reason="store_not_configured")
        yield None
        return

    store: SqliteArticleStore | None = SqliteArticleStore(db_path, run_id=run_id)
    try:
        store.connect()
    except ArticleStoreError as e:
        log.warning("store_unavailable", reason="connect_failed", error=str(e))
        store = None

    try:
        yield store
    finally:
        if store is not None:
            store.close()


def _echo_json(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the SQLite article database (default: FEEDRANK_DB_PATH).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to feedrank.yaml (default: FEEDRANK_CONFIG_PATH or built-ins).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: FEEDRANK_JSON_LOGS).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    db_path: Path | None,
    config_path: Path | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Story ranking, top-stories selection and topic reclassification."""
    settings = get_settings()
    level = logging.DEBUG if verbose else settings.resolved_log_level()
    configure_logging(
        level=level,
        json_format=settings.json_logs if json_logs is None else json_logs,
    )

    run_id = str(uuid.uuid4())
    bind_run_context(run_id, mode=ctx.invoked_subcommand)

    ctx.obj = CliContext(
        db_path=db_path or settings.db_path,
        config=_load_config(config_path or settings.config_path),
        run_id=run_id,
    )


@cli.command()
@click.option(
    "--all",
    "rank_everything",
    is_flag=True,
    help="Re-rank the whole corpus instead of the last day.",
)
@click.pass_obj
def rank(obj: CliContext, rank_everything: bool) -> None:
    """Score articles and persist their ranking scores."""
    metrics = RankerMetrics.get_instance()
    with _store_session(obj.db_path, obj.run_id) as store:
        pipeline = RankingPipeline(
            store,
            run_id=obj.run_id,
            config=obj.config.pipeline,
            metrics=metrics,
            vip_publications=obj.config.vip_publications,
        )
        stats = pipeline.rank_all() if rank_everything else pipeline.rank_recent()

    logger.info(
        "rank_command_complete",
        component=COMPONENT_CLI,
        metrics=metrics.to_dict(),
    )
    _echo_json(stats.model_dump())


@cli.command("top-stories")
@click.option("--count", type=click.IntRange(min=1), default=None)
@click.option("--max-per-pub", type=click.IntRange(min=1), default=None)
@click.option("--max-per-topic", type=click.IntRange(min=1), default=None)
@click.option("--hours-back", type=click.IntRange(min=1), default=None)
@click.pass_obj
def top_stories(
    obj: CliContext,
    count: int | None,
    max_per_pub: int | None,
    max_per_topic: int | None,
    hours_back: int | None,
) -> None:
    """Print the diverse top stories of the recent window."""
    defaults = obj.config.diversity
    with _store_session(obj.db_path, obj.run_id) as store:
        stories = get_top_stories(
            store,
            count=count or defaults.count,
            max_per_publication=max_per_pub or defaults.max_per_publication,
            max_per_topic=max_per_topic or defaults.max_per_topic,
            hours_back=hours_back or defaults.hours_back,
            pool_multiplier=defaults.pool_multiplier,
        )

    _echo_json(
        [
            {
                "id": a.id,
                "title": a.title,
                "source": a.source,
                "topic": a.topic_key,
                "ranking_score": a.ranking_score,
                "url": a.url,
                "vip": a.is_vip
                or is_vip_publication(a.source, obj.config.vip_publications),
            }
            for a in stories
        ]
    )


@cli.command()
@click.option("--topic", "topic_filter", default=None, help="Only this topic.")
@click.option("--limit", type=click.IntRange(min=1), default=None)
@click.pass_obj
def reclassify(obj: CliContext, topic_filter: str | None, limit: int | None) -> None:
    """Reassign article topics using keyword rules."""
    defaults = obj.config.reclassify
    with _store_session(obj.db_path, obj.run_id) as store:
        stats = reclassify_by_keywords(
            store,
            topic_filter=topic_filter,
            limit=limit or defaults.limit,
            min_content_chars=defaults.min_content_chars,
            run_id=obj.run_id,
        )
    _echo_json(stats.model_dump())


def main() -> None:
    """Console script entry point."""
    cli()
