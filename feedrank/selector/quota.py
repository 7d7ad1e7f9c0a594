"""Store-backed top stories with per-publication and per-topic caps."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

import structlog

from feedrank.config.schemas import DiversityConfig
from feedrank.models import Article
from feedrank.selector.publication import extract_publication
from feedrank.store.errors import ArticleStoreError
from feedrank.store.protocols import ArticleOrder, ArticleQuery, ArticleStore


logger = structlog.get_logger()

_DEFAULTS = DiversityConfig()

UNKNOWN_TOPIC = "unknown"


def apply_diversity_filter(
    articles: Iterable[Article],
    count: int,
    max_per_publication: int,
    max_per_topic: int,
) -> list[Article]:
    """Greedy forward scan under hard publication and topic caps.

    Candidates are taken in input (score) order; any candidate that would
    push its publication or topic past the cap is skipped.

    Args:
        articles: Candidates ordered by score descending.
        count: Number of stories wanted.
        max_per_publication: Cap per normalized publication.
        max_per_topic: Cap per topic.

    Returns:
        Selected articles, at most ``count``.
    """
    result: list[Article] = []
    pub_counts: dict[str, int] = defaultdict(int)
    topic_counts: dict[str, int] = defaultdict(int)

    for article in articles:
        if len(result) >= count:
            break

        pub = extract_publication(article.url)
        topic = article.topic_key or UNKNOWN_TOPIC

        if pub_counts[pub] >= max_per_publication:
            continue
        if topic_counts[topic] >= max_per_topic:
            continue

        result.append(article)
        pub_counts[pub] += 1
        topic_counts[topic] += 1

    return result


def get_top_stories(
    store: ArticleStore | None,
    count: int = _DEFAULTS.count,
    max_per_publication: int = _DEFAULTS.max_per_publication,
    max_per_topic: int = _DEFAULTS.max_per_topic,
    hours_back: int = _DEFAULTS.hours_back,
    now: datetime | None = None,
    pool_multiplier: int = _DEFAULTS.pool_multiplier,
) -> list[Article]:
    """Fetch the highest-scored recent stories with diversity caps.

    Reads a candidate pool of ``count * pool_multiplier`` articles with a
    positive score inside the window, first with summaries joined and, if
    that read fails, again without them.

    Args:
        store: Article store handle, or None when unconfigured.
        count: Number of stories to return.
        max_per_publication: Cap per normalized publication.
        max_per_topic: Cap per topic.
        hours_back: Lookback window in hours.
        now: Reference time.
        pool_multiplier: Candidate pool size as a multiple of ``count``.

    Returns:
        Selected articles, empty if the store is unavailable or nothing
        can be selected (``count`` or a cap below 1).
    """
    log = logger.bind(component="selector", subcomponent="top_stories")
    if store is None:
        log.warning("store_unavailable", reason="store_not_configured")
        return []

    if min(count, max_per_publication, max_per_topic, pool_multiplier) < 1:
        log.info(
            "top_stories_skipped",
            count=count,
            max_per_publication=max_per_publication,
            max_per_topic=max_per_topic,
            pool_multiplier=pool_multiplier,
        )
        return []

    reference = now or datetime.now(UTC)
    query = ArticleQuery(
        published_since=reference - timedelta(hours=hours_back),
        min_score_exclusive=0,
        order_by=ArticleOrder.RANKING_SCORE,
        limit=count * pool_multiplier,
        with_summaries=True,
    )

    try:
        pool = store.list_articles(query)
    except ArticleStoreError as e:
        log.warning("enriched_query_failed", error=str(e))
        try:
            plain = query.model_copy(update={"with_summaries": False})
            pool = store.list_articles(plain)
        except ArticleStoreError as fallback_error:
            log.warning("store_unavailable", error=str(fallback_error))
            return []

    selected = apply_diversity_filter(pool, count, max_per_publication, max_per_topic)

    log.info(
        "top_stories_selected",
        pool_size=len(pool),
        selected=len(selected),
        count=count,
    )
    return selected
