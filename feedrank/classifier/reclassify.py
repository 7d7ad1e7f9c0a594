"""Move stored articles to the topic their keywords point at."""

import structlog

from feedrank.classifier.keywords import DEFAULT_REASSIGN, classify_by_keywords
from feedrank.classifier.models import ReclassifyStats
from feedrank.config.schemas import ReclassifyConfig
from feedrank.store.errors import ArticleStoreError
from feedrank.store.protocols import ArticleOrder, ArticleQuery, ArticleStore


logger = structlog.get_logger()

_DEFAULTS = ReclassifyConfig()


def reclassify_by_keywords(
    store: ArticleStore | None,
    topic_filter: str | None = None,
    limit: int = _DEFAULTS.limit,
    min_content_chars: int = _DEFAULTS.min_content_chars,
    run_id: str = "pure",
) -> ReclassifyStats:
    """Reassign topics of recent articles using keyword rules.

    The most recent ``limit`` articles (optionally only those currently in
    ``topic_filter``) with substantive content are classified. Articles
    whose keyword topic differs from their current one are moved. When a
    topic filter is in effect, unmatched articles of a topic listed in
    ``DEFAULT_REASSIGN`` move to its fallback topic.

    Args:
        store: Article store handle, or None when unconfigured.
        topic_filter: Only reclassify articles in this topic.
        limit: Maximum articles read.
        min_content_chars: Content must be longer than this.
        run_id: Run identifier for logging.

    Returns:
        Counts of examined and moved articles (zeroed if the store is
        unavailable).
    """
    log = logger.bind(component="classifier", subcomponent="reclassify", run_id=run_id)
    if store is None:
        log.warning("store_unavailable", reason="store_not_configured")
        return ReclassifyStats()

    query = ArticleQuery(
        topic=topic_filter,
        order_by=ArticleOrder.PUBLISHED_AT,
        limit=limit,
    )
    try:
        articles = store.list_articles(query)
    except ArticleStoreError as e:
        log.warning("store_unavailable", reason="store_read_failed", error=str(e))
        return ReclassifyStats()

    candidates = [a for a in articles if len(a.content) > min_content_chars]

    updates: list[tuple[str, str]] = []
    for article in candidates:
        new_topic = classify_by_keywords(article.title, article.content)
        if new_topic is not None:
            if new_topic != article.topic_key:
                updates.append((article.id, new_topic))
        elif topic_filter and article.topic_key in DEFAULT_REASSIGN:
            updates.append((article.id, DEFAULT_REASSIGN[article.topic_key]))

    moved = 0
    errors = 0
    for article_id, topic in updates:
        try:
            ok = store.update_topic(article_id, topic)
        except Exception as e:  # noqa: BLE001
            log.warning("topic_update_failed", article_id=article_id, error=str(e))
            errors += 1
            continue
        if ok:
            moved += 1
        else:
            log.warning("topic_update_rejected", article_id=article_id)
            errors += 1

    stats = ReclassifyStats(reclassified=moved, total=len(candidates), errors=errors)
    log.info("reclassify_complete", topic_filter=topic_filter, **stats.model_dump())
    return stats
