"""Batch ranking pipeline: read, score, persist."""

import time
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import structlog

from feedrank.config.schemas import PipelineConfig
from feedrank.models import Article
from feedrank.personalize.ranker import is_vip_publication
from feedrank.ranker.metrics import RankerMetrics
from feedrank.ranker.models import PipelineStats, RankingResult, StoreStats
from feedrank.ranker.scorer import HeuristicScorer
from feedrank.store.errors import ArticleStoreError
from feedrank.store.protocols import ArticleOrder, ArticleQuery, ArticleStore


logger = structlog.get_logger()


class RankingPipeline:
    """Scores articles from the store and writes the scores back.

    Two modes:
        - recent: articles from the last 24 hours (bounded), one batch
        - all: the whole corpus paged sequentially, one batch

    The pipeline fails open: a missing or unreachable store yields zeroed
    stats instead of an exception. Per-record write failures are counted
    and never retried.
    """

    def __init__(
        self,
        store: ArticleStore | None,
        run_id: str = "pure",
        config: PipelineConfig | None = None,
        metrics: RankerMetrics | None = None,
        now: datetime | None = None,
        vip_publications: Sequence[str] = (),
    ) -> None:
        """Initialize the pipeline.

        Args:
            store: Article store handle, or None when unconfigured.
            run_id: Run identifier for logging.
            config: Pipeline bounds.
            metrics: Optional metrics instance.
            now: Reference time for windows and recency.
            vip_publications: Sources scored as VIP even when the stored
                article is not flagged.
        """
        self._store = store
        self._run_id = run_id
        self._config = config or PipelineConfig()
        self._metrics = metrics or RankerMetrics.get_instance()
        self._now = now or datetime.now(UTC)
        self._vip_publications = tuple(vip_publications)
        self._log = logger.bind(
            component="ranker", subcomponent="pipeline", run_id=run_id
        )

    def rank_recent(self) -> PipelineStats:
        """Rank articles published within the recent window.

        Returns:
            Pipeline statistics (zeroed if the store is unavailable).
        """
        self._metrics.record_run()
        if self._store is None:
            return self._unavailable("store_not_configured")

        window = timedelta(hours=self._config.recent_window_hours)
        query = ArticleQuery(
            published_since=self._now - window,
            order_by=ArticleOrder.PUBLISHED_AT,
            limit=self._config.recent_limit,
        )
        try:
            articles = self._store.list_articles(query)
        except ArticleStoreError as e:
            return self._unavailable("store_read_failed", error=str(e))

        self._log.info("recent_articles_loaded", count=len(articles))
        return self._rank_and_store(articles)

    def rank_all(self) -> PipelineStats:
        """Re-rank the entire corpus as a single batch.

        Pages are read strictly in sequence until an empty or short page.

        Returns:
            Pipeline statistics (zeroed if the store is unavailable).
        """
        self._metrics.record_run()
        if self._store is None:
            return self._unavailable("store_not_configured")

        page_size = self._config.page_size
        articles: list[Article] = []
        offset = 0

        while True:
            query = ArticleQuery(
                order_by=ArticleOrder.PUBLISHED_AT,
                limit=page_size,
                offset=offset,
            )
            try:
                page = self._store.list_articles(query)
            except ArticleStoreError as e:
                return self._unavailable(
                    "store_read_failed", error=str(e), offset=offset
                )

            articles.extend(page)
            self._log.debug("page_loaded", offset=offset, count=len(page))
            if len(page) < page_size:
                break
            offset += page_size

        self._log.info("corpus_loaded", count=len(articles))
        return self._rank_and_store(articles)

    def store_ranking_scores(self, results: Sequence[RankingResult]) -> StoreStats:
        """Persist scores in sequential chunks of single-record updates.

        Args:
            results: Scores to persist.

        Returns:
            Counts of successful and failed updates.
        """
        if self._store is None or not results:
            return StoreStats()

        updated = 0
        errors = 0
        chunk_size = self._config.write_chunk_size

        for start in range(0, len(results), chunk_size):
            chunk = results[start : start + chunk_size]
            for result in chunk:
                try:
                    ok = self._store.update_ranking_score(
                        result.article_id, result.ranking_score
                    )
                except Exception as e:  # noqa: BLE001
                    self._log.warning(
                        "score_update_failed",
                        article_id=result.article_id,
                        error=str(e),
                    )
                    errors += 1
                    continue

                if ok:
                    updated += 1
                else:
                    self._log.warning(
                        "score_update_rejected", article_id=result.article_id
                    )
                    errors += 1

            self._log.debug(
                "score_chunk_persisted",
                chunk_start=start,
                chunk_size=len(chunk),
            )

        return StoreStats(updated=updated, errors=errors)

    def _rank_and_store(self, articles: list[Article]) -> PipelineStats:
        if not articles:
            return PipelineStats()

        articles = self._mark_vip_publications(articles)

        start = time.perf_counter()
        scorer = HeuristicScorer(run_id=self._run_id, now=self._now)
        results = scorer.score_articles(articles)
        self._metrics.record_scoring_duration((time.perf_counter() - start) * 1000)

        scores = [r.ranking_score for r in results]
        self._metrics.record_ranked(scores)

        start = time.perf_counter()
        store_stats = self.store_ranking_scores(results)
        self._metrics.record_persist_duration((time.perf_counter() - start) * 1000)
        self._metrics.record_persisted(store_stats.updated, store_stats.errors)

        stats = PipelineStats(
            ranked=len(results),
            stored=store_stats.updated,
            errors=store_stats.errors,
            top_score=max(scores),
            bottom_score=min(scores),
        )

        self._log.info("ranking_complete", **stats.model_dump())
        return stats

    def _mark_vip_publications(self, articles: list[Article]) -> list[Article]:
        if not self._vip_publications:
            return articles
        return [
            a.model_copy(update={"is_vip": True})
            if not a.is_vip and is_vip_publication(a.source, self._vip_publications)
            else a
            for a in articles
        ]

    def _unavailable(self, reason: str, **context: object) -> PipelineStats:
        self._metrics.record_store_unavailable()
        self._log.warning("store_unavailable", reason=reason, **context)
        return PipelineStats()


def rank_recent_articles(
    store: ArticleStore | None,
    now: datetime | None = None,
    run_id: str = "pure",
) -> PipelineStats:
    """Rank the last day's articles and persist their scores.

    Args:
        store: Article store handle.
        now: Reference time.
        run_id: Run identifier.

    Returns:
        Pipeline statistics.
    """
    return RankingPipeline(store, run_id=run_id, now=now).rank_recent()


def rank_all_articles(
    store: ArticleStore | None,
    now: datetime | None = None,
    run_id: str = "pure",
) -> PipelineStats:
    """Re-rank every stored article and persist the scores.

    Args:
        store: Article store handle.
        now: Reference time.
        run_id: Run identifier.

    Returns:
        Pipeline statistics.
    """
    return RankingPipeline(store, run_id=run_id, now=now).rank_all()
