"""Unit tests for the batch ranking pipeline."""

from collections.abc import Generator
from datetime import timedelta

import pytest

from feedrank.config.schemas import PipelineConfig
from feedrank.ranker.metrics import RankerMetrics
from feedrank.ranker.models import RankingResult, ScoreBreakdown
from feedrank.ranker.pipeline import (
    RankingPipeline,
    rank_all_articles,
    rank_recent_articles,
)
from feedrank.store.protocols import ArticleOrder
from tests.helpers.articles import make_article
from tests.helpers.fake_store import FakeArticleStore
from tests.helpers.time import FIXED_NOW


@pytest.fixture(autouse=True)
def _reset_metrics() -> Generator[None]:
    RankerMetrics.reset()
    yield
    RankerMetrics.reset()


def _pipeline(
    store: FakeArticleStore | None, config: PipelineConfig | None = None
) -> RankingPipeline:
    return RankingPipeline(store, run_id="test", config=config, now=FIXED_NOW)


class TestRankRecent:
    """Tests for recent-mode ranking."""

    def test_scores_persisted(self) -> None:
        """Test every recent article gets a stored score."""
        store = FakeArticleStore(
            [
                make_article("a", title="Exclusive: Acme buys Beta", source_tier=1),
                make_article("b", title="Senate passes farm bill", source_tier=2),
            ]
        )

        stats = _pipeline(store).rank_recent()

        assert stats.ranked == 2
        assert stats.stored == 2
        assert stats.errors == 0
        assert {article_id for article_id, _ in store.score_updates} == {"a", "b"}
        assert store.articles["a"].ranking_score == stats.top_score

    def test_query_bounds(self) -> None:
        """Test the read covers the last 24 hours, newest first, 500 max."""
        store = FakeArticleStore()

        _pipeline(store).rank_recent()

        query = store.queries[0]
        assert query.published_since == FIXED_NOW - timedelta(hours=24)
        assert query.order_by is ArticleOrder.PUBLISHED_AT
        assert query.limit == 500

    def test_old_articles_excluded(self) -> None:
        """Test articles outside the window are not scored."""
        store = FakeArticleStore(
            [make_article("new", hours_old=3), make_article("old", hours_old=30)]
        )

        stats = _pipeline(store).rank_recent()

        assert stats.ranked == 1
        assert store.articles["old"].ranking_score is None

    def test_empty_window_returns_zero_stats(self) -> None:
        """Test nothing to rank yields zeroed stats."""
        stats = _pipeline(FakeArticleStore()).rank_recent()
        assert stats.ranked == 0
        assert stats.top_score == 0

    def test_missing_store_fails_open(self) -> None:
        """Test an unconfigured store yields zeroed stats."""
        stats = rank_recent_articles(None, now=FIXED_NOW)
        assert stats.model_dump() == {
            "ranked": 0,
            "stored": 0,
            "errors": 0,
            "top_score": 0,
            "bottom_score": 0,
        }
        assert RankerMetrics.get_instance().store_unavailable_total == 1

    def test_unreachable_store_fails_open(self) -> None:
        """Test a read failure yields zeroed stats and no writes."""
        store = FakeArticleStore([make_article()], unavailable=True)

        stats = _pipeline(store).rank_recent()

        assert stats.ranked == 0
        assert store.score_updates == []


class TestRankAll:
    """Tests for full-corpus re-ranking."""

    def test_pages_until_short_page(self) -> None:
        """Test sequential paging stops on the first short page."""
        store = FakeArticleStore(
            [make_article(str(i), hours_old=100 + i) for i in range(5)]
        )

        stats = _pipeline(store, PipelineConfig(page_size=2)).rank_all()

        assert [q.offset for q in store.queries] == [0, 2, 4]
        assert stats.ranked == 5
        assert stats.stored == 5

    def test_exact_multiple_reads_empty_page(self) -> None:
        """Test a full last page is followed by one empty read."""
        store = FakeArticleStore([make_article(str(i)) for i in range(4)])

        stats = _pipeline(store, PipelineConfig(page_size=2)).rank_all()

        assert [q.offset for q in store.queries] == [0, 2, 4]
        assert stats.ranked == 4

    def test_missing_store_fails_open(self) -> None:
        """Test the module-level entry point tolerates an unconfigured store."""
        stats = rank_all_articles(None, now=FIXED_NOW)
        assert stats.ranked == 0
        assert stats.stored == 0

    def test_no_time_window(self) -> None:
        """Test old articles are re-ranked too."""
        store = FakeArticleStore([make_article("ancient", hours_old=24 * 400)])

        stats = _pipeline(store).rank_all()

        assert stats.ranked == 1
        assert store.queries[0].published_since is None

    def test_page_failure_aborts_run(self) -> None:
        """Test a failed page read returns zeroed stats without writes."""
        store = FakeArticleStore(
            [make_article(str(i)) for i in range(5)], fail_read_at_offset=2
        )

        stats = _pipeline(store, PipelineConfig(page_size=2)).rank_all()

        assert stats.ranked == 0
        assert store.score_updates == []

    def test_rescores_wholesale(self) -> None:
        """Test stale stored scores are overwritten."""
        store = FakeArticleStore(
            [make_article("a", title="Quarterly widget note", ranking_score=999)]
        )

        _pipeline(store).rank_all()

        assert store.articles["a"].ranking_score == 10


class TestVipPublications:
    """Tests for configured VIP publications."""

    def test_configured_source_gets_vip_bonus(self) -> None:
        """Test a listed source is scored as VIP, ignoring case."""
        store = FakeArticleStore(
            [
                make_article("vip", title="Quarterly widget note", source="Bloomberg"),
                make_article("plain", title="Harbor dredging update"),
            ]
        )
        pipeline = RankingPipeline(
            store,
            run_id="test",
            now=FIXED_NOW,
            vip_publications=["bloomberg"],
        )

        pipeline.rank_recent()

        scores = dict(store.score_updates)
        assert scores["vip"] - scores["plain"] == 20

    def test_without_list_stored_flag_decides(self) -> None:
        """Test no configured list leaves unflagged sources unboosted."""
        store = FakeArticleStore(
            [
                make_article("a", title="Quarterly widget note", source="Bloomberg"),
                make_article("b", title="Harbor dredging update"),
            ]
        )

        _pipeline(store).rank_recent()

        scores = dict(store.score_updates)
        assert scores["a"] == scores["b"]


class TestStoreRankingScores:
    """Tests for score persistence."""

    @staticmethod
    def _results(*ids: str) -> list[RankingResult]:
        return [RankingResult(i, 10, ScoreBreakdown(source_tier=10)) for i in ids]

    def test_failures_counted_not_retried(self) -> None:
        """Test raised and rejected writes count as errors."""
        store = FakeArticleStore(
            [make_article(i) for i in ("a", "b", "c", "d")],
            raising_ids={"b"},
            rejecting_ids={"c"},
        )

        stats = _pipeline(store).store_ranking_scores(self._results("a", "b", "c", "d"))

        assert stats.updated == 2
        assert stats.errors == 2
        assert [i for i, _ in store.score_updates] == ["a", "d"]

    def test_chunks_preserve_order(self) -> None:
        """Test chunked writes keep result order."""
        ids = [f"id{i:03d}" for i in range(120)]
        store = FakeArticleStore([make_article(i) for i in ids])

        stats = _pipeline(store).store_ranking_scores(self._results(*ids))

        assert stats.updated == 120
        assert [i for i, _ in store.score_updates] == ids

    def test_missing_store_writes_nothing(self) -> None:
        """Test persisting without a store is a no-op."""
        stats = _pipeline(None).store_ranking_scores(self._results("a"))
        assert stats.updated == 0
        assert stats.errors == 0


class TestPipelineMetrics:
    """Tests for metrics recorded by the pipeline."""

    def test_totals_recorded(self) -> None:
        """Test run, ranked, stored and error totals."""
        store = FakeArticleStore(
            [make_article("a"), make_article("b")], rejecting_ids={"b"}
        )

        _pipeline(store).rank_recent()

        metrics = RankerMetrics.get_instance()
        assert metrics.runs_total == 1
        assert metrics.articles_ranked_total == 2
        assert metrics.scores_stored_total == 1
        assert metrics.store_errors_total == 1
