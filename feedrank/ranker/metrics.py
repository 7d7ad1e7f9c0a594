"""Metrics collection for the ranking pipeline."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RankerMetrics:
    """Metrics for ranking pipeline runs.

    Attributes:
        runs_total: Pipeline invocations.
        store_unavailable_total: Runs that failed open on a missing store.
        articles_ranked_total: Articles scored across runs.
        scores_stored_total: Score updates persisted.
        store_errors_total: Score updates that failed.
        score_values: Scores from the latest run for percentiles.
        scoring_duration_ms: Time spent scoring in the latest run.
        persist_duration_ms: Time spent persisting in the latest run.
    """

    runs_total: int = 0
    store_unavailable_total: int = 0
    articles_ranked_total: int = 0
    scores_stored_total: int = 0
    store_errors_total: int = 0
    score_values: list[int] = field(default_factory=list)
    scoring_duration_ms: float = 0.0
    persist_duration_ms: float = 0.0

    _instance: ClassVar["RankerMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_run(self) -> None:
        """Record a pipeline invocation."""
        self.runs_total += 1

    def record_store_unavailable(self) -> None:
        """Record a run that returned zeroed stats."""
        self.store_unavailable_total += 1

    def record_ranked(self, scores: list[int]) -> None:
        """Record the scores produced by one run.

        Args:
            scores: Ranking scores of the batch.
        """
        self.articles_ranked_total += len(scores)
        self.score_values = list(scores)

    def record_persisted(self, updated: int, errors: int) -> None:
        """Record the outcome of persisting a batch.

        Args:
            updated: Successful updates.
            errors: Failed updates.
        """
        self.scores_stored_total += updated
        self.store_errors_total += errors

    def record_scoring_duration(self, duration_ms: float) -> None:
        """Record scoring duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.scoring_duration_ms = duration_ms

    def record_persist_duration(self, duration_ms: float) -> None:
        """Record persistence duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.persist_duration_ms = duration_ms

    def get_score_percentiles(self) -> dict[str, float]:
        """Calculate score percentiles (p50/p90/p99) of the latest run.

        Returns:
            Dictionary with p50, p90, p99 values.
        """
        if not self.score_values:
            return {"p50": 0.0, "p90": 0.0, "p99": 0.0}

        sorted_scores = sorted(self.score_values)
        n = len(sorted_scores)

        def percentile(p: float) -> float:
            idx = int(p * n / 100)
            return float(sorted_scores[min(idx, n - 1)])

        return {
            "p50": percentile(50),
            "p90": percentile(90),
            "p99": percentile(99),
        }

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "runs_total": self.runs_total,
            "store_unavailable_total": self.store_unavailable_total,
            "articles_ranked_total": self.articles_ranked_total,
            "scores_stored_total": self.scores_stored_total,
            "store_errors_total": self.store_errors_total,
            "scoring_duration_ms": self.scoring_duration_ms,
            "persist_duration_ms": self.persist_duration_ms,
            "score_percentiles": self.get_score_percentiles(),
        }
