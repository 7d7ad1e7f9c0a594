"""Heuristic story ranker and batch ranking pipeline.

The scorer turns an article's own fields (plus its batch, for the
first-to-report signal) into an integer score with a full breakdown. The
pipeline reads articles from the store, scores them as one batch and
writes the scores back in bounded sequential chunks.
"""

from feedrank.ranker.metrics import RankerMetrics
from feedrank.ranker.models import (
    PipelineStats,
    RankingResult,
    ScoreBreakdown,
    StoreStats,
)
from feedrank.ranker.pipeline import (
    RankingPipeline,
    rank_all_articles,
    rank_recent_articles,
)
from feedrank.ranker.scorer import HeuristicScorer, score_articles_pure


__all__ = [
    "HeuristicScorer",
    "PipelineStats",
    "RankerMetrics",
    "RankingPipeline",
    "RankingResult",
    "ScoreBreakdown",
    "StoreStats",
    "rank_all_articles",
    "rank_recent_articles",
    "score_articles_pure",
]
