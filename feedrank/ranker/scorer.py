"""Heuristic scoring engine for article ranking."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import structlog

from feedrank.linker.similarity import jaccard, title_words
from feedrank.models import Article
from feedrank.ranker.constants import (
    DEFAULT_TIER_BASE_SCORE,
    FIRST_TO_REPORT_BONUS,
    FIRST_TO_REPORT_SIMILARITY,
    MAX_CONTENT_CHARS,
    RECENCY_BONUS,
    RECENCY_WINDOW_HOURS,
    TEXT_SIGNAL_RULES,
    TIER_BASE_SCORES,
    VIP_BONUS,
    SignalRule,
)
from feedrank.ranker.models import RankingResult, ScoreBreakdown


logger = structlog.get_logger()


def build_match_text(article: Article) -> str:
    """Build the text scanned by the pattern detectors.

    Content is truncated to bound matching cost.

    Args:
        article: Article to read.

    Returns:
        Title and truncated content joined by a space.
    """
    return f"{article.title} {article.content[:MAX_CONTENT_CHARS]}"


class HeuristicScorer:
    """Computes deterministic integer scores for articles.

    Scoring formula:
        score = tier_base + original_reporting + authority_mention
              + financial_magnitude + broad_impact + recency + vip
              + first_to_report - derivative_headline - summarizing_others

    Each bonus and penalty applies at most once. The first-to-report
    signal only compares articles scored together in one batch; it has no
    memory of earlier runs.
    """

    def __init__(self, run_id: str = "pure", now: datetime | None = None) -> None:
        """Initialize the scorer.

        Args:
            run_id: Run identifier for logging.
            now: Reference time for the recency bonus.
        """
        self._run_id = run_id
        self._now = now or datetime.now(UTC)
        self._log = logger.bind(
            component="ranker",
            subcomponent="scorer",
            run_id=run_id,
        )

    @property
    def now(self) -> datetime:
        """Reference time used for recency."""
        return self._now

    def score_article(
        self, article: Article, batch: Sequence[Article] = ()
    ) -> RankingResult:
        """Score one article against the batch it was ranked with.

        Args:
            article: Article to score.
            batch: Articles scored together (may include the article itself).

        Returns:
            RankingResult with the full breakdown.
        """
        peers = [(other, title_words(other.title)) for other in batch]
        return self._score(article, title_words(article.title), peers)

    def score_articles(self, articles: Sequence[Article]) -> list[RankingResult]:
        """Score a batch of articles, in input order.

        Args:
            articles: Articles to score together.

        Returns:
            One RankingResult per article.
        """
        peers = [(a, title_words(a.title)) for a in articles]
        results = [self._score(a, words, peers) for a, words in peers]

        self._log.info(
            "scoring_complete",
            articles_scored=len(results),
            min_score=min((r.ranking_score for r in results), default=0),
            max_score=max((r.ranking_score for r in results), default=0),
        )

        return results

    def _score(
        self,
        article: Article,
        words: set[str],
        peers: list[tuple[Article, set[str]]],
    ) -> RankingResult:
        breakdown = ScoreBreakdown(
            source_tier=self._compute_tier_score(article),
            recency=self._compute_recency_score(article),
            vip=VIP_BONUS if article.is_vip else 0,
            first_to_report=self._compute_first_to_report(article, words, peers),
            **text_signal_points(build_match_text(article)),
        )

        return RankingResult(
            article_id=article.id,
            ranking_score=breakdown.total,
            breakdown=breakdown,
        )

    def _compute_tier_score(self, article: Article) -> int:
        """Compute the base score from the source tier.

        Args:
            article: Article to score.

        Returns:
            Tier base score.
        """
        if article.source_tier is None:
            return DEFAULT_TIER_BASE_SCORE
        return TIER_BASE_SCORES.get(article.source_tier, DEFAULT_TIER_BASE_SCORE)

    def _compute_recency_score(self, article: Article) -> int:
        """Award the recency bonus to articles younger than the window.

        Args:
            article: Article to score.

        Returns:
            Recency bonus or 0.
        """
        age = self._now - article.published_at
        if age < timedelta(hours=RECENCY_WINDOW_HOURS):
            return RECENCY_BONUS
        return 0

    def _compute_first_to_report(
        self,
        article: Article,
        words: set[str],
        peers: list[tuple[Article, set[str]]],
    ) -> int:
        """Award the first-to-report bonus.

        The article wins when no batch sibling has a similar headline, or
        when every similar sibling was published at or after it.

        Args:
            article: Article to score.
            words: Normalized title words of the article.
            peers: Batch articles with their normalized title words.

        Returns:
            First-to-report bonus or 0.
        """
        for other, other_words in peers:
            if other.id == article.id:
                continue
            if jaccard(words, other_words) < FIRST_TO_REPORT_SIMILARITY:
                continue
            if other.published_at < article.published_at:
                return 0
        return FIRST_TO_REPORT_BONUS


def text_signal_points(
    text: str, rules: Sequence[SignalRule] = TEXT_SIGNAL_RULES
) -> dict[str, int]:
    """Evaluate the text rules in order.

    Args:
        text: Match text built from the article.
        rules: Rules to evaluate, suppressing rules first.

    Returns:
        Points per rule name; 0 for rules that missed or were suppressed.
    """
    fired: dict[str, bool] = {}
    points: dict[str, int] = {}
    for rule in rules:
        hit = rule.matches(text)
        fired[rule.name] = hit
        if rule.suppressed_by is not None and fired.get(rule.suppressed_by):
            hit = False
        points[rule.name] = rule.weight if hit else 0
    return points


def score_articles_pure(
    articles: Sequence[Article],
    now: datetime | None = None,
    run_id: str = "pure",
) -> list[RankingResult]:
    """Pure function API for scoring a batch of articles.

    Args:
        articles: Articles to score together.
        now: Reference time for recency.
        run_id: Run identifier.

    Returns:
        List of RankingResult objects in input order.
    """
    scorer = HeuristicScorer(run_id=run_id, now=now)
    return scorer.score_articles(articles)
