"""Data models for the story ranker."""

from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ScoreBreakdown:
    """Every named contribution to an article's ranking score.

    Attributes:
        source_tier: Base score from the source tier.
        original_reporting: Exclusive/breaking/original reporting bonus.
        authority_mention: High-authority individual mention bonus.
        financial_magnitude: Financial magnitude language bonus.
        broad_impact: Broad-impact language bonus.
        recency: Published within the recency window bonus.
        vip: VIP publication bonus.
        first_to_report: Earliest coverage within the batch bonus.
        derivative_headline: Derivative headline penalty (negative).
        summarizing_others: Attribution-without-reporting penalty (negative).
    """

    source_tier: int = 0
    original_reporting: int = 0
    authority_mention: int = 0
    financial_magnitude: int = 0
    broad_impact: int = 0
    recency: int = 0
    vip: int = 0
    first_to_report: int = 0
    derivative_headline: int = 0
    summarizing_others: int = 0

    @property
    def total(self) -> int:
        """Sum of all contributions."""
        return sum(self.to_dict().values())

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary of component name to value.
        """
        return {
            "source_tier": self.source_tier,
            "original_reporting": self.original_reporting,
            "authority_mention": self.authority_mention,
            "financial_magnitude": self.financial_magnitude,
            "broad_impact": self.broad_impact,
            "recency": self.recency,
            "vip": self.vip,
            "first_to_report": self.first_to_report,
            "derivative_headline": self.derivative_headline,
            "summarizing_others": self.summarizing_others,
        }


@dataclass(frozen=True)
class RankingResult:
    """Score computed for a single article.

    Attributes:
        article_id: Identifier of the scored article.
        ranking_score: Final integer score (may be negative).
        breakdown: Contribution of every rule.
    """

    article_id: str
    ranking_score: int
    breakdown: ScoreBreakdown


class PipelineStats(BaseModel):
    """Aggregate result of a ranking pipeline run.

    A zeroed instance is returned when the store is unavailable.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ranked: Annotated[int, Field(ge=0, description="Articles scored")] = 0
    stored: Annotated[int, Field(ge=0, description="Scores persisted")] = 0
    errors: Annotated[int, Field(ge=0, description="Failed score updates")] = 0
    top_score: int = 0
    bottom_score: int = 0


@dataclass(frozen=True)
class StoreStats:
    """Outcome of persisting a batch of scores.

    Attributes:
        updated: Records updated successfully.
        errors: Records whose update failed.
    """

    updated: int = 0
    errors: int = 0
