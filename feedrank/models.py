"""Domain records consumed by the ranking, selection and linking engines.

These mirror what the ingestion and summarization layers hand over: an
``Article`` with optional ``Summary`` (key entities included) and a
``Newsletter`` digest item. All models are immutable; the only mutable
field in the wider system, ``ranking_score``, is written by the ranking
pipeline through the article store, never on the model itself.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TopicCategory(str, Enum):
    """Closed set of feed topic categories."""

    VC_STARTUPS = "vc-startups"
    FUNDRAISING_ACQUISITIONS = "fundraising-acquisitions"
    EXECUTIVE_MOVEMENTS = "executive-movements"
    FINANCIAL_MARKETS = "financial-markets"
    GEOPOLITICS = "geopolitics"
    AUTOMOTIVE = "automotive"
    SCIENCE_TECH = "science-tech"
    LOCAL_NEWS = "local-news"
    POLITICS = "politics"


class InterestLevel(str, Enum):
    """Per-user interest in a topic.

    Hidden topics are excluded from personalized views entirely.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    HIDDEN = "hidden"


class EntityType(str, Enum):
    """Kind of named entity extracted by summarization."""

    COMPANY = "company"
    PERSON = "person"
    FUND = "fund"
    KEYWORD = "keyword"


class Entity(BaseModel):
    """A named entity mentioned by an article or newsletter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1)]
    type: EntityType = EntityType.KEYWORD


class Summary(BaseModel):
    """Structured summary produced by the (external) summarization layer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    brief: str = ""
    the_news: str = ""
    why_it_matters: str = ""
    the_context: str = ""
    key_entities: list[Entity] = Field(default_factory=list)

    @property
    def entity_names(self) -> list[str]:
        """Key entity names in summary order."""
        return [e.name for e in self.key_entities]


class NewsletterDigest(BaseModel):
    """Text-only digest of a newsletter without structured entities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    the_news: str = ""
    why_it_matters: str = ""
    the_context: str = ""

    def text_fields(self) -> list[str]:
        """Non-empty text fields in display order."""
        return [t for t in (self.the_news, self.why_it_matters, self.the_context) if t]


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Article(BaseModel):
    """An ingested article as seen by the ranking core."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Annotated[str, Field(min_length=1, description="Article identifier")]
    title: Annotated[str, Field(description="Headline")]
    content: str = Field(default="", description="Body text (may be empty)")
    url: str = Field(default="", description="Canonical URL")
    source: str = Field(default="", description="Publication label")
    topic: TopicCategory | str = Field(
        default="", description="Topic category (closed set, empty if unknown)"
    )
    source_tier: int | None = Field(
        default=None, description="1=premium, 2=mid, 3=general, None=unknown"
    )
    published_at: datetime = Field(description="Publication timestamp")
    is_vip: bool = False
    ranking_score: int | None = None
    watchlist_matches: Annotated[int, Field(ge=0)] = 0
    is_read: bool = False
    document_type: str | None = Field(
        default=None, description="Set for primary documents such as filings"
    )
    summary: Summary | None = None

    @field_validator("published_at", mode="after")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        return _utc(v)

    @field_validator("topic", mode="before")
    @classmethod
    def coerce_topic(cls, v: object) -> TopicCategory | str:
        """Coerce known topic strings to the enum, keep unknown ones as-is."""
        if v is None:
            return ""
        if isinstance(v, TopicCategory):
            return v
        try:
            return TopicCategory(str(v))
        except ValueError:
            return str(v)

    @property
    def topic_key(self) -> str:
        """Topic as a plain string key."""
        if isinstance(self.topic, TopicCategory):
            return self.topic.value
        return self.topic

    @property
    def entity_names(self) -> list[str]:
        """Key entity names from the summary, empty when unsummarized."""
        if self.summary is None:
            return []
        return self.summary.entity_names


class Newsletter(BaseModel):
    """A received newsletter (digest item)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Annotated[str, Field(min_length=1)]
    publication: str = ""
    subject: str = ""
    received_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    content: str = ""
    summary: Summary | None = None
    newsletter_summary: NewsletterDigest | None = None
    is_read: bool = False

    @property
    def entity_names(self) -> list[str]:
        """Key entity names from the structured summary."""
        if self.summary is None:
            return []
        return self.summary.entity_names


TopicPreferences = dict[TopicCategory | str, InterestLevel]
EngagementScores = dict[str, float]
