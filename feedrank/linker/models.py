"""Result types of the entity cross-referencer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RelatedType(str, Enum):
    """Kind of related item."""

    ARTICLE = "article"
    NEWSLETTER = "newsletter"
    PRIMARY = "primary"


class RelatedItem(BaseModel):
    """An article, newsletter or primary document related to another item."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: RelatedType
    id: str
    source: str = ""
    title: str = ""
    source_url: str | None = None


class CoverageDensity(BaseModel):
    """How many feed articles cover the same story.

    ``count`` includes the article itself; ``sources`` lists the distinct
    publications of the other covering articles in first-seen order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    count: int = Field(default=1, ge=1)
    sources: list[str] = Field(default_factory=list)
