"""Article store contract consumed by the ranking pipelines."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Protocol

from pydantic import Field

from feedrank.data_model import StrictBaseModel
from feedrank.models import Article


class ArticleOrder(str, Enum):
    """Sort orders supported by article reads (always descending)."""

    PUBLISHED_AT = "published_at"
    RANKING_SCORE = "ranking_score"


class ArticleQuery(StrictBaseModel):
    """Filter, order and page parameters for an article read.

    Attributes:
        published_since: Only articles published at or after this time.
        min_score_exclusive: Only articles whose ranking score is greater.
        topic: Only articles with this topic.
        order_by: Descending sort column.
        limit: Maximum number of rows.
        offset: Rows to skip (for pagination).
        with_summaries: Join summaries onto the returned articles.
    """

    published_since: datetime | None = None
    min_score_exclusive: int | None = None
    topic: str | None = None
    order_by: ArticleOrder = ArticleOrder.PUBLISHED_AT
    limit: Annotated[int, Field(ge=1)] = 500
    offset: Annotated[int, Field(ge=0)] = 0
    with_summaries: bool = False


class ArticleStore(Protocol):
    """Protocol for the article store.

    Implementations raise ``StoreUnavailableError`` when they cannot be
    reached and ``QueryError`` when a query shape is unsupported. Update
    methods report failure by returning False or raising; the pipelines
    count either as one error and carry on.
    """

    def list_articles(self, query: ArticleQuery) -> list[Article]:
        """Read articles matching the query."""
        ...

    def update_ranking_score(self, article_id: str, score: int) -> bool:
        """Persist the ranking score of one article."""
        ...

    def update_topic(self, article_id: str, topic: str) -> bool:
        """Persist the topic of one article."""
        ...
