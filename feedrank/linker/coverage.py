"""Coverage density: how many feed articles report the same story."""

from collections.abc import Sequence

from feedrank.linker.constants import (
    COVERAGE_MIN_SHARED_ENTITIES,
    COVERAGE_TITLE_SIMILARITY,
)
from feedrank.linker.models import CoverageDensity
from feedrank.linker.similarity import jaccard, significant_words
from feedrank.models import Article


def find_coverage_density(
    article: Article,
    all_articles: Sequence[Article],
) -> CoverageDensity:
    """Count same-topic articles that cover the same story.

    A peer covers the story when its significant headline words overlap by
    a Jaccard similarity of at least 0.30, or when it shares two or more
    key entity names (case-insensitive).

    Args:
        article: Article being displayed.
        all_articles: Feed articles (the article itself is skipped).

    Returns:
        Coverage count including the article and the covering publications.
    """
    words = significant_words(article.title)
    entity_names = {name.lower() for name in article.entity_names}

    sources: list[str] = []
    for other in all_articles:
        if other.id == article.id or other.topic_key != article.topic_key:
            continue

        similarity = jaccard(words, significant_words(other.title))
        shared = (
            sum(1 for name in other.entity_names if name.lower() in entity_names)
            if entity_names
            else 0
        )

        covers = (
            similarity >= COVERAGE_TITLE_SIMILARITY
            or shared >= COVERAGE_MIN_SHARED_ENTITIES
        )
        if covers and other.source not in sources:
            sources.append(other.source)

    return CoverageDensity(count=len(sources) + 1, sources=sources)
