"""Entity cross-referencing between articles, newsletters and filings."""

from feedrank.linker.coverage import find_coverage_density
from feedrank.linker.cross_refs import (
    find_matching_article_ids,
    find_related_for_article,
    find_related_for_newsletter,
)
from feedrank.linker.entity_matcher import (
    entities_match,
    normalize_entity,
    text_contains_entity,
)
from feedrank.linker.models import CoverageDensity, RelatedItem, RelatedType
from feedrank.linker.similarity import jaccard, significant_words


__all__ = [
    "CoverageDensity",
    "RelatedItem",
    "RelatedType",
    "entities_match",
    "find_coverage_density",
    "find_matching_article_ids",
    "find_related_for_article",
    "find_related_for_newsletter",
    "jaccard",
    "normalize_entity",
    "significant_words",
    "text_contains_entity",
]
