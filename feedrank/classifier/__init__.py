"""Keyword-based topic reclassification."""

from feedrank.classifier.keywords import (
    DEFAULT_REASSIGN,
    TOPIC_KEYWORDS,
    classify_by_keywords,
)
from feedrank.classifier.models import ReclassifyStats
from feedrank.classifier.reclassify import reclassify_by_keywords


__all__ = [
    "DEFAULT_REASSIGN",
    "TOPIC_KEYWORDS",
    "ReclassifyStats",
    "classify_by_keywords",
    "reclassify_by_keywords",
]
