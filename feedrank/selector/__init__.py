"""Diversity selection of top stories.

Two entry points share the same intent: ``get_top_stories`` reads the
best-scored recent articles from the store and caps publications and
topics; ``select_diverse_top_stories`` works on an already ranked list for
the hero + grid layout.
"""

from feedrank.selector.hero import group_by_topic, select_diverse_top_stories
from feedrank.selector.models import TopicGroup, TopStoriesSelection
from feedrank.selector.publication import extract_publication, source_key
from feedrank.selector.quota import apply_diversity_filter, get_top_stories


__all__ = [
    "TopStoriesSelection",
    "TopicGroup",
    "apply_diversity_filter",
    "extract_publication",
    "get_top_stories",
    "group_by_topic",
    "select_diverse_top_stories",
    "source_key",
]
