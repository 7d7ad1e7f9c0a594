"""Per-user feed ordering from topic interests, watchlists and engagement."""

from feedrank.personalize.ranker import (
    filter_by_preferences,
    is_vip_publication,
    normalize_preferences,
    rank_articles,
    score_for_user,
)


__all__ = [
    "filter_by_preferences",
    "is_vip_publication",
    "normalize_preferences",
    "rank_articles",
    "score_for_user",
]
