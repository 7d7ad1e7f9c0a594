"""Per-user ordering of the feed."""

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import structlog

from feedrank.models import (
    Article,
    EngagementScores,
    InterestLevel,
    TopicPreferences,
)
from feedrank.personalize.constants import (
    DEFAULT_INTEREST_WEIGHT,
    ENGAGEMENT_BOOST_SCALE,
    INTEREST_WEIGHTS,
    RECENCY_BANDS,
    SUMMARY_BOOST,
    UNREAD_BOOST,
    WATCHLIST_BOOST_CAP,
    WATCHLIST_POINTS_PER_MATCH,
)


logger = structlog.get_logger()


def normalize_preferences(
    preferences: Mapping[Any, Any],
) -> dict[str, InterestLevel]:
    """Key preferences by plain topic string and coerce levels to the enum.

    Args:
        preferences: Topic to interest level, keys as enum members or strings.

    Returns:
        Normalized mapping.
    """
    return {
        str(getattr(topic, "value", topic)): InterestLevel(level)
        for topic, level in preferences.items()
    }


def _recency_boost(article: Article, now: datetime) -> float:
    age_hours = (now - article.published_at).total_seconds() / 3600
    for max_age, boost in RECENCY_BANDS:
        if age_hours < max_age:
            return boost
    return 0.0


def score_for_user(
    article: Article,
    topic_preferences: Mapping[str, InterestLevel] | None,
    topic_engagement_scores: Mapping[str, float] | None,
    now: datetime,
    max_engagement: float = 1.0,
) -> float | None:
    """Compute one article's personalized score.

    Args:
        article: Article to score.
        topic_preferences: Normalized topic interest levels, or None for a
            flat weight.
        topic_engagement_scores: Per-topic engagement, or None.
        now: Reference time for recency.
        max_engagement: Normalizer for engagement (at least 1).

    Returns:
        The score, or None when the article's topic is hidden.
    """
    if topic_preferences is None:
        score = DEFAULT_INTEREST_WEIGHT
    else:
        level = topic_preferences.get(article.topic_key, InterestLevel.MEDIUM)
        if level is InterestLevel.HIDDEN:
            return None
        score = INTEREST_WEIGHTS[level]

    score += min(
        article.watchlist_matches * WATCHLIST_POINTS_PER_MATCH, WATCHLIST_BOOST_CAP
    )
    score += _recency_boost(article, now)

    if topic_engagement_scores is not None:
        topic_score = topic_engagement_scores.get(article.topic_key, 0.0)
        score += (topic_score / max_engagement) * ENGAGEMENT_BOOST_SCALE

    if article.summary is not None and article.summary.the_news:
        score += SUMMARY_BOOST

    if not article.is_read:
        score += UNREAD_BOOST

    return score


def rank_articles(
    articles: Sequence[Article],
    topic_preferences: TopicPreferences | None = None,
    topic_engagement_scores: EngagementScores | None = None,
    now: datetime | None = None,
) -> list[Article]:
    """Order the feed for one user.

    Hidden topics are dropped. Ties keep their input order.

    Args:
        articles: Full article list.
        topic_preferences: Topic interest levels; without them every topic
            weighs as medium.
        topic_engagement_scores: Per-topic engagement affinity.
        now: Reference time for recency.

    Returns:
        Visible articles, best first.
    """
    reference = now or datetime.now(UTC)
    preferences = (
        normalize_preferences(topic_preferences)
        if topic_preferences is not None
        else None
    )
    max_engagement = max([1.0, *(topic_engagement_scores or {}).values()])

    scored: list[tuple[float, Article]] = []
    hidden = 0
    for article in articles:
        score = score_for_user(
            article,
            preferences,
            topic_engagement_scores,
            reference,
            max_engagement,
        )
        if score is None:
            hidden += 1
            continue
        scored.append((score, article))

    scored.sort(key=lambda pair: pair[0], reverse=True)

    logger.debug(
        "feed_ranked",
        component="personalize",
        articles_in=len(articles),
        hidden=hidden,
    )
    return [article for _, article in scored]


def filter_by_preferences(
    articles: Iterable[Article],
    preferences: TopicPreferences,
) -> list[Article]:
    """Drop articles whose topic is hidden, without scoring.

    Args:
        articles: Articles to filter.
        preferences: Topic interest levels.

    Returns:
        Articles whose topic is not hidden, in input order.
    """
    normalized = normalize_preferences(preferences)
    return [
        a for a in articles if normalized.get(a.topic_key) is not InterestLevel.HIDDEN
    ]


def is_vip_publication(publication: str, vip_publications: Iterable[str]) -> bool:
    """Check a publication against the VIP list, ignoring case.

    Args:
        publication: Publication label.
        vip_publications: VIP publication labels.

    Returns:
        True if the publication is a VIP.
    """
    needle = publication.strip().lower()
    return any(needle == vip.strip().lower() for vip in vip_publications)
