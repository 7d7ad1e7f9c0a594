"""Constants for the preference ranker."""

from feedrank.models import InterestLevel


INTEREST_WEIGHTS: dict[InterestLevel, float] = {
    InterestLevel.HIGH: 3.0,
    InterestLevel.MEDIUM: 2.0,
    InterestLevel.LOW: 1.0,
}

# Weight when no preferences are supplied, or the topic is not listed
DEFAULT_INTEREST_WEIGHT = INTEREST_WEIGHTS[InterestLevel.MEDIUM]

WATCHLIST_POINTS_PER_MATCH = 2.0
WATCHLIST_BOOST_CAP = 5.0

# (max age in hours, boost) checked in order; older articles get nothing
RECENCY_BANDS: tuple[tuple[float, float], ...] = (
    (3.0, 3.0),
    (12.0, 2.0),
    (24.0, 1.5),
    (72.0, 0.5),
)

ENGAGEMENT_BOOST_SCALE = 2.0
SUMMARY_BOOST = 0.5
UNREAD_BOOST = 0.5
