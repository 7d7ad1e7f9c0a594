"""Unit tests for per-user feed ordering."""

import pytest

from feedrank.models import InterestLevel, TopicCategory
from feedrank.personalize import (
    filter_by_preferences,
    is_vip_publication,
    normalize_preferences,
    rank_articles,
    score_for_user,
)
from tests.helpers.articles import make_article
from tests.helpers.time import FIXED_NOW


def _ids(articles: list) -> list[str]:  # type: ignore[type-arg]
    return [a.id for a in articles]


class TestScoreForUser:
    """Tests for the personalized score."""

    @pytest.mark.parametrize(
        ("hours_old", "expected"),
        [(1, 5.0), (5, 4.0), (20, 3.5), (48, 2.5), (100, 2.0)],
    )
    def test_recency_bands(self, hours_old: float, expected: float) -> None:
        """Test recency boosts 3/2/1.5/0.5/0 on top of the flat weight."""
        article = make_article(hours_old=hours_old, is_read=True)
        assert score_for_user(article, None, None, FIXED_NOW) == expected

    def test_band_edges_exclusive(self) -> None:
        """Test an article exactly three hours old falls in the next band."""
        article = make_article(hours_old=3, is_read=True)
        assert score_for_user(article, None, None, FIXED_NOW) == 4.0

    def test_watchlist_boost_capped(self) -> None:
        """Test two points per match, at most five."""
        one = make_article(hours_old=100, is_read=True, watchlist_matches=1)
        many = make_article(hours_old=100, is_read=True, watchlist_matches=4)

        assert score_for_user(one, None, None, FIXED_NOW) == 4.0
        assert score_for_user(many, None, None, FIXED_NOW) == 7.0

    def test_summary_and_unread_boosts(self) -> None:
        """Test a summarized unread article gets half a point for each."""
        article = make_article(hours_old=100, the_news="Acme shipped.")
        assert score_for_user(article, None, None, FIXED_NOW) == 3.0

    def test_engagement_normalized(self) -> None:
        """Test engagement adds up to two points relative to the maximum."""
        article = make_article(topic="politics", hours_old=100, is_read=True)
        score = score_for_user(
            article, None, {"politics": 5.0}, FIXED_NOW, max_engagement=10.0
        )
        assert score == 3.0

    def test_hidden_topic_scores_none(self) -> None:
        """Test hidden topics are not scored."""
        article = make_article(topic="politics")
        prefs = {"politics": InterestLevel.HIDDEN}
        assert score_for_user(article, prefs, None, FIXED_NOW) is None

    def test_unlisted_topic_weighs_medium(self) -> None:
        """Test topics missing from the preferences count as medium."""
        article = make_article(topic="automotive", hours_old=100, is_read=True)
        prefs = {"politics": InterestLevel.HIGH}
        assert score_for_user(article, prefs, None, FIXED_NOW) == 2.0


class TestRankArticles:
    """Tests for rank_articles."""

    def test_uniform_weight_without_preferences(self) -> None:
        """Test topics do not matter without preferences; ties keep order."""
        articles = [
            make_article("a", topic="politics", hours_old=100, is_read=True),
            make_article("b", topic="automotive", hours_old=100, is_read=True),
            make_article("c", topic="geopolitics", hours_old=100, is_read=True),
        ]

        assert _ids(rank_articles(articles, now=FIXED_NOW)) == ["a", "b", "c"]

    def test_interest_levels_order_feed(self) -> None:
        """Test high beats medium beats low."""
        articles = [
            make_article("low", topic="politics"),
            make_article("medium", topic="automotive"),
            make_article("high", topic="geopolitics"),
        ]
        prefs = {
            "politics": InterestLevel.LOW,
            "automotive": InterestLevel.MEDIUM,
            "geopolitics": InterestLevel.HIGH,
        }

        ranked = rank_articles(articles, prefs, now=FIXED_NOW)

        assert _ids(ranked) == ["high", "medium", "low"]

    def test_hidden_topics_dropped(self) -> None:
        """Test hidden-topic articles never appear."""
        articles = [
            make_article("a", topic="politics"),
            make_article("b", topic="automotive"),
        ]
        prefs = {TopicCategory.POLITICS: InterestLevel.HIDDEN}

        assert _ids(rank_articles(articles, prefs, now=FIXED_NOW)) == ["b"]

    def test_string_levels_accepted(self) -> None:
        """Test preference values given as plain strings."""
        articles = [make_article("a", topic="politics")]
        prefs = {"politics": "hidden"}

        ranked = rank_articles(articles, prefs, now=FIXED_NOW)  # type: ignore[arg-type]

        assert ranked == []

    def test_watchlist_lifts_article(self) -> None:
        """Test a watchlist match outranks an otherwise equal article."""
        articles = [
            make_article("plain", hours_old=100),
            make_article("watched", hours_old=100, watchlist_matches=1),
        ]

        assert _ids(rank_articles(articles, now=FIXED_NOW)) == ["watched", "plain"]

    def test_engagement_lifts_topic(self) -> None:
        """Test engaged topics rank above equal-interest topics."""
        articles = [
            make_article("a", topic="politics", hours_old=100),
            make_article("b", topic="automotive", hours_old=100),
        ]

        ranked = rank_articles(
            articles,
            topic_engagement_scores={"automotive": 4.0, "politics": 0.5},
            now=FIXED_NOW,
        )

        assert _ids(ranked) == ["b", "a"]


class TestFilterByPreferences:
    """Tests for filter_by_preferences."""

    def test_hidden_removed_order_kept(self) -> None:
        """Test only hidden topics are removed, input order kept."""
        articles = [
            make_article("a", topic="politics"),
            make_article("b", topic="automotive"),
            make_article("c", topic="politics"),
            make_article("d", topic="local-news"),
        ]
        prefs = {
            TopicCategory.POLITICS: InterestLevel.HIDDEN,
            TopicCategory.AUTOMOTIVE: InterestLevel.LOW,
        }

        assert _ids(filter_by_preferences(articles, prefs)) == ["b", "d"]

    def test_empty_preferences_keep_everything(self) -> None:
        """Test no preferences means nothing is hidden."""
        articles = [make_article("a"), make_article("b")]
        assert filter_by_preferences(articles, {}) == articles


class TestHelpers:
    """Tests for preference helpers."""

    def test_normalize_preferences(self) -> None:
        """Test enum and string keys normalize to plain strings."""
        prefs = normalize_preferences(
            {TopicCategory.POLITICS: "high", "automotive": InterestLevel.LOW}
        )
        assert prefs == {
            "politics": InterestLevel.HIGH,
            "automotive": InterestLevel.LOW,
        }

    @pytest.mark.parametrize(
        ("publication", "expected"),
        [("Bloomberg", True), ("  bloomberg ", True), ("Axios", False)],
    )
    def test_is_vip_publication(self, publication: str, expected: bool) -> None:
        """Test VIP lookup ignores case and surrounding spaces."""
        vips = ["Bloomberg", "The Information"]
        assert is_vip_publication(publication, vips) is expected
