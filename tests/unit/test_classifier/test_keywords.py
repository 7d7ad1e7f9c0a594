"""Unit tests for keyword topic classification."""

import pytest

from feedrank.classifier.keywords import classify_by_keywords


class TestClassifyByKeywords:
    """Tests for classify_by_keywords."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Tesla unveils a cheaper electric vehicle", "automotive"),
            ("Acme acquires Beta in all-stock deal", "fundraising-acquisitions"),
            ("Startup raises $40M at a higher valuation", "fundraising-acquisitions"),
            ("Senate passes the bipartisan budget", "politics"),
            ("New tariffs escalate the trade war", "geopolitics"),
            ("Nasdaq slides as inflation data surprises", "financial-markets"),
            ("Acme names new CFO after founder resigns", "executive-movements"),
            ("Chipmaker bets on quantum computing", "science-tech"),
        ],
    )
    def test_topics(self, title: str, expected: str) -> None:
        """Test representative headlines land in their topic."""
        assert classify_by_keywords(title, "") == expected

    def test_no_keywords(self) -> None:
        """Test text without any keyword is unclassified."""
        assert classify_by_keywords("Local bakery wins award", "Fresh bread.") is None

    def test_most_hits_wins(self) -> None:
        """Test the topic with the most keyword hits is chosen."""
        title = "Tesla and Rivian cut prices"
        content = "Waymo also expands. The merger was called off."
        assert classify_by_keywords(title, content) == "automotive"

    def test_tie_goes_to_first_listed_topic(self) -> None:
        """Test equal hits resolve to the earlier topic in the table."""
        assert classify_by_keywords("Tesla acquires a startup", "") == (
            "fundraising-acquisitions"
        )

    def test_only_leading_content_read(self) -> None:
        """Test keywords past the first 500 content characters are ignored."""
        content = "x" * 500 + " Tesla electric vehicle"
        assert classify_by_keywords("Quarterly update", content) is None
