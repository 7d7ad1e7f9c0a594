"""Unit tests for the SQLite article store."""

from collections.abc import Generator
from datetime import timedelta
from pathlib import Path

import pytest

from feedrank.models import TopicCategory
from feedrank.store import (
    ArticleOrder,
    ArticleQuery,
    SqliteArticleStore,
    StoreUnavailableError,
)
from tests.helpers.articles import make_article
from tests.helpers.time import FIXED_NOW


@pytest.fixture
def store(tmp_path: Path) -> Generator[SqliteArticleStore]:
    """Create a connected store in a temporary directory."""
    with SqliteArticleStore(tmp_path / "state" / "feed.db", run_id="test") as s:
        yield s


class TestConnection:
    """Tests for connection handling."""

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """Test connect creates the database directory."""
        db_path = tmp_path / "nested" / "feed.db"
        with SqliteArticleStore(db_path) as s:
            assert s.is_connected
        assert db_path.exists()

    def test_not_connected_raises(self, tmp_path: Path) -> None:
        """Test operations before connect raise StoreUnavailableError."""
        s = SqliteArticleStore(tmp_path / "feed.db")
        with pytest.raises(StoreUnavailableError):
            s.list_articles(ArticleQuery())

    def test_close_is_idempotent(self, tmp_path: Path) -> None:
        """Test closing twice is harmless."""
        s = SqliteArticleStore(tmp_path / "feed.db")
        s.connect()
        s.close()
        s.close()
        assert not s.is_connected

    def test_non_database_file_is_unavailable(self, tmp_path: Path) -> None:
        """Test a file that is not SQLite raises and leaves no open handle."""
        db_path = tmp_path / "feed.db"
        db_path.write_text("this is plain text, not a database\n" * 200)
        s = SqliteArticleStore(db_path)

        with pytest.raises(StoreUnavailableError, match="Cannot prepare"):
            s.connect()

        assert not s.is_connected


class TestWrites:
    """Tests for upserts and single-field updates."""

    def test_upsert_round_trip(self, store: SqliteArticleStore) -> None:
        """Test an article and its summary read back intact."""
        article = make_article(
            "a",
            title="Acme buys Beta",
            topic="fundraising-acquisitions",
            source_tier=1,
            is_vip=True,
            watchlist_matches=2,
            document_type="8-K",
            entities=["Acme", "Beta"],
        )
        store.upsert_article(article)

        loaded = store.get_article("a")

        assert loaded is not None
        assert loaded.model_dump() == article.model_dump()
        assert loaded.topic is TopicCategory.FUNDRAISING_ACQUISITIONS

    def test_upsert_keeps_existing_score(self, store: SqliteArticleStore) -> None:
        """Test re-ingesting an article does not reset its ranking score."""
        store.upsert_article(make_article("a"))
        store.update_ranking_score("a", 42)

        store.upsert_article(make_article("a", title="Edited headline"))

        loaded = store.get_article("a")
        assert loaded is not None
        assert loaded.title == "Edited headline"
        assert loaded.ranking_score == 42

    def test_update_ranking_score(self, store: SqliteArticleStore) -> None:
        """Test score updates report whether a row changed."""
        store.upsert_article(make_article("a"))

        assert store.update_ranking_score("a", 65) is True
        assert store.update_ranking_score("missing", 65) is False

    def test_update_topic(self, store: SqliteArticleStore) -> None:
        """Test topic updates persist."""
        store.upsert_article(make_article("a", topic="politics"))

        assert store.update_topic("a", "geopolitics") is True
        loaded = store.get_article("a")
        assert loaded is not None
        assert loaded.topic_key == "geopolitics"

    def test_count_and_missing(self, store: SqliteArticleStore) -> None:
        """Test counting and reading an unknown id."""
        store.upsert_article(make_article("a"))
        store.upsert_article(make_article("b"))

        assert store.count_articles() == 2
        assert store.get_article("zzz") is None


class TestListArticles:
    """Tests for filtered reads."""

    @pytest.fixture(autouse=True)
    def _seed(self, store: SqliteArticleStore) -> None:
        for article in [
            make_article("new", hours_old=1, ranking_score=30, topic="politics"),
            make_article("mid", hours_old=5, ranking_score=80, entities=["Acme"]),
            make_article("old", hours_old=50, ranking_score=99),
            make_article("unscored", hours_old=2),
        ]:
            store.upsert_article(article)

    def test_published_order_newest_first(self, store: SqliteArticleStore) -> None:
        """Test default order is newest first."""
        rows = store.list_articles(ArticleQuery())
        assert [a.id for a in rows] == ["new", "unscored", "mid", "old"]

    def test_score_filter_and_order(self, store: SqliteArticleStore) -> None:
        """Test score filter and score order inside a time window."""
        rows = store.list_articles(
            ArticleQuery(
                published_since=FIXED_NOW - timedelta(hours=24),
                min_score_exclusive=0,
                order_by=ArticleOrder.RANKING_SCORE,
            )
        )
        assert [a.id for a in rows] == ["mid", "new"]

    def test_topic_filter(self, store: SqliteArticleStore) -> None:
        """Test filtering by topic."""
        rows = store.list_articles(ArticleQuery(topic="politics"))
        assert [a.id for a in rows] == ["new"]

    def test_paging(self, store: SqliteArticleStore) -> None:
        """Test limit and offset page through results."""
        first = store.list_articles(ArticleQuery(limit=3))
        second = store.list_articles(ArticleQuery(limit=3, offset=3))
        assert [a.id for a in first + second] == ["new", "unscored", "mid", "old"]

    def test_summaries_joined_on_request(self, store: SqliteArticleStore) -> None:
        """Test summaries are only attached when asked for."""
        plain = store.list_articles(ArticleQuery(topic="science-tech"))
        enriched = store.list_articles(
            ArticleQuery(topic="science-tech", with_summaries=True)
        )

        assert all(a.summary is None for a in plain)
        by_id = {a.id: a for a in enriched}
        assert by_id["mid"].entity_names == ["Acme"]
        assert by_id["old"].summary is None
