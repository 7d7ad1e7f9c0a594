"""SQLite article store implementation."""

import sqlite3
import time
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import structlog

from feedrank.models import Article, Summary
from feedrank.store.errors import MigrationError, QueryError, StoreUnavailableError
from feedrank.store.migrations import CURRENT_VERSION, MigrationManager
from feedrank.store.protocols import ArticleOrder, ArticleQuery


logger = structlog.get_logger()

_ARTICLE_COLUMNS = (
    "a.id, a.title, a.content, a.url, a.source, a.topic, a.source_tier, "
    "a.published_at, a.is_vip, a.ranking_score, a.watchlist_matches, "
    "a.is_read, a.document_type"
)

_ORDER_CLAUSES: dict[ArticleOrder, str] = {
    ArticleOrder.PUBLISHED_AT: "a.published_at DESC, a.id ASC",
    ArticleOrder.RANKING_SCORE: "a.ranking_score DESC, a.published_at DESC, a.id ASC",
}


@dataclass
class TransactionContext:
    """Context for a single transaction.

    Attributes:
        tx_id: Short transaction identifier for log correlation.
        start_time_ns: perf_counter_ns at transaction start.
        operation: Operation name.
        affected_rows: Rows changed by the transaction.
    """

    tx_id: str
    start_time_ns: int
    operation: str
    affected_rows: int = 0


def _to_db_timestamp(value: datetime) -> str:
    """Normalize a timestamp to a sortable UTC ISO string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


class SqliteArticleStore:
    """SQLite-backed article store.

    Implements the ``ArticleStore`` protocol with WAL mode and schema
    migrations. Score and topic updates are single-row statements so a
    failing record never affects its neighbours.
    """

    def __init__(self, db_path: Path | str, run_id: str | None = None) -> None:
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file.
            run_id: Optional run ID for logging context.
        """
        self._db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self._run_id = run_id or str(uuid.uuid4())
        self._conn: sqlite3.Connection | None = None
        self._log = logger.bind(
            component="store",
            run_id=self._run_id,
            db_path=str(self._db_path),
        )

    @property
    def db_path(self) -> Path:
        """Get the database path."""
        return self._db_path

    @property
    def is_connected(self) -> bool:
        """Check if connected to database."""
        return self._conn is not None

    def connect(self) -> None:
        """Open the database and apply pending migrations.

        Raises:
            StoreUnavailableError: If the database cannot be opened or
                migrated. The connection is closed again in that case.
        """
        if self._conn is not None:
            return

        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._log.info("connecting_to_database")

        try:
            self._conn = sqlite3.connect(str(self._db_path))
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot open {self._db_path}: {e}") from e

        try:
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.execute("PRAGMA foreign_keys=ON")

            migration_mgr = MigrationManager(self._conn)
            old_version = migration_mgr.get_current_version()
            applied = migration_mgr.apply_migrations()
        except (sqlite3.Error, MigrationError) as e:
            self._conn.close()
            self._conn = None
            self._log.warning("database_setup_failed", error=str(e))
            msg = f"Cannot prepare {self._db_path}: {e}"
            raise StoreUnavailableError(msg) from e

        self._log.info(
            "database_connected",
            old_version=old_version,
            new_version=CURRENT_VERSION,
            migrations_applied=applied,
        )

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self._log.info("database_closed")

    def __enter__(self) -> "SqliteArticleStore":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()

    def _ensure_connected(self) -> sqlite3.Connection:
        """Ensure database is connected.

        Returns:
            The database connection.

        Raises:
            StoreUnavailableError: If not connected.
        """
        if self._conn is None:
            raise StoreUnavailableError("Database not connected. Call connect() first.")
        return self._conn

    @contextmanager
    def _transaction(self, operation: str) -> Generator[TransactionContext]:
        """Context manager for transactions with timing and logging.

        Args:
            operation: Name of the operation for logging.

        Yields:
            Transaction context with timing information.
        """
        conn = self._ensure_connected()
        ctx = TransactionContext(
            tx_id=str(uuid.uuid4())[:8],
            start_time_ns=time.perf_counter_ns(),
            operation=operation,
        )

        try:
            yield ctx
            conn.commit()
        except Exception:
            conn.rollback()
            duration_ms = (time.perf_counter_ns() - ctx.start_time_ns) / 1_000_000
            self._log.error(
                "transaction_failed",
                tx_id=ctx.tx_id,
                op=operation,
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration_ms = (time.perf_counter_ns() - ctx.start_time_ns) / 1_000_000
        self._log.debug(
            "transaction_complete",
            tx_id=ctx.tx_id,
            op=operation,
            affected_rows=ctx.affected_rows,
            duration_ms=round(duration_ms, 2),
        )

    # ===== Writes =====

    def upsert_article(self, article: Article) -> None:
        """Insert or replace an article and its summary.

        Args:
            article: Article to store.
        """
        with self._transaction("upsert_article") as ctx:
            conn = self._ensure_connected()
            cursor = conn.execute(
                """
                INSERT INTO articles (
                    id, title, content, url, source, topic, source_tier,
                    published_at, is_vip, ranking_score, watchlist_matches,
                    is_read, document_type
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title = excluded.title,
                    content = excluded.content,
                    url = excluded.url,
                    source = excluded.source,
                    topic = excluded.topic,
                    source_tier = excluded.source_tier,
                    published_at = excluded.published_at,
                    is_vip = excluded.is_vip,
                    watchlist_matches = excluded.watchlist_matches,
                    is_read = excluded.is_read,
                    document_type = excluded.document_type
                """,
                (
                    article.id,
                    article.title,
                    article.content,
                    article.url,
                    article.source,
                    article.topic_key,
                    article.source_tier,
                    _to_db_timestamp(article.published_at),
                    int(article.is_vip),
                    article.ranking_score,
                    article.watchlist_matches,
                    int(article.is_read),
                    article.document_type,
                ),
            )
            ctx.affected_rows = cursor.rowcount

            if article.summary is not None:
                conn.execute(
                    """
                    INSERT INTO summaries (article_id, summary_json) VALUES (?, ?)
                    ON CONFLICT(article_id) DO UPDATE SET
                        summary_json = excluded.summary_json
                    """,
                    (article.id, article.summary.model_dump_json()),
                )

    def update_ranking_score(self, article_id: str, score: int) -> bool:
        """Persist the ranking score of one article.

        Args:
            article_id: Article to update.
            score: New ranking score.

        Returns:
            True if a row was updated.
        """
        return self._update_field("ranking_score", article_id, score)

    def update_topic(self, article_id: str, topic: str) -> bool:
        """Persist the topic of one article.

        Args:
            article_id: Article to update.
            topic: New topic category.

        Returns:
            True if a row was updated.
        """
        return self._update_field("topic", article_id, topic)

    def _update_field(self, column: str, article_id: str, value: object) -> bool:
        # column names come from the two public callers only
        with self._transaction(f"update_{column}") as ctx:
            conn = self._ensure_connected()
            cursor = conn.execute(
                f"UPDATE articles SET {column} = ? WHERE id = ?",  # noqa: S608
                (value, article_id),
            )
            ctx.affected_rows = cursor.rowcount
        return ctx.affected_rows > 0

    # ===== Reads =====

    def list_articles(self, query: ArticleQuery) -> list[Article]:
        """Read articles matching the query.

        Args:
            query: Filters, ordering and paging.

        Returns:
            Matching articles in query order.

        Raises:
            StoreUnavailableError: If not connected.
            QueryError: If the query fails to execute.
        """
        conn = self._ensure_connected()

        clauses: list[str] = []
        params: list[object] = []
        if query.published_since is not None:
            clauses.append("a.published_at >= ?")
            params.append(_to_db_timestamp(query.published_since))
        if query.min_score_exclusive is not None:
            clauses.append("a.ranking_score > ?")
            params.append(query.min_score_exclusive)
        if query.topic is not None:
            clauses.append("a.topic = ?")
            params.append(query.topic)

        columns = _ARTICLE_COLUMNS
        join = ""
        if query.with_summaries:
            columns += ", s.summary_json"
            join = "LEFT JOIN summaries s ON s.article_id = a.id"

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        sql = (
            f"SELECT {columns} FROM articles a {join} {where} "  # noqa: S608
            f"ORDER BY {_ORDER_CLAUSES[query.order_by]} LIMIT ? OFFSET ?"
        )
        params.extend([query.limit, query.offset])

        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise QueryError(str(e)) from e

        return [self._row_to_article(row, query.with_summaries) for row in rows]

    def get_article(self, article_id: str) -> Article | None:
        """Get a single article with its summary.

        Args:
            article_id: Article identifier.

        Returns:
            The article, or None if not found.
        """
        conn = self._ensure_connected()
        row = conn.execute(
            f"SELECT {_ARTICLE_COLUMNS}, s.summary_json FROM articles a "  # noqa: S608
            "LEFT JOIN summaries s ON s.article_id = a.id WHERE a.id = ?",
            (article_id,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_article(row, with_summary=True)

    def count_articles(self) -> int:
        """Count stored articles."""
        conn = self._ensure_connected()
        row = conn.execute("SELECT COUNT(*) FROM articles").fetchone()
        return int(row[0])

    def _row_to_article(self, row: sqlite3.Row, with_summary: bool) -> Article:
        """Convert a database row to an Article."""
        summary = None
        if with_summary and row["summary_json"]:
            summary = Summary.model_validate_json(row["summary_json"])

        return Article(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            url=row["url"],
            source=row["source"],
            topic=row["topic"],
            source_tier=row["source_tier"],
            published_at=datetime.fromisoformat(row["published_at"]),
            is_vip=bool(row["is_vip"]),
            ranking_score=row["ranking_score"],
            watchlist_matches=row["watchlist_matches"],
            is_read=bool(row["is_read"]),
            document_type=row["document_type"],
            summary=summary,
        )
