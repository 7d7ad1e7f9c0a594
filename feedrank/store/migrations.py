"""SQLite schema migrations for the article store."""

import sqlite3
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from feedrank.store.errors import MigrationError


logger = structlog.get_logger()

CURRENT_VERSION = 2


@dataclass(frozen=True)
class Migration:
    """One schema step with its forward and reverse scripts."""

    version: int
    description: str
    up_sql: str
    down_sql: str


MIGRATIONS: list[Migration] = [
    Migration(
        version=1,
        description="Articles and summaries tables",
        up_sql="""
CREATE TABLE IF NOT EXISTS articles (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL DEFAULT '',
    url TEXT NOT NULL DEFAULT '',
    source TEXT NOT NULL DEFAULT '',
    topic TEXT NOT NULL DEFAULT '',
    source_tier INTEGER,
    published_at TEXT NOT NULL,
    is_vip INTEGER NOT NULL DEFAULT 0,
    watchlist_matches INTEGER NOT NULL DEFAULT 0,
    is_read INTEGER NOT NULL DEFAULT 0,
    document_type TEXT
);
CREATE INDEX IF NOT EXISTS idx_articles_published_at ON articles(published_at);
CREATE INDEX IF NOT EXISTS idx_articles_topic ON articles(topic);

CREATE TABLE IF NOT EXISTS summaries (
    article_id TEXT PRIMARY KEY REFERENCES articles(id) ON DELETE CASCADE,
    summary_json TEXT NOT NULL
);
""",
        down_sql="""
DROP TABLE IF EXISTS summaries;
DROP INDEX IF EXISTS idx_articles_topic;
DROP INDEX IF EXISTS idx_articles_published_at;
DROP TABLE IF EXISTS articles;
""",
    ),
    Migration(
        version=2,
        description="Add ranking_score column to articles",
        up_sql="""
ALTER TABLE articles ADD COLUMN ranking_score INTEGER;
CREATE INDEX IF NOT EXISTS idx_articles_ranking_score ON articles(ranking_score DESC);
CREATE INDEX IF NOT EXISTS idx_articles_published_ranking
    ON articles(published_at DESC, ranking_score DESC);
""",
        down_sql="""
DROP INDEX IF EXISTS idx_articles_published_ranking;
DROP INDEX IF EXISTS idx_articles_ranking_score;
ALTER TABLE articles DROP COLUMN ranking_score;
""",
    ),
]


def get_migrations_to_apply(current_version: int) -> list[Migration]:
    """Migrations newer than ``current_version``, oldest first."""
    return [m for m in MIGRATIONS if m.version > current_version]


class MigrationManager:
    """Applies and reverts the article store schema on one connection.

    Each step runs its script, then records or removes its row in the
    ``schema_version`` table and commits. A failing step is rolled back and
    raised as ``MigrationError``; steps before it stay committed.
    """

    _SCHEMA_VERSION_DDL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL,
    description TEXT
);
"""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._log = logger.bind(component="store", subcomponent="migrations")

    def _ensure_version_table(self) -> None:
        self._conn.execute(self._SCHEMA_VERSION_DDL)
        self._conn.commit()

    def get_current_version(self) -> int:
        """Highest recorded schema version, 0 for a fresh database."""
        self._ensure_version_table()
        (version,) = self._conn.execute(
            "SELECT MAX(version) FROM schema_version"
        ).fetchone()
        return int(version) if version is not None else 0

    def _run_step(
        self,
        migration: Migration,
        script: str,
        bookkeeping: tuple[str, tuple[object, ...]],
        event: str,
    ) -> None:
        self._log.info(
            event, version=migration.version, description=migration.description
        )
        sql, params = bookkeeping
        try:
            self._conn.executescript(script)
            self._conn.execute(sql, params)
            self._conn.commit()
        except sqlite3.Error as e:
            self._conn.rollback()
            self._log.error(
                "migration_failed",
                version=migration.version,
                step=event,
                error=str(e),
            )
            raise MigrationError(migration.version, str(e)) from e

    def apply_migrations(self) -> list[int]:
        """Bring the schema up to ``CURRENT_VERSION``.

        Returns:
            Versions applied by this call, oldest first. Empty when the
            schema is already current.

        Raises:
            MigrationError: If a migration script fails.
        """
        applied: list[int] = []
        for migration in get_migrations_to_apply(self.get_current_version()):
            record = (
                "INSERT INTO schema_version (version, applied_at, description) "
                "VALUES (?, ?, ?)",
                (
                    migration.version,
                    datetime.now(UTC).isoformat(),
                    migration.description,
                ),
            )
            self._run_step(migration, migration.up_sql, record, "migration_applying")
            applied.append(migration.version)
        return applied

    def get_applied_migrations(self) -> list[dict[str, object]]:
        """Recorded migrations in version order, as plain dicts."""
        self._ensure_version_table()
        cursor = self._conn.execute(
            "SELECT version, applied_at, description FROM schema_version "
            "ORDER BY version"
        )
        columns = [c[0] for c in cursor.description]
        return [dict(zip(columns, row, strict=True)) for row in cursor.fetchall()]

    def rollback_to(self, target_version: int) -> list[int]:
        """Revert every applied migration above ``target_version``.

        Args:
            target_version: Version to end at; 0 drops the whole schema.

        Returns:
            Versions reverted, newest first.

        Raises:
            ValueError: If the target version is negative.
            MigrationError: If a down script fails.
        """
        if target_version < 0:
            msg = f"target_version must be >= 0, got {target_version}"
            raise ValueError(msg)

        current = self.get_current_version()
        to_revert = [
            m for m in MIGRATIONS if target_version < m.version <= current
        ]

        reverted: list[int] = []
        for migration in sorted(to_revert, key=lambda m: m.version, reverse=True):
            unrecord = (
                "DELETE FROM schema_version WHERE version = ?",
                (migration.version,),
            )
            self._run_step(
                migration, migration.down_sql, unrecord, "migration_reverting"
            )
            reverted.append(migration.version)
        return reverted
