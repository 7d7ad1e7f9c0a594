"""Article store contract and SQLite implementation.

The ranking core does not own persistence; it reads and updates articles
through the ``ArticleStore`` protocol. ``SqliteArticleStore`` is the
bundled implementation.
"""

from feedrank.store.errors import (
    ArticleStoreError,
    MigrationError,
    QueryError,
    StoreUnavailableError,
)
from feedrank.store.protocols import ArticleOrder, ArticleQuery, ArticleStore
from feedrank.store.store import SqliteArticleStore


__all__ = [
    # Errors
    "ArticleStoreError",
    "MigrationError",
    "QueryError",
    "StoreUnavailableError",
    # Contract
    "ArticleOrder",
    "ArticleQuery",
    "ArticleStore",
    # Implementation
    "SqliteArticleStore",
]
