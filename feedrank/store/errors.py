"""Domain exceptions for the article store.

Availability errors (store missing or unreachable) are kept apart from
query and schema errors so the ranking pipelines can fail open on the
former while still surfacing the latter.
"""


class ArticleStoreError(Exception):
    """Base exception for all article store errors."""


class StoreUnavailableError(ArticleStoreError):
    """Raised when the store is not configured, not connected or unreachable.

    Top-level pipeline functions catch this and return empty results.
    """

    def __init__(self, message: str = "Article store not connected") -> None:
        """Initialize the unavailable error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)


class QueryError(ArticleStoreError):
    """Raised when a read query cannot be executed as requested.

    Callers that issue enriched queries fall back to plain ones on this
    error.
    """


class MigrationError(ArticleStoreError):
    """Raised when a schema migration fails."""

    def __init__(self, version: int, message: str) -> None:
        """Initialize the migration error.

        Args:
            version: The migration version that failed.
            message: Human-readable error message.
        """
        self.version = version
        super().__init__(f"Migration {version} failed: {message}")
