"""Builders for articles and newsletters used across tests."""

from datetime import datetime, timedelta

from feedrank.models import Article, Entity, Newsletter, NewsletterDigest, Summary
from tests.helpers.time import FIXED_NOW


def make_article(  # noqa: PLR0913
    article_id: str = "a1",
    title: str = "Test headline",
    content: str = "",
    source: str = "Example News",
    url: str | None = None,
    topic: str = "science-tech",
    source_tier: int | None = 3,
    hours_old: float = 10.0,
    published_at: datetime | None = None,
    is_vip: bool = False,
    ranking_score: int | None = None,
    watchlist_matches: int = 0,
    is_read: bool = False,
    document_type: str | None = None,
    entities: list[str] | None = None,
    the_news: str = "",
) -> Article:
    """Create a test Article.

    ``entities`` (or ``the_news``) attaches a summary with those key entities.
    """
    summary = None
    if entities is not None or the_news:
        summary = Summary(
            the_news=the_news,
            key_entities=[Entity(name=name) for name in entities or []],
        )

    return Article(
        id=article_id,
        title=title,
        content=content,
        url=url if url is not None else f"https://www.example.com/{article_id}",
        source=source,
        topic=topic,
        source_tier=source_tier,
        published_at=published_at or FIXED_NOW - timedelta(hours=hours_old),
        is_vip=is_vip,
        ranking_score=ranking_score,
        watchlist_matches=watchlist_matches,
        is_read=is_read,
        document_type=document_type,
        summary=summary,
    )


def make_newsletter(
    newsletter_id: str = "n1",
    subject: str = "Morning digest",
    publication: str = "The Brief",
    entities: list[str] | None = None,
    the_news: str | None = None,
    why_it_matters: str = "",
    the_context: str = "",
) -> Newsletter:
    """Create a test Newsletter.

    ``the_news`` attaches a text digest; ``entities`` a structured summary.
    """
    digest = None
    if the_news is not None:
        digest = NewsletterDigest(
            the_news=the_news,
            why_it_matters=why_it_matters,
            the_context=the_context,
        )

    summary = None
    if entities is not None:
        summary = Summary(key_entities=[Entity(name=name) for name in entities])

    return Newsletter(
        id=newsletter_id,
        publication=publication,
        subject=subject,
        received_at=FIXED_NOW,
        summary=summary,
        newsletter_summary=digest,
    )
