"""Relate articles, newsletters and primary documents by shared entities."""

import re
from collections.abc import Sequence

import structlog

from feedrank.linker.constants import (
    HIGHLIGHT_SUBJECT_MAX_WORDS,
    HIGHLIGHT_SUBJECT_MIN_LENGTH,
    MAX_RELATED_ITEMS,
    NEWSLETTER_ENTITY_WEIGHT,
    SUBJECT_KEYWORD_MIN_LENGTH,
)
from feedrank.linker.entity_matcher import entities_match, text_contains_entity
from feedrank.linker.models import RelatedItem, RelatedType
from feedrank.models import Article, Newsletter


logger = structlog.get_logger()

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def _subject_words(subject: str, min_length: int) -> list[str]:
    cleaned = _NON_ALNUM.sub("", subject.lower())
    return [w for w in cleaned.split() if len(w) > min_length]


def _newsletter_match_texts(newsletter: Newsletter) -> list[str]:
    """Texts an article entity is searched in.

    The text digest wins when present; otherwise the structured entity
    names stand in for text.
    """
    if newsletter.newsletter_summary is not None:
        return newsletter.newsletter_summary.text_fields()
    return newsletter.entity_names


def _article_item(article: Article) -> RelatedItem:
    return RelatedItem(
        type=RelatedType.PRIMARY if article.document_type else RelatedType.ARTICLE,
        id=article.id,
        source=article.source,
        title=article.title,
        source_url=article.url or None,
    )


def _newsletter_item(newsletter: Newsletter) -> RelatedItem:
    return RelatedItem(
        type=RelatedType.NEWSLETTER,
        id=newsletter.id,
        source=newsletter.publication,
        title=newsletter.subject,
    )


def _top(scored: list[tuple[int, RelatedItem]]) -> list[RelatedItem]:
    # stable: equal scores keep articles before newsletters, in input order
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in scored[:MAX_RELATED_ITEMS]]


def find_related_for_article(
    article: Article,
    all_articles: Sequence[Article],
    newsletters: Sequence[Newsletter],
) -> list[RelatedItem]:
    """Find the items most related to an article.

    Other articles score one point per matching entity pair. Newsletters
    score one point per article entity found in their text, counted once
    per newsletter.

    Args:
        article: Article to relate.
        all_articles: Candidate articles (the article itself is skipped).
        newsletters: Candidate newsletters.

    Returns:
        Up to four related items, best first. Empty when the article has
        no key entities.
    """
    entities = article.entity_names
    if not entities:
        return []

    scored: list[tuple[int, RelatedItem]] = []

    for other in all_articles:
        if other.id == article.id:
            continue
        other_entities = other.entity_names
        score = sum(
            1 for e in entities for oe in other_entities if entities_match(e, oe)
        )
        if score > 0:
            scored.append((score, _article_item(other)))

    for newsletter in newsletters:
        texts = _newsletter_match_texts(newsletter)
        score = sum(
            1 for name in entities if any(text_contains_entity(t, name) for t in texts)
        )
        if score > 0:
            scored.append((score, _newsletter_item(newsletter)))

    related = _top(scored)
    logger.debug(
        "related_items_found",
        component="linker",
        item_id=article.id,
        candidates=len(scored),
        returned=len(related),
    )
    return related


def find_related_for_newsletter(
    newsletter: Newsletter,
    articles: Sequence[Article],
    all_newsletters: Sequence[Newsletter],
) -> list[RelatedItem]:
    """Find the items most related to a newsletter.

    Articles score two points per matching entity pair; when that gives
    nothing, subject keywords found inside the article's entity names score
    one point each. Other newsletters score one point per newsletter entity
    mentioned in their news and why-it-matters text.

    Args:
        newsletter: Newsletter to relate.
        articles: Candidate articles.
        all_newsletters: Candidate newsletters (the newsletter is skipped).

    Returns:
        Up to four related items, best first.
    """
    entity_names = newsletter.entity_names
    subject_words = _subject_words(newsletter.subject, SUBJECT_KEYWORD_MIN_LENGTH)

    scored: list[tuple[int, RelatedItem]] = []

    for article in articles:
        article_entities = article.entity_names
        score = NEWSLETTER_ENTITY_WEIGHT * sum(
            1 for n in entity_names for ae in article_entities if entities_match(n, ae)
        )
        if score == 0:
            score = sum(
                1
                for word in subject_words
                for ae in article_entities
                if word in ae.lower()
            )
        if score > 0:
            scored.append((score, _article_item(article)))

    for other in all_newsletters:
        if other.id == newsletter.id:
            continue
        digest = other.newsletter_summary
        other_text = (
            " ".join(t for t in (digest.the_news, digest.why_it_matters) if t)
            if digest is not None
            else ""
        )
        score = sum(1 for n in entity_names if text_contains_entity(other_text, n))
        if score > 0:
            scored.append((score, _newsletter_item(other)))

    return _top(scored)


def find_matching_article_ids(
    newsletter: Newsletter,
    articles: Sequence[Article],
) -> list[str]:
    """Ids of articles sharing at least one entity with a newsletter.

    Without structured entities the first five subject words longer than
    four characters are matched instead.

    Args:
        newsletter: Newsletter being highlighted.
        articles: Feed articles.

    Returns:
        Matching article ids in input order.
    """
    names = newsletter.entity_names or _subject_words(
        newsletter.subject, HIGHLIGHT_SUBJECT_MIN_LENGTH
    )[:HIGHLIGHT_SUBJECT_MAX_WORDS]

    return [
        article.id
        for article in articles
        if any(
            entities_match(name, e) for name in names for e in article.entity_names
        )
    ]
