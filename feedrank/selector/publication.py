"""Publication identity derived from article URLs."""

import re
from urllib.parse import urlparse

from feedrank.models import Article


UNKNOWN_PUBLICATION = "unknown"

# Feed and edition subdomains that do not distinguish publications
_SUBDOMAIN_PREFIX = re.compile(r"^(?:www|feeds|rss|news)\.", re.IGNORECASE)


def extract_publication(url: str) -> str:
    """Derive a publication identifier from a URL host.

    Strips one leading ``www.``, ``feeds.``, ``rss.`` or ``news.`` label so
    that ``feeds.example.com`` and ``www.example.com`` count as one
    publication.

    Args:
        url: Article URL.

    Returns:
        Lowercased host without the common prefix, or "unknown".
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return UNKNOWN_PUBLICATION
    if not hostname:
        return UNKNOWN_PUBLICATION
    return _SUBDOMAIN_PREFIX.sub("", hostname)


def source_key(article: Article) -> str:
    """Source identity used by the hero selection caps.

    Uses the publication label when present, the URL host otherwise.

    Args:
        article: Article to identify.

    Returns:
        Source key string.
    """
    if article.source:
        return article.source
    return extract_publication(article.url)
