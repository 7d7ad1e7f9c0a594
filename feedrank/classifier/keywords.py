"""Keyword rules for topic classification.

Each topic lists lowercase stems. A stem matches any word that starts with
it, so ``acqui`` covers "acquires" and "acquisition".
"""

import re


TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "fundraising-acquisitions": (
        "acqui", "merger", "funding round", r"series [a-f]", "ipo fil",
        "ipo price", "spac", "buyout", r"raises \$", r"raised \$", "valuation",
        "venture fund", "fundrais",
    ),
    "executive-movements": (
        "ceo hire", "cto join", "appoint", "named ceo", "named cto",
        "steps down as", "resign", r"executive.*hire", r"board.*appoint",
        r"chief.*officer.*join",
    ),
    "automotive": (
        "electric vehicle", "autonomous driv", "ev sales", "tesla", "rivian",
        "waymo", "self-driving", "automotive",
    ),
    "geopolitics": (
        "sanction", "tariff", "diplomat", "treaty", "nato", "united nations",
        "foreign policy", "trade war", "geopolit",
    ),
    "science-tech": (
        "artificial intelligence", "machine learning", "quantum comput",
        "cybersecur", "open.?source", "software", "ai model", "neural", "chip",
        "semiconductor", "spacex", "rocket", "nasa",
    ),
    "politics": (
        "congress", "senate", "white house", "legislation", "executive order",
        "democrat", "republican", "election", "bipartisan", "bill pass",
    ),
    "financial-markets": (
        "stock market", "wall street", "fed rate", "interest rate", "earnings",
        "quarterly result", "s&p 500", "nasdaq", "dow jones", "treasury",
        "inflation", "gdp", "economic data", "sec fil", "10-k", "8-k",
    ),
}  # fmt: skip

# Topics left unmatched while reclassifying a filtered topic move here
DEFAULT_REASSIGN: dict[str, str] = {
    "fundraising-acquisitions": "financial-markets",
}

CLASSIFY_CONTENT_CHARS = 500


def _compile(stems: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(stems) + r")\w*", re.IGNORECASE)


TOPIC_PATTERNS: dict[str, re.Pattern[str]] = {
    topic: _compile(stems) for topic, stems in TOPIC_KEYWORDS.items()
}


def classify_by_keywords(title: str, content: str) -> str | None:
    """Pick the topic whose keywords occur most often.

    The headline and the first 500 characters of the body are searched.
    Ties go to the topic listed first.

    Args:
        title: Article headline.
        content: Article body.

    Returns:
        Best topic with at least one hit, or None.
    """
    text = f"{title} {content[:CLASSIFY_CONTENT_CHARS]}"
    best_topic: str | None = None
    best_hits = 0

    for topic, pattern in TOPIC_PATTERNS.items():
        hits = len(pattern.findall(text))
        if hits > best_hits:
            best_topic = topic
            best_hits = hits

    return best_topic
