"""Constants for the entity cross-referencer."""

# Curated variants for entity names. Lookups are made on the normalized
# (lowercased, trimmed) name; each canonical short form and its main
# expansion list each other so matching works in both directions.
KEYWORD_SYNONYMS: dict[str, list[str]] = {
    "ai": [
        "artificial intelligence",
        "machine learning",
        "ml",
        "deep learning",
        "llm",
        "generative ai",
    ],
    "artificial intelligence": ["ai", "machine learning", "ml", "deep learning", "llm"],
    "ev": ["electric vehicle", "electric vehicles", "battery"],
    "electric vehicle": ["ev", "electric vehicles", "battery"],
    "ipo": ["initial public offering", "going public", "public offering"],
    "initial public offering": ["ipo", "going public"],
    "crypto": ["cryptocurrency", "bitcoin", "blockchain", "web3"],
    "cryptocurrency": ["crypto", "bitcoin", "blockchain"],
    "fed": ["federal reserve", "interest rates", "monetary policy"],
    "federal reserve": ["fed", "interest rates", "monetary policy"],
    "vc": ["venture capital", "startup funding", "series a", "series b"],
    "venture capital": ["vc", "startup funding"],
}

# Maximum related items returned for an article or newsletter
MAX_RELATED_ITEMS = 4

# Weight of an entity-name match when relating a newsletter to articles
NEWSLETTER_ENTITY_WEIGHT = 2

# Subject words must be longer than this to count as keywords
SUBJECT_KEYWORD_MIN_LENGTH = 3

# Stricter subject-word fallback used for hover highlighting
HIGHLIGHT_SUBJECT_MIN_LENGTH = 4
HIGHLIGHT_SUBJECT_MAX_WORDS = 5

# Title words must be longer than this to be compared
MIN_TITLE_WORD_LENGTH = 2

# Coverage density thresholds
COVERAGE_TITLE_SIMILARITY = 0.30
COVERAGE_MIN_SHARED_ENTITIES = 2

TITLE_STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
        "has", "have", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "can", "shall", "its", "it", "this", "that",
        "as", "if", "not", "no", "so", "up", "out", "about", "into", "over",
        "after", "new", "says", "said", "report", "reports",
    }
)  # fmt: skip
