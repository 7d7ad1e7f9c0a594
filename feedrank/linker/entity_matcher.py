"""Entity-name matching with curated synonyms."""

from feedrank.linker.constants import KEYWORD_SYNONYMS


def normalize_entity(name: str) -> str:
    """Lowercase and trim an entity name."""
    return name.strip().lower()


def entities_match(a: str, b: str) -> bool:
    """Check whether two entity names refer to the same thing.

    Names match when equal after normalization, or when either one lists
    the other among its synonyms.

    Args:
        a: First entity name.
        b: Second entity name.

    Returns:
        True if the names match.
    """
    na = normalize_entity(a)
    nb = normalize_entity(b)
    if na == nb:
        return True
    if nb in KEYWORD_SYNONYMS.get(na, ()):
        return True
    return na in KEYWORD_SYNONYMS.get(nb, ())


def text_contains_entity(text: str, name: str) -> bool:
    """Check whether free text mentions an entity or one of its synonyms.

    Containment is a plain case-insensitive substring test.

    Args:
        text: Text to search.
        name: Entity name.

    Returns:
        True if the entity or a synonym occurs in the text.
    """
    haystack = text.lower()
    needle = normalize_entity(name)
    if not needle:
        return False
    if needle in haystack:
        return True
    return any(s in haystack for s in KEYWORD_SYNONYMS.get(needle, ()))
