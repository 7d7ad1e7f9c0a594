"""Constants for the story ranker.

Every detector is a named rule with its patterns and a signed weight.
Rules fire at most once per article no matter how many patterns hit.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SignalRule:
    """A heuristic text detector.

    Attributes:
        name: Breakdown key for this rule.
        patterns: Compiled patterns; any hit fires the rule.
        weight: Points added (negative for penalties).
        suppressed_by: Name of an earlier rule whose hit silences this one.
    """

    name: str
    patterns: tuple[re.Pattern[str], ...]
    weight: int
    suppressed_by: str | None = None

    def matches(self, text: str) -> bool:
        """Check whether any pattern hits the text."""
        return any(p.search(text) for p in self.patterns)


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# Base score by source tier; anything else (tier 3, unknown) scores 0
TIER_BASE_SCORES: dict[int, int] = {1: 50, 2: 25}
DEFAULT_TIER_BASE_SCORE = 0

# Characters of content considered by text detectors
MAX_CONTENT_CHARS = 3000

ORIGINAL_REPORTING = SignalRule(
    name="original_reporting",
    patterns=_compile(
        r"\bexclusive\b",
        r"\bbreaking\b",
        r"\bscoop\b",
        r"\binvestigation\b",
        r"\bfirst reported\b",
    ),
    weight=15,
)

AUTHORITY_MENTION = SignalRule(
    name="authority_mention",
    patterns=_compile(
        r"\bJerome Powell\b",
        r"\bJanet Yellen\b",
        r"\bChristine Lagarde\b",
        r"\bJamie Dimon\b",
        r"\bWarren Buffett\b",
        r"\bLarry Fink\b",
        r"\bSam Altman\b",
        r"\bDario Amodei\b",
        r"\bJensen Huang\b",
        r"\bSatya Nadella\b",
        r"\bSundar Pichai\b",
        r"\bTim Cook\b",
        r"\bMark Zuckerberg\b",
        r"\bElon Musk\b",
    ),
    weight=10,
)

FINANCIAL_MAGNITUDE = SignalRule(
    name="financial_magnitude",
    patterns=_compile(
        r"\bbillions?\b",
        r"\$\d+(?:\.\d+)?\s?B\b",
        r"\bIPO\b",
        r"\bacquisitions?\b",
    ),
    weight=10,
)

BROAD_IMPACT = SignalRule(
    name="broad_impact",
    patterns=_compile(
        r"\bglobal\b",
        r"\bnationwide\b",
        r"\bindustry[- ]wide\b",
        r"\bmarket[- ]wide\b",
    ),
    weight=5,
)

DERIVATIVE_HEADLINE = SignalRule(
    name="derivative_headline",
    patterns=_compile(
        r"\breacts?\s+to\b",
        r"\bresponds?\s+to\b",
        r"\bfollowing\s+news\b",
        r"\bafter\s+reports?\b",
    ),
    weight=-15,
)

SUMMARIZING_OTHERS = SignalRule(
    name="summarizing_others",
    patterns=_compile(
        r"\baccording\s+to\s+(?:media\s+)?reports?\b",
        r"\bsources\s+say\b",
        r"\bas\s+reported\s+by\b",
        r"\breportedly\b",
    ),
    weight=-10,
    suppressed_by=ORIGINAL_REPORTING.name,
)

# Text rules in evaluation order; a suppressing rule must come first
TEXT_SIGNAL_RULES: tuple[SignalRule, ...] = (
    ORIGINAL_REPORTING,
    AUTHORITY_MENTION,
    FINANCIAL_MAGNITUDE,
    BROAD_IMPACT,
    DERIVATIVE_HEADLINE,
    SUMMARIZING_OTHERS,
)

RECENCY_BONUS = 5
RECENCY_WINDOW_HOURS = 2

VIP_BONUS = 20

FIRST_TO_REPORT_BONUS = 10
FIRST_TO_REPORT_SIMILARITY = 0.40
