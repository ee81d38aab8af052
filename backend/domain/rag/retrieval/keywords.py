"""
Keyword extraction for lexical search
"""

import re
from typing import Iterable, Set

STOP_WORDS = frozenset([
    "a", "an", "the", "and", "or", "but", "is", "are",
    "in", "on", "at", "to", "for", "with",
])
MIN_KEYWORD_LENGTH = 3

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def extract_keywords(text: str) -> Set[str]:
    """
    Extract the significant lowercase terms of a query.

    Punctuation is stripped (not replaced), so "Co2-Sensor" becomes "co2sensor".
    Only ASCII letters, digits and underscores count as word characters, so
    accented letters are stripped too ("über" becomes "ber").
    Tokens shorter than three characters and stop words are dropped.

    Example:
        extract_keywords("The Co2Sensor is a sensor.") == {"co2sensor", "sensor"}
    """
    cleaned = _PUNCTUATION.sub("", (text or "").lower())
    return {
        word
        for word in _WHITESPACE.split(cleaned)
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    }


def build_keyword_pattern(keywords: Iterable[str]) -> str:
    """Join keywords into an OR-style tsquery pattern ("a | b"). Sorted so the pattern is stable."""
    return " | ".join(sorted(keywords))
