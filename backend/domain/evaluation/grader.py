"""
Negation-aware keyword grading of generated answers

A keyword counts when it appears in the answer, unless the answer only mentions it
while saying the information is missing ("The context does not provide details on X").
This is a substring heuristic, not a semantic judgement: keywords that occur inside
other words match, and multi-clause sentences are treated as a whole.
"""

import re
from typing import List

from core.exceptions import EvaluationError

NEGATION_PHRASES = (
    "does not provide",
    "doesn't provide",
    "no information",
    "not mentioned",
    "not specified",
    "not found",
    "not available",
    "cannot find",
    "could not find",
    "unable to find",
    "the context does not",
    "the provided context does not",
    "the information is not",
    "no details",
    "no data",
    "not present",
    "not included",
    "don't have information",
    "do not have information",
    "don't have any information",
    "do not have any information",
)

# "<negation> about <keyword>", "<negation> on <keyword>", "<negation> regarding <keyword>"
NEGATION_CONNECTORS = ("about", "on", "regarding")

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def _has_negation(text: str) -> bool:
    return any(phrase in text for phrase in NEGATION_PHRASES)


def _is_negated_mention(text: str, keyword: str) -> bool:
    return any(
        f"{phrase} {connector} {keyword}" in text
        for phrase in NEGATION_PHRASES
        for connector in NEGATION_CONNECTORS
    )


def count_keyword_matches(response_text: str, expected_keywords: List[str]) -> int:
    """
    Count expected keywords the answer actually provides.

    1. Empty answer or no keywords -> 0.
    2. If the answer contains a negation phrase and every keyword appears right after
       one ("not mentioned about X"), the answer is a non-answer -> 0.
    3. Otherwise each keyword present as a case-insensitive substring counts. When the
       answer contains any negation phrase, the keyword only counts if at least one
       sentence mentioning it contains no negation phrase.

    Examples:
        count_keyword_matches("I don't have information about pressure sensors.", ["pressure"]) == 0
        count_keyword_matches("The pressure sensor reads in Pa.", ["pressure", "voltage"]) == 1
    """
    if not response_text or not expected_keywords:
        return 0

    text = response_text.lower()
    keywords = [keyword.lower() for keyword in expected_keywords]
    negated = _has_negation(text)

    if negated and all(_is_negated_mention(text, keyword) for keyword in keywords):
        return 0

    sentences = _SENTENCE_SPLIT.split(text) if negated else []
    count = 0
    for keyword in keywords:
        if keyword not in text:
            continue
        if not negated:
            count += 1
        elif any(keyword in sentence and not _has_negation(sentence) for sentence in sentences):
            count += 1

    return count


def keyword_match_percentage(matched: int, total: int) -> float:
    """
    matched / total * 100.

    Raises:
        EvaluationError: If there are no expected keywords to grade against
    """
    if total <= 0:
        raise EvaluationError("Cannot compute keyword match percentage without expected keywords")
    return matched / total * 100
