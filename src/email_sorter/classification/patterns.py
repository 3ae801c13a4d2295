"""
Safe regex pattern generation for keyword rules.

Keyword lists are turned into a single case-insensitive alternation anchored on
word edges, so "bill" matches "Bill due" but not "billion".
"""

import re
from typing import List, Pattern

import structlog


logger = structlog.get_logger(__name__)

# Word edges that also work for terms starting or ending with punctuation ("50% off")
_LEFT_EDGE = r"(?<!\w)"
_RIGHT_EDGE = r"(?!\w)"


def build_keyword_pattern(terms: List[str]) -> str:
    """
    Generate a safe regex pattern from a list of literal terms.

    Terms are stripped, de-duplicated case-insensitively, escaped and ordered
    longest first so the longest phrase wins at a given position.

    Args:
        terms: Literal keywords or phrases (e.g., ["invoice", "payment due"])

    Returns:
        Regex pattern string with escaping and word edges

    Raises:
        ValueError: If no usable term is given

    Examples:
        >>> build_keyword_pattern(["invoice", "receipt"])
        '(?<!\\\\w)(?:invoice|receipt)(?!\\\\w)'
    """
    seen = set()
    cleaned: List[str] = []
    for term in terms:
        normalized = " ".join(str(term).split())
        key = normalized.casefold()
        if normalized and key not in seen:
            seen.add(key)
            cleaned.append(normalized)

    if not cleaned:
        raise ValueError("Keyword list is empty")

    cleaned.sort(key=lambda t: (-len(t), t.casefold()))
    escaped = [r"\s+".join(re.escape(word) for word in term.split()) for term in cleaned]
    pattern = _LEFT_EDGE + "(?:" + "|".join(escaped) + ")" + _RIGHT_EDGE

    logger.debug("keyword_pattern_generated", terms_count=len(cleaned))

    return pattern


def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Compile a rule pattern case-insensitively.

    Args:
        pattern: Regex pattern string

    Returns:
        Compiled pattern

    Raises:
        ValueError: If the pattern is empty or fails to compile
    """
    if not pattern:
        raise ValueError("Pattern is empty")

    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.error("regex_compilation_failed", pattern=pattern, error=str(e))
        raise ValueError(f"Invalid regex pattern: {pattern}, error: {e}") from e
