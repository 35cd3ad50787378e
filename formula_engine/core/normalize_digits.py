"""Digit Normalizer - raw text to a canonical digit pool.

Invariants:
    - Output elements are single characters in '0'..'9', no duplicates
    - parse_digits output is sorted ascending (the one canonical order)
    - Empty input after stripping yields [] - never an error
"""

import re

_NON_DIGIT = re.compile(r"[^0-9]")


def parse_digits(raw: str | None) -> list[str]:
    """Strip non-digits, dedupe, sort ascending. '3a1 13' -> ['1', '3']."""
    if not raw:
        return []
    return sorted(set(_NON_DIGIT.sub("", raw)))


def unique_pool(items: list[str]) -> list[str]:
    """Dedupe preserving first-seen order."""
    return list(dict.fromkeys(items))
