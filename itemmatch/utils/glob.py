"""Wildcard pattern matching used by every criterion.

Contract:
- ``*`` matches zero or more characters, newlines included
- every other character is literal (no ``?``, character classes or escapes)
- the pattern must match the whole candidate
- comparison is case-insensitive

Entry search builds patterns such as ``*<value>*`` from fragments of
configured patterns, so these rules must stay stable. Matching scans the
candidate once per pattern segment and never backtracks, so cost stays
linear in the candidate length however many wildcards a pattern has.
"""

from functools import lru_cache
from typing import Tuple


@lru_cache(maxsize=1024)
def split_glob(pattern: str) -> Tuple[str, ...]:
    """Split a lower-cased pattern into the literal segments between wildcards."""
    return tuple(pattern.lower().split("*"))


def glob_matches(pattern: str, candidate: str) -> bool:
    """Return True when candidate matches the glob pattern.

    Example:
        >>> glob_matches("*_sword", "DIAMOND_SWORD")
        True
        >>> glob_matches("diamond", "diamond_sword")
        False
    """
    if pattern is None or candidate is None:
        return False

    segments = split_glob(pattern)
    text = candidate.lower()

    if len(segments) == 1:
        return text == segments[0]

    head, tail = segments[0], segments[-1]
    if len(text) < len(head) + len(tail):
        return False
    if not text.startswith(head) or not text.endswith(tail):
        return False

    # leftmost placement of each middle segment is always safe
    position = len(head)
    end = len(text) - len(tail)
    for segment in segments[1:-1]:
        index = text.find(segment, position, end)
        if index < 0:
            return False
        position = index + len(segment)
    return True
