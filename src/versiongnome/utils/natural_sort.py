"""Natural (alphanumeric) string ordering.

Embedded numbers compare by value, so ``"720p"`` sorts before ``"1080p"`` and
``"Part 2"`` before ``"Part 10"``. Used everywhere versions are ranked so the
ordering is deterministic.
"""

import re
from functools import cmp_to_key
from typing import Any, Callable, List, Optional

_CHUNK_RE = re.compile(r"\d+|\D+")


def _chunks(text: str) -> List[str]:
    return _CHUNK_RE.findall(text)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare_text(a: str, b: str) -> int:
    """Case-insensitive first, then ordinal so ``"Extended"`` sorts before ``"extended"``."""
    folded_a, folded_b = a.casefold(), b.casefold()
    if folded_a != folded_b:
        return -1 if folded_a < folded_b else 1
    if a != b:
        return -1 if a < b else 1
    return 0


def _compare_digits(a: str, b: str) -> int:
    # Leading zeros carry no value; a longer significant run is a bigger number.
    a, b = a.lstrip("0"), b.lstrip("0")
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    if a != b:
        return -1 if a < b else 1
    return 0


def compare(a: Optional[str], b: Optional[str]) -> int:
    """Compare two strings in natural order.

    Args:
        a: First string (``None`` sorts first).
        b: Second string (``None`` sorts first).

    Returns:
        -1, 0 or 1 like a classic ``cmp`` function.
    """
    if a is None or b is None:
        if a is None and b is None:
            return 0
        return -1 if a is None else 1
    if not a or not b:
        return _sign(len(a) - len(b))

    for chunk_a, chunk_b in zip(_chunks(a), _chunks(b)):
        if chunk_a[0].isdecimal() and chunk_b[0].isdecimal():
            result = _compare_digits(chunk_a, chunk_b)
        else:
            result = _compare_text(chunk_a, chunk_b)
        if result:
            return result

    return _sign(len(a) - len(b))


natural_key: Callable[[str], Any] = cmp_to_key(compare)
"""Sort key adapter: ``sorted(names, key=natural_key)``."""


def natural_sort(items: List[str], reverse: bool = False) -> List[str]:
    """Sort strings in natural order.

    Example:
        >>> natural_sort(["Movie - 720p", "Movie - 2160p", "Movie - 1080p"])
        ['Movie - 720p', 'Movie - 1080p', 'Movie - 2160p']
    """
    return sorted(items, key=natural_key, reverse=reverse)
