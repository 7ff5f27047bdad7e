"""Year extraction from video names."""

from dataclasses import dataclass
from typing import Iterable, Optional, Pattern


@dataclass(frozen=True)
class CleanDateTimeResult:
    """Name with the year removed, and the year if one was found."""

    name: str
    year: Optional[int] = None


def clean_datetime(name: str, expressions: Iterable[Pattern[str]]) -> CleanDateTimeResult:
    """Split a trailing release year off *name*.

    ``"Movie (2020) 1080p"`` becomes ``("Movie", 2020)``. The first expression
    that yields both a title and a year wins.

    Args:
        name: File name without extension.
        expressions: Compiled patterns capturing the title (group 1) and the
            year (group 2).

    Returns:
        The cleaned name and year, or the original name without a year.
    """
    if not name:
        return CleanDateTimeResult(name)

    for expression in expressions:
        match = expression.search(name)
        if match is None or match.group(1) is None or match.group(2) is None:
            continue
        return CleanDateTimeResult(match.group(1).rstrip(), int(match.group(2)))

    return CleanDateTimeResult(name)
