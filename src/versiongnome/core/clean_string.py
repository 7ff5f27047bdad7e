"""Release-tag stripping for video names.

Removes the tail of a name starting at the first recognised release token
(resolution, codec, source, bracketed group...). Patterns come from
:class:`~versiongnome.models.options.NamingPatterns`.
"""

from typing import Iterable, Pattern, Tuple


def try_clean(name: str, expressions: Iterable[Pattern[str]]) -> Tuple[bool, str]:
    """Clean *name* with the first matching expression.

    Args:
        name: Name to clean.
        expressions: Compiled patterns, each defining a ``cleaned`` group.

    Returns:
        ``(True, cleaned)`` for the first pattern that matches, otherwise
        ``(False, "")``.
    """
    if not name:
        return False, ""

    for expression in expressions:
        match = expression.search(name)
        if match is None or "cleaned" not in expression.groupindex:
            continue
        cleaned = match.group("cleaned")
        if cleaned is not None:
            return True, cleaned

    return False, ""
