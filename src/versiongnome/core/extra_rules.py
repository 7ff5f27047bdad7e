"""Detection of bonus content (trailers, featurettes, samples...).

A path is an extra when its file name, file name suffix, or containing folder
matches one of the configured :class:`~versiongnome.models.options.ExtraRule`
tokens. The first matching rule decides the type.
"""

import logging
from pathlib import PurePath
from typing import Iterable, Optional

from versiongnome.models.core import ExtraType
from versiongnome.models.options import ExtraRule, ExtraRuleType

logger = logging.getLogger(__name__)


def _matches(rule: ExtraRule, stem: str, folder: str, parent: str, library_root: str) -> bool:
    token = rule.token.casefold()
    if rule.rule_type == ExtraRuleType.FILENAME:
        return stem.casefold() == token
    if rule.rule_type == ExtraRuleType.SUFFIX:
        # "-trailer2" is still a trailer
        return stem.rstrip("0123456789").casefold().endswith(token)
    if rule.rule_type == ExtraRuleType.DIRECTORY_NAME:
        # A library literally named "Trailers" does not make everything a trailer
        return folder.casefold() == token and parent.casefold() != library_root.casefold()
    return False


def get_extra_type(
    path: str,
    rules: Iterable[ExtraRule],
    library_root: Optional[str] = "",
) -> Optional[ExtraType]:
    """Determine the extra type of *path*.

    Args:
        path: Full path of the file.
        rules: Extra rules to check, in priority order.
        library_root: Top-level folder of the library; a directory rule never
            matches the root itself.

    Returns:
        The extra type of the first matching rule, or None for primary content.
    """
    pure = PurePath(path)
    stem = pure.stem
    folder = pure.parent.name
    parent = str(pure.parent)
    root = (library_root or "").rstrip("/\\")

    for rule in rules:
        if _matches(rule, stem, folder, parent, root):
            logger.debug("%s matched extra rule %s (%s)", path, rule.token, rule.extra_type.value)
            return rule.extra_type
    return None
