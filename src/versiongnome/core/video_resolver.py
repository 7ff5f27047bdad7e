"""Resolution of a single path into a FileRecord.

This is the per-file half of the naming pipeline: it decides whether a path is
a video at all, parses the display name and year out of the file name, and
flags extras. The video list resolver calls it for every part of a stack.
"""

import logging
from pathlib import PurePath
from typing import Optional

from versiongnome.core.clean_datetime import clean_datetime
from versiongnome.core.clean_string import try_clean
from versiongnome.core.extra_rules import get_extra_type
from versiongnome.models.core import FileRecord
from versiongnome.models.options import NamingPatterns, compile_patterns

logger = logging.getLogger(__name__)


def parse_display_name(name: str, patterns: NamingPatterns) -> tuple[str, Optional[int]]:
    """Strip the year and release tags from *name*.

    Args:
        name: File name without extension.
        patterns: Compiled naming patterns.

    Returns:
        Tuple of (cleaned name, year or None).
    """
    result = clean_datetime(name, patterns.clean_datetimes)
    cleaned_name = result.name
    ok, new_name = try_clean(cleaned_name, patterns.clean_strings)
    if ok:
        cleaned_name = new_name
    return cleaned_name, result.year


def resolve_file(
    path: str,
    is_directory: bool = False,
    patterns: Optional[NamingPatterns] = None,
    parse_name: bool = True,
    library_root: Optional[str] = "",
) -> Optional[FileRecord]:
    """Build a FileRecord for *path*.

    Args:
        path: Full path to the file or directory.
        is_directory: Whether the path is a directory (DVD/Blu-ray folder or
            a directory stack part).
        patterns: Compiled naming patterns; defaults are used when omitted.
        parse_name: When True the display name is cleaned and the year parsed;
            otherwise the raw file name is used.
        library_root: Top-level library folder, forwarded to extra detection.

    Returns:
        The resolved record, or None when *path* is empty or not a video file.
    """
    if not path:
        return None

    patterns = patterns or compile_patterns()
    container: Optional[str] = None
    pure = PurePath(path)

    if not is_directory:
        if not patterns.is_video_file(path):
            logger.debug("Skipping non-video file %s", path)
            return None
        container = pure.suffix.lstrip(".").lower() or None

    name = pure.name if is_directory else pure.stem
    year: Optional[int] = None
    if parse_name:
        name, year = parse_display_name(name, patterns)

    return FileRecord(
        path=path,
        display_name=name,
        is_directory=is_directory,
        year=year,
        extra_type=get_extra_type(path, patterns.options.extra_rules, library_root),
        container=container,
    )
