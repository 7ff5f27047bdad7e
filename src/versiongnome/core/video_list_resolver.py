"""Resolution of a folder's video files into logical titles.

This is the list half of the naming pipeline. Given the FileRecords of one
media item (a movie folder, a season folder...), it
- partitions them into multi-part stacks, standalone titles and extras;
- builds one LogicalEntry per stack and per standalone title;
- optionally collapses alternate versions (movie or episode policy, see
  :mod:`versiongnome.core.versions`);
- appends the extras, untouched, at the end.

Design:
- Extras never take part in stack detection, so a ``trailer`` next to
  ``Movie cd1``/``Movie cd2`` cannot break the stack.
- Nothing here touches the filesystem; callers hand over records they already
  built (see :func:`versiongnome.core.video_resolver.resolve_file`).
- Caller records are never mutated. Episode grouping works on copies.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from versiongnome.core.stack_resolver import resolve_stacks
from versiongnome.core.versions import group_episode_versions, group_movie_versions
from versiongnome.core.video_resolver import resolve_file
from versiongnome.errors import UnsupportedMediaKindError
from versiongnome.models.core import CollectionType, FileRecord, FileStack, LogicalEntry
from versiongnome.models.options import NamingPatterns, compile_patterns

logger = logging.getLogger(__name__)

MediaKind = Union[CollectionType, str, None]


def coerce_collection_type(value: MediaKind) -> Optional[CollectionType]:
    """Map a caller supplied media kind onto a CollectionType.

    Args:
        value: A CollectionType, its string value (case-insensitive) or None.

    Returns:
        The collection type, or None when no kind was given.

    Raises:
        UnsupportedMediaKindError: If *value* is not a known collection type.
    """
    if value is None or isinstance(value, CollectionType):
        return value
    if isinstance(value, str):
        try:
            return CollectionType(value.strip().lower())
        except ValueError:
            pass
    raise UnsupportedMediaKindError(value)


def partition_files(
    files: Sequence[FileRecord],
    patterns: Optional[NamingPatterns] = None,
) -> Tuple[List[FileStack], List[FileRecord], List[FileRecord]]:
    """Split *files* into stacks, standalone titles and remaining extras.

    Args:
        files: Records of one media item, in caller order.
        patterns: Compiled naming patterns; defaults are used when omitted.

    Returns:
        Tuple of (stacks, standalone records, extras), the last two in input
        order.
    """
    stacks = resolve_stacks(
        ((record.path, record.is_directory) for record in files if not record.is_extra),
        patterns,
    )

    standalone: List[FileRecord] = []
    extras: List[FileRecord] = []
    for record in files:
        if any(stack.contains(record.path, record.is_directory) for stack in stacks):
            continue
        if record.is_extra:
            extras.append(record)
        else:
            standalone.append(record)

    return stacks, standalone, extras


def build_entries(
    stacks: Sequence[FileStack],
    standalone: Sequence[FileRecord],
    patterns: Optional[NamingPatterns] = None,
    parse_name: bool = True,
    library_root: Optional[str] = "",
) -> List[LogicalEntry]:
    """Create one LogicalEntry per stack, then one per standalone record.

    Stack parts are re-resolved from their paths; parts that do not resolve
    to a video are dropped.
    """
    patterns = patterns or compile_patterns()
    entries: List[LogicalEntry] = []

    for stack in stacks:
        parts = [
            resolve_file(path, stack.is_directory_stack, patterns, parse_name, library_root)
            for path in stack.files
        ]
        resolved = [part for part in parts if part is not None]
        if not resolved:
            logger.debug("Stack %r has no resolvable parts, skipping", stack.name)
            continue
        entries.append(LogicalEntry(name=stack.name, year=resolved[0].year, files=resolved))

    for record in standalone:
        entries.append(
            LogicalEntry(
                name=record.display_name,
                year=record.year,
                files=[record],
                extra_type=record.extra_type,
            )
        )

    return entries


def resolve_video_list(
    files: Sequence[FileRecord],
    patterns: Optional[NamingPatterns] = None,
    support_multi_version: bool = True,
    parse_name: bool = True,
    library_root: Optional[str] = "",
    collection_type: MediaKind = None,
    logger_: Optional[logging.Logger] = None,
) -> List[LogicalEntry]:
    """Group the video files of one media item into logical titles.

    Args:
        files: Records of one media item.
        patterns: Compiled naming patterns; defaults are used when omitted.
        support_multi_version: Collapse alternate versions into one entry.
        parse_name: Parse names and years when re-resolving stack parts.
        library_root: Top-level library folder, used by extra detection.
        collection_type: Media kind. ``tvshows`` selects episode grouping,
            anything else (including None) movie grouping.
        logger_: Receives grouping diagnostics; defaults to the module logger.

    Returns:
        Titles (grouped or not) in grouper order, followed by the extras.

    Raises:
        UnsupportedMediaKindError: If *collection_type* is not a known kind.
    """
    kind = coerce_collection_type(collection_type)
    patterns = patterns or compile_patterns()

    stacks, standalone, extras = partition_files(files, patterns)
    entries = build_entries(stacks, standalone, patterns, parse_name, library_root)
    logger.debug(
        "Partitioned %d files into %d stacks, %d standalone titles and %d extras",
        len(files),
        len(stacks),
        len(standalone),
        len(extras),
    )

    if support_multi_version:
        if kind == CollectionType.TVSHOWS:
            entries = group_episode_versions(entries, logger_)
        else:
            entries = group_movie_versions(entries, patterns)

    entries.extend(
        LogicalEntry(
            name=record.display_name,
            year=record.year,
            files=[record],
            extra_type=record.extra_type,
        )
        for record in extras
    )
    return entries
