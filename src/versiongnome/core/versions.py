"""Alternate-version grouping for movies and TV episodes.

Two policies collapse several logical entries of the same title into one
primary file plus alternates:

- Movies / music videos: the whole folder is one candidate group. Every entry
  must pass an eligibility check (same year, file name is the folder name plus
  an optional version suffix) or nothing is grouped at all.
- TV episodes: entries are bucketed by an "episode base key" derived from the
  file name (``Show S01E01 - [1080p]`` -> ``Show S01E01``). Each bucket is
  grouped on its own; there is no all-or-nothing gate.

Both rank versions the same way: names carrying a resolution marker
(``1080p``, ``2160p``...) first, highest resolution first, then everything else
in natural order.
"""

import logging
import re
from functools import cmp_to_key
from typing import Callable, Dict, List, Optional, Tuple, Union

from versiongnome.core.clean_string import try_clean
from versiongnome.models.core import FileRecord, LogicalEntry
from versiongnome.models.options import NamingPatterns
from versiongnome.utils.natural_sort import compare

logger = logging.getLogger(__name__)

RESOLUTION_RE = re.compile(r"[0-9]{2}[0-9]+[ip]", re.IGNORECASE)
MOVIE_VERSION_TAG_RE = re.compile(r"^\[([^]]*)\]")
EPISODE_VERSION_RE = re.compile(
    r"^(?P<base>.+) - (?:\[(?P<bracketed>.+)\]|(?P<plain>(?!s\d{2}e\d{2}$)[^\[\]]+))$",
    re.IGNORECASE,
)

# More versions than this for one episode usually means the naming scheme
# was not understood.
MAX_EXPECTED_EPISODE_VERSIONS = 2


# ---------------------------------------------------------------------------
# Shared ranking
# ---------------------------------------------------------------------------


def resolution_marker(name: str) -> Optional[str]:
    """Return the resolution marker in *name* (``"1080p"``), if any."""
    match = RESOLUTION_RE.search(name)
    return match.group(0) if match else None


def rank_versions(
    items: List[FileRecord],
    bucket_name: Callable[[FileRecord], str],
) -> List[FileRecord]:
    """Order version candidates best first.

    Items whose ``bucket_name`` contains a resolution marker come first, by
    marker descending then base name ascending (natural order). The rest follow
    by base name ascending.

    Args:
        items: Files to order.
        bucket_name: Name checked for a resolution marker.

    Returns:
        A new, ordered list.
    """
    marked = [f for f in items if resolution_marker(bucket_name(f)) is not None]
    unmarked = [f for f in items if resolution_marker(bucket_name(f)) is None]

    def by_resolution(a: FileRecord, b: FileRecord) -> int:
        name_a, name_b = a.file_name_without_extension, b.file_name_without_extension
        result = compare(resolution_marker(name_b) or "", resolution_marker(name_a) or "")
        return result or compare(name_a, name_b)

    def by_name(a: FileRecord, b: FileRecord) -> int:
        return compare(a.file_name_without_extension, b.file_name_without_extension)

    return sorted(marked, key=cmp_to_key(by_resolution)) + sorted(
        unmarked, key=cmp_to_key(by_name)
    )


# ---------------------------------------------------------------------------
# Movies and music videos
# ---------------------------------------------------------------------------


def have_same_year(entries: List[LogicalEntry]) -> bool:
    """Check that every entry shares the first entry's year (None == None)."""
    if len(entries) <= 1:
        return True
    first = entries[0].year
    return all(entry.year == first for entry in entries[1:])


def is_movie_eligible_for_multi_version(
    folder_name: str, file_name: str, patterns: NamingPatterns
) -> bool:
    """Check whether *file_name* is *folder_name* plus a version suffix.

    ``Movie (2020) - 1080p`` and ``Movie (2020) [Director's Cut]`` qualify for
    folder ``Movie (2020)``; ``Movie (2020) Sequel`` does not.
    """
    if not file_name.casefold().startswith(folder_name.casefold()):
        return False

    remainder = file_name[len(folder_name) :].strip()
    ok, cleaned = try_clean(remainder, patterns.clean_strings)
    if ok:
        remainder = cleaned.strip()

    return (
        not remainder
        or remainder.startswith("-")
        or MOVIE_VERSION_TAG_RE.match(remainder) is not None
    )


def is_movie_group_eligible(
    entries: List[LogicalEntry], folder_name: str, patterns: NamingPatterns
) -> bool:
    """Decide whether a folder's entries may be merged into one movie.

    All of the following must hold:
    - the folder name is longer than one character;
    - every entry has the same year;
    - no stacked entry would be merged with another entry;
    - every non-extra entry's file name is the folder name plus a version
      suffix (see :func:`is_movie_eligible_for_multi_version`).
    """
    if len(folder_name) <= 1 or not have_same_year(entries):
        return False
    if len(entries) > 1 and any(entry.is_stack for entry in entries):
        return False
    return all(
        is_movie_eligible_for_multi_version(
            folder_name, entry.primary.file_name_without_extension, patterns
        )
        for entry in entries
        if entry.extra_type is None
    )


def merge_movie_versions(entries: List[LogicalEntry], folder_name: str) -> List[LogicalEntry]:
    """Merge eligible *entries* into a single primary-plus-alternates entry.

    The entry whose file name is exactly the folder name is primary; otherwise
    the best ranked entry is. The input entries are not modified.
    """
    primary: Optional[LogicalEntry] = None
    for entry in entries:
        if entry.extra_type is None and entry.primary.file_name_without_extension == folder_name:
            primary = entry

    ordered = list(entries)
    if len(entries) > 1:
        by_file = {id(entry.primary): entry for entry in entries}
        ranked = rank_versions(
            [entry.primary for entry in entries], lambda f: f.file_name_without_extension
        )
        ordered = [by_file[id(f)] for f in ranked]

    primary = primary or ordered[0]
    alternates = list(primary.alternate_versions)
    for entry in ordered:
        if entry is not primary:
            alternates.extend(entry.all_files())

    return [
        primary.model_copy(
            update={
                "name": folder_name,
                "files": list(primary.files),
                "alternate_versions": alternates,
            }
        )
    ]


def group_movie_versions(
    entries: List[LogicalEntry], patterns: NamingPatterns
) -> List[LogicalEntry]:
    """Collapse a folder of movie entries into one entry with alternates.

    Args:
        entries: All non-extra entries of one folder.
        patterns: Compiled naming patterns (clean strings are used by the
            eligibility check).

    Returns:
        A single merged entry, or *entries* unchanged when the folder is not
        eligible.
    """
    if not entries:
        return entries

    folder_name = entries[0].primary.folder_name
    if not is_movie_group_eligible(entries, folder_name, patterns):
        logger.debug("Folder %r is not eligible for movie version grouping", folder_name)
        return entries

    return merge_movie_versions(entries, folder_name)


# ---------------------------------------------------------------------------
# TV episodes
# ---------------------------------------------------------------------------


def get_episode_key_and_version(file_name: str) -> Tuple[str, Optional[str]]:
    """Split an episode file name into its base key and version tag.

    ``"Show S01E01 - [HEVC]"`` -> ``("Show S01E01", "HEVC")``;
    ``"Show S01E01"`` -> ``("Show S01E01", None)``. A trailing episode code
    (``"Show - S01E01"``) is never taken for a version.
    """
    match = EPISODE_VERSION_RE.match(file_name)
    if match is None:
        return file_name, None
    version = match.group("bracketed")
    if version is None:
        version = match.group("plain")
    return match.group("base"), version


def choose_primary_episode_file(ordered: List[FileRecord], base_key: str) -> FileRecord:
    """Pick the file named exactly like the base key, else the best ranked."""
    wanted = base_key.casefold()
    for candidate in ordered:
        if candidate.file_name_without_extension.casefold() == wanted:
            return candidate
    return ordered[0]


class _EpisodeGroup:
    """Files collected for one episode base key."""

    def __init__(self, entry: LogicalEntry, base_key: str) -> None:
        self.base_key = base_key
        self.name = entry.name
        self.year = entry.year
        self.files: List[FileRecord] = []


def group_episode_versions(
    entries: List[LogicalEntry],
    logger_: Optional[logging.Logger] = None,
) -> List[LogicalEntry]:
    """Group episode entries that differ only by a version suffix.

    Args:
        entries: Entries of one season/folder, one file each.
        logger_: Receives the "too many versions" warning; defaults to this
            module's logger.

    Returns:
        One entry per episode base key in order of first appearance, each
        with one primary file and its alternates. Fewer than two entries are
        returned unchanged.
    """
    if len(entries) < 2:
        return entries

    log = logger_ or logger
    groups: Dict[str, _EpisodeGroup] = {}
    # Output order: episode groups by first appearance, stacks kept whole in place
    slots: List[Union[_EpisodeGroup, LogicalEntry]] = []

    for entry in entries:
        if not entry.files:
            continue

        if entry.is_stack:
            slots.append(entry)
            continue

        for record in entry.all_files():
            base_key, version = get_episode_key_and_version(record.file_name_without_extension)
            if version is not None:
                record = record.model_copy(update={"version_tag": version})

            key = base_key.casefold()
            group = groups.get(key)
            if group is None:
                group = groups[key] = _EpisodeGroup(entry, base_key)
                slots.append(group)
            group.files.append(record)

    result: List[LogicalEntry] = []
    for group in slots:
        if isinstance(group, LogicalEntry):
            result.append(group)
            continue

        base_key = group.base_key
        if len(group.files) > MAX_EXPECTED_EPISODE_VERSIONS:
            log.warning(
                "Found more than %d versions for episode %s. This might indicate "
                "an incompatible file naming scheme.",
                MAX_EXPECTED_EPISODE_VERSIONS,
                base_key,
                extra={"episode_base_key": base_key, "version_count": len(group.files)},
            )

        ordered = rank_versions(group.files, lambda f: f.sort_name)
        primary = choose_primary_episode_file(ordered, base_key)
        result.append(
            LogicalEntry(
                name=group.name,
                year=group.year,
                files=[primary],
                alternate_versions=[f for f in ordered if f is not primary],
            )
        )

    return result
