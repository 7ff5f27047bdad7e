"""Core domain models for versiongnome.

This module defines the data structures the video list resolver consumes and
produces.
- FileRecord is one physical video file or directory as identified by the
  caller (or by :func:`versiongnome.core.video_resolver.resolve_file`).
- LogicalEntry is one title: a single file, a multi-part stack, or a primary
  file with its alternate versions.
- FileStack is a group of files/directories that are consecutive parts of one
  title (``cd1``/``cd2``, ``disc1``/``disc2``...).

Design:
- CollectionType and ExtraType are ``str`` enums so they serialise cleanly to
  JSON and can be parsed straight from CLI/config values.
- Records are plain pydantic models; the resolver never mutates a FileRecord
  handed to it, it derives copies instead (see ``version_tag``).
"""

from enum import Enum
from pathlib import PurePath
from typing import List, Optional

from pydantic import BaseModel, Field


class CollectionType(str, Enum):
    """Kind of media a folder of videos belongs to.

    Only ``TVSHOWS`` selects episode version grouping; every other kind uses the
    movie/music-video grouping.
    """

    MOVIES = "movies"
    TVSHOWS = "tvshows"
    MUSICVIDEOS = "musicvideos"
    HOMEVIDEOS = "homevideos"
    BOXSETS = "boxsets"
    FOLDERS = "folders"
    UNKNOWN = "unknown"


class ExtraType(str, Enum):
    """Type of bonus content attached to a title."""

    UNKNOWN = "unknown"
    CLIP = "clip"
    TRAILER = "trailer"
    BEHIND_THE_SCENES = "behindthescenes"
    DELETED_SCENE = "deletedscene"
    INTERVIEW = "interview"
    SCENE = "scene"
    SAMPLE = "sample"
    THEME_VIDEO = "themevideo"
    FEATURETTE = "featurette"
    SHORT = "short"


class FileRecord(BaseModel):
    """A single video file or directory discovered by the caller."""

    path: str
    """Full path of the file or directory. Unique within one resolve call."""

    display_name: str
    """Name used for display and sorting; the parsed title when names are
    parsed, otherwise the file name without extension."""

    is_directory: bool = False
    """Whether the record is a directory (e.g. a DVD/Blu-ray folder)."""

    year: Optional[int] = None
    """Release year parsed from the name, if any."""

    extra_type: Optional[ExtraType] = None
    """Kind of extra; ``None`` means primary content."""

    container: Optional[str] = None
    """File extension without the leading dot (files only)."""

    version_tag: Optional[str] = None
    """Version label captured from an episode file name (``" - [1080p]"``).
    Set on derived copies only, the caller's record keeps ``display_name``."""

    @property
    def file_name(self) -> str:
        """Last path component."""
        return PurePath(self.path).name

    @property
    def file_name_without_extension(self) -> str:
        """Last path component without its extension (directories keep theirs)."""
        if self.is_directory:
            return self.file_name
        return PurePath(self.path).stem

    @property
    def folder_name(self) -> str:
        """Name of the directory containing this record."""
        return PurePath(self.path).parent.name

    @property
    def sort_name(self) -> str:
        """Name used to classify versions: the version tag when present."""
        return self.version_tag if self.version_tag is not None else self.display_name

    @property
    def is_extra(self) -> bool:
        return self.extra_type is not None


class LogicalEntry(BaseModel):
    """One resolved title.

    ``files`` holds more than one record only for multi-part stacks; such an
    entry never carries alternate versions.
    """

    name: str
    """Display name of the title."""

    year: Optional[int] = None
    """Release year shared by the files."""

    files: List[FileRecord] = Field(default_factory=list)
    """Files making up the title, in part order."""

    alternate_versions: List[FileRecord] = Field(default_factory=list)
    """Other encodes/cuts of the same title, best first."""

    extra_type: Optional[ExtraType] = None
    """Kind of extra for standalone extras, ``None`` for primary content."""

    @property
    def primary(self) -> FileRecord:
        """First (and for version groups, only) file of the entry."""
        return self.files[0]

    @property
    def is_stack(self) -> bool:
        return len(self.files) > 1

    def all_files(self) -> List[FileRecord]:
        """Every record owned by this entry, parts first then alternates."""
        return [*self.files, *self.alternate_versions]


class FileStack(BaseModel):
    """Parts of one title split across several files or directories."""

    name: str
    """Title prefix shared by all parts."""

    files: List[str]
    """Member paths in part order."""

    is_directory_stack: bool = False
    """Whether the parts are directories rather than files."""

    def contains(self, path: str, is_directory: bool) -> bool:
        """Check whether *path* is one of this stack's parts.

        Args:
            path: Full path to look up. Paths are compared exactly; on a
                case-sensitive filesystem ``Movie cd1`` and ``movie CD1`` are
                different files.
            is_directory: Whether *path* is a directory; a file never belongs to
                a directory stack and vice versa.

        Returns:
            True if the path is a member of the stack.
        """
        if self.is_directory_stack != is_directory:
            return False
        return path in self.files
