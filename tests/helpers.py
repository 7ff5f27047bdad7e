"""Utilities for tests."""

from pathlib import PurePath
from typing import Optional

from versiongnome.models.core import ExtraType, FileRecord, LogicalEntry


def make_record(
    path: str,
    year: Optional[int] = None,
    extra_type: Optional[ExtraType] = None,
    is_directory: bool = False,
) -> FileRecord:
    """Build a FileRecord whose display name is the file name without extension."""
    pure = PurePath(path)
    return FileRecord(
        path=path,
        display_name=pure.name if is_directory else pure.stem,
        is_directory=is_directory,
        year=year,
        extra_type=extra_type,
    )


def make_entry(path: str, year: Optional[int] = None) -> LogicalEntry:
    """Build a single-file LogicalEntry."""
    record = make_record(path, year)
    return LogicalEntry(name=record.display_name, year=year, files=[record])


def paths_of(records) -> list[str]:
    """Return the paths of *records* in order."""
    return [record.path for record in records]
