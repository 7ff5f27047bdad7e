"""Core functionality for versiongnome.

This package exposes the list resolver and the per-file resolver for use by
the CLI and other modules.
- resolve_video_list: Groups one folder's files into stacks, titles, alternate
  versions and extras.
- resolve_file: Builds a FileRecord (display name, year, extra type) for a
  single path.

See video_list_resolver.py and versions.py for the grouping rules.
"""

from versiongnome.core.video_list_resolver import resolve_video_list
from versiongnome.core.video_resolver import resolve_file

__all__ = ["resolve_file", "resolve_video_list"]
