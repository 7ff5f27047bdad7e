"""CLI commands for versiongnome.

This module implements the user-facing commands:
- ``resolve``: group an explicit list of paths;
- ``scan``: group the entries of one folder;
- ``version``: print the package version.

Design:
- Typer app and Console are instantiated at module level for reuse across
  commands.
- Annotated is used for argument/option definitions.
- Options left unset on the command line fall back to environment variables
  and config.toml through :func:`versiongnome.utils.config.resolve_setting`.
- Exit codes are defined as an Enum.
"""

import json
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from versiongnome.cli.renderer import entries_to_json, render_entries
from versiongnome.core.video_list_resolver import resolve_video_list
from versiongnome.core.video_resolver import resolve_file
from versiongnome.errors import ConfigError
from versiongnome.models.core import CollectionType, FileRecord
from versiongnome.models.options import NamingPatterns, compile_patterns
from versiongnome.utils.config import load_naming_options, resolve_setting
from versiongnome.utils.debug import debug, setup_logger

app = typer.Typer(
    name="versiongnome",
    help="Group video files into stacks, extras and alternate versions.",
)
console = Console()


@app.callback()
def callback(
    debug_output: bool = typer.Option(
        False,
        "--debug",
        help="Log grouping decisions. Can also be set with VERSIONGNOME_DEBUG=1.",
    ),
) -> None:
    """Configure logging before any command runs."""
    setup_logger(verbose=True if debug_output else None)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


def validate_media_type(value: str) -> CollectionType:
    """Validate and convert a string to a CollectionType.

    Raises:
        typer.BadParameter: If the value is not a valid media type.
    """
    try:
        return CollectionType(value.strip().lower())
    except ValueError:
        valid_types = [t.value for t in CollectionType]
        raise typer.BadParameter(
            f"Invalid media type. Must be one of: {', '.join(valid_types)}"
        )


PATHS = Annotated[
    List[Path],
    typer.Argument(help="Video files or directories belonging to one media item"),
]

ROOT_PATH = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        resolve_path=True,
        help="Folder whose entries are resolved",
    ),
]

MEDIA_TYPE = Annotated[
    Optional[str],
    typer.Option(
        "--media-type",
        "-t",
        help="Media kind (movies, tvshows, musicvideos...). Defaults to movies.",
    ),
]

MULTI_VERSION = Annotated[
    Optional[bool],
    typer.Option(
        "--multi-version/--no-multi-version",
        help="Collapse alternate versions of the same title",
    ),
]

PARSE_NAME = Annotated[
    Optional[bool],
    typer.Option(
        "--parse-name/--no-parse-name",
        help="Strip years and release tags from display names",
    ),
]

LIBRARY_ROOT = Annotated[
    Optional[Path],
    typer.Option(
        "--library-root",
        help="Top-level library folder (a library named 'Trailers' is not an extra)",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format",
    ),
]


def _load_patterns() -> NamingPatterns:
    try:
        return compile_patterns(load_naming_options())
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)


def _build_records(
    paths: List[Path], patterns: NamingPatterns, parse_name: bool, library_root: str
) -> List[FileRecord]:
    records: List[FileRecord] = []
    for path in paths:
        record = resolve_file(str(path), path.is_dir(), patterns, parse_name, library_root)
        if record is None:
            debug(f"Ignoring {path}: not a video file")
            continue
        records.append(record)
    return records


def _resolve_and_render(
    paths: List[Path],
    media_type: Optional[str],
    multi_version: Optional[bool],
    parse_name: Optional[bool],
    library_root: Optional[Path],
    json_output: bool,
) -> None:
    kind = validate_media_type(
        resolve_setting("resolve.media_type", default="movies", cli_value=media_type)
    )
    multi = resolve_setting("resolve.multi_version", default=True, cli_value=multi_version)
    parse = resolve_setting("resolve.parse_name", default=True, cli_value=parse_name)
    root = str(library_root) if library_root is not None else ""

    patterns = _load_patterns()
    records = _build_records(paths, patterns, parse, root)
    if not records:
        console.print("[yellow]No video files found.[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)

    entries = resolve_video_list(
        records,
        patterns,
        support_multi_version=multi,
        parse_name=parse,
        library_root=root,
        collection_type=kind,
    )

    if json_output:
        sys.stdout.write(json.dumps(entries_to_json(entries), indent=2) + "\n")
    else:
        render_entries(entries, console=console)


@app.command()
def resolve(
    paths: PATHS,
    media_type: MEDIA_TYPE = None,
    multi_version: MULTI_VERSION = None,
    parse_name: PARSE_NAME = None,
    library_root: LIBRARY_ROOT = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Group the given video files into titles, versions and extras."""
    _resolve_and_render(paths, media_type, multi_version, parse_name, library_root, json_output)


@app.command()
def scan(
    root: ROOT_PATH,
    media_type: MEDIA_TYPE = None,
    multi_version: MULTI_VERSION = None,
    parse_name: PARSE_NAME = None,
    library_root: LIBRARY_ROOT = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Group the videos (and disc folders) directly inside ROOT."""
    paths = sorted(p for p in root.iterdir() if not p.name.startswith("."))
    debug(f"Scanning {root}: {len(paths)} entries")
    _resolve_and_render(paths, media_type, multi_version, parse_name, library_root, json_output)


@app.command()
def version() -> None:
    """Show the version of versiongnome."""
    from versiongnome.__about__ import __version__

    console.print(f"VersionGnome version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
