"""Renderer for CLI output.

Shows resolved titles as a Rich table: one row per title with its files,
alternate versions and extra type, followed by a short summary line.
"""

from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.table import Table

from versiongnome.models.core import LogicalEntry


def _describe(entry: LogicalEntry) -> str:
    if entry.extra_type is not None:
        return f"extra ({entry.extra_type.value})"
    if entry.is_stack:
        return "stack"
    if entry.alternate_versions:
        return "versions"
    return "title"


def render_entries(
    entries: Sequence[LogicalEntry], console: Console | None = None, title: str = "Resolved Titles"
) -> None:
    """Render resolved entries as a rich table.

    Args:
        entries: Output of the video list resolver.
        console: Optional Console instance to use for rendering.
        title: Table title.
    """
    console = console or Console()

    table = Table(title=title)
    table.add_column("Kind", style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Year", style="magenta")
    table.add_column("Files", style="green")
    table.add_column("Alternate Versions", style="yellow")

    kind_styles = {
        "stack": "blue",
        "versions": "green bold",
        "title": "white",
    }

    for entry in entries:
        kind = _describe(entry)
        table.add_row(
            kind,
            entry.name,
            str(entry.year) if entry.year is not None else "",
            "\n".join(f.file_name for f in entry.files),
            "\n".join(f.file_name for f in entry.alternate_versions),
            style=kind_styles.get(kind, "dim"),
        )

    console.print(table)

    extras = len([e for e in entries if e.extra_type is not None])
    alternates = sum(len(e.alternate_versions) for e in entries)
    console.print(
        f"Titles: {len(entries) - extras} | Alternate versions: {alternates} | Extras: {extras}"
    )


def entries_to_json(entries: Sequence[LogicalEntry]) -> List[Dict[str, Any]]:
    """Dump entries to JSON-ready dicts."""
    return [entry.model_dump(mode="json") for entry in entries]
