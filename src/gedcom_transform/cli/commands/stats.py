
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gedcom_transform.cli.utils import configure_verbosity, fail, load_gedcom

console = Console()

_LABELS = {
    "people": "People",
    "families": "Families",
    "sources": "Sources",
    "repositories": "Repositories",
    "notes": "Notes",
    "media": "Media",
}


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    version: Optional[str] = typer.Option(
        None,
        "--gedcom-version",
        help="Declared GEDCOM version of the input (5.5.1 or 7.0)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    configure_verbosity(debug)

    try:
        document = load_gedcom(gedcom, version=version, verbose=verbose)
    except (OSError, ValueError) as exc:
        fail(exc)

    table = Table(title="GEDCOM Statistics")
    table.add_column("Entity", style="bold")
    table.add_column("Count", justify="right")

    for key, count in document.counts().items():
        table.add_row(_LABELS[key], str(count))

    unlinked = sum(1 for person in document.people if not person.family_list)
    table.add_row("People without family links", str(unlinked))

    console.print(table)
