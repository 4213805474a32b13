from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gedcom_transform.cli.utils import configure_verbosity, err_console, fail, load_gedcom, write_json
from gedcom_transform.exporter.json_exporter import document_to_dict


def parse_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    version: Optional[str] = typer.Option(
        None,
        "--gedcom-version",
        help="Declared GEDCOM version of the input (5.5.1 or 7.0)",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
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
    Parse a GEDCOM file into Document JSON (stdout by default).
    """
    configure_verbosity(debug)

    try:
        document = load_gedcom(gedcom, version=version, verbose=verbose)
    except (OSError, ValueError) as exc:
        fail(exc)

    write_json(document_to_dict(document), out=out, pretty=pretty)

    if verbose:
        err_console.log("Export complete")
