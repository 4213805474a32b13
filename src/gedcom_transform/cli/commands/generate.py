from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import typer

from gedcom_transform.cli.utils import (
    configure_verbosity,
    default_version,
    err_console,
    fail,
    load_document,
)
from gedcom_transform.config import get_config
from gedcom_transform.core.exceptions import TransformError
from gedcom_transform.exporter.gedzip import generate_gedzip
from gedcom_transform.registry.entities import Document
from gedcom_transform.transform import generate


def _collect_media(document: Document, media_root: Path) -> Dict[str, bytes]:
    payloads: Dict[str, bytes] = {}
    for media in document.media:
        if not media.path:
            continue
        candidate = media_root / media.path
        if candidate.is_file():
            payloads[media.path] = candidate.read_bytes()
        else:
            err_console.log(f"[yellow]Media file not found, not bundled:[/yellow] {candidate}")
    return payloads


def generate_command(
    document_json: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    version: Optional[str] = typer.Option(
        None,
        "--gedcom-version",
        help="GEDCOM version to emit (5.5.1 or 7.0)",
    ),
    gedzip: bool = typer.Option(
        False,
        "--gedzip",
        help="Write a GEDCOM 7.0 GEDZIP archive bundling media files (requires --out)",
    ),
    media_root: Optional[Path] = typer.Option(
        None,
        "--media-root",
        help="Directory media paths are relative to (defaults to the JSON file's directory)",
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
    Generate GEDCOM text (or a GEDZIP archive) from Document JSON.
    """
    configure_verbosity(debug)
    gen_cfg = get_config().generator
    header = {
        "source_name": str(gen_cfg.get("source_name")),
        "source_version": str(gen_cfg.get("source_version")),
    }

    try:
        document = load_document(document_json)

        if gedzip:
            if out is None:
                raise typer.BadParameter("--gedzip needs --out", param_hint="--out")
            if version is not None and version != "7.0":
                raise typer.BadParameter(
                    f"GEDZIP archives are GEDCOM 7.0 only, got {version}", param_hint="--gedcom-version"
                )
            media = _collect_media(document, media_root or document_json.parent)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(generate_gedzip(document, media, **header))
        else:
            text = generate(
                document,
                version or default_version("generator"),
                max_line_length=gen_cfg.get("max_line_length"),
                **header,
            )
            if out:
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(text, encoding="utf-8")
            else:
                typer.echo(text, nl=False)
    except (OSError, TransformError) as exc:
        fail(exc)

    if verbose:
        err_console.log(f"Generated GEDCOM for {document.counts()}")
