
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console

from gedcom_transform.config import get_config
from gedcom_transform.core.exceptions import TransformError
from gedcom_transform.exporter.json_exporter import load_document_json
from gedcom_transform.logging import get_logger, set_debug
from gedcom_transform.registry.entities import Document
from gedcom_transform.transform import parse

console = Console()
err_console = Console(stderr=True)

log = get_logger("cli")


def configure_verbosity(debug: bool) -> None:
    if debug:
        set_debug(True)


def default_version(section: str) -> str:
    cfg = get_config()
    if section == "parser":
        return str(cfg.parser.get("version", "5.5.1"))
    return str(cfg.generator.get("version", "5.5.1"))


def load_gedcom(path: Path, *, version: Optional[str] = None, verbose: bool = False) -> Document:
    """
    Read a GEDCOM file and parse it into a Document.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()

    text = path.read_text(encoding="utf-8-sig", errors="replace")
    document = parse(text, version or default_version("parser"))

    elapsed = time.perf_counter() - t0
    log.info("Parsed %s in %.2fs: %s", path, elapsed, document.counts())

    if verbose:
        err_console.log(f"Loaded GEDCOM in {elapsed:.2f}s")

    return document


def load_document(path: Path) -> Document:
    """Read a Document from its JSON form."""
    return load_document_json(path)


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)


def fail(exc: Exception) -> None:
    """Report a failure in red and exit non-zero."""
    log.error("Command failed: %s", exc)
    err_console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=2 if isinstance(exc, TransformError) else 1)
