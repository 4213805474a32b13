# src/gedcom_transform/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from gedcom_transform.logging import get_logger

log = get_logger(__name__)

# <level> [<@xref@>] <tag> [<value>]
_LINE_RE = re.compile(
    r"^(?P<level>\d+)\s+"
    r"(?:(?P<pointer>@[^@\s]+@)\s+)?"
    r"(?P<tag>[A-Za-z0-9_]+)"
    r"(?:\s(?P<value>.*))?$"
)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Token:
    """
    A single GEDCOM line token.

    Attributes:
        lineno: 1-based line number in the original text.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        pointer: Optional cross-reference identifier, e.g. "@I1@" or None.
        tag: GEDCOM tag, e.g. "INDI", "FAM", "HEAD", "NOTE", "CONC", "CONT".
        value: The line value (payload) as a string (may be empty).
        raw: The trimmed line the token was read from.
    """
    lineno: int
    level: int
    pointer: Optional[str]
    tag: str
    value: str
    raw: str


class GedcomSyntaxError(ValueError):
    """Raised when a GEDCOM line cannot be parsed according to basic syntax."""


def tokenize_line(line: str, lineno: int = 0) -> Token:
    """
    Parse a single GEDCOM line into a Token.

    Surrounding whitespace is insignificant and trimmed first. The value is
    whatever follows the tag and its single separator, kept verbatim.

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "1 NOTE This is a note"
    """
    raw = line.strip()

    # Handle optional UTF-8 BOM on the very first line.
    if raw.startswith("\ufeff"):
        raw = raw.lstrip("\ufeff").strip()

    if not raw:
        raise GedcomSyntaxError(f"Empty or whitespace-only line at {lineno}")

    match = _LINE_RE.match(raw)
    if match is None:
        raise GedcomSyntaxError(f"Line {lineno}: not a GEDCOM line -> {raw!r}")

    return Token(
        lineno=lineno,
        level=int(match.group("level")),
        pointer=match.group("pointer"),
        tag=match.group("tag"),
        value=match.group("value") or "",
        raw=raw,
    )


def tokenize_lines(lines: Iterable[str]) -> Iterator[Token]:
    """
    Best-effort tokenization: yield a Token for every line that parses.

    Blank lines are skipped; lines failing the grammar are dropped and the
    rest of the stream is still tokenized.
    """
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield tokenize_line(line, lineno=lineno)
        except GedcomSyntaxError as exc:
            log.debug("Dropping line: %s", exc)


def tokenize_text(text: str) -> List[Token]:
    """Tokenize an in-memory GEDCOM document (any of \\n, \\r\\n, \\r endings)."""
    return list(tokenize_lines(_LINE_BREAK_RE.split(text)))


def tokenize_file(path: Union[str, Path]) -> Iterator[Token]:
    """
    Yield Token objects for every parseable line in the given file.

    Raises:
        FileNotFoundError: if `path` does not exist.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    with file_path.open("r", encoding="utf-8", errors="replace") as f:
        yield from tokenize_lines(f)
