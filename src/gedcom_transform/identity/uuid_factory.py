# src/gedcom_transform/identity/uuid_factory.py
from __future__ import annotations

import re
import uuid
from typing import Callable, Dict, Iterable, Optional, Set

HandleFactory = Callable[[], str]

# Prefix letter per top-level record type, used for sequential ids and xrefs.
ID_PREFIXES: Dict[str, str] = {
    "INDI": "I",
    "FAM": "F",
    "SOUR": "S",
    "REPO": "R",
    "NOTE": "N",
    "SNOTE": "N",
    "OBJE": "O",
}

ID_WIDTH = 4

_XREF_NUMBER_RE = re.compile(r"^@[A-Za-z_]*(\d+)@$")
_SEQUENTIAL_ID_RE = re.compile(r"^([A-Za-z]+)(\d+)$")


# -----------------------------
# Handles
# -----------------------------

def new_handle() -> str:
    """
    Fresh opaque handle for one entity.

    Never derived from the xref: xrefs are file-local and get renumbered on
    every export.
    """
    return uuid.uuid4().hex


# -----------------------------
# Pointer normalization
# -----------------------------

def normalize_pointer(pointer: Optional[str]) -> Optional[str]:
    """
    Normalize a GEDCOM pointer value:
      - strip whitespace
      - strip any '@' characters
      - re-wrap in @...@

    "@I1@", "I1" and " @I1@ " all normalize to "@I1@". Case is preserved:
    GEDCOM xrefs are case-sensitive.
    """
    if pointer is None:
        return None

    p = pointer.strip().replace("@", "")
    if not p:
        return None
    return f"@{p}@"


# -----------------------------
# Sequential ids
# -----------------------------

def format_sequential_id(prefix: str, number: int) -> str:
    return f"{prefix}{number:0{ID_WIDTH}d}"


def format_xref(prefix: str, number: int) -> str:
    return f"@{format_sequential_id(prefix, number)}@"


def sequential_id_from_pointer(pointer: Optional[str], prefix: str) -> Optional[str]:
    """
    Derive "I0012" from "@I12@" (any letters, then digits).

    Returns None when the pointer carries no trailing number.
    """
    if not pointer:
        return None
    match = _XREF_NUMBER_RE.match(pointer.strip())
    if match is None:
        return None
    digits = match.group(1)
    return f"{prefix}{digits.zfill(ID_WIDTH)}"


class IdAllocator:
    """
    Hands out sequential ids for entities that have neither a _UID nor a
    numbered xref.

    One allocator serves one transform run. Every id already present in the
    document should be passed to `reserve` first; `allocate` then returns the
    next number above anything seen for that prefix, so allocated ids are
    unique within the run and increase monotonically.
    """

    def __init__(self) -> None:
        self._taken: Set[str] = set()
        self._high_water: Dict[str, int] = {}

    def reserve(self, sequential_id: str) -> None:
        self._taken.add(sequential_id)
        match = _SEQUENTIAL_ID_RE.match(sequential_id)
        if match is None:
            return
        prefix, number = match.group(1), int(match.group(2))
        if number > self._high_water.get(prefix, 0):
            self._high_water[prefix] = number

    def reserve_all(self, sequential_ids: Iterable[str]) -> None:
        for sid in sequential_ids:
            self.reserve(sid)

    def allocate(self, prefix: str) -> str:
        number = self._high_water.get(prefix, 0) + 1
        candidate = format_sequential_id(prefix, number)
        while candidate in self._taken:
            number += 1
            candidate = format_sequential_id(prefix, number)
        self.reserve(candidate)
        return candidate


__all__ = [
    "HandleFactory",
    "ID_PREFIXES",
    "IdAllocator",
    "format_sequential_id",
    "format_xref",
    "new_handle",
    "normalize_pointer",
    "sequential_id_from_pointer",
]
