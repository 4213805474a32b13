from __future__ import annotations

from typing import Dict, Iterable, Optional

from gedcom_transform.identity.uuid_factory import HandleFactory, new_handle, normalize_pointer
from gedcom_transform.logging import get_logger

log = get_logger(__name__)


class ReferenceTable:
    """
    One-to-one map between GEDCOM xrefs ("@I1@") and internal handles.

    Parse direction: built over every level-0 record before any decoder runs,
    so forward references (a FAMC pointing at a family further down the file)
    resolve. Generate direction: filled positionally, handle -> "@I0001@".

    Each entry also remembers the tag of the record it names, so a lookup can
    insist on a record type: a HUSB must name an INDI, a FAMC a FAM.
    """

    def __init__(self) -> None:
        self._handles: Dict[str, str] = {}
        self._pointers: Dict[str, str] = {}
        self._tags: Dict[str, str] = {}

    @classmethod
    def from_records(
        cls,
        records: Iterable,
        handle_factory: HandleFactory = new_handle,
    ) -> "ReferenceTable":
        table = cls()
        for record in records:
            pointer = getattr(record, "pointer", None)
            if not pointer:
                continue
            if pointer in table:
                log.debug("Duplicate definition of %s ignored by reference table", pointer)
                continue
            table.assign(handle_factory(), pointer, record.tag)
        log.debug("Reference table built: %d xrefs", len(table))
        return table

    def assign(self, handle: str, pointer: str, tag: str = "") -> None:
        p = normalize_pointer(pointer)
        if p is None:
            raise ValueError(f"Invalid pointer: {pointer!r}")
        self._handles[p] = handle
        self._pointers[handle] = p
        self._tags[p] = (tag or "").upper()

    def tag_for(self, pointer: Optional[str]) -> Optional[str]:
        """Tag of the record `pointer` names ("INDI", "FAM", ...), None if unknown."""
        p = normalize_pointer(pointer)
        if p is None or p not in self._handles:
            return None
        return self._tags.get(p, "")

    def handle_for(self, pointer: Optional[str], tag: Optional[str] = None) -> Optional[str]:
        """
        Resolve a pointer value ("@F1@" or bare "F1"); None if unknown.

        With `tag`, a pointer naming a record of any other type is treated as
        unresolved.
        """
        p = normalize_pointer(pointer)
        if p is None:
            return None
        if tag is not None and self._tags.get(p) != tag.upper():
            return None
        return self._handles.get(p)

    def pointer_for(self, handle: Optional[str], tag: Optional[str] = None) -> Optional[str]:
        if handle is None:
            return None
        p = self._pointers.get(handle)
        if p is None:
            return None
        if tag is not None and self._tags.get(p) != tag.upper():
            return None
        return p

    def __contains__(self, pointer: object) -> bool:
        if not isinstance(pointer, str):
            return False
        return normalize_pointer(pointer) in self._handles

    def __len__(self) -> int:
        return len(self._handles)
