# src/gedcom_transform/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from .tokenizer import Token
from .segmenter import GEDCOMNode, segment_records


@dataclass
class GEDCOMTree:
    """
    The record forest of one GEDCOM text.

    `records` holds every level-0 node in document order, including HEAD,
    TRLR and record types nothing decodes. Lookups only ever see level-0
    records: cross-references in GEDCOM always target a whole record.
    """

    records: List[GEDCOMNode]

    _by_pointer: Optional[Dict[str, GEDCOMNode]] = field(default=None, init=False, repr=False)
    _by_tag: Optional[Dict[str, List[GEDCOMNode]]] = field(default=None, init=False, repr=False)

    def _index(self) -> None:
        by_pointer: Dict[str, GEDCOMNode] = {}
        by_tag: Dict[str, List[GEDCOMNode]] = {}

        for record in self.records:
            # a repeated xref keeps its first record
            if record.pointer:
                by_pointer.setdefault(record.pointer, record)
            if record.tag:
                by_tag.setdefault(record.tag.upper(), []).append(record)

        self._by_pointer = by_pointer
        self._by_tag = by_tag

    def find_by_pointer(self, pointer: Optional[str]) -> Optional[GEDCOMNode]:
        """Record defined as `pointer` (e.g. '@I1@'), or None."""
        if not pointer:
            return None
        if self._by_pointer is None:
            self._index()
        return self._by_pointer.get(pointer)

    def find_records_by_tag(self, tag: str) -> List[GEDCOMNode]:
        """Level-0 records with `tag`, matched case-insensitively."""
        if not tag:
            return []
        if self._by_tag is None:
            self._index()
        return list(self._by_tag.get(tag.upper(), []))

    def all_tags(self) -> List[str]:
        return sorted({rec.tag for rec in self.records if rec.tag})

    def iter_nodes(self) -> Iterator[GEDCOMNode]:
        """Every node of every record, depth-first."""
        for root in self.records:
            yield from root.iter_subtree()

    def __repr__(self) -> str:
        return f"<GEDCOMTree records={len(self.records)}>"


def build_tree(tokens: Iterable[Token]) -> GEDCOMTree:
    """
    tokens -> GEDCOMTree

    The whole forest exists before any cross-reference is resolved, which is
    what lets a FAMC point at a family defined further down the file.
    """
    return GEDCOMTree(records=segment_records(tokens))
