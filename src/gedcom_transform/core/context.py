from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from gedcom_transform.identity.uuid_factory import (
    HandleFactory,
    IdAllocator,
    new_handle,
    sequential_id_from_pointer,
)
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.loader.tree_builder import GEDCOMTree
from gedcom_transform.registry.reference_table import ReferenceTable


def explicit_gramps_id(node: GEDCOMNode, prefix: str) -> Optional[str]:
    """
    The id a record carries itself: its `_UID` value verbatim, else the
    numeric part of its xref ("@I12@" -> "I0012"). None if it has neither.
    """
    uid = node.first_value("_UID").strip()
    if uid:
        return uid
    return sequential_id_from_pointer(node.pointer, prefix)


@dataclass
class DecodeContext:
    """
    Per-parse state shared by the entity decoders.

    Built once the forest and the reference table are complete; never shared
    between parse calls.
    """

    tree: GEDCOMTree
    refs: ReferenceTable
    allocator: IdAllocator = field(default_factory=IdAllocator)
    handle_factory: HandleFactory = new_handle

    def resolve(self, value: Optional[str], tag: Optional[str] = None) -> Optional[str]:
        """
        Handle for a pointer value such as "@F1@"; None when unresolved or,
        with `tag`, when the pointer names a record of another type.
        """
        return self.refs.handle_for(value, tag)

    def handle_for_record(self, node: GEDCOMNode) -> str:
        # Only the first definition of an xref owns the table's handle.
        if node.pointer and self.tree.find_by_pointer(node.pointer) is node:
            handle = self.refs.handle_for(node.pointer)
            if handle:
                return handle
        return self.handle_factory()

    def gramps_id_for(self, node: GEDCOMNode, prefix: str) -> str:
        return explicit_gramps_id(node, prefix) or self.allocator.allocate(prefix)
