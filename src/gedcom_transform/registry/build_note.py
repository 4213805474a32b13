from __future__ import annotations

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.registry.entities import Note
from gedcom_transform.registry.utils import _expect_tag


def build_note(node: GEDCOMNode, ctx: DecodeContext) -> Note:
    """
    Build a Note from a top-level NOTE (5.5.1) or SNOTE (7.0) record.

    Expects CONT/CONC already folded into the record's value by
    `reconstruct_values`: the text is the value, newlines included.
    """
    _expect_tag(node, "NOTE", "SNOTE")

    return Note(
        handle=ctx.handle_for_record(node),
        gramps_id=ctx.gramps_id_for(node, "N"),
        text=node.value or "",
    )
