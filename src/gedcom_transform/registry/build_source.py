from __future__ import annotations

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.registry.entities import Source
from gedcom_transform.registry.utils import _expect_tag, _first_child_value


def build_source(node: GEDCOMNode, ctx: DecodeContext) -> Source:
    """
    Build a Source from a GEDCOMNode with tag 'SOUR'.

    Handles TITL and AUTH. Long values split with CONT/CONC arrive already
    rejoined by `reconstruct_values`.
    """
    _expect_tag(node, "SOUR")

    source = Source(
        handle=ctx.handle_for_record(node),
        gramps_id=ctx.gramps_id_for(node, "S"),
    )

    source.title = _first_child_value(node, "TITL") or ""
    source.author = _first_child_value(node, "AUTH") or ""

    return source
