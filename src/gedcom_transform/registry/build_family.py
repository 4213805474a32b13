from __future__ import annotations

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.registry.entities import Family
from gedcom_transform.registry.utils import (
    _child_nodes_by_tag,
    _expect_tag,
    _resolve_all,
)


def build_family(node: GEDCOMNode, ctx: DecodeContext) -> Family:
    """
    Build a Family from a GEDCOMNode with tag 'FAM'.

    HUSB -> father, WIFE -> mother, each CHIL appended in order. The first
    HUSB/WIFE that resolves to an INDI record wins; pointers that resolve
    nowhere, or to any other record type, are dropped.
    """
    _expect_tag(node, "FAM")

    family = Family(
        handle=ctx.handle_for_record(node),
        gramps_id=ctx.gramps_id_for(node, "F"),
    )

    fathers = _resolve_all(ctx, _child_nodes_by_tag(node, "HUSB"), "INDI")
    mothers = _resolve_all(ctx, _child_nodes_by_tag(node, "WIFE"), "INDI")
    family.father_handle = fathers[0] if fathers else None
    family.mother_handle = mothers[0] if mothers else None

    # a child listed twice stays listed twice
    family.child_ref_list = _resolve_all(ctx, _child_nodes_by_tag(node, "CHIL"), "INDI", unique=False)

    return family
