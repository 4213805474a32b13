from __future__ import annotations

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.registry.entities import Repository
from gedcom_transform.registry.utils import _expect_tag, _first_child_value


def build_repository(node: GEDCOMNode, ctx: DecodeContext) -> Repository:
    _expect_tag(node, "REPO")

    return Repository(
        handle=ctx.handle_for_record(node),
        gramps_id=ctx.gramps_id_for(node, "R"),
        name=_first_child_value(node, "NAME") or "",
    )
