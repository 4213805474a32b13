from __future__ import annotations

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.registry.entities import Media
from gedcom_transform.registry.utils import _expect_tag, _first_child_value


def build_media_object(node: GEDCOMNode, ctx: DecodeContext) -> Media:
    """
    Build a Media entity from a top-level OBJE record.

    FILE -> path. The description is a TITL directly on the record or, as
    5.5.1 and 7.0 both place it, a TITL under the first FILE.
    """
    _expect_tag(node, "OBJE")

    media = Media(
        handle=ctx.handle_for_record(node),
        gramps_id=ctx.gramps_id_for(node, "O"),
    )

    file_node = node.find_first("FILE")
    if file_node is not None:
        media.path = file_node.value or ""

    title = _first_child_value(node, "TITL")
    if title is None and file_node is not None:
        title = _first_child_value(file_node, "TITL")
    media.desc = title or ""

    return media
