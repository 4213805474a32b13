from __future__ import annotations

from typing import List, Optional

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode


def _iter_children(node):
    """Yield child GEDCOMNodes safely."""
    return getattr(node, "children", []) or []


def _child_nodes_by_tag(node, tag: str):
    return [c for c in _iter_children(node) if getattr(c, "tag", None) == tag]


def _first_child_value(node, tag: str) -> Optional[str]:
    for c in _iter_children(node):
        if getattr(c, "tag", None) == tag:
            return getattr(c, "value", None)
    return None


def _expect_tag(node: GEDCOMNode, *tags: str) -> None:
    if getattr(node, "tag", None) not in tags:
        raise ValueError(f"Expected {'/'.join(tags)} node, got {getattr(node, 'tag', None)}")


def _resolve_all(
    ctx: DecodeContext,
    nodes: List[GEDCOMNode],
    tag: str,
    unique: bool = True,
) -> List[str]:
    """
    Resolve pointer-valued children in order, keeping only pointers to
    records of type `tag`.

    Unresolved pointers are skipped. With `unique`, repeats collapse to the
    first occurrence.
    """
    handles: List[str] = []
    for node in nodes:
        handle = ctx.resolve(node.value, tag)
        if handle is None or (unique and handle in handles):
            continue
        handles.append(handle)
    return handles
