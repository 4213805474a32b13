# src/gedcom_transform/loader/value_reconstructor.py

"""
Value Reconstructor: Handles GEDCOM CONT / CONC tags.

Rules (GEDCOM 5.5.1 / 7.0):
    - CONC: Append text directly to the parent's value.
            No newline added.

    - CONT: Append a newline + the text.
            Always produces a new line in the logical output.

Examples:
    Parent NOTE value: "Line one"
    Child CONC value:  " and more"
        -> "Line one and more"

    Child CONT value:  "Second line"
        -> "Line one and more\nSecond line"

The encoder side lives in ``gedcom_transform.exporter.encoders`` and must
stay the exact inverse of ``continued_value``.
"""

from __future__ import annotations

from typing import List

from .segmenter import GEDCOMNode

CONTINUATION_TAGS = frozenset({"CONT", "CONC"})


def continued_value(node: GEDCOMNode) -> str:
    """
    Return the node's value with its CONT/CONC children folded in.

    Does not mutate the node.
    """
    parts: List[str] = [node.value or ""]

    for child in node.children:
        if child.tag == "CONT":
            parts.append("\n")
            parts.append(child.value or "")
        elif child.tag == "CONC":
            parts.append(child.value or "")

    return "".join(parts)


def _reconstruct_node(node: GEDCOMNode) -> None:
    """
    Recursively reconstruct values for this node and its children.
    Mutates the node in place.

    After reconstruction:
      - node.value has the final reconstructed text
      - CONC and CONT child nodes are removed
      - Other children remain and are also processed
    """
    node.value = continued_value(node)

    kept: List[GEDCOMNode] = []
    for child in node.children:
        if child.tag in CONTINUATION_TAGS:
            continue
        _reconstruct_node(child)
        kept.append(child)

    node.children = kept


def reconstruct_values(records: List[GEDCOMNode]) -> List[GEDCOMNode]:
    """
    Reconstruct all values for every top-level record and its descendants.

    Returns the same list (records), after in-place reconstruction; structure
    is unchanged except for removal of CONC/CONT nodes.
    """
    for rec in records:
        _reconstruct_node(rec)

    return records
