# src/gedcom_transform/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_transform.loader import (
        Token,
        GedcomSyntaxError,
        GEDCOMNode,
        GEDCOMTree,
        tokenize_text,
        tokenize_line,
        build_tree,
        reconstruct_values,
    )
"""

from __future__ import annotations

from .tokenizer import (
    GedcomSyntaxError,
    Token,
    tokenize_file,
    tokenize_line,
    tokenize_lines,
    tokenize_text,
)
from .segmenter import GEDCOMNode, segment_records
from .tree_builder import GEDCOMTree, build_tree
from .value_reconstructor import continued_value, reconstruct_values


__all__ = [
    "Token",
    "GedcomSyntaxError",
    "GEDCOMNode",
    "GEDCOMTree",
    "tokenize_file",
    "tokenize_line",
    "tokenize_lines",
    "tokenize_text",
    "segment_records",
    "build_tree",
    "continued_value",
    "reconstruct_values",
]
