"""
transform.py
The two pure entry points of gedcom-transform.

    parse(text, version)      -> Document
    generate(document, version) -> text

Neither touches files, the network or a database; callers own all I/O.
Each call builds its own reference table and id allocator, so concurrent
calls share no mutable state.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from gedcom_transform.exporter.gedcom_writer import (
    DEFAULT_MAX_LINE_LENGTH,
    DEFAULT_SOURCE_NAME,
    DEFAULT_SOURCE_VERSION,
    generate_gedcom,
)
from gedcom_transform.identity.uuid_factory import HandleFactory, IdAllocator, new_handle
from gedcom_transform.loader.tokenizer import tokenize_text
from gedcom_transform.loader.tree_builder import build_tree
from gedcom_transform.logging import get_logger
from gedcom_transform.registry.build_registry import build_document
from gedcom_transform.registry.entities import Document

log = get_logger(__name__)


def parse(
    text: str,
    version: str = "5.5.1",
    *,
    handle_factory: HandleFactory = new_handle,
    allocator: Optional[IdAllocator] = None,
) -> Document:
    """
    Parse GEDCOM 5.5.1 / 7.0 text into a Document.

    Never fails on malformed input: unparseable and orphaned lines are
    dropped, unresolved cross-references are left out, missing fields decode
    to empty defaults. `version` is informational; both versions share one
    grammar and dispatch table.

    Args:
        text: the whole GEDCOM document, already decoded to str.
        version: declared GEDCOM version of `text`.
        handle_factory: source of fresh entity handles (uuid4 hex by default).
        allocator: id allocator for records carrying neither _UID nor a
            numbered xref; a fresh one per call by default.
    """
    tokens = tokenize_text(text)
    tree = build_tree(tokens)
    log.debug("Parsed %d tokens into %d records", len(tokens), len(tree.records))
    return build_document(
        tree,
        version=version,
        handle_factory=handle_factory,
        allocator=allocator,
    )


def generate(
    document: Document,
    version: str = "5.5.1",
    *,
    source_name: str = DEFAULT_SOURCE_NAME,
    source_version: str = DEFAULT_SOURCE_VERSION,
    max_line_length: Optional[int] = DEFAULT_MAX_LINE_LENGTH,
    today: Optional[date] = None,
) -> str:
    """
    Generate GEDCOM text for `document`.

    Xrefs are assigned positionally per record type and are not stable
    across regenerations; `_UID` lines carry each entity's sequential id.

    Raises:
        UnsupportedVersionError: if `version` is neither "5.5.1" nor "7.0".
    """
    return generate_gedcom(
        document,
        version,
        source_name=source_name,
        source_version=source_version,
        max_line_length=max_line_length,
        today=today,
    )
