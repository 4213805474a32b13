from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from gedcom_transform.core.context import DecodeContext, explicit_gramps_id
from gedcom_transform.identity.uuid_factory import (
    ID_PREFIXES,
    HandleFactory,
    IdAllocator,
    new_handle,
)
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.loader.tree_builder import GEDCOMTree
from gedcom_transform.loader.value_reconstructor import reconstruct_values
from gedcom_transform.logging import get_logger
from gedcom_transform.registry.build_family import build_family
from gedcom_transform.registry.build_individual import build_individual
from gedcom_transform.registry.build_media_object import build_media_object
from gedcom_transform.registry.build_note import build_note
from gedcom_transform.registry.build_repository import build_repository
from gedcom_transform.registry.build_source import build_source
from gedcom_transform.registry.entities import Document
from gedcom_transform.registry.reference_table import ReferenceTable

log = get_logger(__name__)

Decoder = Callable[[GEDCOMNode, DecodeContext], object]

# Top-level tag -> (decoder, Document list it lands in)
DECODERS: Dict[str, Tuple[Decoder, str]] = {
    "INDI": (build_individual, "people"),
    "FAM": (build_family, "families"),
    "SOUR": (build_source, "sources"),
    "REPO": (build_repository, "repositories"),
    "NOTE": (build_note, "notes"),
    "SNOTE": (build_note, "notes"),
    "OBJE": (build_media_object, "media"),
}


def _reserve_explicit_ids(tree: GEDCOMTree, allocator: IdAllocator) -> None:
    for record in tree.records:
        prefix = ID_PREFIXES.get(record.tag)
        if prefix is None:
            continue
        sid = explicit_gramps_id(record, prefix)
        if sid:
            allocator.reserve(sid)


def build_document(
    tree: GEDCOMTree,
    *,
    version: str = "5.5.1",
    handle_factory: HandleFactory = new_handle,
    allocator: Optional[IdAllocator] = None,
) -> Document:
    """
    Decode a record forest into a Document.

    Passes, strictly in order:
      1. fold CONT/CONC into their parent values
      2. reference table over every level-0 xref
      3. reserve every id the records carry themselves
      4. decode each record; HEAD, TRLR, SUBM and unknown tags are skipped
    """
    reconstruct_values(tree.records)

    refs = ReferenceTable.from_records(tree.records, handle_factory=handle_factory)

    allocator = allocator if allocator is not None else IdAllocator()
    _reserve_explicit_ids(tree, allocator)

    ctx = DecodeContext(
        tree=tree,
        refs=refs,
        allocator=allocator,
        handle_factory=handle_factory,
    )

    document = Document()
    skipped: Dict[str, int] = {}

    for record in tree.records:
        entry = DECODERS.get(record.tag)
        if entry is None:
            skipped[record.tag] = skipped.get(record.tag, 0) + 1
            continue

        decoder, bucket = entry
        getattr(document, bucket).append(decoder(record, ctx))

    log.debug(
        "Decoded GEDCOM %s document %s (skipped top-level tags: %s)",
        version,
        document.counts(),
        skipped,
    )
    return document
