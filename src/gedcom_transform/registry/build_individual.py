from __future__ import annotations

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.registry.entities import EventSummary, Gender, Person
from gedcom_transform.registry.names import parse_name
from gedcom_transform.registry.utils import (
    _expect_tag,
    _first_child_value,
    _iter_children,
    _resolve_all,
)

SEX_CODES = {
    "M": Gender.MALE,
    "F": Gender.FEMALE,
}


def decode_sex(value: str | None) -> Gender:
    """`M` -> male, `F` -> female, anything else (or nothing) -> unknown."""
    return SEX_CODES.get((value or "").strip().upper(), Gender.UNKNOWN)


def decode_event(node: GEDCOMNode | None) -> EventSummary:
    """First DATE and first PLAC beneath a BIRT/DEAT node, both verbatim."""
    if node is None:
        return EventSummary()
    return EventSummary(
        date=_first_child_value(node, "DATE") or "",
        place=_first_child_value(node, "PLAC") or "",
    )


def build_individual(node: GEDCOMNode, ctx: DecodeContext) -> Person:
    """
    Build a Person from a GEDCOMNode with tag 'INDI'.

    Best-effort: missing NAME/SEX/events decode to empty defaults and family
    pointers that resolve nowhere, or to a non-FAM record, are left out of
    `family_list`.
    """
    _expect_tag(node, "INDI")

    person = Person(
        handle=ctx.handle_for_record(node),
        gramps_id=ctx.gramps_id_for(node, "I"),
    )

    name_node = node.find_first("NAME")
    if name_node is not None:
        person.primary_name = parse_name(name_node.value)

    person.gender = decode_sex(_first_child_value(node, "SEX"))
    person.birth = decode_event(node.find_first("BIRT"))
    person.death = decode_event(node.find_first("DEAT"))

    family_links = [c for c in _iter_children(node) if c.tag in ("FAMC", "FAMS")]
    person.family_list = _resolve_all(ctx, family_links, "FAM")

    return person
