"""
encoders.py
Entity -> GEDCOM line encoders.

Each encoder mirrors its decoder in ``gedcom_transform.registry`` and returns
the record's lines, level-0 line first. Cross-references go through the
generator's ReferenceTable (handle -> "@I0001@"); handles that have no xref
in this document are left out rather than emitted dangling.
"""

from __future__ import annotations

import mimetypes
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, List, Optional

from gedcom_transform.identity.uuid_factory import normalize_pointer
from gedcom_transform.registry.entities import (
    Document,
    EventSummary,
    Family,
    Gender,
    Media,
    Note,
    Person,
    Repository,
    Source,
)
from gedcom_transform.registry.names import format_name
from gedcom_transform.registry.reference_table import ReferenceTable

# Everything the tokenizer treats as a line end
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

SEX_LETTERS: Dict[Gender, str] = {
    Gender.FEMALE: "F",
    Gender.MALE: "M",
    Gender.UNKNOWN: "U",
}


@dataclass(frozen=True)
class EncodeOptions:
    """
    version: "5.5.1" or "7.0"
    max_line_length: longest line to emit before splitting with CONC;
        None disables splitting (7.0 has no CONC).
    """
    version: str = "5.5.1"
    max_line_length: Optional[int] = 255


# ----------------------------------------------------------------------
# Line helpers
# ----------------------------------------------------------------------

def format_line(level: int, tag: str, value: str = "", pointer: Optional[str] = None) -> str:
    """
    One GEDCOM line. `value` must fit on a single line: any line break left
    in it is folded to a space. Multi-line text goes through `value_lines`.
    """
    value = _LINE_BREAK_RE.sub(" ", value or "")
    head = f"{level} {pointer} {tag}" if pointer else f"{level} {tag}"
    return f"{head} {value}" if value else head


def _is_space(ch: str) -> bool:
    return ch.isspace()


def _split_for_conc(text: str, first_room: int, room: int) -> List[str]:
    """
    Cut `text` into pieces no longer than the available room.

    Cuts never land next to whitespace: the tokenizer trims line ends, so a
    piece ending or starting in a space would lose it. Text with no safe cut
    point is left whole.
    """
    pieces: List[str] = []
    limit = first_room

    while len(text) > limit > 0:
        cut = limit
        while cut > 0 and (_is_space(text[cut - 1]) or _is_space(text[cut])):
            cut -= 1
        if cut == 0:
            break
        pieces.append(text[:cut])
        text = text[cut:]
        limit = room

    pieces.append(text)
    return pieces


def value_lines(
    level: int,
    tag: str,
    value: str,
    options: EncodeOptions,
    pointer: Optional[str] = None,
) -> List[str]:
    """
    Encode a possibly multi-line value.

    Segments after the first line break (\n, \r\n or a lone \r) become CONT
    lines one level down; in
    5.5.1 segments longer than the line limit continue with CONC. This is the
    exact inverse of `continued_value` on the decode side.
    """
    segments = _LINE_BREAK_RE.split(value)
    lines: List[str] = []

    for idx, segment in enumerate(segments):
        if idx == 0:
            line_level, line_tag, line_pointer = level, tag, pointer
        else:
            line_level, line_tag, line_pointer = level + 1, "CONT", None

        pieces = [segment]
        if options.max_line_length:
            first_room = options.max_line_length - len(format_line(line_level, line_tag, "x", line_pointer)) + 1
            conc_room = options.max_line_length - len(format_line(level + 1, "CONC", "x")) + 1
            pieces = _split_for_conc(segment, first_room, conc_room)

        lines.append(format_line(line_level, line_tag, pieces[0], line_pointer))
        lines.extend(format_line(level + 1, "CONC", piece) for piece in pieces[1:])

    return lines


def _uid_line(gramps_id: str, xref: str) -> str:
    # Entities without a sequential id take the one their xref implies.
    uid = gramps_id or (normalize_pointer(xref) or "").strip("@")
    return format_line(1, "_UID", uid)


def _event_lines(tag: str, event: EventSummary, options: EncodeOptions) -> List[str]:
    if event.is_empty():
        return []
    lines = [format_line(1, tag)]
    if event.date:
        lines.extend(value_lines(2, "DATE", event.date, options))
    if event.place:
        lines.extend(value_lines(2, "PLAC", event.place, options))
    return lines


def _media_form(path: str, version: str) -> Optional[str]:
    suffix = PurePosixPath(path.replace("\\", "/")).suffix
    if not suffix:
        return None
    if version == "7.0":
        mime, _ = mimetypes.guess_type(f"file{suffix.lower()}")
        return mime
    return suffix.lstrip(".").lower()


# ----------------------------------------------------------------------
# Entity encoders
# ----------------------------------------------------------------------

def encode_person(
    person: Person,
    refs: ReferenceTable,
    document: Document,
    options: EncodeOptions,
) -> List[str]:
    """
    INDI record. FAMS or FAMC is chosen per family from whether the person
    is one of its parents; links to families missing from `document` are dropped.
    """
    xref = refs.pointer_for(person.handle, "INDI")
    lines = [format_line(0, "INDI", pointer=xref)]

    name = person.primary_name
    if name.first_name or name.surname or name.suffix:
        lines.append(format_line(1, "NAME", format_name(name)))
        if name.first_name:
            lines.append(format_line(2, "GIVN", name.first_name))
        if name.surname:
            lines.append(format_line(2, "SURN", name.surname))

    lines.append(format_line(1, "SEX", SEX_LETTERS.get(person.gender, "U")))

    lines.extend(_event_lines("BIRT", person.birth, options))
    lines.extend(_event_lines("DEAT", person.death, options))

    seen = set()
    for family_handle in person.family_list:
        fam_xref = refs.pointer_for(family_handle, "FAM")
        family = document.get_family(family_handle)
        if fam_xref is None or family is None or family_handle in seen:
            continue
        seen.add(family_handle)
        tag = "FAMS" if family.is_parent(person.handle) else "FAMC"
        lines.append(format_line(1, tag, fam_xref))

    lines.append(_uid_line(person.gramps_id, xref or ""))
    return lines


def encode_family(family: Family, refs: ReferenceTable, options: EncodeOptions) -> List[str]:
    xref = refs.pointer_for(family.handle, "FAM")
    lines = [format_line(0, "FAM", pointer=xref)]

    husband = refs.pointer_for(family.father_handle, "INDI")
    if husband:
        lines.append(format_line(1, "HUSB", husband))

    wife = refs.pointer_for(family.mother_handle, "INDI")
    if wife:
        lines.append(format_line(1, "WIFE", wife))

    for child_handle in family.child_ref_list:
        child = refs.pointer_for(child_handle, "INDI")
        if child:
            lines.append(format_line(1, "CHIL", child))

    lines.append(_uid_line(family.gramps_id, xref or ""))
    return lines


def encode_source(source: Source, refs: ReferenceTable, options: EncodeOptions) -> List[str]:
    xref = refs.pointer_for(source.handle)
    lines = [format_line(0, "SOUR", pointer=xref)]
    if source.title:
        lines.extend(value_lines(1, "TITL", source.title, options))
    if source.author:
        lines.extend(value_lines(1, "AUTH", source.author, options))
    lines.append(_uid_line(source.gramps_id, xref or ""))
    return lines


def encode_repository(repo: Repository, refs: ReferenceTable, options: EncodeOptions) -> List[str]:
    xref = refs.pointer_for(repo.handle)
    lines = [format_line(0, "REPO", pointer=xref)]
    if repo.name:
        lines.extend(value_lines(1, "NAME", repo.name, options))
    lines.append(_uid_line(repo.gramps_id, xref or ""))
    return lines


def encode_note(note: Note, refs: ReferenceTable, options: EncodeOptions) -> List[str]:
    """First text segment inline on the NOTE record line, the rest as CONT."""
    xref = refs.pointer_for(note.handle)
    lines = value_lines(0, "NOTE", note.text or "", options, pointer=xref)
    lines.append(_uid_line(note.gramps_id, xref or ""))
    return lines


def encode_media(media: Media, refs: ReferenceTable, options: EncodeOptions) -> List[str]:
    xref = refs.pointer_for(media.handle)
    lines = [format_line(0, "OBJE", pointer=xref)]

    if media.path:
        lines.extend(value_lines(1, "FILE", media.path, options))
        form = _media_form(media.path, options.version)
        if form:
            lines.append(format_line(2, "FORM", form))
        if media.desc:
            lines.extend(value_lines(2, "TITL", media.desc, options))
    elif media.desc:
        lines.extend(value_lines(1, "TITL", media.desc, options))

    lines.append(_uid_line(media.gramps_id, xref or ""))
    return lines
