"""
gedcom_writer.py
Document -> GEDCOM text.

Emission order is fixed:

    HEAD, INDI..., FAM..., SOUR..., REPO..., NOTE..., OBJE..., TRLR

Xrefs are positional per type: the Nth person becomes @I000N@, the Nth
family @F000N@ and so on. Reordering the Document's lists therefore
renumbers every xref; identity survives through the `_UID` lines.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import List, Optional

from gedcom_transform.core.exceptions import UnsupportedVersionError
from gedcom_transform.exporter.encoders import (
    EncodeOptions,
    encode_family,
    encode_media,
    encode_note,
    encode_person,
    encode_repository,
    encode_source,
    format_line,
)
from gedcom_transform.identity.uuid_factory import format_xref
from gedcom_transform.logging import get_logger
from gedcom_transform.registry.entities import Document
from gedcom_transform.registry.reference_table import ReferenceTable

log = get_logger(__name__)

SUPPORTED_VERSIONS = ("5.5.1", "7.0")

DEFAULT_SOURCE_NAME = "gedcom-transform"
DEFAULT_SOURCE_VERSION = "1.0.0"
DEFAULT_MAX_LINE_LENGTH = 255

_MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")


def check_version(version: str) -> str:
    if version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersionError(
            f"Unsupported GEDCOM version {version!r}; expected one of {', '.join(SUPPORTED_VERSIONS)}"
        )
    return version


def format_gedcom_date(day: date_type) -> str:
    """GEDCOM exact date, e.g. "19 OCT 2026"."""
    return f"{day.day} {_MONTHS[day.month - 1]} {day.year}"


def header_lines(
    version: str,
    *,
    source_name: str = DEFAULT_SOURCE_NAME,
    source_version: str = DEFAULT_SOURCE_VERSION,
    today: Optional[date_type] = None,
) -> List[str]:
    lines = [format_line(0, "HEAD")]

    if version == "7.0":
        lines.append(format_line(1, "GEDC"))
        lines.append(format_line(2, "VERS", "7.0"))
        return lines

    lines.append(format_line(1, "SOUR", source_name))
    lines.append(format_line(2, "VERS", source_version))
    lines.append(format_line(1, "GEDC"))
    lines.append(format_line(2, "VERS", "5.5.1"))
    lines.append(format_line(2, "FORM", "LINEAGE-LINKED"))
    lines.append(format_line(1, "CHAR", "UTF-8"))
    lines.append(format_line(1, "DATE", format_gedcom_date(today or date_type.today())))
    return lines


def assign_xrefs(document: Document) -> ReferenceTable:
    """Positional handle -> xref assignment, one counter per record type."""
    refs = ReferenceTable()
    collections = (
        ("I", "INDI", document.people),
        ("F", "FAM", document.families),
        ("S", "SOUR", document.sources),
        ("R", "REPO", document.repositories),
        ("N", "NOTE", document.notes),
        ("O", "OBJE", document.media),
    )
    for prefix, tag, entities in collections:
        for index, entity in enumerate(entities, start=1):
            refs.assign(entity.handle, format_xref(prefix, index), tag)
    return refs


def generate_gedcom(
    document: Document,
    version: str = "5.5.1",
    *,
    source_name: str = DEFAULT_SOURCE_NAME,
    source_version: str = DEFAULT_SOURCE_VERSION,
    max_line_length: Optional[int] = DEFAULT_MAX_LINE_LENGTH,
    today: Optional[date_type] = None,
) -> str:
    """
    Encode a Document as GEDCOM text (newline-terminated).

    Raises:
        UnsupportedVersionError: if `version` is neither "5.5.1" nor "7.0".
    """
    check_version(version)

    options = EncodeOptions(
        version=version,
        max_line_length=max_line_length if version == "5.5.1" else None,
    )
    refs = assign_xrefs(document)

    lines = header_lines(
        version,
        source_name=source_name,
        source_version=source_version,
        today=today,
    )

    for person in document.people:
        lines.extend(encode_person(person, refs, document, options))
    for family in document.families:
        lines.extend(encode_family(family, refs, options))
    for source in document.sources:
        lines.extend(encode_source(source, refs, options))
    for repo in document.repositories:
        lines.extend(encode_repository(repo, refs, options))
    for note in document.notes:
        lines.extend(encode_note(note, refs, options))
    for media in document.media:
        lines.extend(encode_media(media, refs, options))

    lines.append(format_line(0, "TRLR"))

    log.debug("Generated GEDCOM %s: %d lines %s", version, len(lines), document.counts())
    return "\n".join(lines) + "\n"
