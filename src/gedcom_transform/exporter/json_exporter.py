"""
json_exporter.py
JSON boundary for Documents.

This exporter:
- Converts the Document's dataclasses to plain dictionaries (NOT strings)
- Reads the same shape back for the generate direction
- Keys are the entity field names; gender is its string value
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from gedcom_transform.core.exceptions import DocumentFormatError
from gedcom_transform.logging import get_logger
from gedcom_transform.registry.entities import (
    Document,
    EventSummary,
    Family,
    Gender,
    Media,
    Note,
    Person,
    PrimaryName,
    Repository,
    Source,
    Surname,
)

log = get_logger(__name__)

# Gramps-style integer codes are accepted on input
_GENDER_CODES = {0: Gender.FEMALE, 1: Gender.MALE, 2: Gender.UNKNOWN}


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Enums -> their value
    - Primitives pass through
    - dataclasses -> dict (recursively)
    - dict -> dict (recursively)
    - list / tuple / set -> list (recursively)
    """
    if isinstance(obj, Enum):
        return obj.value

    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if is_dataclass(obj):
        return {f.name: _to_json_compatible(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    # Last resort
    return str(obj)


def document_to_dict(document: Document) -> Dict[str, Any]:
    """Convert a Document into a JSON-safe dict."""
    return {
        "counts": document.counts(),
        **_to_json_compatible(document),
    }


# ----------------------------------------------------------------------
# Reading back
# ----------------------------------------------------------------------

def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DocumentFormatError(f"Field {key!r} must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    return _str(data, key) or None


def _str_list(data: Mapping[str, Any], key: str) -> List[str]:
    values = data.get(key) or []
    if not isinstance(values, list):
        raise DocumentFormatError(f"Field {key!r} must be a list")
    out: List[str] = []
    for item in values:
        # {"ref": handle} entries are accepted for child references
        if isinstance(item, Mapping):
            item = item.get("ref")
        if not isinstance(item, str):
            raise DocumentFormatError(f"Field {key!r} must hold handle strings")
        out.append(item)
    return out


def _handle(data: Mapping[str, Any]) -> str:
    handle = data.get("handle")
    if not isinstance(handle, str) or not handle:
        raise DocumentFormatError(f"Entity without a handle: {dict(data)!r}")
    return handle


def _gender(value: Any) -> Gender:
    if value is None:
        return Gender.UNKNOWN
    if isinstance(value, int) and not isinstance(value, bool):
        return _GENDER_CODES.get(value, Gender.UNKNOWN)
    try:
        return Gender(str(value).lower())
    except ValueError:
        raise DocumentFormatError(f"Unknown gender value: {value!r}") from None


def _event(data: Any) -> EventSummary:
    if not data:
        return EventSummary()
    if not isinstance(data, Mapping):
        raise DocumentFormatError("Event must be an object with date/place")
    return EventSummary(date=_str(data, "date"), place=_str(data, "place"))


def _primary_name(data: Any) -> PrimaryName:
    if not data:
        return PrimaryName()
    if not isinstance(data, Mapping):
        raise DocumentFormatError("primary_name must be an object")
    surnames = data.get("surname_list") or []
    if not isinstance(surnames, list):
        raise DocumentFormatError("surname_list must be a list")
    return PrimaryName(
        first_name=_str(data, "first_name"),
        surname_list=[
            Surname(surname=_str(s, "surname")) if isinstance(s, Mapping) else Surname(surname=str(s))
            for s in surnames
        ],
        call=_str(data, "call"),
        suffix=_str(data, "suffix"),
    )


def _person(data: Mapping[str, Any]) -> Person:
    return Person(
        handle=_handle(data),
        gramps_id=_str(data, "gramps_id"),
        gender=_gender(data.get("gender")),
        primary_name=_primary_name(data.get("primary_name")),
        birth=_event(data.get("birth")),
        death=_event(data.get("death")),
        family_list=_str_list(data, "family_list"),
    )


def _family(data: Mapping[str, Any]) -> Family:
    return Family(
        handle=_handle(data),
        gramps_id=_str(data, "gramps_id"),
        father_handle=_optional_str(data, "father_handle"),
        mother_handle=_optional_str(data, "mother_handle"),
        child_ref_list=_str_list(data, "child_ref_list"),
    )


def _source(data: Mapping[str, Any]) -> Source:
    return Source(
        handle=_handle(data),
        gramps_id=_str(data, "gramps_id"),
        title=_str(data, "title"),
        author=_str(data, "author"),
    )


def _repository(data: Mapping[str, Any]) -> Repository:
    return Repository(handle=_handle(data), gramps_id=_str(data, "gramps_id"), name=_str(data, "name"))


def _note(data: Mapping[str, Any]) -> Note:
    return Note(handle=_handle(data), gramps_id=_str(data, "gramps_id"), text=_str(data, "text"))


def _media(data: Mapping[str, Any]) -> Media:
    return Media(
        handle=_handle(data),
        gramps_id=_str(data, "gramps_id"),
        path=_str(data, "path"),
        desc=_str(data, "desc"),
    )


_READERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "people": _person,
    "families": _family,
    "sources": _source,
    "repositories": _repository,
    "notes": _note,
    "media": _media,
}


def document_from_dict(data: Any) -> Document:
    """
    Rebuild a Document from `document_to_dict` output (or hand-written JSON
    of the same shape). Unknown top-level keys such as "counts" are ignored.

    Raises:
        DocumentFormatError: on a structurally invalid document.
    """
    if not isinstance(data, Mapping):
        raise DocumentFormatError("Document JSON must be an object")

    document = Document()
    for key, reader in _READERS.items():
        items = data.get(key) or []
        if not isinstance(items, list):
            raise DocumentFormatError(f"{key!r} must be a list")
        for item in items:
            if not isinstance(item, Mapping):
                raise DocumentFormatError(f"Entries of {key!r} must be objects")
            getattr(document, key).append(reader(item))
    return document


# ----------------------------------------------------------------------
# Files
# ----------------------------------------------------------------------

def serialize_document_to_json_string(document: Document, indent: Optional[int] = 2) -> str:
    return json.dumps(
        document_to_dict(document),
        indent=indent,
        ensure_ascii=False,
    )


def export_document_json(document: Document, output_path: str | Path, indent: Optional[int] = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info("Exporting document JSON to: %s %s", output_path, document.counts())

    json_str = serialize_document_to_json_string(document, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)


def load_document_json(path: str | Path) -> Document:
    """Read a Document from a JSON file written by `export_document_json`."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise DocumentFormatError(f"{path}: not UTF-8 text ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise DocumentFormatError(f"{path}: invalid JSON ({exc})") from exc
    return document_from_dict(data)
