"""
Exporter package.

Re-exports the generate-direction entry points: GEDCOM text, GEDZIP
archives and the JSON boundary for Documents.
"""

from __future__ import annotations

from .gedcom_writer import SUPPORTED_VERSIONS, generate_gedcom
from .gedzip import generate_gedzip
from .json_exporter import (
    document_from_dict,
    document_to_dict,
    export_document_json,
    load_document_json,
    serialize_document_to_json_string,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "document_from_dict",
    "document_to_dict",
    "export_document_json",
    "generate_gedcom",
    "generate_gedzip",
    "load_document_json",
    "serialize_document_to_json_string",
]
