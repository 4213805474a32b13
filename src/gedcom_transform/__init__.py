"""
gedcom-transform: bidirectional GEDCOM 5.5.1 / 7.0 <-> Document transform.

    from gedcom_transform import parse, generate

    document = parse(text)
    text = generate(document, "7.0")
"""

from gedcom_transform.core.exceptions import (
    DocumentFormatError,
    MediaBundleError,
    TransformError,
    UnsupportedVersionError,
)
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
from gedcom_transform.transform import generate, parse

__version__ = "1.0.0"

__all__ = [
    "Document",
    "DocumentFormatError",
    "EventSummary",
    "Family",
    "Gender",
    "Media",
    "MediaBundleError",
    "Note",
    "Person",
    "PrimaryName",
    "Repository",
    "Source",
    "Surname",
    "TransformError",
    "UnsupportedVersionError",
    "generate",
    "parse",
]
