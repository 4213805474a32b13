from __future__ import annotations

from .entities import (
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
from .reference_table import ReferenceTable

__all__ = [
    "Document",
    "EventSummary",
    "Family",
    "Gender",
    "Media",
    "Note",
    "Person",
    "PrimaryName",
    "ReferenceTable",
    "Repository",
    "Source",
    "Surname",
]
