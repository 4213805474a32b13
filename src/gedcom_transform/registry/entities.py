from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"
    UNKNOWN = "unknown"


# -----------------------------
# Small atoms
# -----------------------------

@dataclass(slots=True)
class Surname:
    surname: str = ""


@dataclass(slots=True)
class PrimaryName:
    """
    A person's preferred name, decoded from `NAME Given /Surname/ Suffix`.

    `call` is the name the person went by; it defaults to the first word of
    the given name.
    """
    first_name: str = ""
    surname_list: List[Surname] = field(default_factory=list)
    call: str = ""
    suffix: str = ""

    @property
    def surname(self) -> str:
        return " ".join(s.surname for s in self.surname_list if s.surname)


@dataclass(slots=True)
class EventSummary:
    """Birth or death summary. Date strings are opaque, never parsed here."""
    date: str = ""
    place: str = ""

    def is_empty(self) -> bool:
        return not (self.date or self.place)


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class Person:
    handle: str
    gramps_id: str = ""
    gender: Gender = Gender.UNKNOWN
    primary_name: PrimaryName = field(default_factory=PrimaryName)
    birth: EventSummary = field(default_factory=EventSummary)
    death: EventSummary = field(default_factory=EventSummary)

    # Families the person is a child or a parent in, by handle
    family_list: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Family:
    handle: str
    gramps_id: str = ""
    father_handle: Optional[str] = None
    mother_handle: Optional[str] = None
    child_ref_list: List[str] = field(default_factory=list)

    def is_parent(self, person_handle: str) -> bool:
        return person_handle in (self.father_handle, self.mother_handle)


@dataclass(slots=True)
class Source:
    handle: str
    gramps_id: str = ""
    title: str = ""
    author: str = ""


@dataclass(slots=True)
class Repository:
    handle: str
    gramps_id: str = ""
    name: str = ""


@dataclass(slots=True)
class Note:
    handle: str
    gramps_id: str = ""
    text: str = ""


@dataclass(slots=True)
class Media:
    handle: str
    gramps_id: str = ""
    path: str = ""
    desc: str = ""


# -----------------------------
# Document
# -----------------------------

@dataclass(slots=True)
class Document:
    """
    The collection-of-entities shape handed across the core's boundary.

    Order inside each list is document order on parse and drives xref
    numbering on generate.
    """
    people: List[Person] = field(default_factory=list)
    families: List[Family] = field(default_factory=list)
    sources: List[Source] = field(default_factory=list)
    repositories: List[Repository] = field(default_factory=list)
    notes: List[Note] = field(default_factory=list)
    media: List[Media] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return {
            "people": len(self.people),
            "families": len(self.families),
            "sources": len(self.sources),
            "repositories": len(self.repositories),
            "notes": len(self.notes),
            "media": len(self.media),
        }

    def get_person(self, handle: Optional[str]) -> Optional[Person]:
        """Person with `handle`, or None."""
        if handle is None:
            return None
        return next((p for p in self.people if p.handle == handle), None)

    def get_family(self, handle: Optional[str]) -> Optional[Family]:
        """Family with `handle`, or None."""
        if handle is None:
            return None
        return next((f for f in self.families if f.handle == handle), None)
