"""
NAME value codec.

    "John /Doe/"            -> given "John", surname ["Doe"]
    "Mary Ann /Smith/ Jr."  -> given "Mary Ann", surname ["Smith"], suffix "Jr."
    "Cher"                  -> given "Cher", no surname
    "/Colleen/"             -> no given name, surname ["Colleen"]
"""

from __future__ import annotations

from gedcom_transform.registry.entities import PrimaryName, Surname


def _call_name(given: str) -> str:
    tokens = given.split()
    return tokens[0] if tokens else ""


def parse_name(value: str) -> PrimaryName:
    """
    Split a GEDCOM NAME value on its first pair of slashes.

    Text before the opening slash is the given name, text between the slashes
    the surname, text after the closing slash the suffix. A lone opening slash
    runs the surname to the end of the value. Never raises.
    """
    raw = value or ""

    if "/" not in raw:
        given = raw.strip()
        return PrimaryName(first_name=given, call=_call_name(given))

    left, _, rest = raw.partition("/")
    surname, _, suffix = rest.partition("/")

    given = left.strip()
    surname = surname.strip()

    return PrimaryName(
        first_name=given,
        surname_list=[Surname(surname=surname)] if surname else [],
        call=_call_name(given),
        suffix=suffix.strip(),
    )


def format_name(name: PrimaryName) -> str:
    """Inverse of `parse_name`: `Given /Surname/[ Suffix]`."""
    text = f"{name.first_name} /{name.surname}/"
    if name.suffix:
        text = f"{text} {name.suffix}"
    return text.strip()
