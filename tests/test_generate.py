from datetime import date

import pytest

from gedcom_transform import (
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
    UnsupportedVersionError,
    generate,
    parse,
)
from gedcom_transform.exporter.encoders import EncodeOptions, value_lines

TODAY = date(2026, 10, 19)


def small_document():
    father = Person(
        handle="p1",
        gramps_id="I0001",
        gender=Gender.MALE,
        primary_name=PrimaryName(first_name="John", surname_list=[Surname("Smith")], call="John"),
        birth=EventSummary(date="1850", place="Boston"),
        family_list=["f1"],
    )
    child = Person(
        handle="p2",
        gramps_id="I0002",
        primary_name=PrimaryName(first_name="Ann", surname_list=[Surname("Smith")], suffix="Jr."),
        family_list=["f1"],
    )
    family = Family(handle="f1", gramps_id="F0001", father_handle="p1", child_ref_list=["p2"])
    return Document(
        people=[father, child],
        families=[family],
        sources=[Source(handle="s1", gramps_id="S0001", title="Census", author="Bureau")],
        repositories=[Repository(handle="r1", gramps_id="R0001", name="Archive")],
        notes=[Note(handle="n1", gramps_id="N0001", text="Line1\nLine2")],
        media=[Media(handle="m1", gramps_id="O0001", path="photos/a.jpg", desc="Portrait")],
    )


def lines_of(text):
    assert text.endswith("\n")
    return text.split("\n")[:-1]


def test_header_551():
    lines = lines_of(generate(Document(), "5.5.1", today=TODAY))
    assert lines == [
        "0 HEAD",
        "1 SOUR gedcom-transform",
        "2 VERS 1.0.0",
        "1 GEDC",
        "2 VERS 5.5.1",
        "2 FORM LINEAGE-LINKED",
        "1 CHAR UTF-8",
        "1 DATE 19 OCT 2026",
        "0 TRLR",
    ]


def test_header_70_is_minimal():
    lines = lines_of(generate(Document(), "7.0"))
    assert lines == ["0 HEAD", "1 GEDC", "2 VERS 7.0", "0 TRLR"]


def test_header_source_override():
    text = generate(Document(), source_name="MyApp", source_version="2.1", today=TODAY)
    assert "1 SOUR MyApp\n2 VERS 2.1\n" in text


def test_record_order_and_positional_xrefs():
    lines = lines_of(generate(small_document(), today=TODAY))
    records = [line for line in lines if line.startswith("0 ")]
    assert records == [
        "0 HEAD",
        "0 @I0001@ INDI",
        "0 @I0002@ INDI",
        "0 @F0001@ FAM",
        "0 @S0001@ SOUR",
        "0 @R0001@ REPO",
        "0 @N0001@ NOTE Line1",
        "0 @O0001@ OBJE",
        "0 TRLR",
    ]


def test_person_encoding():
    text = generate(small_document(), today=TODAY)
    assert (
        "0 @I0001@ INDI\n"
        "1 NAME John /Smith/\n"
        "2 GIVN John\n"
        "2 SURN Smith\n"
        "1 SEX M\n"
        "1 BIRT\n"
        "2 DATE 1850\n"
        "2 PLAC Boston\n"
        "1 FAMS @F0001@\n"
        "1 _UID I0001\n"
    ) in text
    assert (
        "0 @I0002@ INDI\n"
        "1 NAME Ann /Smith/ Jr.\n"
        "2 GIVN Ann\n"
        "2 SURN Smith\n"
        "1 SEX U\n"
        "1 FAMC @F0001@\n"
        "1 _UID I0002\n"
    ) in text


def test_empty_events_are_not_emitted():
    text = generate(small_document(), today=TODAY)
    assert "1 DEAT" not in text


def test_family_encoding():
    text = generate(small_document(), today=TODAY)
    assert "0 @F0001@ FAM\n1 HUSB @I0001@\n1 CHIL @I0002@\n1 _UID F0001\n" in text


def test_note_continuation():
    text = generate(small_document(), today=TODAY)
    assert "0 @N0001@ NOTE Line1\n1 CONT Line2\n1 _UID N0001\n" in text

    reparsed = parse(text)
    assert reparsed.notes[0].text == "Line1\nLine2"


def test_blank_note_lines_survive():
    document = Document(notes=[Note(handle="n", gramps_id="N0001", text="a\n\n\nb\n")])
    text = generate(document)
    assert "0 @N0001@ NOTE a\n1 CONT\n1 CONT\n1 CONT b\n1 CONT\n" in text
    assert parse(text).notes[0].text == "a\n\n\nb\n"


def test_media_form_per_version():
    assert "1 FILE photos/a.jpg\n2 FORM jpg\n2 TITL Portrait\n" in generate(small_document())
    assert "1 FILE photos/a.jpg\n2 FORM image/jpeg\n2 TITL Portrait\n" in generate(small_document(), "7.0")


def test_missing_links_are_left_out():
    person = Person(handle="p1", gramps_id="I0001", family_list=["nowhere"])
    family = Family(handle="f1", gramps_id="F0001", mother_handle="ghost", child_ref_list=["p1", "ghost"])
    text = generate(Document(people=[person], families=[family]))

    assert "FAMC" not in text
    assert "FAMS" not in text
    assert "WIFE" not in text
    assert "1 CHIL @I0001@\n" in text
    assert "@ghost" not in text


def test_uid_falls_back_to_xref():
    text = generate(Document(people=[Person(handle="p1")]))
    assert "0 @I0001@ INDI\n1 SEX U\n1 _UID I0001\n" in text


def test_unsupported_version():
    with pytest.raises(UnsupportedVersionError):
        generate(Document(), "5.5")
    with pytest.raises(ValueError):
        generate(Document(), "")


def test_long_values_split_with_conc_in_551():
    title = "word " * 100 + "end"
    document = Document(sources=[Source(handle="s", gramps_id="S0001", title=title)])

    text = generate(document, "5.5.1", today=TODAY)

    assert all(len(line) <= 255 for line in lines_of(text))
    assert "2 CONC " in text
    assert parse(text).sources[0].title == title


def test_long_values_stay_whole_in_70():
    title = "word " * 100 + "end"
    document = Document(sources=[Source(handle="s", gramps_id="S0001", title=title)])

    text = generate(document, "7.0")

    assert "CONC" not in text
    assert f"1 TITL {title}\n" in text


def test_value_lines_never_cut_next_to_spaces():
    options = EncodeOptions(max_line_length=20)
    value = "aaaa bbbb cccc dddd eeee ffff"

    lines = value_lines(1, "TITL", value, options)

    assert lines[0].startswith("1 TITL ")
    pieces = [lines[0][len("1 TITL "):]] + [line[len("2 CONC "):] for line in lines[1:]]
    assert "".join(pieces) == value
    for piece in pieces:
        assert not piece.startswith(" ")
        assert not piece.endswith(" ")


def test_links_to_other_record_types_are_left_out():
    note = Note(handle="n1", gramps_id="N0001", text="hi")
    person = Person(handle="p1", gramps_id="I0001", family_list=["n1"])
    family = Family(handle="f1", gramps_id="F0001", father_handle="n1", child_ref_list=["n1", "p1"])
    text = generate(Document(people=[person], families=[family], notes=[note]))

    assert "HUSB" not in text
    assert "FAMC" not in text
    assert "1 CHIL @N0001@" not in text
    assert "0 @F0001@ FAM\n1 CHIL @I0001@\n1 _UID F0001\n" in text


def test_repeated_children_are_written_for_each_entry():
    child = Person(handle="c", gramps_id="I0002")
    family = Family(handle="f1", gramps_id="F0001", child_ref_list=["c", "c"])
    text = generate(Document(people=[child], families=[family]))

    assert "1 CHIL @I0001@\n1 CHIL @I0001@\n" in text
    reparsed = parse(text)
    assert reparsed.families[0].child_ref_list == [reparsed.people[0].handle] * 2


def test_line_breaks_in_names_fold_to_spaces():
    person = Person(
        handle="p1",
        gramps_id="I0001",
        primary_name=PrimaryName(first_name="Ann\nMarie", surname_list=[Surname("Sm\r\nith")]),
    )
    text = generate(Document(people=[person]))

    assert "1 NAME Ann Marie /Sm ith/\n2 GIVN Ann Marie\n2 SURN Sm ith\n1 SEX U\n" in text
    reparsed = parse(text).people[0]
    assert reparsed.primary_name.first_name == "Ann Marie"
    assert reparsed.primary_name.surname == "Sm ith"


def test_carriage_returns_in_notes_become_cont_lines():
    document = Document(notes=[Note(handle="n", gramps_id="N0001", text="Line1\rLine2\r\nLine3")])
    text = generate(document)

    assert "\r" not in text
    assert "0 @N0001@ NOTE Line1\n1 CONT Line2\n1 CONT Line3\n" in text
