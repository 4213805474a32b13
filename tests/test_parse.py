import itertools

import pytest

from gedcom_transform import Gender, parse
from gedcom_transform.identity.uuid_factory import IdAllocator
from gedcom_transform.utils.pathing import mock_file_path


def counter_handles():
    counter = itertools.count(1)
    return lambda: f"h{next(counter)}"


@pytest.fixture(scope="module")
def document_551():
    text = mock_file_path("family_551.ged").read_text(encoding="utf-8")
    return parse(text, "5.5.1")


@pytest.fixture(scope="module")
def document_70():
    text = mock_file_path("family_70.ged").read_text(encoding="utf-8")
    return parse(text, "7.0")


def by_id(entities):
    return {e.gramps_id: e for e in entities}


def test_counts_551(document_551):
    assert document_551.counts() == {
        "people": 4,
        "families": 1,
        "sources": 1,
        "repositories": 1,
        "notes": 1,
        "media": 1,
    }


def test_people_decode(document_551):
    people = by_id(document_551.people)
    assert set(people) == {"I0001", "I0002", "I0042", "I0004"}

    john = people["I0001"]
    assert john.primary_name.first_name == "John"
    assert john.primary_name.surname == "Smith"
    assert john.gender is Gender.MALE
    assert john.birth.date == "12 MAR 1850"
    assert john.birth.place == "Boston, Massachusetts, USA"
    assert john.death.date == "3 JAN 1920"

    mary = people["I0002"]
    assert mary.gender is Gender.FEMALE
    assert mary.primary_name.call == "Mary"
    assert mary.birth.date == "ABT 1855"
    assert mary.birth.place == ""

    robert = people["I0042"]
    assert robert.primary_name.first_name == "Robert James"
    assert robert.primary_name.suffix == "Jr."

    cher = people["I0004"]
    assert cher.primary_name.first_name == "Cher"
    assert cher.primary_name.surname_list == []
    assert cher.gender is Gender.UNKNOWN


def test_links_resolve_and_dangling_pointers_drop(document_551):
    people = by_id(document_551.people)
    family = document_551.families[0]

    assert family.gramps_id == "F0001"
    assert family.father_handle == people["I0001"].handle
    assert family.mother_handle == people["I0002"].handle
    # @I404@ is never defined
    assert family.child_ref_list == [people["I0042"].handle, people["I0004"].handle]

    # @F99@ is never defined
    assert people["I0042"].family_list == [family.handle]
    assert people["I0001"].family_list == [family.handle]


def test_handles_are_unique(document_551):
    handles = [
        e.handle
        for bucket in (
            document_551.people,
            document_551.families,
            document_551.sources,
            document_551.repositories,
            document_551.notes,
            document_551.media,
        )
        for e in bucket
    ]
    assert len(handles) == len(set(handles))


def test_continuations_fold_into_text(document_551):
    assert document_551.sources[0].title == "Parish Register of St. Mary's, Boston"
    assert document_551.sources[0].author == "Church of St. Mary"
    assert document_551.repositories[0].name == "Massachusetts State Archives"
    assert document_551.notes[0].text == "The Smith family arrived from Liverpool.\nThey settled in Boston."


def test_media_decode(document_551):
    media = document_551.media[0]
    assert media.gramps_id == "O0001"
    assert media.path == "photos/smith_family.jpg"
    assert media.desc == "Smith family portrait"


def test_gedcom_70_shared_note_and_links(document_70):
    assert document_70.counts()["notes"] == 1
    assert document_70.notes[0].text == "First line of a shared note\n\nThird line after a blank one"

    people = by_id(document_70.people)
    family = document_70.families[0]
    assert family.father_handle is None
    assert family.mother_handle == people["I0002"].handle
    assert family.child_ref_list == [people["I0001"].handle]
    assert document_70.media[0].desc == "Portrait of Ada"


def test_forward_references_resolve():
    text = (
        "0 HEAD\n"
        "0 @F1@ FAM\n"
        "1 HUSB @I1@\n"
        "1 CHIL @I2@\n"
        "0 @I1@ INDI\n"
        "1 FAMS @F1@\n"
        "0 @I2@ INDI\n"
        "1 FAMC @F1@\n"
        "0 TRLR\n"
    )
    document = parse(text)
    family = document.families[0]
    father, child = document.people

    assert family.father_handle == father.handle
    assert family.child_ref_list == [child.handle]
    assert child.family_list == [family.handle]


def test_malformed_and_orphan_lines_are_dropped():
    clean = "0 HEAD\n0 @I1@ INDI\n1 NAME Ann /Lee/\n1 SEX F\n0 TRLR\n"
    noisy = (
        "1 NAME Orphan /Line/\n"
        "0 HEAD\n"
        "this is not gedcom\n"
        "0 @I1@ INDI\n"
        "1 NAME Ann /Lee/\n"
        "@@ garbage\n"
        "1 SEX F\n"
        "0 TRLR\n"
    )

    assert parse(noisy, handle_factory=counter_handles()) == parse(clean, handle_factory=counter_handles())


def test_empty_and_header_only_input():
    assert parse("").counts() == parse("0 HEAD\n0 TRLR\n").counts()
    assert sum(parse("").counts().values()) == 0


def test_unknown_top_level_tags_are_ignored():
    document = parse("0 HEAD\n0 @U1@ SUBM\n1 NAME Desk\n0 @X1@ _CUSTOM\n0 @I1@ INDI\n0 TRLR\n")
    assert document.counts()["people"] == 1
    assert sum(document.counts().values()) == 1


def test_records_without_number_get_allocated_ids():
    text = (
        "0 @I5@ INDI\n"
        "0 @ABC@ INDI\n"
        "0 INDI\n"
        "0 @X9@ INDI\n"
        "1 _UID I0003\n"
    )
    ids = [p.gramps_id for p in parse(text).people]

    assert ids == ["I0005", "I0006", "I0007", "I0003"]


def test_caller_supplied_allocator_is_used():
    allocator = IdAllocator()
    allocator.reserve("N0100")

    document = parse("0 @NOTE_A@ NOTE hello\n", allocator=allocator)

    assert document.notes[0].gramps_id == "N0101"


def test_crlf_and_bom_input():
    text = "\ufeff0 HEAD\r\n0 @I1@ INDI\r\n1 NAME Ann /Lee/\r\n0 TRLR\r\n"
    person = parse(text).people[0]
    assert person.primary_name.surname == "Lee"


def test_duplicate_xref_first_definition_owns_links():
    text = (
        "0 @I1@ INDI\n"
        "1 NAME First /One/\n"
        "0 @I1@ INDI\n"
        "1 NAME Second /One/\n"
        "0 @F1@ FAM\n"
        "1 HUSB @I1@\n"
    )
    document = parse(text)
    first, second = document.people

    assert first.handle != second.handle
    assert document.families[0].father_handle == first.handle


def test_links_only_resolve_to_matching_record_types():
    document = parse("0 @N1@ NOTE hi\n0 @F1@ FAM\n1 HUSB @N1@\n1 CHIL @F1@\n0 @I1@ INDI\n1 FAMC @N1@\n")
    family = document.families[0]

    assert family.father_handle is None
    assert family.child_ref_list == []
    assert document.people[0].family_list == []
