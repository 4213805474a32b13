import itertools

import pytest

from gedcom_transform.core.context import DecodeContext
from gedcom_transform.loader.segmenter import GEDCOMNode
from gedcom_transform.loader.value_reconstructor import reconstruct_values
from gedcom_transform.loader.tree_builder import GEDCOMTree
from gedcom_transform.registry.build_note import build_note
from gedcom_transform.registry.reference_table import ReferenceTable


def make_node(tag, value="", pointer=None, children=None, level=0):
    return GEDCOMNode(
        level=level,
        tag=tag,
        value=value,
        pointer=pointer,
        children=children or [],
    )


def make_context(*records):
    counter = itertools.count(1)
    factory = lambda: f"h{next(counter)}"  # noqa: E731
    tree = GEDCOMTree(records=reconstruct_values(list(records)))
    refs = ReferenceTable.from_records(tree.records, handle_factory=factory)
    return DecodeContext(tree=tree, refs=refs, handle_factory=factory)


def test_build_note_basic_and_multiline():
    note = make_node(
        "NOTE",
        pointer="@N1@",
        value="This is the first line.",
        children=[
            make_node("CONT", "This is a second line.", level=1),
            make_node("CONC", " And this is appended.", level=1),
            make_node("CONT", "Third line.", level=1),
            make_node("_FOO", "bar", level=1),
        ],
    )

    entity = build_note(note, make_context(note))

    assert entity.handle == "h1"
    assert entity.gramps_id == "N0001"
    assert entity.text == (
        "This is the first line.\n"
        "This is a second line. And this is appended.\n"
        "Third line."
    )


def test_build_note_without_inline_text():
    note = make_node("NOTE", pointer="@N2@", children=[make_node("CONT", "Only line", level=1)])
    assert build_note(note, make_context(note)).text == "\nOnly line"


def test_build_note_accepts_shared_note_tag():
    note = make_node("SNOTE", pointer="@N3@", value="Shared")
    assert build_note(note, make_context(note)).text == "Shared"


def test_build_note_rejects_other_tags():
    node = make_node("INDI", pointer="@I1@")
    with pytest.raises(ValueError):
        build_note(node, make_context(node))


def test_build_note_reads_folded_value():
    # CONT/CONC children are folded away before decoders run
    note = make_node("NOTE", pointer="@N4@", value="one\ntwo")
    ctx = make_context(note)
    assert note.children == []
    assert build_note(note, ctx).text == "one\ntwo"
