# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from gedcom_transform.loader import GedcomSyntaxError, tokenize_file, tokenize_line, tokenize_text
from gedcom_transform.utils import mock_file_path


def test_tokenize_line_simple_head() -> None:
    token = tokenize_line("0 HEAD", lineno=1)
    assert token.lineno == 1
    assert token.level == 0
    assert token.pointer is None
    assert token.tag == "HEAD"
    assert token.value == ""


def test_tokenize_line_with_pointer_and_tag_only() -> None:
    token = tokenize_line("0 @I1@ INDI", lineno=1)
    assert token.level == 0
    assert token.pointer == "@I1@"
    assert token.tag == "INDI"
    assert token.value == ""


def test_tokenize_line_with_value() -> None:
    line = "1 NOTE This is a test note"
    token = tokenize_line(line, lineno=10)
    assert token.level == 1
    assert token.pointer is None
    assert token.tag == "NOTE"
    assert token.value == "This is a test note"
    assert token.raw == line


def test_tokenize_line_pointer_value_is_not_an_xref_definition() -> None:
    token = tokenize_line("1 FAMC @F1@")
    assert token.pointer is None
    assert token.tag == "FAMC"
    assert token.value == "@F1@"


def test_tokenize_line_trims_surrounding_whitespace() -> None:
    token = tokenize_line("   2 DATE 1 JAN 1900  \r")
    assert token.level == 2
    assert token.tag == "DATE"
    assert token.value == "1 JAN 1900"


def test_tokenize_line_keeps_inner_value_spacing() -> None:
    token = tokenize_line("2 CONC  from Liverpool.")
    assert token.value == " from Liverpool."


def test_tokenize_line_with_bom_on_first_line() -> None:
    token = tokenize_line("\ufeff0 HEAD", lineno=1)
    assert token.level == 0
    assert token.tag == "HEAD"
    assert token.pointer is None


@pytest.mark.parametrize(
    "line",
    ["X HEAD", "0 ", "HEAD", "0 @I1@", "1", "-1 NAME John"],
)
def test_tokenize_line_invalid_raises(line: str) -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line(line, lineno=1)


def test_tokenize_text_drops_bad_and_blank_lines() -> None:
    text = "0 HEAD\n\nnot a gedcom line\r\n1 CHAR UTF-8\r0 TRLR\n"
    tokens = tokenize_text(text)

    assert [t.tag for t in tokens] == ["HEAD", "CHAR", "TRLR"]
    # Line numbers still refer to the original text
    assert [t.lineno for t in tokens] == [1, 4, 5]


def test_tokenize_file_reads_existing_mock_file() -> None:
    path = mock_file_path("family_551.ged")
    tokens = list(tokenize_file(path))

    assert tokens, "Expected at least one token from mock GEDCOM file"
    assert tokens[0].level == 0
    assert tokens[0].tag == "HEAD"
    assert tokens[-1].tag == "TRLR"


def test_tokenize_file_missing_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        list(tokenize_file(tmp_path / "missing.ged"))
