"""Tests for the Lark-backed IDF scanner."""

import pytest

from idfparse.exceptions import ErrorKind, IDFSyntaxError
from idfparse.parsers.scanner import Scanner


def _types(text):
    return [t.type for t in Scanner(text)]


def _values(text):
    return [str(t) for t in Scanner(text) if t.type != "EOI"]


def test_token_classes():
    text = ".BOARD_OUTLINE ECAD\n1 -2.5 'a b' \"c\"\n"
    assert _types(text) == [
        "SECTION_NAME",
        "WORD",
        "NEWLINE",
        "NUMBER",
        "NUMBER",
        "QUOTED_STRING",
        "QUOTED_STRING",
        "NEWLINE",
        "EOI",
    ]


def test_whitespace_is_skipped():
    assert _values("  a\t\tb   \n") == ["a", "b", "\n"]


def test_bare_string_punctuation():
    assert _values("R1.a/b:c?d-e_f\n") == ["R1.a/b:c?d-e_f", "\n"]


def test_numeric_run_is_not_split():
    # Shape checks happen in the value reader, the scanner keeps the run whole
    assert _values("007 3. 1e5\n") == ["007", "3.", "1e5", "\n"]


def test_full_line_comment_is_invisible():
    assert _values("# header comment\na\n# another\nb\n") == ["a", "\n", "b", "\n"]


def test_trailing_comment_consumes_line_break():
    assert _values("1 2 # note\n3\n") == ["1", "2", "3", "\n"]


def test_comment_at_end_of_input():
    assert _types("a\n# no newline") == ["WORD", "NEWLINE", "EOI"]


def test_hash_ends_bare_string():
    assert _values("abc#def\nx\n") == ["abc", "x", "\n"]


def test_quoted_string_may_span_lines():
    tokens = list(Scanner("'a\nb' c\n"))
    assert str(tokens[0]) == "'a\nb'"
    assert tokens[1].line == 2


def test_positions():
    tokens = list(Scanner("x\n  y"))
    y = tokens[2]
    assert (y.start_pos, y.line, y.column) == (4, 2, 3)

    eoi = tokens[-1]
    assert eoi.type == "EOI"
    assert (eoi.start_pos, eoi.line, eoi.column) == (5, 2, 4)


def test_empty_input_yields_only_eoi():
    tokens = list(Scanner(""))
    assert len(tokens) == 1
    assert tokens[0].type == "EOI"
    assert (tokens[0].line, tokens[0].column) == (1, 1)


@pytest.mark.parametrize("text", ["'abc\n", 'a "def\n', "'mixed\"\n"])
def test_unterminated_quote(text):
    with pytest.raises(IDFSyntaxError) as exc_info:
        list(Scanner(text))
    assert exc_info.value.kind == ErrorKind.UNTERMINATED_QUOTE


def test_unterminated_quote_position():
    with pytest.raises(IDFSyntaxError) as exc_info:
        list(Scanner("a b\nc 'open\n"))
    pos = exc_info.value.position
    assert (pos.line, pos.column, pos.offset) == (2, 3, 6)


@pytest.mark.parametrize(
    "text, column",
    [
        ("a @b\n", 3),
        ("a\r\n", 2),
        (".5\n", 1),
        ("x ;\n", 3),
        ("_name\n", 1),
    ],
)
def test_unexpected_character(text, column):
    with pytest.raises(IDFSyntaxError) as exc_info:
        list(Scanner(text))
    assert exc_info.value.kind == ErrorKind.UNEXPECTED_CHARACTER
    assert exc_info.value.position.column == column


def test_scanner_is_lazy():
    tokens = Scanner("a b\n@")
    stream = iter(tokens)
    # The bad character is only reported once the scan reaches it
    assert [next(stream).type for _ in range(3)] == ["WORD", "WORD", "NEWLINE"]
    with pytest.raises(IDFSyntaxError):
        next(stream)
