import pytest

from hexit.lexer import lex_source
from hexit.pos import Placed
from hexit.tokens import Token, at, ALPHANUM, FORM, OPEN, CLOSE, QUOTED, STRAY
from hexit.errors import UnclosedString, UnclosedForm

WS = Token.whitespace()


def test_empty_line():
    assert lex_source(1, "") == []


def test_one_run():
    assert lex_source(1, "AB") == [at(ALPHANUM, "AB", 1, 0)]


def test_runs_split_by_whitespace():
    assert lex_source(3, "AB  CD") == [at(ALPHANUM, "AB", 3, 0), WS, at(ALPHANUM, "CD", 3, 4)]


def test_leading_whitespace():
    assert lex_source(1, "  AB") == [WS, at(ALPHANUM, "AB", 1, 2)]


def test_underscores():
    assert lex_source(1, "___ _") == [at(ALPHANUM, "___", 1, 0), WS, at(ALPHANUM, "_", 1, 4)]


def test_function_call():
    assert lex_source(1, "x86(AB34)") == [
        at(ALPHANUM, "x86", 1, 0),
        at(OPEN, "(", 1, 3),
        at(ALPHANUM, "AB34", 1, 4),
        at(CLOSE, ")", 1, 8),
    ]


def test_open_after_whitespace():
    assert lex_source(1, "AB (") == [at(ALPHANUM, "AB", 1, 0), WS, at(OPEN, "(", 1, 3)]


def test_form_is_placed_at_its_bracket():
    assert lex_source(1, "be16[256]") == [at(ALPHANUM, "be16", 1, 0), at(FORM, "256", 1, 4)]


def test_quotes_next_to_each_other():
    assert lex_source(1, '""""A""""') == [
        at(QUOTED, "", 1, 0),
        at(QUOTED, "", 1, 2),
        at(ALPHANUM, "A", 1, 4),
        at(QUOTED, "", 1, 5),
        at(QUOTED, "", 1, 7),
    ]


def test_escaped_quote_stays_in_string():
    assert lex_source(1, '"a\\"b"') == [at(QUOTED, 'a\\"b', 1, 0)]


def test_escaped_backslash_before_closing_quote():
    assert lex_source(1, '"a\\\\"') == [at(QUOTED, 'a\\\\', 1, 0)]


def test_brackets_inside_strings():
    assert lex_source(1, '"[(#)]"') == [at(QUOTED, '[(#)]', 1, 0)]


def test_stray_character():
    assert lex_source(1, "&") == [at(STRAY, "&", 1, 0)]


def test_stray_after_run_keeps_the_run():
    assert lex_source(1, "Aé") == [at(ALPHANUM, "A", 1, 0), at(STRAY, "é", 1, 1)]


def test_colon_is_stray():
    tokens = lex_source(1, "Magic: 03")
    assert tokens[1] == at(STRAY, ":", 1, 5)
    assert tokens[1].is_colon()


def test_comment_after_whitespace():
    assert lex_source(1, "AB # a comment") == [at(ALPHANUM, "AB", 1, 0), WS]


def test_comment_right_after_run():
    assert lex_source(1, "AB#CD") == [at(ALPHANUM, "AB", 1, 0)]


def test_hash_inside_form():
    assert lex_source(1, "[#]") == [at(FORM, "#", 1, 0)]


def test_unclosed_string():
    with pytest.raises(UnclosedString) as excinfo:
        lex_source(2, 'AB "cd')
    assert excinfo.value.placed == Placed('"cd', 2, 3)
    assert str(excinfo.value) == 'Unclosed string "\\"cd"'


def test_unclosed_form():
    with pytest.raises(UnclosedForm) as excinfo:
        lex_source(1, "[12")
    assert excinfo.value.placed == Placed("[12", 1, 0)


def test_string_ending_in_escaped_quote_is_unclosed():
    with pytest.raises(UnclosedString):
        lex_source(1, '"ab\\"')
