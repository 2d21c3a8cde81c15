import pytest

from hexit.ast import (
    Char, Dec, Constant, Function, StringLiteral, IPv4, IPv6, Timestamp, Float, Bits,
    MultiByteType, BitwiseFold, MultiByteFunction, BitwiseFunction, BitwiseNotFunction,
    RepeatFunction,
)
from hexit.errors import (
    SingleHex, StrayCharacter, StrayFunctionName, InvalidFunctionName,
    InvalidRepeatAmount, InvalidForm, UnclosedFunction, NestedTooDeeply,
)
from hexit.lexer import lex_source
from hexit.parser import (
    parse_tokens, parse_alphanums, parse_function_name, parse_form,
    parse_backslashes, is_constant_name, MAX_NESTING,
)
from hexit.pos import Placed
from hexit.tokens import Token


def span(text, column=0):
    return Placed(text, 1, column)


def parse(line):
    return parse_tokens(lex_source(1, line) + [Token.whitespace()])


# Alphanumeric runs

def test_one_byte():
    assert parse_alphanums(span("EF")) == [Char(0xEF)]


def test_two_bytes():
    assert parse_alphanums(span("EF12")) == [Char(0xEF), Char(0x12)]


def test_half_a_byte():
    with pytest.raises(SingleHex) as excinfo:
        parse_alphanums(span("E"))
    assert excinfo.value.placed == span("E")


def test_odd_number_of_digits():
    with pytest.raises(SingleHex) as excinfo:
        parse_alphanums(span("D7B", 4))
    assert excinfo.value.placed == span("B", 6)


def test_not_a_byte():
    with pytest.raises(StrayCharacter) as excinfo:
        parse_alphanums(span("Ex"))
    assert excinfo.value.placed == span("x", 1)


def test_first_g():
    with pytest.raises(StrayCharacter) as excinfo:
        parse_alphanums(span("FG"))
    assert excinfo.value.placed == span("G", 1)


def test_second_g():
    with pytest.raises(StrayCharacter) as excinfo:
        parse_alphanums(span("GF"))
    assert excinfo.value.placed == span("G", 0)


def test_constant_name():
    assert parse_alphanums(span("DNS_AAAA")) == [Constant("DNS_AAAA")]


def test_shortest_constant():
    assert parse_alphanums(span("A_B")) == [Constant("A_B")]


def test_constant_ending_with_digits():
    assert parse_alphanums(span("DNS_EUI48")) == [Constant("DNS_EUI48")]


def test_constant_too_short():
    with pytest.raises(StrayCharacter) as excinfo:
        parse_alphanums(span("_A"))
    assert excinfo.value.placed == span("_", 0)


def test_constant_still_too_short():
    with pytest.raises(StrayCharacter) as excinfo:
        parse_alphanums(span("A_"))
    assert excinfo.value.placed == span("_", 1)


def test_lowercase_is_not_a_constant():
    assert not is_constant_name("dns_aaaa")
    assert not is_constant_name("DNSAAAA")
    assert is_constant_name("IP_TCP")


def test_bare_function_name():
    with pytest.raises(StrayFunctionName):
        parse_alphanums(span("be16"))


# Function names

@pytest.mark.parametrize("name, expected", [
    ("be16", MultiByteFunction(MultiByteType.BE16)),
    ("le64", MultiByteFunction(MultiByteType.LE64)),
    ("xor", BitwiseFunction(BitwiseFold.XOR)),
    ("not", BitwiseNotFunction()),
    ("x1", RepeatFunction(1)),
    ("x65535", RepeatFunction(65535)),
    ("x007", RepeatFunction(7)),
])
def test_function_names(name, expected):
    assert parse_function_name(span(name)) == expected


@pytest.mark.parametrize("name", ["x", "xx11", "foo", "BE16", "x1a"])
def test_not_function_names(name):
    assert parse_function_name(span(name)) is None


@pytest.mark.parametrize("name", ["x0", "x000", "x65536", "x99999999999", "x" + "1" * 5000])
def test_invalid_repeat_amounts(name):
    with pytest.raises(InvalidRepeatAmount):
        parse_function_name(span(name))


# Forms

def test_empty_form():
    with pytest.raises(InvalidForm):
        parse_form(span(""))


def test_decimal_form():
    assert parse_form(span("1234567")) == Dec("1234567")


def test_ipv4_form():
    assert parse_form(span("127.0.0.1")) == IPv4(bytes([127, 0, 0, 1]))


def test_ipv6_form():
    assert parse_form(span("::1")) == IPv6(bytes(15) + b'\x01')


def test_ipv6_zone_is_not_an_address():
    with pytest.raises(InvalidForm):
        parse_form(span("fe80::1%eth0"))


def test_bits_form():
    assert parse_form(span("b0110110")) == Bits([False, True, True, False, True, True, False])


def test_bits_with_underscores():
    assert parse_form(span("b011_0110")) == Bits([False, True, True, False, True, True, False])


@pytest.mark.parametrize("text", ["b", "b_", "b0110112", "something_else", "foo", "f", "f1.2.3"])
def test_invalid_forms(text):
    with pytest.raises(InvalidForm) as excinfo:
        parse_form(span(text))
    assert excinfo.value.placed == span(text)


@pytest.mark.parametrize("text", ["1.5", "-0", "NaN", "inf", "-infinity", "1.3211836173E+19", ".5", "1."])
def test_float_forms(text):
    assert parse_form(span("f" + text)) == Float(text)


def test_timestamp_form():
    assert parse_form(span("2017-12-31T21:36:45")) == Timestamp(1514756205)


def test_timestamp_with_space_and_zone():
    assert parse_form(span("2017-12-31 21:36:45Z")) == Timestamp(1514756205)


def test_timestamp_with_impossible_date():
    with pytest.raises(InvalidForm):
        parse_form(span("2017-02-31T00:00:00"))


# Strings

def test_backslashes_untouched():
    assert parse_backslashes("plain") == "plain"


def test_backslash_escapes():
    assert parse_backslashes('AB\\"JSON\\"CD') == 'AB"JSON"CD'
    assert parse_backslashes('\\n\\r\\t\\\\') == '\n\r\t\\'


# Token streams

def test_hex_and_string():
    assert parse('AB "cd"') == [Char(0xAB), StringLiteral(b"cd")]


def test_run_touching_string():
    assert parse('AB"cd"EF') == [Char(0xAB), StringLiteral(b"cd"), Char(0xEF)]


def test_string_is_utf8():
    assert parse('"é"') == [StringLiteral("é".encode('utf-8'))]


def test_repeat_function():
    assert parse("x3(AB)") == [Function(RepeatFunction(3), [Char(0xAB)])]


def test_function_with_form():
    assert parse("be16[256]") == [Function(MultiByteFunction(MultiByteType.BE16), [Dec("256")])]


def test_nested_functions():
    assert parse("x2(not(AB) CD)") == [
        Function(RepeatFunction(2), [Function(BitwiseNotFunction(), [Char(0xAB)]), Char(0xCD)]),
    ]


def test_parsing_continues_after_function():
    assert parse("and(01 02) 03") == [
        Function(BitwiseFunction(BitwiseFold.AND), [Char(1), Char(2)]),
        Char(3),
    ]


def test_empty_argument_list():
    assert parse("not()") == [Function(BitwiseNotFunction(), [])]


def test_invalid_function_name():
    with pytest.raises(InvalidFunctionName) as excinfo:
        parse("foo(AB)")
    assert excinfo.value.placed == span("foo")


def test_invalid_function_name_before_form():
    with pytest.raises(InvalidFunctionName):
        parse("AB[12]")


def test_stray_open():
    with pytest.raises(StrayCharacter) as excinfo:
        parse("(AB)")
    assert excinfo.value.placed == span("(")


def test_stray_close():
    with pytest.raises(StrayCharacter) as excinfo:
        parse("AB)")
    assert excinfo.value.placed == span(")", 2)


def test_unclosed_function():
    with pytest.raises(UnclosedFunction) as excinfo:
        parse("x3(AB")
    assert excinfo.value.placed == span("(", 2)


def test_function_name_not_followed_by_arguments():
    with pytest.raises(StrayFunctionName):
        parse("x3 (AB)")


def test_nesting_at_the_limit():
    depth = MAX_NESTING
    exps = parse("not(" * depth + ")" * depth)
    assert len(exps) == 1


def test_nesting_too_deep():
    depth = MAX_NESTING + 1
    with pytest.raises(NestedTooDeeply) as excinfo:
        parse("not(" * depth + ")" * depth)
    assert excinfo.value.placed == span("(", 4 * MAX_NESTING + 3)
