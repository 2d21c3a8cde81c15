import io

from hexit.style import Style


def format(style, data):
    sink = io.StringIO()
    count = style.format(data, sink)
    return sink.getvalue(), count


def test_default_style():
    assert format(Style(), b"\x01\xab\xff") == ("01ABFF\n", 3)


def test_no_bytes():
    assert format(Style(), b"") == ("\n", 0)


def test_lowercase():
    assert format(Style(lowercase=True), b"\xab") == ("ab\n", 1)


def test_separator_goes_between_pairs():
    assert format(Style(separator=" "), b"\x01\x02\x03") == ("01 02 03\n", 3)


def test_prefix_and_suffix():
    style = Style(prefix="0x", suffix=",", separator=" ", lowercase=True)
    assert format(style, b"\x0a\x0b") == ("0x0a, 0x0b,\n", 2)
