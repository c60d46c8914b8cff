import pytest

from pcm.common.strings import replace_all, split_lines, split_string


@pytest.mark.parametrize(
    "text, delim, expected",
    [
        ("a b c", " ", ["a", "b", "c"]),
        ("abc", " ", ["abc"]),
        ("", " ", [""]),
        ("a b ", " ", ["a", "b", ""]),
        ("a::b::c", "::", ["a", "b", "c"]),
        ("a:b::c", "::", ["a:b", "c"]),
        ("aaa", "aa", ["", "a"]),
    ],
)
def test_split_string(text: str, delim: str, expected: list[str]) -> None:
    assert split_string(text, delim) == expected


def test_split_string_rejects_empty_delimiter() -> None:
    with pytest.raises(ValueError):
        split_string("abc", "")


def test_split_lines_normalises_crlf_and_keeps_empty_lines() -> None:
    assert split_lines("a\r\nb\n\nc") == ["a", "b", "", "c"]
    assert split_lines("a\n") == ["a", ""]
    assert split_lines("") == [""]


def test_split_lines_keeps_lone_carriage_return() -> None:
    assert split_lines("a\rb\n") == ["a\rb", ""]


def test_split_lines_ignores_quotes() -> None:
    """CRLF inside quotes is still normalised; the line grammar has no quoting."""

    assert split_lines("ref 'a\r\nb'") == ["ref 'a", "b'"]


def test_replace_all_plain() -> None:
    assert replace_all("a-b-c", "-", "+", respect_quotes=False) == "a+b+c"
    assert replace_all("a-b-c", "-", "+", offset=2, respect_quotes=False) == "a-b+c"


def test_replace_all_respects_quotes() -> None:
    assert replace_all('x y "a b" z', " ", "_") == 'x_y_"a b"_z'
    assert replace_all("x 'a b' \"c d\" e", " ", "_") == "x_'a b'_\"c d\"_e"


def test_replace_all_multichar_and_growth() -> None:
    assert replace_all("aXXbXX", "XX", "XXX") == "aXXXbXXX"
    assert replace_all("abc", "", "z") == "abc"


def test_replace_all_offset_skips_prefix() -> None:
    assert replace_all("a a a", "a", "b", offset=1) == "a b b"
