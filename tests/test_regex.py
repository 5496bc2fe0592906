import pytest

from lexdef.mir import Alternation, Class, Concat, Literal, Loop, Maybe
from lexdef.regex import (
    RegexError,
    binary,
    binary_ignore_case,
    parse,
    utf8,
    utf8_ignore_case,
)


@pytest.mark.parametrize(
    "regex,expected",
    [
        ("[a-z]+", 1),
        ("a|b", 2),
        ("a|[b-z]", 1),
        ("(foo)+", 6),
        ("foobar", 12),
        ("(fooz|bar)+qux", 12),
    ],
)
def test_priorities(regex, expected):
    assert utf8(regex).priority() == expected


def test_literal_concat():
    assert utf8("ab") == Concat((Literal(97), Literal(98)))


def test_one_or_more_expansion():
    assert utf8("a+") == Concat((Literal(97), Loop(Literal(97))))


def test_bounded_expansion():
    assert utf8("a{1,3}") == Concat((Literal(97), Maybe(Literal(97)), Maybe(Literal(97))))


def test_at_least_expansion():
    assert utf8("a{2,}") == Concat((Literal(97), Literal(97), Loop(Literal(97))))


def test_alternation():
    assert utf8("a|b") == Alternation((Literal(97), Literal(98)))


@pytest.mark.parametrize("pattern", [r"\x00.*", r"\x00.+"])
def test_greedy_dot_rejected_bytes(pattern):
    with pytest.raises(RegexError, match="greedily"):
        binary(pattern)


def test_dot_in_group_allowed():
    assert utf8("(.)?").priority() == 0


def test_non_greedy_rejected():
    with pytest.raises(RegexError, match="non-greedy"):
        utf8("a*?")


def test_anchor_rejected():
    with pytest.raises(RegexError, match="anchors"):
        utf8("^a")


def test_word_boundary_rejected():
    with pytest.raises(RegexError, match="word boundaries"):
        utf8(r"\bfoo")


def test_unclosed_group():
    with pytest.raises(RegexError):
        utf8("(ab")


def test_binary_hex_literal():
    assert binary(r"\xCA\xFE") == Concat((Literal(0xCA, False), Literal(0xFE, False)))


def test_binary_class():
    cls = binary(r"[\xA0-\xAF]")
    assert cls == Class(((0xA0, 0xAF),), False)


def test_ignore_case_literal():
    result = utf8_ignore_case("é")
    assert "É" in result and "é" in result


def test_binary_ignore_case_class():
    assert binary_ignore_case("[a-c]").ranges == ((65, 67), (97, 99))


def test_negated_class():
    cls = parse("[^']", unicode=True)
    assert "'" not in cls and "a" in cls


def test_inline_flag():
    result = utf8("(?i)a")
    assert result == Class(((65, 65), (97, 97)), True)