import pytest

from lexdef.mir import Alternation, Class, Concat, Empty, Literal, Loop, Maybe


def test_leaf_priorities():
    assert Literal(ord("a")).priority() == 2
    assert Class(((97, 122),)).priority() == 1
    assert Empty().priority() == 0


def test_loop_and_maybe_ignored():
    assert Loop(Literal(97)).priority() == 0
    assert Maybe(Concat((Literal(97), Literal(98)))).priority() == 0


def test_concat_sums_and_alternation_takes_min():
    foo = Concat((Literal(102), Literal(111), Literal(111)))
    assert foo.priority() == 6
    assert Alternation((foo, Class(((0, 5),)))).priority() == 1


def test_class_canonical_ranges():
    cls = Class(((5, 9), (0, 3), (4, 4)))
    assert cls.ranges == ((0, 9),)


def test_class_union():
    result = Class(((97, 99),)).union(Class(((65, 67),)))
    assert result.ranges == ((65, 67), (97, 99))
    assert "b" in result and "B" in result and "d" not in result


def test_union_mismatched_alphabets():
    with pytest.raises(ValueError):
        Class(((0, 1),), True).union(Class(((0, 1),), False))


def test_byte_negate():
    assert Class(((10, 10),), False).negate().ranges == ((0, 9), (11, 255))


def test_unicode_negate_skips_surrogates():
    ranges = Class(((0, 0x7F),)).negate().ranges
    assert ranges == ((0x80, 0xD7FF), (0xE000, 0x10FFFF))