"""Making patterns match ASCII letters regardless of case.

Only ASCII letters are folded; every other character keeps its case.
"""

from __future__ import annotations

from typing import Iterable

from .mir import Alternation, Class, Concat, Empty, Literal, Loop, Maybe, Mir

_LOWER = (ord("a"), ord("z"))
_UPPER = (ord("A"), ord("Z"))
_SHIFT = 32


def _overlaps(st1: int, end1: int, st2: int, end2: int) -> bool:
    return (st2 <= st1 <= end2) or (st1 <= st2 <= end1)


def _fold_byte(value: int) -> Mir:
    if _LOWER[0] <= value <= _LOWER[1]:
        return Alternation((Literal(value - _SHIFT, False), Literal(value, False)))
    if _UPPER[0] <= value <= _UPPER[1]:
        return Alternation((Literal(value, False), Literal(value + _SHIFT, False)))
    return Literal(value, False)


def _fold_literal(literal: Literal) -> Mir:
    if literal.unicode and literal.value > 0x7F:
        return literal
    return _fold_byte(literal.value)


def _fold_byte_ranges(ranges: Iterable[tuple[int, int]]) -> tuple[tuple[int, int], ...]:
    ranges = tuple(ranges)
    extra: list[tuple[int, int]] = []
    for start, end in ranges:
        low, high = max(start, _LOWER[0]), min(end, _LOWER[1])
        if low <= high:
            extra.append((low - _SHIFT, high - _SHIFT))
        low, high = max(start, _UPPER[0]), min(end, _UPPER[1])
        if low <= high:
            extra.append((low + _SHIFT, high + _SHIFT))
    return Class(ranges + tuple(extra), False).ranges


def fold_class_ranges(ranges: Iterable[tuple[int, int]]) -> tuple[tuple[int, int], ...]:
    """Add the other-case counterparts of ASCII letters to code point ranges."""
    ranges = tuple(ranges)
    extra: list[tuple[int, int]] = []
    z_upper = _UPPER[1]
    for start, end in ranges:
        if start > 0x7F:
            continue
        if end <= 0x7F:
            if _overlaps(_LOWER[0], _LOWER[1], start, end):
                lower, upper = max(start, _LOWER[0]), min(end, _LOWER[1])
                extra.append((lower - _SHIFT, upper - _SHIFT))
            if _overlaps(_UPPER[0], _UPPER[1], start, end):
                lower, upper = max(start, _UPPER[0]), min(end, _UPPER[1])
                extra.append((lower + _SHIFT, upper + _SHIFT))
        else:
            if _overlaps(_LOWER[0], _LOWER[1], start, _LOWER[1]):
                lower = max(start, _LOWER[0])
                extra.append((lower - _SHIFT, z_upper))
            if _overlaps(_UPPER[0], _UPPER[1], start, _UPPER[1]):
                lower = max(start, _UPPER[0])
                extra.append((lower + _SHIFT, z_upper))
    return Class(ranges + tuple(extra), True).ranges


def _fold_class(cls: Class) -> Class:
    if cls.unicode:
        return Class(fold_class_ranges(cls.ranges), True)
    return Class(_fold_byte_ranges(cls.ranges), False)


def make_ascii_case_insensitive(mir: Mir) -> Mir:
    """Return an equivalent pattern that ignores the case of ASCII letters."""
    if isinstance(mir, Empty):
        return mir
    if isinstance(mir, Loop):
        return Loop(make_ascii_case_insensitive(mir.inner))
    if isinstance(mir, Maybe):
        return Maybe(make_ascii_case_insensitive(mir.inner))
    if isinstance(mir, Concat):
        return Concat(tuple(make_ascii_case_insensitive(item) for item in mir.items))
    if isinstance(mir, Alternation):
        return Alternation(tuple(make_ascii_case_insensitive(item) for item in mir.items))
    if isinstance(mir, Class):
        return _fold_class(mir)
    if isinstance(mir, Literal):
        return _fold_literal(mir)
    raise TypeError(f"not a pattern node: {type(mir).__name__}")