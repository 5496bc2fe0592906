"""Intermediate representation of a token pattern.

A pattern is reduced to a small tree of nodes: literals, character classes,
concatenations, alternations, optional parts and loops. Repetition counts
and groups are expanded or stripped away so that later stages only ever see
this canonical form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

MAX_CODEPOINT = 0x10FFFF
MAX_BYTE = 0xFF
SURROGATES = (0xD800, 0xDFFF)


def _canonical(ranges: Iterable[tuple[int, int]]) -> tuple[tuple[int, int], ...]:
    """Sort ranges and merge those that overlap or touch."""
    merged: list[list[int]] = []
    for start, end in sorted((min(a, b), max(a, b)) for a, b in ranges):
        if merged and start <= merged[-1][1] + 1:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return tuple((start, end) for start, end in merged)


class Mir:
    """Base of all pattern nodes."""

    def priority(self) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class Empty(Mir):
    """Matches the empty string."""

    def priority(self) -> int:
        return 0


@dataclass(frozen=True)
class Loop(Mir):
    """Zero or more repetitions of the inner node."""

    inner: Mir

    def priority(self) -> int:
        return 0


@dataclass(frozen=True)
class Maybe(Mir):
    """Zero or one occurrence of the inner node."""

    inner: Mir

    def priority(self) -> int:
        return 0


@dataclass(frozen=True)
class Concat(Mir):
    """A sequence of nodes matched one after another."""

    items: tuple[Mir, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def priority(self) -> int:
        return sum(item.priority() for item in self.items)


@dataclass(frozen=True)
class Alternation(Mir):
    """Any one of several alternatives."""

    items: tuple[Mir, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def priority(self) -> int:
        return min((item.priority() for item in self.items), default=0)


@dataclass(frozen=True)
class Class(Mir):
    """A set of code points (``unicode=True``) or bytes, as inclusive ranges."""

    ranges: tuple[tuple[int, int], ...]
    unicode: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranges", _canonical(self.ranges))

    def priority(self) -> int:
        return 1

    def __contains__(self, value: object) -> bool:
        if isinstance(value, str):
            if len(value) != 1:
                return False
            value = ord(value)
        if not isinstance(value, int):
            return False
        return any(start <= value <= end for start, end in self.ranges)

    def union(self, other: Class) -> Class:
        """Return a class holding the members of both classes."""
        if self.unicode != other.unicode:
            raise ValueError("cannot combine a unicode class with a byte class")
        return Class(self.ranges + other.ranges, self.unicode)

    def negate(self) -> Class:
        """Return the complement of this class within its alphabet."""
        top = MAX_CODEPOINT if self.unicode else MAX_BYTE
        result: list[tuple[int, int]] = []
        cursor = 0
        for start, end in self.ranges:
            if start > cursor:
                result.append((cursor, start - 1))
            cursor = max(cursor, end + 1)
        if cursor <= top:
            result.append((cursor, top))
        if self.unicode:
            result = list(_remove(result, SURROGATES))
        return Class(tuple(result), self.unicode)


def _remove(
    ranges: Iterable[tuple[int, int]], hole: tuple[int, int]
) -> Iterable[tuple[int, int]]:
    low, high = hole
    for start, end in ranges:
        if end < low or start > high:
            yield (start, end)
            continue
        if start < low:
            yield (start, low - 1)
        if end > high:
            yield (high + 1, end)


@dataclass(frozen=True)
class Literal(Mir):
    """A single code point (``unicode=True``) or a single byte."""

    value: int
    unicode: bool = True

    def priority(self) -> int:
        return 2