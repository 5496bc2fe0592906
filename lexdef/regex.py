"""Parsing of regular expressions into the pattern representation."""

from __future__ import annotations

import unicodedata
from functools import lru_cache
from typing import Callable

from .mir import (
    MAX_CODEPOINT,
    SURROGATES,
    Alternation,
    Class,
    Concat,
    Empty,
    Literal,
    Loop,
    Maybe,
    Mir,
)


class RegexError(ValueError):
    """Raised when a pattern is malformed or uses an unsupported feature."""


NON_GREEDY = "#[regex]: non-greedy parsing is currently unsupported."
WORD_BOUNDARY = "#[regex]: word boundaries are currently unsupported."
ANCHOR = "#[regex]: anchors in #[regex] are currently unsupported."
GREEDY_DOT = (
    '#[regex]: ".+" and ".*" patterns will greedily consume the entire source '
    "till the end as backtracking is not allowed. If you are looking to match "
    "everything until a specific character, you should use a negative character "
    "class. E.g., use regex r\"'[^']*'\" to match anything in between two quotes."
)

DOT_UTF8 = Class(((0, 9), (11, SURROGATES[0] - 1), (SURROGATES[1] + 1, MAX_CODEPOINT)), True)
DOT_BYTES = Class(((0, 9), (11, 0xFF)), False)

_SIMPLE_ESCAPES = {"n": 10, "t": 9, "r": 13, "f": 12, "v": 11, "a": 7}


def _scan(predicate: Callable[[str], bool]) -> tuple[tuple[int, int], ...]:
    ranges: list[tuple[int, int]] = []
    start = None
    for cp in range(MAX_CODEPOINT + 2):
        inside = cp <= MAX_CODEPOINT and not (
            SURROGATES[0] <= cp <= SURROGATES[1]
        ) and predicate(chr(cp))
        if inside and start is None:
            start = cp
        elif not inside and start is not None:
            ranges.append((start, cp - 1))
            start = None
    return tuple(ranges)


@lru_cache(maxsize=None)
def _perl_class(kind: str, unicode: bool) -> Class:
    if unicode:
        predicates = {
            "d": str.isdecimal,
            "w": lambda c: c.isalnum() or c == "_" or unicodedata.category(c) in ("Mn", "Mc", "Pc"),
            "s": str.isspace,
        }
        return Class(_scan(predicates[kind]), True)
    ascii_ranges = {
        "d": ((0x30, 0x39),),
        "w": ((0x30, 0x39), (0x41, 0x5A), (0x5F, 0x5F), (0x61, 0x7A)),
        "s": ((9, 13), (32, 32)),
    }
    return Class(ascii_ranges[kind], False)


@lru_cache(maxsize=None)
def _property_class(name: str) -> Class:
    if name in ("White_Space", "Whitespace", "space"):
        return Class(_scan(str.isspace), True)
    if name in ("Any",):
        return Class(((0, MAX_CODEPOINT),), True).negate().negate()
    valid = {"L", "M", "N", "P", "S", "Z", "C"}
    if not (name[:1] in valid and len(name) <= 2):
        raise RegexError(f"unsupported Unicode property: {name}")
    ranges = _scan(lambda c: unicodedata.category(c).startswith(name))
    if not ranges:
        raise RegexError(f"unsupported Unicode property: {name}")
    return Class(ranges, True)


def _fold_char(cp: int) -> set[int]:
    ch = chr(cp)
    variants = {cp}
    for other in (ch.lower(), ch.upper()):
        if len(other) == 1:
            variants.add(ord(other))
    return variants


def _fold_ranges(ranges, unicode: bool) -> list[tuple[int, int]]:
    extra: list[tuple[int, int]] = []
    for start, end in ranges:
        for cp in range(start, end + 1):
            if not unicode and cp > 0x7F:
                continue
            extra.extend((v, v) for v in _fold_char(cp) if v != cp and (unicode or v <= 0x7F))
    return list(ranges) + extra


class _Parser:
    def __init__(self, pattern: str, unicode: bool, case_insensitive: bool) -> None:
        self.pattern = pattern
        self.pos = 0
        self.unicode = unicode
        self.ci = case_insensitive

    def peek(self) -> str | None:
        return self.pattern[self.pos] if self.pos < len(self.pattern) else None

    def next(self) -> str:
        ch = self.peek()
        if ch is None:
            raise RegexError("unexpected end of pattern")
        self.pos += 1
        return ch

    def parse(self) -> Mir:
        mir = self.alternation()
        if self.pos < len(self.pattern):
            raise RegexError("unopened group")
        return mir

    def alternation(self) -> Mir:
        branches = [self.concat()]
        while self.peek() == "|":
            self.pos += 1
            branches.append(self.concat())
        return branches[0] if len(branches) == 1 else Alternation(tuple(branches))

    def concat(self) -> Mir:
        items: list[Mir] = []
        while self.peek() is not None and self.peek() not in "|)":
            item = self.repetition()
            if item is None:
                continue
            if isinstance(item, Concat):
                items.extend(item.items)
            else:
                items.append(item)
        if not items:
            return Empty()
        return items[0] if len(items) == 1 else Concat(tuple(items))

    def repetition(self) -> Mir | None:
        atom = self.atom()
        if atom is None:
            return None
        mir, is_dot = atom
        while self.peek() is not None and self.peek() in "*+?{":
            op = self.next()
            if op == "{":
                low, high = self.counts()
            else:
                low, high = {"*": (0, None), "+": (1, None), "?": (0, 1)}[op]
            if self.peek() == "?":
                raise RegexError(NON_GREEDY)
            mir = self.expand(mir, op, low, high, is_dot)
            is_dot = False
        return mir

    def counts(self) -> tuple[int, int | None]:
        end = self.pattern.find("}", self.pos)
        if end < 0:
            raise RegexError("unclosed counted repetition")
        body = self.pattern[self.pos:end].replace(" ", "")
        self.pos = end + 1
        low_text, comma, high_text = body.partition(",")
        try:
            low = int(low_text)
            if not comma:
                return low, low
            high = int(high_text) if high_text else None
        except ValueError:
            raise RegexError("invalid counted repetition") from None
        if high is not None and high < low:
            raise RegexError("invalid counted repetition range")
        return low, high

    @staticmethod
    def expand(mir: Mir, op: str, low: int, high: int | None, is_dot: bool) -> Mir:
        if op in "*+" and is_dot:
            raise RegexError(GREEDY_DOT)
        if op == "?":
            return Maybe(mir)
        if op == "*":
            return Loop(mir)
        if op == "+":
            return Concat((mir, Loop(mir)))
        if high is None:
            return Concat((mir,) * low + (Loop(mir),))
        return Concat((mir,) * low + (Maybe(mir),) * (high - low))

    def atom(self) -> tuple[Mir, bool] | None:
        ch = self.next()
        if ch == "(":
            return self.group()
        if ch == ".":
            return (DOT_UTF8 if self.unicode else DOT_BYTES), True
        if ch == "[":
            return self.char_class(), False
        if ch in "^$":
            raise RegexError(ANCHOR)
        if ch in "*+?{":
            raise RegexError("repetition operator missing expression")
        if ch == "\\":
            return self.escape(), False
        return self.char_literal(ord(ch)), False

    def group(self) -> tuple[Mir, bool] | None:
        saved = self.ci
        if self.peek() == "?":
            self.pos += 1
            if self.peek() == "P" or self.peek() == "<":
                end = self.pattern.find(">", self.pos)
                if end < 0:
                    raise RegexError("unclosed group name")
                self.pos = end + 1
            else:
                enabled = True
                while True:
                    flag = self.next()
                    if flag == ")":
                        return None
                    if flag == ":":
                        break
                    if flag == "-":
                        enabled = False
                    elif flag == "i":
                        self.ci = enabled
                    elif flag in "msxuU":
                        if flag == "U":
                            raise RegexError(NON_GREEDY)
                    else:
                        raise RegexError(f"unrecognized flag: {flag}")
        inner = self.alternation()
        if self.peek() != ")":
            raise RegexError("unclosed group")
        self.pos += 1
        self.ci = saved
        return inner, False

    def char_literal(self, cp: int) -> Mir:
        if not self.unicode and cp > 0x7F:
            return Concat(tuple(self.byte_literal(b) for b in chr(cp).encode("utf-8")))
        if self.unicode:
            if self.ci:
                variants = _fold_char(cp)
                if len(variants) > 1:
                    return Class(tuple((v, v) for v in variants), True)
            return Literal(cp, True)
        return self.byte_literal(cp)

    def byte_literal(self, value: int) -> Mir:
        if self.ci and value <= 0x7F:
            variants = {v for v in _fold_char(value) if v <= 0x7F}
            if len(variants) > 1:
                return Class(tuple((v, v) for v in variants), False)
        return Literal(value, False)

    def hex_value(self) -> int:
        if self.peek() == "{":
            end = self.pattern.find("}", self.pos)
            if end < 0:
                raise RegexError("unclosed hex escape")
            text = self.pattern[self.pos + 1:end]
            self.pos = end + 1
        else:
            text = self.pattern[self.pos:self.pos + 2]
            self.pos += 2
        try:
            value = int(text, 16)
        except ValueError:
            raise RegexError(f"invalid hex escape: {text}") from None
        if value > MAX_CODEPOINT or (self.unicode and SURROGATES[0] <= value <= SURROGATES[1]):
            raise RegexError(f"invalid hex escape: {text}")
        return value

    def escape_item(self) -> int | Class:
        """Read one escape; return a code point or a predefined class."""
        ch = self.next()
        if ch in "bB":
            raise RegexError(WORD_BOUNDARY)
        if ch in "Az":
            raise RegexError(ANCHOR)
        if ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch]
        if ch == "x":
            return self.hex_value()
        if ch.lower() in "dws":
            cls = _perl_class(ch.lower(), self.unicode)
            return cls.negate() if ch.isupper() else cls
        if ch in "pP":
            if not self.unicode:
                raise RegexError("Unicode properties are not allowed in byte patterns")
            if self.peek() == "{":
                end = self.pattern.find("}", self.pos)
                if end < 0:
                    raise RegexError("unclosed Unicode property")
                name = self.pattern[self.pos + 1:end]
                self.pos = end + 1
            else:
                name = self.next()
            cls = _property_class(name)
            return cls.negate() if ch == "P" else cls
        if ch.isalnum():
            raise RegexError(f"unrecognized escape sequence: \\{ch}")
        return ord(ch)

    def escape(self) -> Mir:
        item = self.escape_item()
        if isinstance(item, Class):
            return item
        if self.unicode:
            return self.char_literal(item)
        if item > 0xFF:
            raise RegexError("byte escape out of range")
        return self.byte_literal(item)

    def class_char(self) -> int | Class:
        ch = self.next()
        if ch == "\\":
            return self.escape_item()
        return ord(ch)

    def char_class(self) -> Class:
        negated = self.peek() == "^"
        if negated:
            self.pos += 1
        ranges: list[tuple[int, int]] = []
        classes: list[Class] = []
        first = True
        while True:
            if self.peek() is None:
                raise RegexError("unclosed character class")
            if self.peek() == "]" and not first:
                self.pos += 1
                break
            first = False
            item = self.class_char()
            if isinstance(item, Class):
                classes.append(item)
                continue
            end = item
            if self.peek() == "-" and self.pattern[self.pos + 1:self.pos + 2] not in ("]", ""):
                self.pos += 1
                end = self.class_char()
                if isinstance(end, Class):
                    raise RegexError("invalid range in character class")
                if end < item:
                    raise RegexError("invalid range in character class")
            if not self.unicode and end > 0xFF:
                raise RegexError("character out of byte range in class")
            ranges.append((item, end))
        if self.ci:
            ranges = _fold_ranges(ranges, self.unicode)
        result = Class(tuple(ranges), self.unicode)
        for cls in classes:
            result = result.union(cls)
        return result.negate() if negated else result


def parse(pattern: str, unicode: bool = True, case_insensitive: bool = False) -> Mir:
    """Parse ``pattern`` into its canonical node tree."""
    return _Parser(pattern, unicode, case_insensitive).parse()


def utf8(source: str) -> Mir:
    return parse(source, unicode=True, case_insensitive=False)


def utf8_ignore_case(source: str) -> Mir:
    return parse(source, unicode=True, case_insensitive=True)


def binary(source: str) -> Mir:
    return parse(source, unicode=False, case_insensitive=False)


def binary_ignore_case(source: str) -> Mir:
    return parse(source, unicode=False, case_insensitive=True)