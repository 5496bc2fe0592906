"""Named subpatterns that token patterns can refer to with ``(?&name)``."""

from __future__ import annotations

import re
from typing import Any, Iterator

from . import regex
from .regex import RegexError

_IDENT = re.compile(r"[^\W\d]\w*\Z")
_REFERENCE = "(?&"
_GROUP = "(?:"


class SubpatternError(ValueError):
    """Raised when a subpattern or a reference to one is invalid."""


def bytes_to_regex_string(data: bytes) -> str:
    """Render bytes as regex text, writing non-ASCII bytes as ``\\xNN`` escapes."""
    data = bytes(data)
    if data.isascii():
        return data.decode("ascii")
    return "".join(chr(byte) if byte < 0x80 else f"\\x{byte:02x}" for byte in data)


def _is_identifier(name: str) -> bool:
    return bool(_IDENT.match(name)) and name != "_"


def _pattern_source(literal: Any) -> tuple[str, bool]:
    """Return the regex text of a literal and whether it is a byte pattern."""
    value = getattr(literal, "value", literal)
    if isinstance(value, str):
        return value, False
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes_to_regex_string(bytes(value)), True
    raise TypeError(f"expected a str or bytes pattern, got {type(value).__name__}")


class Subpatterns:
    """An ordered collection of named, already expanded subpatterns."""

    def __init__(self) -> None:
        self._patterns: dict[str, str] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._patterns

    def __getitem__(self, name: str) -> str:
        return self._patterns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def add(self, name: str, literal: Any) -> None:
        """Define subpattern ``name``; its own references are expanded now."""
        if not _is_identifier(name):
            raise SubpatternError(f"subpattern name `{name}` is not an identifier")
        if name in self._patterns:
            raise SubpatternError(f"{name} can only be assigned once")

        _, is_bytes = _pattern_source(literal)
        fixed = self.fix(literal)
        try:
            (regex.binary if is_bytes else regex.utf8)(fixed)
        except RegexError as err:
            raise SubpatternError(str(err)) from err

        self._patterns[name] = fixed

    def fix(self, literal: Any) -> str:
        """Return the pattern text with every ``(?&name)`` replaced by its definition."""
        pattern, _ = _pattern_source(literal)
        i = 0
        while (found := pattern.find(_REFERENCE, i)) >= 0:
            i = found
            pattern = pattern[:i] + _GROUP + pattern[i + len(_REFERENCE):]
            i += len(_GROUP)

            close = pattern.find(")", i)
            if close < 0:
                # Left for the regex parser to report as an unclosed group.
                pattern = pattern[:i]
                break

            raw_name = pattern[i:close]
            name = raw_name.strip()
            if not _is_identifier(name):
                raise SubpatternError(
                    f"subpattern reference `{raw_name}` is not an identifier"
                )
            if name not in self._patterns:
                raise SubpatternError(
                    f"subpattern reference `{name}` has not been defined"
                )

            replacement = self._patterns[name]
            pattern = pattern[:i] + replacement + pattern[close:]
            i += len(replacement) + 1

        return pattern