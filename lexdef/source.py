"""Byte-level access to the input a lexer reads from.

Text sources are addressed by UTF-8 byte offsets, binary sources by plain
byte offsets. Slices of a text source come back as ``str``, slices of a
binary source as ``bytes``.
"""

from __future__ import annotations

from typing import Union

Slice = Union[str, bytes]


def _is_continuation(byte: int) -> bool:
    return 0x80 <= byte <= 0xBF


class Source:
    """Input of a lexer, either text or raw bytes."""

    __slots__ = ("_bytes", "_is_text")

    def __init__(self, data: Union[str, bytes, bytearray, memoryview]) -> None:
        if isinstance(data, str):
            self._bytes = data.encode("utf-8")
            self._is_text = True
        elif isinstance(data, (bytes, bytearray, memoryview)):
            self._bytes = bytes(data)
            self._is_text = False
        else:
            raise TypeError(f"cannot read from {type(data).__name__}")

    @property
    def is_text(self) -> bool:
        """Whether this source holds UTF-8 text rather than raw bytes."""
        return self._is_text

    @property
    def data(self) -> bytes:
        """The raw bytes of the source."""
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)

    def __repr__(self) -> str:
        kind = "text" if self._is_text else "binary"
        return f"Source({kind}, {len(self._bytes)} bytes)"

    def read(self, offset: int, size: int = 1) -> bytes | None:
        """Return ``size`` bytes starting at ``offset``, or None when out of bounds."""
        if size < 1:
            raise ValueError("chunk size must be at least 1")
        if offset < 0 or offset + size > len(self._bytes):
            return None
        return self._bytes[offset:offset + size]

    def slice(self, start: int, end: int) -> Slice | None:
        """Return the part of the source between two byte offsets.

        None is returned when the range is reversed, out of bounds, or (for
        text) does not fall on character boundaries.
        """
        if start < 0 or start > end or end > len(self._bytes):
            return None
        chunk = self._bytes[start:end]
        if not self._is_text:
            return chunk
        if not (self.is_boundary(start) and self.is_boundary(end)):
            return None
        return chunk.decode("utf-8")

    def find_boundary(self, index: int) -> int:
        """Return the first valid slicing position at or after ``index``."""
        if not self._is_text:
            return index
        if index < 0 or index > len(self._bytes):
            raise IndexError(f"index {index} out of bounds for length {len(self._bytes)}")
        while not self.is_boundary(index):
            index += 1
        return index

    def is_boundary(self, index: int) -> bool:
        """Whether the source can be sliced at ``index``."""
        if index < 0 or index > len(self._bytes):
            return False
        if not self._is_text or index == len(self._bytes):
            return True
        return not _is_continuation(self._bytes[index])