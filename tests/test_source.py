import pytest

from lexdef.source import Source

ESCHATON = "It was the year when they finally immanentized the Eschaton."


def test_read_chunks_of_text():
    src = Source("foo")
    assert src.read(0, 3) == b"foo"
    assert src.read(0, 2) == b"fo"
    assert src.read(2) == b"o"


def test_read_out_of_bounds():
    src = Source("foo")
    assert src.read(0, 4) is None
    assert src.read(2, 2) is None
    assert src.read(-1) is None


def test_read_rejects_empty_chunk():
    with pytest.raises(ValueError):
        Source("foo").read(0, 0)


def test_slice_text():
    src = Source(ESCHATON)
    assert src.slice(51, 59) == "Eschaton"


def test_slice_whole_round_trip():
    assert Source(ESCHATON).slice(0, len(ESCHATON)) == ESCHATON
    data = bytes([0, 0xCA, 0xFE, 0xBE, 0xEF])
    assert Source(data).slice(0, len(data)) == data


def test_slice_invalid_ranges():
    src = Source("abc")
    assert src.slice(2, 1) is None
    assert src.slice(0, 4) is None


def test_slice_inside_multibyte_char_is_rejected():
    src = Source("é")
    assert src.slice(0, 1) is None
    assert src.slice(0, 2) == "é"


def test_binary_slice_returns_bytes():
    src = Source(b"\xca\xfe\xbe\xef")
    assert src.slice(1, 3) == b"\xfe\xbe"
    assert src.is_text is False


def test_length_counts_utf8_bytes():
    text = "λόγος"
    assert len(Source(text)) == len(text.encode("utf-8"))


def test_is_boundary_text():
    src = Source("aé")
    assert src.is_boundary(0)
    assert src.is_boundary(1)
    assert not src.is_boundary(2)
    assert src.is_boundary(len(src))
    assert not src.is_boundary(len(src) + 1)


def test_is_boundary_binary():
    src = Source(b"\xa0\xa1")
    assert src.is_boundary(1)
    assert src.is_boundary(2)
    assert not src.is_boundary(3)


def test_find_boundary_text_skips_continuation_bytes():
    text = "До"
    src = Source(text)
    for index in range(len(src) + 1):
        found = src.find_boundary(index)
        assert found >= index
        assert src.is_boundary(found)
        assert src.slice(0, found) is not None and text.startswith(src.slice(0, found))


def test_find_boundary_binary_is_identity():
    src = Source(b"\xaa\xbb\xcc")
    assert [src.find_boundary(i) for i in range(4)] == [0, 1, 2, 3]


def test_find_boundary_out_of_bounds():
    with pytest.raises(IndexError):
        Source("abc").find_boundary(10)


def test_rejects_unsupported_input():
    with pytest.raises(TypeError):
        Source(42)