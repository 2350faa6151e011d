from __future__ import annotations

import pytest

from gapedit.buffer import GapBuffer
from gapedit.errors import BufferRangeError


def make_buffer(data: bytes = b"", *, chunk_size: int = 8) -> GapBuffer:
    return GapBuffer.from_bytes(data, chunk_size=chunk_size)


def test_load_places_content_in_first_region() -> None:
    buffer = make_buffer(b"hello")

    assert buffer.first_len == 5
    assert buffer.second_len == 0
    assert buffer.capacity == 8
    assert buffer.dump() == b"hello"


def test_load_exact_chunk_multiple_leaves_spare_chunk() -> None:
    buffer = make_buffer(b"x" * 8)

    assert buffer.capacity == 16
    assert buffer.gap_size == 8


def test_load_none_is_empty() -> None:
    buffer = GapBuffer.from_bytes(None)

    assert len(buffer) == 0
    assert buffer.dump() == b""


def test_seek_preserves_logical_content() -> None:
    buffer = make_buffer(b"abcdef")

    for offset in (0, 3, 6, 2, 5, 1):
        buffer.seek(offset)
        assert buffer.first_len == offset
        assert buffer.dump() == b"abcdef"
        assert [buffer.get(i) for i in range(6)] == list(b"abcdef")


def test_seek_out_of_range_raises() -> None:
    buffer = make_buffer(b"abc")

    with pytest.raises(BufferRangeError):
        buffer.seek(4)
    with pytest.raises(BufferRangeError):
        buffer.seek(-1)


def test_insert_and_delete_scenario() -> None:
    buffer = make_buffer(b"ab\ncd")

    buffer.insert(1, ord("X"))
    assert buffer.dump() == b"aXb\ncd"

    buffer.delete(0)
    assert buffer.dump() == b"Xb\ncd"
    assert buffer.length() == 5


def test_net_length_after_mixed_edits() -> None:
    buffer = make_buffer(b"0123")

    buffer.insert(4, ord("4"))
    buffer.insert(0, ord("-"))
    buffer.delete(2)
    buffer.insert(3, ord("+"))
    buffer.delete(5)

    assert buffer.length() == 4 + 3 - 2
    assert buffer.dump() == b"-02+3"


def test_insert_beyond_one_chunk_grows() -> None:
    buffer = make_buffer(b"", chunk_size=4)
    payload = bytes(range(97, 97 + 10))

    for index, byte in enumerate(payload):
        buffer.insert(index, byte)

    assert buffer.dump() == payload
    assert buffer.grow_count >= 2
    assert buffer.capacity % 4 == 0


def test_grow_relocates_second_region() -> None:
    buffer = make_buffer(b"abcd", chunk_size=4)
    assert buffer.capacity == 8
    buffer.seek(1)

    for _ in range(6):
        buffer.insert(1, ord("."))

    assert buffer.dump() == b"a......bcd"
    assert buffer.grow_count == 1


def test_delete_out_of_range_raises() -> None:
    buffer = make_buffer(b"ab")

    with pytest.raises(BufferRangeError):
        buffer.delete(2)


def test_iter_bytes_spans_gap() -> None:
    buffer = make_buffer(b"hello world")
    buffer.seek(4)

    assert bytes(buffer.iter_bytes()) == b"hello world"
    assert bytes(buffer.iter_bytes(6)) == b"world"
