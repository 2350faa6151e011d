"""Gap buffer byte storage.

The buffer is one ``bytearray`` holding two regions::

    [first region     <gap>     second region]

The first region always starts at physical index 0 and the second region
always ends at the last physical index. Edits happen at the boundary, so the
gap is moved (``seek``) to the edit offset first; moving it costs the number
of bytes between the old and new boundary.
"""

from __future__ import annotations

from typing import Iterator, Optional

from gapedit.errors import BufferRangeError, EditorError
from gapedit.runtime import telemetry
from gapedit.runtime.config import DEFAULT_CHUNK_SIZE


class GapBuffer:
    """Byte sequence with a movable gap for cheap local edits."""

    __slots__ = ("_buf", "_chunk_size", "first_len", "second_len", "grow_count")

    def __init__(self, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._chunk_size = chunk_size
        self._buf = bytearray()
        self.first_len = 0
        self.second_len = 0
        self.grow_count = 0

    @classmethod
    def from_bytes(
        cls, data: Optional[bytes], *, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> "GapBuffer":
        buffer = cls(chunk_size=chunk_size)
        buffer.load(data)
        return buffer

    @property
    def capacity(self) -> int:
        return len(self._buf)

    @property
    def gap_size(self) -> int:
        return len(self._buf) - self.length()

    def length(self) -> int:
        return self.first_len + self.second_len

    def __len__(self) -> int:
        return self.length()

    def _physical(self, offset: int) -> int:
        if offset < self.first_len:
            return offset
        return len(self._buf) - self.second_len + (offset - self.first_len)

    def get(self, offset: int) -> int:
        """Return the byte value at logical ``offset``."""

        if offset < 0 or offset >= self.length():
            raise BufferRangeError(
                f"offset {offset} outside buffer of length {self.length()}",
                offset=offset,
            )
        return self._buf[self._physical(offset)]

    def iter_bytes(self, start: int = 0) -> Iterator[int]:
        """Yield byte values in logical order beginning at ``start``."""

        buf = self._buf
        second_start = len(buf) - self.second_len
        for offset in range(start, self.first_len):
            yield buf[offset]
        skip = max(0, start - self.first_len)
        for index in range(second_start + skip, len(buf)):
            yield buf[index]

    def seek(self, offset: int) -> None:
        """Move the gap so the first region is exactly ``offset`` bytes long."""

        if offset < 0 or offset > self.length():
            raise BufferRangeError(
                f"cannot seek to {offset} in buffer of length {self.length()}",
                offset=offset,
            )
        buf = self._buf
        end = len(buf)
        if offset < self.first_len:
            count = self.first_len - offset
            second_start = end - self.second_len
            buf[second_start - count : second_start] = buf[offset : self.first_len]
            self.first_len -= count
            self.second_len += count
        elif offset > self.first_len:
            count = offset - self.first_len
            second_start = end - self.second_len
            buf[self.first_len : offset] = buf[second_start : second_start + count]
            self.first_len += count
            self.second_len -= count

    def _grow(self) -> None:
        old_capacity = len(self._buf)
        try:
            self._buf.extend(bytes(self._chunk_size))
        except MemoryError as exc:
            raise EditorError.out_of_memory(operation="grow") from exc
        new_capacity = len(self._buf)
        if self.second_len:
            old_start = old_capacity - self.second_len
            self._buf[new_capacity - self.second_len : new_capacity] = self._buf[
                old_start:old_capacity
            ]
        self.grow_count += 1
        telemetry.record_event(
            "buffer.grow",
            level="debug",
            data={"capacity": new_capacity, "length": self.length()},
        )

    def insert(self, offset: int, byte: int) -> None:
        """Insert a single byte so it ends up at logical ``offset``."""

        if offset < 0 or offset > self.length():
            raise BufferRangeError(
                f"cannot insert at {offset} in buffer of length {self.length()}",
                offset=offset,
            )
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte value {byte} out of range")
        if self.length() == len(self._buf):
            self._grow()
        self.seek(offset)
        self._buf[self.first_len] = byte
        self.first_len += 1

    def delete(self, offset: int) -> None:
        """Remove the byte at logical ``offset``."""

        if offset < 0 or offset >= self.length():
            raise BufferRangeError(
                f"cannot delete {offset} in buffer of length {self.length()}",
                offset=offset,
            )
        self.seek(offset + 1)
        self.first_len -= 1

    def load(self, data: Optional[bytes]) -> None:
        """Replace the contents with ``data`` (``None`` loads an empty buffer)."""

        content = bytes(data or b"")
        chunks = len(content) // self._chunk_size + 1
        try:
            storage = bytearray(chunks * self._chunk_size)
        except MemoryError as exc:
            raise EditorError.out_of_memory(operation="load") from exc
        storage[: len(content)] = content
        self._buf = storage
        self.first_len = len(content)
        self.second_len = 0

    def dump(self) -> bytes:
        """Return the logical contents, first region then second region."""

        end = len(self._buf)
        return bytes(self._buf[: self.first_len]) + bytes(
            self._buf[end - self.second_len : end]
        )

    def __repr__(self) -> str:
        return (
            f"GapBuffer(length={self.length()}, capacity={self.capacity}, "
            f"first_len={self.first_len}, second_len={self.second_len})"
        )


__all__ = ["GapBuffer"]
