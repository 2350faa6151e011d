"""High-level buffer facade combining gap storage, pointer, and clipboard."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import replace
from typing import ContextManager, List, Optional, Tuple

from gapedit.errors import EditorError
from gapedit.runtime import telemetry
from gapedit.runtime.config import DEFAULT_CHUNK_SIZE

from .clipboard import Clipboard
from .gap import GapBuffer
from .lines import cursor_from_offset, line_length, offset_of
from .selection import copy_selection, delete_selection, selection_start
from .state import Pointer


class Buffer:
    def __init__(
        self,
        *,
        name: str = "untitled",
        gap: Optional[GapBuffer] = None,
        pointer: Optional[Pointer] = None,
        clipboard: Optional[Clipboard] = None,
    ) -> None:
        self.name = name
        self.gap = gap if gap is not None else GapBuffer()
        self.pointer = pointer if pointer is not None else Pointer()
        self.clipboard = clipboard if clipboard is not None else Clipboard()
        self.version = 0

    @classmethod
    def from_bytes(
        cls,
        data: Optional[bytes],
        *,
        name: str = "untitled",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> "Buffer":
        return cls(name=name, gap=GapBuffer.from_bytes(data, chunk_size=chunk_size))

    def cursor_offset(self) -> int:
        return offset_of(self.gap, self.pointer.line, self.pointer.column)

    def insert_text(self, data: bytes, *, label: str = "insert_text") -> int:
        """Replace any selection with ``data`` and move the cursor past it.

        Returns the number of bytes inserted. On allocation failure the
        buffer, pointer, and selection are restored and ``EditorError``
        propagates.
        """

        if not data:
            return 0
        with Transaction(self, label) as tx:
            tx.remove_selection()
            offset = self.cursor_offset()
            tx.insert(offset, data)
            line, column = cursor_from_offset(self.gap, offset + len(data))
            self.pointer.set_cursor(line, column, sticky=True)
        return len(data)

    def delete_backward(self) -> int:
        """Delete the selection, or the byte before the cursor.

        The cursor steps left first (to the end of the previous line at
        column 0), so deleting at a line start joins the two lines.
        """

        pointer = self.pointer
        with Transaction(self, "delete_backward") as tx:
            removed = tx.remove_selection()
            if removed:
                return removed
            offset = self.cursor_offset()
            if offset == 0:
                return 0
            if pointer.column > 0:
                pointer.set_cursor(pointer.line, pointer.column - 1, sticky=True)
            else:
                previous = pointer.line - 1
                pointer.set_cursor(
                    previous, line_length(self.gap, previous), sticky=True
                )
            tx.delete(offset - 1)
            return 1

    def delete_selection(self) -> int:
        with Transaction(self, "delete_selection") as tx:
            return tx.remove_selection()

    def copy_selection(self) -> bytes:
        with telemetry.span(
            "buffer::copy_selection",
            component="buffer",
            metadata={"buffer": self.name},
        ):
            try:
                return copy_selection(self.gap, self.pointer)
            except MemoryError as exc:
                raise EditorError.out_of_memory(operation="copy") from exc


class Transaction(AbstractContextManager["Transaction"]):
    """Groups buffer edits so a failure part-way leaves nothing applied.

    Every insert and delete is journaled; if the block raises, the journal
    is replayed backwards and the pointer restored. Replay never needs to
    grow the gap buffer, since it only returns the buffer to a length it
    already held.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._pointer_before: Optional[Pointer] = None
        self._journal: List[Tuple[str, int, bytes]] = []

    def __enter__(self) -> "Transaction":
        self._pointer_before = replace(self.buffer.pointer)
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def insert(self, offset: int, data: bytes) -> None:
        gap = self.buffer.gap
        inserted = 0
        try:
            for byte in data:
                gap.insert(offset + inserted, byte)
                inserted += 1
        finally:
            if inserted:
                self._journal.append(("insert", offset, bytes(data[:inserted])))

    def delete(self, offset: int) -> None:
        gap = self.buffer.gap
        removed = bytes([gap.get(offset)])
        gap.delete(offset)
        self._journal.append(("delete", offset, removed))

    def remove_selection(self) -> int:
        pointer = self.buffer.pointer
        if not pointer.selection_active:
            return 0
        gap = self.buffer.gap
        try:
            removed = copy_selection(gap, pointer)
        except MemoryError as exc:
            raise EditorError.out_of_memory(operation="delete_selection") from exc
        start = offset_of(gap, *selection_start(pointer))
        count = delete_selection(gap, pointer)
        self._journal.append(("delete", start, removed))
        return count

    def _rollback(self) -> None:
        gap = self.buffer.gap
        for kind, offset, data in reversed(self._journal):
            if kind == "insert":
                for _ in data:
                    gap.delete(offset)
            else:
                for index, byte in enumerate(data):
                    gap.insert(offset + index, byte)
        self._journal.clear()
        if self._pointer_before is not None:
            self.buffer.pointer = self._pointer_before

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            if self._journal:
                self.buffer.version += 1
        elif issubclass(exc_type, (EditorError, MemoryError)):
            self._rollback()
            if self._handle is not None:
                self._handle.rollback(str(exc))
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "Transaction"]
