"""Error types shared by the buffer, storage, and engine layers."""

from __future__ import annotations

import errno as errno_codes
import os
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced to the status line."""

    IO = "io"
    ALLOCATION = "allocation"
    WRITE_INCOMPLETE = "write_incomplete"


WRITE_INCOMPLETE_MESSAGE = "bad write"


class EditorError(RuntimeError):
    """Recoverable editor failure carrying its kind and platform detail.

    ``str(error)`` is the text shown on the status line. The underlying
    exception, when there is one, is chained as ``__cause__``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        errno: Optional[int] = None,
        operation: Optional[str] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.errno = errno
        self.operation = operation
        self.path = path

    @classmethod
    def from_os_error(
        cls,
        exc: OSError,
        *,
        operation: str,
        path: Optional[str] = None,
        kind: ErrorKind = ErrorKind.IO,
    ) -> "EditorError":
        reason = exc.strerror or str(exc)
        error = cls(kind, reason, errno=exc.errno, operation=operation, path=path)
        error.__cause__ = exc
        return error

    @classmethod
    def out_of_memory(cls, *, operation: str) -> "EditorError":
        return cls(
            ErrorKind.ALLOCATION,
            os.strerror(errno_codes.ENOMEM),
            errno=errno_codes.ENOMEM,
            operation=operation,
        )

    @classmethod
    def write_incomplete(cls, *, path: Optional[str] = None) -> "EditorError":
        return cls(
            ErrorKind.WRITE_INCOMPLETE,
            WRITE_INCOMPLETE_MESSAGE,
            operation="write",
            path=path,
        )

    def diagnostic(self, program_name: str) -> str:
        """Format a one-line stderr diagnostic, e.g. ``prog: open(x): reason``."""

        if self.operation and self.path is not None:
            return f"{program_name}: {self.operation}({self.path}): {self}"
        if self.operation:
            return f"{program_name}: {self.operation}(): {self}"
        return f"{program_name}: {self}"


class BufferRangeError(IndexError):
    """Raised when an offset or range falls outside the buffer."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


__all__ = [
    "BufferRangeError",
    "EditorError",
    "ErrorKind",
    "WRITE_INCOMPLETE_MESSAGE",
]
