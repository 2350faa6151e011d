"""Whole-file load and save collaborators."""

from __future__ import annotations

from gapedit.errors import EditorError

from . import telemetry


def load_file(path: str) -> bytes:
    """Return the full contents of ``path``; a missing file reads as empty."""

    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except FileNotFoundError:
        telemetry.record_event("storage.load", data={"path": path, "missing": True})
        return b""
    except MemoryError as exc:
        raise EditorError.out_of_memory(operation="read") from exc
    except OSError as exc:
        raise EditorError.from_os_error(exc, operation="open", path=path) from exc

    telemetry.record_event("storage.load", data={"path": path, "bytes": len(data)})
    return data


def save_file(path: str, data: bytes) -> None:
    """Truncate ``path`` and write ``data`` in full.

    Failing to open the file raises an ``IO`` error with the platform reason.
    Any failure after that is reported as ``WRITE_INCOMPLETE`` ("bad write");
    the original exception stays chained on the error.
    """

    try:
        handle = open(path, "wb")
    except OSError as exc:
        raise EditorError.from_os_error(exc, operation="open", path=path) from exc

    try:
        with handle:
            written = handle.write(data)
    except OSError as exc:
        telemetry.record_event(
            "storage.write_failed",
            level="error",
            data={"path": path, "reason": exc.strerror or str(exc)},
        )
        raise EditorError.write_incomplete(path=path) from exc
    if written != len(data):
        raise EditorError.write_incomplete(path=path)

    telemetry.record_event("storage.save", data={"path": path, "bytes": len(data)})


__all__ = ["load_file", "save_file"]
