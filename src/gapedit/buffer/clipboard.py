"""Session clipboard."""

from __future__ import annotations

from typing import Optional


class Clipboard:
    """Single register holding the last cut or copied bytes."""

    def __init__(self) -> None:
        self._contents: Optional[bytes] = None

    @property
    def contents(self) -> bytes:
        return self._contents or b""

    def is_empty(self) -> bool:
        return not self._contents

    def store(self, data: bytes) -> None:
        self._contents = bytes(data)

    def clear(self) -> None:
        self._contents = None


__all__ = ["Clipboard"]
