"""Scroll state for the visible window onto the buffer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Viewport:
    """First rendered line plus the line count the last frame could show."""

    top_line: int = 0
    visible_height: int = 0

    def follow(self, line: int) -> None:
        """Scroll by whole pages until ``line`` is inside the window.

        The step is the last rendered height, so a resize between renders can
        overshoot until the next frame recomputes it.
        """

        step = self.visible_height
        if step <= 0:
            self.top_line = line
            return
        while self.top_line + step <= line:
            self.top_line += step
        while self.top_line > line:
            self.top_line = 0 if self.top_line < step else self.top_line - step


__all__ = ["Viewport"]
