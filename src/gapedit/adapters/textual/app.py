"""Executable Textual app that hosts the edit engine."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Callable, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use gapedit.adapters.textual.app"
    ) from exc

from gapedit.engine.dispatcher import EditEngine
from gapedit.errors import EditorError
from gapedit.runtime import telemetry
from gapedit.runtime.config import DEFAULT_PROGRAM_NAME, EditorConfig
from gapedit.view import Frame

from .controller import TextualEditorAdapter, TextualUIHooks

# Textual key names that differ from the engine's binding tokens.
KEY_TOKENS = {
    "tab": "TAB",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "pageup": "PAGE_UP",
    "pagedown": "PAGE_DOWN",
    "home": "HOME",
    "end": "END",
    "escape": "ESC",
}

SELECTED_STYLE = "reverse"
CURSOR_STYLE = "reverse"
STATUS_STYLE = "bold"


def frame_to_text(frame: Frame) -> Text:
    """Convert a rendered frame into styled rich text, status row last."""

    text = Text(no_wrap=True, overflow="crop")
    cursor_x, cursor_y = frame.cursor
    for y, row in enumerate(frame.rows):
        for x, cell in enumerate(row):
            style = ""
            if cell.selected:
                style = SELECTED_STYLE
            if (x, y) == (cursor_x, cursor_y):
                style = CURSOR_STYLE if not cell.selected else "underline"
            text.append(cell.char, style=style or None)
        text.append("\n")
    text.append(frame.status_line, style=STATUS_STYLE)
    return text


def normalize_key(
    key: str, character: Optional[str]
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key name to ``(key, text, modifiers)`` for the engine."""

    if key in KEY_TOKENS:
        return (KEY_TOKENS[key], None, ())
    if key.startswith("ctrl+") and len(key) == len("ctrl+") + 1:
        return (key[-1], None, ("ctrl",))
    if character and len(character) == 1 and character.isprintable():
        return (character, character, ())
    return None


class EditorView(Static, can_focus=True):
    """Full-screen text surface; receives every key before screen bindings."""

    DEFAULT_CSS = """
    EditorView {
        width: 1fr;
        height: 1fr;
        padding: 0;
    }
    """

    def __init__(
        self, on_editor_key: Callable[[events.Key], None], **kwargs: Any
    ) -> None:
        super().__init__("", **kwargs)
        self._on_editor_key = on_editor_key

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self._on_editor_key(event)


class GapEditApp(App[None], inherit_bindings=False):
    """Single-buffer editor UI."""

    # ctrl+p is the paste key, not the command palette.
    ENABLE_COMMAND_PALETTE = False

    CSS = """
	Screen {
		layout: vertical;
	}
	"""

    def __init__(self, engine: EditEngine) -> None:
        super().__init__()
        self.engine = engine
        self.adapter: TextualEditorAdapter | None = None
        self._view: EditorView | None = None
        self._ui_logger = telemetry.get_logger("gapedit.ui")

    def compose(self) -> ComposeResult:
        self._view = EditorView(self._handle_key, id="editor")
        yield self._view

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_frame=self._update_frame,
            handle_event=self._handle_event,
            request_quit=self.exit,
            log=self._log_line,
        )
        size = self.size
        self.adapter = TextualEditorAdapter(
            self.engine, hooks, width=size.width, height=size.height
        )
        if self._view:
            self._view.focus()

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    def _handle_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)

    def _update_frame(self, frame: Frame) -> None:
        if self._view:
            self._view.update(frame_to_text(frame))

    def _handle_event(self, name: str, payload: object | None) -> None:
        telemetry.record_event(f"ui.{name}", data={"payload": payload})

    def _log_line(self, line: str) -> None:
        self._ui_logger.debug(line)


def _parse_args(
    argv: Optional[Sequence[str]], program_name: str
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=program_name, description="Edit a file in the terminal."
    )
    parser.add_argument("path", help="File to edit; created on first save")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    program_name = os.path.basename(sys.argv[0]) or DEFAULT_PROGRAM_NAME
    args = _parse_args(argv, program_name)
    config = EditorConfig.from_env(program_name)
    telemetry.configure(
        settings=config, preset="session" if config.log_file else None
    )

    try:
        engine = EditEngine.open(args.path, config=config)
    except EditorError as exc:
        telemetry.record_event(
            "session.open_failed",
            level="error",
            data={"path": args.path, "reason": str(exc)},
        )
        print(exc.diagnostic(config.program_name), file=sys.stderr)
        return 1

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        print(f"{program_name}: not a terminal", file=sys.stderr)
        return 1

    telemetry.record_event(
        "session.start",
        data={"path": args.path, "bytes": engine.context.buffer.gap.length()},
    )
    GapEditApp(engine).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
