from __future__ import annotations

import asyncio
import io
import sys
from typing import Any, Dict, List

import pytest

from gapedit.adapters.textual import TextualEditorAdapter, TextualUIHooks
from gapedit.adapters.textual.app import GapEditApp, frame_to_text, main, normalize_key
from gapedit.buffer import Buffer
from gapedit.engine import EditorContext, EventBus
from gapedit.engine.dispatcher import EditEngine
from gapedit.view import Frame


def make_engine(text: bytes = b"", path: str | None = None) -> EditEngine:
    context = EditorContext(
        buffer=Buffer.from_bytes(text, name="scratch"), bus=EventBus(), path=path
    )
    return EditEngine(context)


def test_adapter_renders_frames_and_status() -> None:
    frames: List[Frame] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_frame=frames.append,
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(make_engine(), hooks, width=12, height=3)

    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("i", text="i")

    assert len(frames) == 3
    assert frames[-1].row_text(0).startswith("hi")
    assert frames[-1].cursor == (2, 0)
    assert statuses[-1] == "         2,0"


def test_adapter_resize_rerenders() -> None:
    frames: List[Frame] = []
    adapter = TextualEditorAdapter(
        make_engine(b"abc"), TextualUIHooks(update_frame=frames.append)
    )

    adapter.resize(5, 2)

    assert frames[-1].width == 5
    assert len(frames[-1].rows) == 1


def test_adapter_surfaces_selection_events() -> None:
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_frame=lambda frame: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualEditorAdapter(make_engine(b"abc"), hooks)

    adapter.handle_textual_key("t", modifiers=("ctrl",))
    adapter.handle_textual_key("RIGHT")

    toggles = [event for event in events if event["name"] == "selection.toggle"]
    assert toggles
    assert toggles[-1]["payload"]["active"] is True


def test_adapter_requests_quit() -> None:
    quits: List[bool] = []
    frames: List[Frame] = []
    hooks = TextualUIHooks(
        update_frame=frames.append,
        request_quit=lambda: quits.append(True),
    )
    adapter = TextualEditorAdapter(make_engine(), hooks)

    result = adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert result.quit is True
    assert quits == [True]
    assert len(frames) == 1


def test_adapter_shows_save_error(tmp_path) -> None:
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_frame=lambda frame: None,
        update_status=statuses.append,
    )
    engine = make_engine(b"x", path=str(tmp_path / "missing" / "doc.txt"))
    adapter = TextualEditorAdapter(engine, hooks, width=40, height=4)

    adapter.handle_textual_key("s", modifiers=("ctrl",))

    assert statuses[-1].startswith("No such file or directory")
    assert statuses[-1].endswith("0,0")


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_frame=lambda frame: None,
        log=logs.append,
    )
    adapter = TextualEditorAdapter(make_engine(), hooks)

    adapter.handle_textual_key("a", text="a")

    assert any(line.startswith("key ->") for line in logs)
    assert any("status='insert'" in line for line in logs)


def test_normalize_key_maps_textual_names() -> None:
    assert normalize_key("pagedown", None) == ("PAGE_DOWN", None, ())
    assert normalize_key("enter", None) == ("ENTER", None, ())
    assert normalize_key("ctrl+s", None) == ("s", None, ("ctrl",))
    assert normalize_key("a", "a") == ("a", "a", ())
    assert normalize_key("f5", None) is None


def test_frame_to_text_appends_status_row() -> None:
    frame = make_engine(b"ab").render(6, 2)

    text = frame_to_text(frame)

    assert text.plain == "ab    \n" + frame.status_line


def run_app(engine: EditEngine, *keys: str) -> GapEditApp:
    app = GapEditApp(engine)

    async def drive() -> None:
        async with app.run_test(size=(20, 5)) as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)

    asyncio.run(drive())
    return app


def test_app_pastes_with_ctrl_p() -> None:
    engine = make_engine(b"abc")
    engine.context.buffer.clipboard.store(b"XY")

    run_app(engine, "ctrl+p")

    assert engine.context.buffer.gap.dump() == b"XYabc"
    assert engine.context.buffer.pointer.position == (0, 2)


def test_app_saves_with_ctrl_s(tmp_path) -> None:
    path = tmp_path / "doc.txt"
    engine = make_engine(b"", path=str(path))

    run_app(engine, "h", "i", "ctrl+s")

    assert path.read_bytes() == b"hi"


def test_app_quits_with_ctrl_q() -> None:
    engine = make_engine(b"abc")

    run_app(engine, "ctrl+q")

    assert engine.finished
    assert engine.context.buffer.gap.dump() == b"abc"


@pytest.mark.parametrize("argv", [[], ["one.txt", "two.txt"]])
def test_main_requires_exactly_one_path(argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_main_reports_open_failure(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["gapedit"])
    monkeypatch.setattr(sys, "stdin", io.StringIO())

    assert main([str(tmp_path)]) == 1

    err = capsys.readouterr().err
    assert f"gapedit: open({tmp_path}): " in err
    assert "not a terminal" not in err


def test_main_refuses_non_terminal(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["gapedit"])
    monkeypatch.setattr(sys, "stdin", io.StringIO())

    assert main([str(tmp_path / "new.txt")]) == 1

    assert "gapedit: not a terminal" in capsys.readouterr().err
