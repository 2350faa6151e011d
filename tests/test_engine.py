from __future__ import annotations

from typing import Dict, List

from gapedit.buffer import Buffer, GapBuffer
from gapedit.engine import CommandResult, EditorContext, EventBus, KeyInput
from gapedit.engine.dispatcher import EditEngine
from gapedit.errors import EditorError
from gapedit.runtime.config import EditorConfig


def make_engine(
    text: bytes = b"", *, path: str | None = None, chunk_size: int = 4096
) -> EditEngine:
    buffer = Buffer.from_bytes(text, name="test", chunk_size=chunk_size)
    context = EditorContext(buffer=buffer, bus=EventBus(), path=path)
    return EditEngine(context)


def press(engine: EditEngine, key: str, *modifiers: str) -> CommandResult:
    return engine.handle_key(KeyInput(key=key, modifiers=tuple(modifiers)))


def type_text(engine: EditEngine, text: str) -> None:
    for char in text:
        engine.handle_key(KeyInput.from_char(char))


def contents(engine: EditEngine) -> bytes:
    return engine.context.buffer.gap.dump()


def cursor(engine: EditEngine) -> tuple[int, int]:
    return engine.context.buffer.pointer.position


def test_typing_inserts_printable_bytes() -> None:
    engine = make_engine()

    type_text(engine, "hello")

    assert contents(engine) == b"hello"
    assert cursor(engine) == (0, 5)
    assert engine.context.buffer.version == 5


def test_enter_and_tab_insert_control_bytes() -> None:
    engine = make_engine()

    type_text(engine, "ab\n\tc")

    assert contents(engine) == b"ab\n\tc"
    assert cursor(engine) == (1, 2)


def test_typing_in_middle_of_line() -> None:
    engine = make_engine(b"ac")
    press(engine, "RIGHT")

    type_text(engine, "b")

    assert contents(engine) == b"abc"
    assert cursor(engine) == (0, 2)


def test_unbound_non_printable_key_is_not_consumed() -> None:
    engine = make_engine(b"abc")

    result = press(engine, "F5")

    assert result.consumed is False
    assert contents(engine) == b"abc"


def test_backspace_at_line_start_joins_lines() -> None:
    engine = make_engine(b"ab\ncd")
    press(engine, "DOWN")

    press(engine, "BACKSPACE")

    assert contents(engine) == b"abcd"
    assert cursor(engine) == (0, 2)


def test_backspace_and_delete_remove_previous_byte() -> None:
    engine = make_engine(b"abc")
    press(engine, "END")

    press(engine, "BACKSPACE")
    press(engine, "DELETE")

    assert contents(engine) == b"a"
    assert cursor(engine) == (0, 1)


def test_backspace_at_buffer_start_is_noop() -> None:
    engine = make_engine(b"abc")

    result = press(engine, "BACKSPACE")

    assert result.status == "noop"
    assert contents(engine) == b"abc"
    assert engine.context.buffer.version == 0


def test_horizontal_moves_stop_at_line_edges() -> None:
    engine = make_engine(b"ab\ncd")

    press(engine, "LEFT")
    assert cursor(engine) == (0, 0)

    for _ in range(5):
        press(engine, "RIGHT")
    assert cursor(engine) == (0, 2)


def test_vertical_moves_restore_sticky_column() -> None:
    engine = make_engine(b"abcdef\nab\nabcdef")
    press(engine, "END")
    press(engine, "LEFT")

    press(engine, "DOWN")
    assert cursor(engine) == (1, 2)

    press(engine, "DOWN")
    assert cursor(engine) == (2, 5)

    press(engine, "DOWN")
    assert cursor(engine) == (2, 5)

    press(engine, "UP")
    press(engine, "UP")
    assert cursor(engine) == (0, 5)


def test_home_and_end() -> None:
    engine = make_engine(b"one\ntwo three")
    press(engine, "DOWN")

    press(engine, "END")
    assert cursor(engine) == (1, 9)

    press(engine, "HOME")
    assert cursor(engine) == (1, 0)


def test_page_moves_use_rendered_height_and_scroll() -> None:
    lines = "\n".join(str(n) for n in range(10)).encode()
    engine = make_engine(lines)
    engine.render(10, 4)
    assert engine.context.viewport.visible_height == 3

    press(engine, "PAGE_DOWN")
    assert cursor(engine) == (3, 0)
    assert engine.context.viewport.top_line == 3

    for _ in range(5):
        press(engine, "PAGE_DOWN")
    assert cursor(engine) == (9, 0)

    press(engine, "PAGE_UP")
    assert cursor(engine) == (6, 0)

    for _ in range(5):
        press(engine, "PAGE_UP")
    assert cursor(engine) == (0, 0)
    assert engine.context.viewport.top_line == 0


def test_cursor_motion_scrolls_viewport() -> None:
    lines = "\n".join(str(n) for n in range(10)).encode()
    engine = make_engine(lines)
    engine.render(10, 4)

    for _ in range(4):
        press(engine, "DOWN")

    assert engine.context.viewport.top_line == 3
    frame = engine.render(10, 4)
    assert frame.row_text(0).startswith("3")
    assert frame.cursor == (0, 1)


def test_cut_and_paste_selection() -> None:
    engine = make_engine(b"hello world")
    press(engine, "t", "ctrl")
    for _ in range(4):
        press(engine, "RIGHT")

    press(engine, "x", "ctrl")

    buffer = engine.context.buffer
    assert contents(engine) == b" world"
    assert buffer.clipboard.contents == b"hello"
    assert cursor(engine) == (0, 0)
    assert not buffer.pointer.selection_active

    press(engine, "END")
    press(engine, "p", "ctrl")

    assert contents(engine) == b" worldhello"
    assert cursor(engine) == (0, 11)


def test_copy_keeps_buffer_and_selection() -> None:
    engine = make_engine(b"ab\ncd")
    press(engine, "t", "ctrl")
    press(engine, "DOWN")
    press(engine, "RIGHT")

    press(engine, "c", "ctrl")

    assert engine.context.buffer.clipboard.contents == b"ab\ncd"
    assert contents(engine) == b"ab\ncd"
    assert engine.context.buffer.pointer.selection_active


def test_copy_without_selection_stores_nothing() -> None:
    engine = make_engine(b"abc")

    press(engine, "c", "ctrl")
    result = press(engine, "p", "ctrl")

    assert engine.context.buffer.clipboard.is_empty()
    assert result.status == "noop"
    assert contents(engine) == b"abc"


def test_paste_replaces_selection() -> None:
    engine = make_engine(b"abc")
    engine.context.buffer.clipboard.store(b"XY")
    press(engine, "RIGHT")
    press(engine, "t", "ctrl")

    press(engine, "p", "ctrl")

    assert contents(engine) == b"aXYc"
    assert cursor(engine) == (0, 3)


def test_typing_replaces_selection() -> None:
    engine = make_engine(b"one two")
    press(engine, "END")
    press(engine, "t", "ctrl")
    for _ in range(3):
        press(engine, "LEFT")

    type_text(engine, "2")

    assert contents(engine) == b"one 2"


def test_backspace_removes_selection_only() -> None:
    engine = make_engine(b"ab\ncd")
    press(engine, "RIGHT")
    press(engine, "t", "ctrl")
    press(engine, "DOWN")

    press(engine, "BACKSPACE")

    assert contents(engine) == b"a"
    assert cursor(engine) == (0, 1)


def test_selection_events_are_emitted() -> None:
    engine = make_engine(b"abc")
    events: List[Dict[str, object]] = []
    engine.context.bus.subscribe("selection.toggle", events.append)

    press(engine, "t", "ctrl")
    press(engine, "t", "ctrl")

    assert [event["active"] for event in events] == [True, False]


def test_save_writes_file(tmp_path) -> None:
    target = tmp_path / "out.txt"
    engine = make_engine(b"saved\n", path=str(target))
    saved: List[object] = []
    engine.context.bus.subscribe("buffer.save", saved.append)

    result = press(engine, "s", "ctrl")

    assert result.status == "save"
    assert target.read_bytes() == b"saved\n"
    assert saved == [{"path": str(target), "bytes": 6}]


def test_raw_control_bytes_map_to_commands(tmp_path) -> None:
    target = tmp_path / "raw.txt"
    engine = make_engine(b"x", path=str(target))

    engine.handle_key(KeyInput.from_char("\x13"))
    result = engine.handle_key(KeyInput.from_char("\x11"))

    assert target.read_bytes() == b"x"
    assert result.quit is True


def test_save_failure_becomes_one_frame_status(tmp_path) -> None:
    engine = make_engine(b"x", path=str(tmp_path / "missing" / "out.txt"))
    failures: List[object] = []
    engine.context.bus.subscribe("buffer.save_failed", failures.append)

    result = press(engine, "s", "ctrl")

    assert result.status == "error"
    assert failures and failures[0]["kind"] == "io"
    frame = engine.render(40, 3)
    assert frame.status_line.startswith("No such file or directory")
    assert engine.render(40, 3).status_line.strip() == "0,0"


def test_save_without_path_reports_no_file_name() -> None:
    engine = make_engine(b"x")

    result = press(engine, "s", "ctrl")

    assert result.message == "no file name"


def test_quit_marks_engine_finished() -> None:
    engine = make_engine()
    quits: List[object] = []
    engine.context.bus.subscribe("session.quit", quits.append)

    result = press(engine, "q", "ctrl")

    assert result.quit is True
    assert engine.finished is True
    assert quits == [{"path": None}]


def test_allocation_failure_rolls_back_paste(monkeypatch) -> None:
    engine = make_engine(b"abc", chunk_size=4)
    buffer = engine.context.buffer
    buffer.clipboard.store(b"XYZ")
    press(engine, "RIGHT")
    press(engine, "t", "ctrl")

    def failing_grow(self: GapBuffer) -> None:
        raise EditorError.out_of_memory(operation="grow")

    monkeypatch.setattr(GapBuffer, "_grow", failing_grow)

    result = press(engine, "p", "ctrl")

    assert result.status == "error"
    assert contents(engine) == b"abc"
    assert buffer.pointer.position == (0, 1)
    assert buffer.pointer.selection_active
    assert buffer.version == 0
    assert engine.context.status == result.message


def test_open_missing_file_starts_empty(tmp_path) -> None:
    path = tmp_path / "new.txt"

    engine = EditEngine.open(str(path), config=EditorConfig(chunk_size=16))

    assert contents(engine) == b""
    assert engine.context.path == str(path)
    assert engine.context.buffer.name == "new.txt"
    assert engine.context.buffer.gap.capacity == 16


def test_buffer_keeps_the_empty_storage_it_is_given() -> None:
    gap = GapBuffer.from_bytes(b"", chunk_size=16)

    buffer = Buffer(gap=gap)

    assert buffer.gap is gap
    assert buffer.gap.capacity == 16


def test_open_existing_file(tmp_path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\ntwo")

    engine = EditEngine.open(str(path), config=EditorConfig())
    press(engine, "DOWN")
    press(engine, "END")
    type_text(engine, "!")

    assert contents(engine) == b"one\ntwo!"
