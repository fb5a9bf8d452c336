import curses
import os

import pytest

from todotui import tui
from todotui.core import App
from todotui.models import DEFAULT_TODOS, Key, KeyEvent, Mode, TodoItem


@pytest.mark.parametrize(
    "ch, expected",
    [
        ("\n", KeyEvent(Key.ENTER)),
        ("\r", KeyEvent(Key.ENTER)),
        (curses.KEY_ENTER, KeyEvent(Key.ENTER)),
        ("\x1b", KeyEvent(Key.ESC)),
        ("\x7f", KeyEvent(Key.BACKSPACE)),
        ("\b", KeyEvent(Key.BACKSPACE)),
        (curses.KEY_BACKSPACE, KeyEvent(Key.BACKSPACE)),
        (curses.KEY_UP, KeyEvent(Key.UP)),
        (curses.KEY_DOWN, KeyEvent(Key.DOWN)),
        ("q", KeyEvent(Key.CHAR, "q")),
        (" ", KeyEvent(Key.CHAR, " ")),
        ("é", KeyEvent(Key.CHAR, "é")),
        ("\x03", KeyEvent(Key.OTHER)),
        ("\t", KeyEvent(Key.OTHER)),
        (curses.KEY_RESIZE, KeyEvent(Key.OTHER)),
        (curses.KEY_F1, KeyEvent(Key.OTHER)),
    ],
)
def test_decode_key(ch, expected):
    assert tui.decode_key(ch) == expected


def test_item_line():
    assert tui.item_line(TodoItem("milk"), selected=False) == "  [ ] milk"
    assert tui.item_line(TodoItem("milk", True), selected=True) == "► [✓] milk"


def test_input_text_follows_mode(tmp_path):
    app = App(str(tmp_path / "todos.json"))
    assert tui.input_text(app) == "Press 'a' to add a new todo"
    app.mode = Mode.INPUT
    app.input = "abc"
    assert tui.input_text(app) == "New todo: abc (Press Enter to confirm, Esc to cancel)"


def test_scroll_offset_keeps_selection_visible():
    assert tui.scroll_offset(0, 0, 10, 4) == 0
    assert tui.scroll_offset(0, 5, 10, 4) == 2
    assert tui.scroll_offset(5, 1, 10, 4) == 1
    assert tui.scroll_offset(3, 4, 10, 4) == 3
    # list shrank below the current offset
    assert tui.scroll_offset(8, 1, 2, 4) == 0
    assert tui.scroll_offset(3, None, 0, 4) == 0


def test_layout():
    list_box, input_box = tui.layout(24, 80)
    assert list_box == (17, 76, 2, 2)
    assert input_box == (3, 76, 19, 2)
    assert tui.layout(9, 80) is None


def test_main_returns_zero_on_quit(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    seen = []
    monkeypatch.setattr(tui, "start_curses", seen.append)
    assert tui.main() == 0
    assert [t.text for t in seen[0].todos] == DEFAULT_TODOS
    assert seen[0].path == str(tmp_path / "todos.json")


def test_main_reports_loop_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    def boom(app):
        raise curses.error("setupterm failed")

    monkeypatch.setattr(tui, "start_curses", boom)
    assert tui.main() == 1
    assert "setupterm failed" in capsys.readouterr().err


def test_item_line_replaces_unprintable_characters():
    assert tui.item_line(TodoItem("a\x00b\tc"), selected=False) == "  [ ] a?b?c"


def test_input_text_replaces_unprintable_characters(tmp_path):
    app = App(str(tmp_path / "todos.json"))
    app.mode = Mode.INPUT
    app.input = "x\x00"
    assert tui.input_text(app).startswith("New todo: x? (")


def test_main_without_working_directory_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def gone():
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(os, "getcwd", gone)
    seen = []
    monkeypatch.setattr(tui, "start_curses", seen.append)
    assert tui.main() == 0
    assert [t.text for t in seen[0].todos] == DEFAULT_TODOS
