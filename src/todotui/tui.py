"""Curses-based terminal user interface for the todo list."""

import curses
import os
import sys
from typing import Optional, Tuple, Union

from .core import App, run
from .models import POLL_INTERVAL_MS, Key, KeyEvent, Mode, TodoItem, save_path

TITLE = " Todo List (up/down: navigate, Space: toggle, a: add, d: delete, q: quit) "
INPUT_TITLE = " Input "
HIGHLIGHT_SYMBOL = "► "
MARGIN = 2
INPUT_HEIGHT = 3


def decode_key(ch: Union[str, int]) -> KeyEvent:
    """Translate a `get_wch()` result into a KeyEvent."""
    if isinstance(ch, str):
        if ch in ("\n", "\r"):
            return KeyEvent(Key.ENTER)
        if ch == "\x1b":
            return KeyEvent(Key.ESC)
        if ch in ("\x7f", "\b"):
            return KeyEvent(Key.BACKSPACE)
        if len(ch) == 1 and ch.isprintable():
            return KeyEvent(Key.CHAR, ch)
        return KeyEvent(Key.OTHER)

    if ch == curses.KEY_UP:
        return KeyEvent(Key.UP)
    if ch == curses.KEY_DOWN:
        return KeyEvent(Key.DOWN)
    if ch == curses.KEY_ENTER:
        return KeyEvent(Key.ENTER)
    if ch == curses.KEY_BACKSPACE:
        return KeyEvent(Key.BACKSPACE)
    return KeyEvent(Key.OTHER)


def displayable(text: str) -> str:
    """Replace characters curses cannot draw (NUL, control chars) with '?'."""
    return "".join(c if c.isprintable() else "?" for c in text)


def item_line(item: TodoItem, selected: bool) -> str:
    """Row text for one item: highlight symbol, checkbox, text."""
    prefix = HIGHLIGHT_SYMBOL if selected else " " * len(HIGHLIGHT_SYMBOL)
    checkbox = "[✓] " if item.completed else "[ ] "
    return prefix + checkbox + displayable(item.text)


def input_text(app: App) -> str:
    if app.mode == Mode.INPUT:
        return f"New todo: {displayable(app.input)} (Press Enter to confirm, Esc to cancel)"
    return "Press 'a' to add a new todo"


def scroll_offset(offset: int, selected: Optional[int], count: int, rows: int) -> int:
    """Return the first visible row so that `selected` stays on screen."""
    if rows < 1 or count == 0:
        return 0
    offset = max(0, min(offset, count - rows)) if count > rows else 0
    if selected is None:
        return offset
    if selected < offset:
        return selected
    if selected >= offset + rows:
        return selected - rows + 1
    return offset


def layout(height: int, width: int) -> Optional[Tuple[Tuple[int, int, int, int], Tuple[int, int, int, int]]]:
    """Split the screen into (list box, input box) as (h, w, y, x).

    Returns None when the terminal is too small to draw both boxes.
    """
    area_h = height - 2 * MARGIN
    area_w = width - 2 * MARGIN
    list_h = area_h - INPUT_HEIGHT
    if list_h < 3 or area_w < 8:
        return None
    list_box = (list_h, area_w, MARGIN, MARGIN)
    input_box = (INPUT_HEIGHT, area_w, MARGIN + list_h, MARGIN)
    return list_box, input_box


class TUI:
    """Curses screen: draws the App and polls for one key at a time."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.offset = 0
        curses.curs_set(0)
        self.stdscr.keypad(True)
        self.stdscr.timeout(POLL_INTERVAL_MS)

        self.has_colors = curses.has_colors()
        if self.has_colors:
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                pass
            curses.init_pair(1, curses.COLOR_WHITE, curses.COLOR_BLUE)
            curses.init_pair(2, curses.COLOR_YELLOW, -1)
            self.COL_SELECTED = curses.color_pair(1) | curses.A_BOLD
            self.COL_INPUT = curses.color_pair(2)
        else:
            self.COL_SELECTED = curses.A_REVERSE | curses.A_BOLD
            self.COL_INPUT = curses.A_BOLD

    def draw(self, app: App):
        """Render the list box and the input box."""
        self.stdscr.erase()
        self.stdscr.noutrefresh()
        height, width = self.stdscr.getmaxyx()
        boxes = layout(height, width)
        if boxes is None:
            curses.doupdate()
            return
        (lh, lw, ly, lx), (ih, iw, iy, ix) = boxes

        win = curses.newwin(lh, lw, ly, lx)
        win.border()
        self._put(win, 0, 2, TITLE, lw - 4, curses.A_BOLD)
        rows, cols = lh - 2, lw - 2
        self.offset = scroll_offset(self.offset, app.selected, len(app.todos), rows)
        for i in range(self.offset, min(self.offset + rows, len(app.todos))):
            t = app.todos[i]
            is_selected = i == app.selected
            attrs = curses.A_NORMAL
            if t.completed:
                attrs |= curses.A_DIM
            if is_selected:
                attrs |= self.COL_SELECTED
            line = item_line(t, is_selected)
            if is_selected:
                line = line.ljust(cols)
            self._put(win, 1 + i - self.offset, 1, line, cols, attrs)
        win.noutrefresh()

        box = curses.newwin(ih, iw, iy, ix)
        box.border()
        self._put(box, 0, 2, INPUT_TITLE, iw - 4, curses.A_NORMAL)
        attrs = self.COL_INPUT if app.mode == Mode.INPUT else curses.A_NORMAL
        self._put(box, 1, 1, input_text(app), iw - 2, attrs)
        box.noutrefresh()

        curses.doupdate()

    @staticmethod
    def _put(win, y: int, x: int, text: str, n: int, attrs: int):
        # Wide characters can push a write past the right border.
        try:
            win.addnstr(y, x, text, n, attrs)
        except curses.error:
            pass

    def poll(self) -> Optional[KeyEvent]:
        """Wait up to POLL_INTERVAL_MS for a key; None if nothing arrived."""
        try:
            ch = self.stdscr.get_wch()
        except curses.error:
            return None
        return decode_key(ch)


def start_curses(app: App):
    """Initialize curses and run the loop until the user quits."""

    def _main(stdscr):
        curses.raw()
        tui = TUI(stdscr)
        run(app, tui.draw, tui.poll)

    curses.wrapper(_main)


def main() -> int:
    """TUI entry point. Returns the process exit code."""
    os.environ.setdefault("ESCDELAY", "25")
    app = App.load(save_path())
    try:
        start_curses(app)
    except Exception as e:
        # curses.wrapper has already restored the terminal at this point.
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
