"""Application state and action handlers (no curses, no drawing)."""

import logging
from typing import Callable, Dict, List, Optional

from .models import DEFAULT_TODOS, Key, KeyEvent, Mode, TodoItem
from .storage import read_file, write_file

logger = logging.getLogger(__name__)


class App:
    """In-memory todo list plus selection, mode and the pending input text.

    Selection is None exactly when the list is empty; otherwise it is a valid
    index. Every mutating action saves the whole list to `path`.
    """

    def __init__(self, path: str, todos: Optional[List[TodoItem]] = None):
        self.path = path
        self.todos: List[TodoItem] = list(todos) if todos is not None else []
        self.selected: Optional[int] = 0 if self.todos else None
        self.input = ""
        self.mode = Mode.NAVIGATION

    @classmethod
    def new(cls, path: str) -> "App":
        """Fresh app with the tutorial items, first one selected."""
        return cls(path, [TodoItem(text=text) for text in DEFAULT_TODOS])

    @classmethod
    def load(cls, path: str) -> "App":
        """Load the snapshot at path, falling back to `new()` on any problem."""
        try:
            todos = read_file(path)
        except FileNotFoundError:
            logger.info("No todo file at %s; starting with defaults", path)
            return cls.new(path)
        except (OSError, ValueError) as e:
            logger.warning("Could not load todos from %s (%s); using defaults", path, e)
            return cls.new(path)

        if not todos:
            logger.warning("Todo file %s is empty; using defaults", path)
            return cls.new(path)

        logger.debug("Loaded %d todos from %s", len(todos), path)
        return cls(path, todos)

    def save(self) -> bool:
        """Write the list to disk. Failures are logged, never raised."""
        try:
            write_file(self.path, self.todos)
        except OSError:
            logger.warning("Failed to save todos to %s", self.path, exc_info=True)
            return False
        logger.debug("Saved %d todos to %s", len(self.todos), self.path)
        return True

    def _selection_in_bounds(self) -> bool:
        return self.selected is not None and 0 <= self.selected < len(self.todos)

    # Navigation mode

    def next(self):
        if not self.todos:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected >= len(self.todos) - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self):
        if not self.todos:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected <= 0:
            self.selected = len(self.todos) - 1
        else:
            self.selected -= 1

    def toggle_completed(self):
        if not self._selection_in_bounds():
            return
        t = self.todos[self.selected]
        t.completed = not t.completed
        self.save()

    def delete_selected(self):
        if not self._selection_in_bounds():
            return
        idx = self.selected
        del self.todos[idx]
        if not self.todos:
            self.selected = None
        elif idx >= len(self.todos):
            self.selected = len(self.todos) - 1
        else:
            self.selected = idx
        self.save()

    def start_input(self):
        self.mode = Mode.INPUT

    # Input mode

    def push_char(self, ch: str):
        self.input += ch

    def pop_char(self):
        self.input = self.input[:-1]

    def cancel_input(self):
        self.input = ""
        self.mode = Mode.NAVIGATION

    def add_todo(self):
        """Commit the input buffer as a new item. Empty buffer: no-op."""
        if not self.input:
            return
        self.todos.append(TodoItem(text=self.input, completed=False))
        self.input = ""
        self.mode = Mode.NAVIGATION
        self.selected = len(self.todos) - 1
        self.save()


def handle_navigation_key(app: App, event: KeyEvent) -> bool:
    """Apply a Navigation-mode key. Returns False when the user quits."""
    key, ch = event.key, event.char
    if key == Key.CHAR and ch == "q":
        return False
    if key == Key.DOWN or (key == Key.CHAR and ch == "j"):
        app.next()
    elif key == Key.UP or (key == Key.CHAR and ch == "k"):
        app.previous()
    elif key == Key.CHAR and ch == " ":
        app.toggle_completed()
    elif key == Key.CHAR and ch == "d":
        app.delete_selected()
    elif key == Key.CHAR and ch == "a":
        app.start_input()
    return True


def handle_input_key(app: App, event: KeyEvent) -> bool:
    """Apply an Input-mode key. There is no quit key here; 'q' is text."""
    if event.key == Key.ENTER:
        app.add_todo()
    elif event.key == Key.CHAR:
        app.push_char(event.char)
    elif event.key == Key.BACKSPACE:
        app.pop_char()
    elif event.key == Key.ESC:
        app.cancel_input()
    return True


KEY_HANDLERS: Dict[Mode, Callable[[App, KeyEvent], bool]] = {
    Mode.NAVIGATION: handle_navigation_key,
    Mode.INPUT: handle_input_key,
}


def dispatch(app: App, event: KeyEvent) -> bool:
    """Route one event to the handler for the current mode.

    Key-release events are ignored. Returns False when the loop should stop.
    """
    if event.kind != "press":
        return True
    try:
        handler = KEY_HANDLERS[app.mode]
    except KeyError:
        raise ValueError(f"no key handler for mode {app.mode!r}") from None
    return handler(app, event)


def run(
    app: App,
    render: Callable[[App], None],
    poll: Callable[[], Optional[KeyEvent]],
) -> None:
    """Render, wait briefly for one event, dispatch it; repeat until quit."""
    while True:
        render(app)
        event = poll()
        if event is None:
            continue
        if not dispatch(app, event):
            return
