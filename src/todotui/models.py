"""Data models and constants for the todo TUI."""

import enum
import os
from dataclasses import dataclass
from typing import Any, Dict, Literal

SAVE_FILENAME = "todos.json"
POLL_INTERVAL_MS = 16


def save_path() -> str:
    """Return the snapshot path: ./todos.json in the current directory.

    Falls back to the bare relative name if the working directory is gone.
    """
    try:
        return os.path.join(os.getcwd(), SAVE_FILENAME)
    except OSError:
        return SAVE_FILENAME


DEFAULT_TODOS = [
    "Press 'a' to add a todo",
    "Press 'Space' to toggle completion",
    "Press 'd' to delete a todo",
    "Press 'q' to quit",
]


@dataclass
class TodoItem:
    """A single todo entry with text and a completion flag."""

    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, obj: Any) -> "TodoItem":
        """Build an item from a decoded JSON object.

        Unknown keys are ignored; a missing or mistyped field is a ValueError.
        """
        if not isinstance(obj, dict):
            raise ValueError(f"expected an object, got {type(obj).__name__}")
        text = obj.get("text")
        completed = obj.get("completed")
        if not isinstance(text, str):
            raise ValueError("field 'text' must be a string")
        if not isinstance(completed, bool):
            raise ValueError("field 'completed' must be a boolean")
        return cls(text=text, completed=completed)


class Mode(enum.Enum):
    """How key events are interpreted."""

    NAVIGATION = "navigation"
    INPUT = "input"


class Key(enum.Enum):
    CHAR = "char"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    BACKSPACE = "backspace"
    ESC = "esc"
    OTHER = "other"


KeyKind = Literal["press", "release"]


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keystroke. `char` is set only for Key.CHAR."""

    key: Key
    char: str = ""
    kind: KeyKind = "press"  # "press" | "release"
