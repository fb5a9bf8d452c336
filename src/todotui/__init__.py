"""todotui - a small terminal todo list persisted to ./todos.json."""

import logging

__version__ = "1.0.0"

from .models import TodoItem, Mode, Key, KeyEvent, DEFAULT_TODOS, SAVE_FILENAME, save_path
from .storage import read_file, write_file
from .core import App, dispatch, run

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "TodoItem",
    "Mode",
    "Key",
    "KeyEvent",
    "DEFAULT_TODOS",
    "SAVE_FILENAME",
    "save_path",
    "read_file",
    "write_file",
    "App",
    "dispatch",
    "run",
]
