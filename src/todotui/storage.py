"""File I/O for the todo snapshot (todos.json)."""

import json
import os
import stat
import tempfile
from typing import List

from .models import TodoItem


def read_file(path: str) -> List[TodoItem]:
    """Load the snapshot at path.

    Raises OSError (FileNotFoundError when absent) if the file cannot be read,
    and ValueError if the content is not a JSON array of todo objects.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except RecursionError:
            raise ValueError("JSON nested too deeply") from None

    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return [TodoItem.from_dict(obj) for obj in data]


def _file_mode(path: str) -> int:
    """Permission bits for a new snapshot: the existing file's, else umask-based."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_file(path: str, todos: List[TodoItem]) -> None:
    """Overwrite path with the full list, pretty-printed.

    The data goes to a temp file next to the real target (symlinks resolved)
    and is then moved over it, so readers only ever see a complete snapshot.
    The target keeps its permission bits.
    """
    payload = json.dumps([t.to_dict() for t in todos], indent=2, ensure_ascii=False)
    target = os.path.realpath(path)
    mode = _file_mode(target)
    fd, tmp_path = tempfile.mkstemp(
        prefix=".todos-", suffix=".tmp", dir=os.path.dirname(target)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
