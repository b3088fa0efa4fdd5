"""Reading and writing the todo list as JSON on disk."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from .models import AppState, TodoItem

logger = logging.getLogger(__name__)

APP_NAME = "TuiTodo"
FILENAME = "todos.json"


class StateFormatError(ValueError):
    """Raised when stored data does not describe a valid todo list."""


def _item_to_dict(item: TodoItem) -> dict[str, Any]:
    return {"text": item.text, "done": item.done}


def _item_from_dict(data: Any) -> TodoItem:
    if not isinstance(data, dict):
        raise StateFormatError(f"todo item must be an object, got {type(data).__name__}")
    try:
        text = data["text"]
        done = data["done"]
    except KeyError as exc:
        raise StateFormatError(f"todo item is missing key {exc.args[0]!r}") from exc
    if not isinstance(text, str):
        raise StateFormatError("todo item 'text' must be a string")
    if not isinstance(done, bool):
        raise StateFormatError("todo item 'done' must be a boolean")
    return TodoItem(text=text, done=done)


def state_to_dict(state: AppState) -> dict[str, Any]:
    """Return the JSON-ready form of a state; only the todos are kept."""
    return {"todos": [_item_to_dict(item) for item in state.todos]}


def state_from_dict(data: Any) -> AppState:
    """Build a freshly loaded state from decoded JSON.

    A missing or non-list ``todos`` entry yields an empty list; a malformed
    item raises :class:`StateFormatError`.
    """
    todos_data = data.get("todos") if isinstance(data, dict) else None
    if isinstance(todos_data, list):
        todos = tuple(_item_from_dict(entry) for entry in todos_data)
    else:
        logger.warning(
            "State file format invalid or missing 'todos'. Loading empty list."
        )
        todos = ()
    return AppState(
        todos=todos,
        current_input="",
        selected_index=0 if todos else -1,
        status_message="State loaded.",
        exit_requested=False,
    )


def _home_directory() -> Optional[str]:
    home = os.environ.get("HOME")
    if home is not None:
        return home
    try:
        import pwd

        return pwd.getpwuid(os.getuid()).pw_dir
    except (ImportError, KeyError, AttributeError):
        return None


def _platform_data_dir() -> Path:
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_NAME
        return Path.cwd() / APP_NAME
    if sys.platform == "darwin":
        home = _home_directory()
        if home is not None:
            return Path(home) / "Library" / "Application Support" / APP_NAME
        return Path.cwd() / APP_NAME
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home is not None:
        config_dir = Path(config_home)
    else:
        home = _home_directory()
        config_dir = Path(home) / ".config" if home is not None else Path.cwd()
    return config_dir / APP_NAME


def get_default_data_path() -> Path:
    """Return the per-user path of the todo file, creating its directory."""
    data_dir = _platform_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Error creating data directory %s: %s", data_dir, exc)
        data_dir = Path.cwd()
    return data_dir / FILENAME


def save_state(path: str | os.PathLike[str], state: AppState) -> None:
    """Write the todos of *state* to *path* as indented JSON.

    Raises :class:`OSError` if the file cannot be written.
    """
    text = json.dumps(state_to_dict(state), indent=4, sort_keys=True, ensure_ascii=False)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.error("Error saving state to %s: %s", path, exc)
        raise


def load_state(path: str | os.PathLike[str]) -> Optional[AppState]:
    """Read a state from *path*.

    Returns ``None`` when the file does not exist or cannot be read or parsed.
    """
    file_path = Path(path)
    if not file_path.exists():
        return None
    try:
        raw = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error loading state from %s: %s", file_path, exc)
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("JSON parsing error: %s at byte %d", exc.msg, exc.pos)
        return None
    try:
        return state_from_dict(data)
    except StateFormatError as exc:
        logger.error("JSON processing error: %s", exc)
        return None