"""The terminal user interface and the command that starts it."""

from __future__ import annotations

import argparse
import curses
import logging
import os
import sys
import time
from dataclasses import replace
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Optional

from .models import (
    AppState,
    QuitAction,
    RemoveSelectedTodoAction,
    RequestLoadAction,
    RequestSaveAction,
    SelectTodoAction,
    SetInputTextAction,
    AddTodoAction,
    ToggleSelectedTodoAction,
)
from .persistence import get_default_data_path, load_state
from .reducer import initialize_persistence_path, reducer
from .store import Store

logger = logging.getLogger(__name__)

KEY_UP = "UP"
KEY_DOWN = "DOWN"
KEY_ENTER = "ENTER"
KEY_ESCAPE = "ESCAPE"
KEY_BACKSPACE = "BACKSPACE"
KEY_DELETE = "DELETE"

TITLE = "TODO List Manager"
LOG_FILENAME = "tui_todo_log.txt"
FRAME_DELAY_MS = 33

_INPUT_CAPACITY = 255
_DOUBLE_CLICK_SECONDS = 0.5
_LIST_TOP = 4
_BUTTONS = ("Add (a)", "Remove (r)", "Toggle (t)", "Save (s)", "Load (l)", "Quit (q)")
_SHORTCUTS = {
    "r": RemoveSelectedTodoAction,
    "t": ToggleSelectedTodoAction,
    "s": RequestSaveAction,
    "l": RequestLoadAction,
    "q": QuitAction,
    " ": ToggleSelectedTodoAction,
    KEY_DELETE: RemoveSelectedTodoAction,
}


class _Style(Enum):
    PLAIN = auto()
    TITLE = auto()
    SEPARATOR = auto()
    PROMPT = auto()
    SELECTED = auto()
    DIM = auto()


_ATTRS = {
    _Style.PLAIN: curses.A_NORMAL,
    _Style.TITLE: curses.A_BOLD,
    _Style.SEPARATOR: curses.A_NORMAL,
    _Style.PROMPT: curses.A_BOLD,
    _Style.SELECTED: curses.A_REVERSE,
    _Style.DIM: curses.A_DIM,
}

_STRING_KEYS = {
    "\n": KEY_ENTER,
    "\r": KEY_ENTER,
    "\x1b": KEY_ESCAPE,
    "\x7f": KEY_BACKSPACE,
    "\b": KEY_BACKSPACE,
}

_CODE_KEYS = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_ENTER: KEY_ENTER,
    curses.KEY_BACKSPACE: KEY_BACKSPACE,
    curses.KEY_DC: KEY_DELETE,
}


class TodoApp:
    """Turns key presses into actions and the store's state into screen lines."""

    def __init__(self, store: Store) -> None:
        self.store = store
        self.show_input = False
        self.input_text = ""
        self._last_click: Optional[tuple[int, float]] = None

    def handle_key(self, key: str) -> None:
        """React to one key: a printable character or one of the ``KEY_*`` names."""
        if self.show_input:
            self._handle_input_key(key)
        else:
            self._handle_list_key(key)

    def _handle_input_key(self, key: str) -> None:
        if key == KEY_ENTER:
            self.store.dispatch(SetInputTextAction(self.input_text))
            self.store.dispatch(AddTodoAction())
            self.show_input = False
            self.input_text = ""
        elif key == KEY_ESCAPE:
            self.show_input = False
        elif key == KEY_BACKSPACE:
            self.input_text = self.input_text[:-1]
        elif len(key) == 1 and key.isprintable() and len(self.input_text) < _INPUT_CAPACITY:
            self.input_text += key

    def _handle_list_key(self, key: str) -> None:
        state = self.store.state
        if key == "a":
            self.show_input = True
            self.input_text = ""
        elif key == KEY_UP:
            if state.selected_index > 0:
                self.store.dispatch(SelectTodoAction(state.selected_index - 1))
        elif key == KEY_DOWN:
            if state.selected_index < len(state.todos) - 1:
                self.store.dispatch(SelectTodoAction(state.selected_index + 1))
        elif key in _SHORTCUTS:
            self.store.dispatch(_SHORTCUTS[key]())

    def _click_row(self, row: int, now: Optional[float] = None) -> None:
        """Select the todo shown on screen *row*; a second quick click toggles it."""
        index = row - _LIST_TOP
        if self.show_input or not 0 <= index < len(self.store.state.todos):
            return
        clicked_at = time.monotonic() if now is None else now
        self.store.dispatch(SelectTodoAction(index))
        last = self._last_click
        if last is not None and last[0] == index and clicked_at - last[1] < _DOUBLE_CLICK_SECONDS:
            self.store.dispatch(ToggleSelectedTodoAction())
            self._last_click = None
        else:
            self._last_click = (index, clicked_at)

    def _rendered(self) -> list[tuple[str, _Style]]:
        state = self.store.state
        separator = ("-" * 40, _Style.SEPARATOR)
        lines = [(TITLE, _Style.TITLE), separator]
        if self.show_input:
            lines.append((f"New Todo Item: {self.input_text}_   [Cancel]", _Style.PROMPT))
        else:
            lines.append(("  ".join(f"[{label}]" for label in _BUTTONS), _Style.PLAIN))
        lines.append(separator)
        for index, todo in enumerate(state.todos):
            label = ("[x] " if todo.done else "[ ] ") + todo.text
            if index == state.selected_index:
                lines.append(("> " + label, _Style.SELECTED))
            else:
                lines.append(("  " + label, _Style.PLAIN))
        lines.append(separator)
        lines.append((f"Status: {state.status_message}", _Style.DIM))
        if self.show_input:
            lines.append(("Enter to add the todo item, Esc to cancel", _Style.DIM))
        else:
            lines.append(
                (
                    "Shortcuts: a (add), r (remove), t (toggle), s (save), l (load), q (quit)",
                    _Style.DIM,
                )
            )
            lines.append(
                ("In list: Up/Down to select, Space to toggle, Delete to remove", _Style.DIM)
            )
        return lines

    def render_lines(self) -> list[str]:
        """Return the text of every screen line, top to bottom."""
        return [text for text, _ in self._rendered()]

    def draw(self, screen) -> None:
        """Paint the current lines onto a curses window."""
        height, width = screen.getmaxyx()
        screen.erase()
        if width > 1:
            for row, (text, style) in enumerate(self._rendered()[:height]):
                if style is _Style.SEPARATOR:
                    text = "-" * (width - 1)
                try:
                    screen.addnstr(row, 0, text, width - 1, _ATTRS[style])
                except curses.error:
                    pass
        screen.refresh()


def _translate_key(key) -> Optional[str]:
    if isinstance(key, str):
        return _STRING_KEYS.get(key, key)
    if key in (10, 13):
        return KEY_ENTER
    return _CODE_KEYS.get(key)


def _run_loop(screen, app: TodoApp, should_stop: Callable[[], bool]) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    curses.mousemask(curses.BUTTON1_CLICKED | curses.BUTTON1_PRESSED)
    screen.keypad(True)
    screen.timeout(FRAME_DELAY_MS)
    while not should_stop():
        app.draw(screen)
        try:
            key = screen.get_wch()
        except curses.error:
            continue
        if key == curses.KEY_MOUSE:
            try:
                _, _x, y, _z, _bstate = curses.getmouse()
            except curses.error:
                continue
            app._click_row(y)
            continue
        name = _translate_key(key)
        if name is not None:
            app.handle_key(name)


def setup_logging(log_file_path: str | os.PathLike[str]) -> logging.Handler:
    """Send all log records to *log_file_path*, truncating it; return the handler."""
    handler = logging.FileHandler(log_file_path, mode="w", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s"))
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logger.info("--- Log Start ---")
    logger.info("File logger initialized. Logging to: %s", log_file_path)
    return handler


def load_initial_state(data_path: str | os.PathLike[str]) -> AppState:
    """Return the saved state from *data_path*, or a fresh one if there is none."""
    loaded = load_state(data_path)
    if loaded is not None:
        logger.info("Loaded initial state from disk")
        return replace(loaded, status_message="State loaded.", exit_requested=False)
    logger.info("No saved state found or error loading, starting fresh.")
    return AppState(status_message="Ready (new list).", exit_requested=False)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the todo list in the terminal until the user quits."""
    parser = argparse.ArgumentParser(
        prog="tuitodo", description="Keep a todo list in the terminal."
    )
    parser.parse_args(argv)

    try:
        data_path = get_default_data_path()
        log_file_path = Path(data_path).parent / LOG_FILENAME
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"Error determining file paths: {exc}", file=sys.stderr)
        return 1

    try:
        handler = setup_logging(log_file_path)
    except OSError as exc:
        print(f"Log file sink creation failed: {exc}", file=sys.stderr)
        return 1

    try:
        logger.info("Application starting")
        logger.info("Data file path: %s", data_path)
        initialize_persistence_path(data_path)

        store = Store(load_initial_state(data_path), reducer)
        should_exit = False

        def on_change(state: AppState) -> None:
            nonlocal should_exit
            if state.exit_requested:
                logger.info("Exit requested flag detected, stopping loop.")
                should_exit = True

        store.watch(on_change)
        app = TodoApp(store)

        logger.info("Starting UI loop")
        os.environ.setdefault("ESCDELAY", "25")
        curses.wrapper(_run_loop, app, lambda: should_exit)
        logger.info("Application finished cleanly")
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()
    return 0