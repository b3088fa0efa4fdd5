import curses
import logging

import pytest

from tuitodo.app import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_UP,
    TodoApp,
    load_initial_state,
    setup_logging,
)
from tuitodo.models import AppState, TodoItem
from tuitodo.persistence import save_state
from tuitodo.reducer import initialize_persistence_path, reducer
from tuitodo.store import Store


@pytest.fixture(autouse=True)
def _reset_path():
    initialize_persistence_path(None)
    yield
    initialize_persistence_path(None)


def _app(*texts, selected=-1):
    state = AppState(todos=tuple(TodoItem(text) for text in texts), selected_index=selected)
    return TodoApp(Store(state, reducer))


def _type(app, text):
    for char in text:
        app.handle_key(char)


class FakeScreen:
    def __init__(self, height=24, width=80):
        self.height = height
        self.width = width
        self.rows = {}
        self.refreshed = 0

    def getmaxyx(self):
        return self.height, self.width

    def erase(self):
        self.rows.clear()

    def addnstr(self, y, x, text, n, attr=0):
        self.rows[y] = (text[:n], attr)

    def refresh(self):
        self.refreshed += 1


def test_add_flow():
    app = _app()
    app.handle_key("a")
    assert app.show_input is True
    _type(app, "milk")
    assert app.input_text == "milk"
    app.handle_key(KEY_ENTER)
    assert app.store.state.todos == (TodoItem("milk"),)
    assert app.store.state.status_message == "Todo added."
    assert app.show_input is False
    assert app.input_text == ""


def test_escape_cancels_input():
    app = _app()
    app.handle_key("a")
    _type(app, "milk")
    app.handle_key(KEY_ESCAPE)
    assert app.show_input is False
    assert app.store.state.todos == ()


def test_reopening_input_clears_text():
    app = _app()
    app.handle_key("a")
    _type(app, "milk")
    app.handle_key(KEY_ESCAPE)
    app.handle_key("a")
    assert app.input_text == ""


def test_backspace_removes_last_char():
    app = _app()
    app.handle_key("a")
    _type(app, "milk")
    app.handle_key(KEY_BACKSPACE)
    assert app.input_text == "mil"


def test_shortcut_letters_are_text_while_typing():
    app = _app("a", selected=0)
    app.handle_key("a")
    _type(app, "qrt")
    assert app.input_text == "qrt"
    assert app.store.state.exit_requested is False
    assert app.store.state.todos == (TodoItem("a"),)


def test_input_length_is_bounded():
    app = _app()
    app.handle_key("a")
    typed = "x" * 300
    _type(app, typed)
    assert len(app.input_text) < len(typed)
    app.handle_key(KEY_ENTER)
    text = app.store.state.todos[0].text
    assert text == typed[: len(text)]


def test_enter_with_empty_input():
    app = _app()
    app.handle_key("a")
    app.handle_key(KEY_ENTER)
    assert app.store.state.todos == ()
    assert app.store.state.status_message == "Input is empty."


def test_quit_key():
    app = _app()
    app.handle_key("q")
    assert app.store.state.exit_requested is True
    assert app.store.state.status_message == "Exiting..."


def test_navigation():
    app = _app("a", "b", "c", selected=0)
    app.handle_key(KEY_DOWN)
    assert app.store.state.selected_index == 1
    app.handle_key(KEY_UP)
    assert app.store.state.selected_index == 0
    app.handle_key(KEY_UP)
    assert app.store.state.selected_index == 0


def test_down_stops_at_last_item():
    app = _app("a", "b", selected=1)
    app.handle_key(KEY_DOWN)
    assert app.store.state.selected_index == len(app.store.state.todos) - 1


@pytest.mark.parametrize("key", [" ", "t"])
def test_toggle_keys(key):
    app = _app("a", selected=0)
    app.handle_key(key)
    assert app.store.state.todos == (TodoItem("a", True),)


@pytest.mark.parametrize("key", ["r", KEY_DELETE])
def test_remove_keys(key):
    app = _app("a", "b", selected=0)
    app.handle_key(key)
    assert app.store.state.todos == (TodoItem("b"),)
    assert app.store.state.status_message == "Todo removed."


def test_save_and_load_keys(tmp_path):
    initialize_persistence_path(tmp_path / "todos.json")
    app = _app("a", "b", selected=1)
    app.handle_key("s")
    assert app.store.state.status_message == "State saved successfully."
    app.handle_key("r")
    app.handle_key("l")
    assert app.store.state.todos == (TodoItem("a"), TodoItem("b"))
    assert app.store.state.status_message == "State loaded successfully."


def test_render_lines_show_items_and_status():
    store = Store(
        AppState(todos=(TodoItem("done item", True), TodoItem("open item")), selected_index=0),
        reducer,
    )
    lines = TodoApp(store).render_lines()
    assert any("[x] done item" in line for line in lines)
    assert any("[ ] open item" in line for line in lines)
    assert "Status: Ready" in lines
    assert any("Add (a)" in line and "Quit (q)" in line for line in lines)
    assert any(line.startswith("Shortcuts:") for line in lines)


def test_render_lines_in_input_mode():
    app = _app()
    app.handle_key("a")
    _type(app, "milk")
    lines = app.render_lines()
    assert any(line.startswith("New Todo Item:") and "milk" in line for line in lines)
    assert "Enter to add the todo item, Esc to cancel" in lines
    assert not any("Add (a)" in line for line in lines)


def test_double_click_toggles():
    app = _app("a", "b")
    first_row = next(i for i, line in enumerate(app.render_lines()) if "[ ] b" in line)
    app._click_row(first_row, now=10.0)
    assert app.store.state.selected_index == 1
    assert app.store.state.todos[1].done is False
    app._click_row(first_row, now=10.2)
    assert app.store.state.todos[1].done is True


def test_slow_clicks_do_not_toggle():
    app = _app("a")
    row = next(i for i, line in enumerate(app.render_lines()) if "[ ] a" in line)
    app._click_row(row, now=10.0)
    app._click_row(row, now=20.0)
    assert app.store.state.todos == (TodoItem("a"),)
    assert app.store.state.selected_index == 0


def test_draw_writes_lines_with_selection_highlight():
    app = _app("a", "b", selected=1)
    screen = FakeScreen()
    app.draw(screen)
    texts = [screen.rows[row][0] for row in sorted(screen.rows)]
    assert texts[0] == app.render_lines()[0]
    selected = [attr for text, attr in screen.rows.values() if "[ ] b" in text]
    assert selected == [curses.A_REVERSE]
    assert screen.refreshed == 1


def test_draw_clips_to_screen():
    app = _app("a", "b", "c")
    screen = FakeScreen(height=3, width=10)
    app.draw(screen)
    assert max(screen.rows) < 3
    assert all(len(text) < 10 for text, _ in screen.rows.values())


def test_load_initial_state_without_file(tmp_path):
    state = load_initial_state(tmp_path / "todos.json")
    assert state.todos == ()
    assert state.status_message == "Ready (new list)."
    assert state.exit_requested is False


def test_load_initial_state_from_file(tmp_path):
    path = tmp_path / "todos.json"
    save_state(path, AppState(todos=(TodoItem("a", True),)))
    state = load_initial_state(path)
    assert state.todos == (TodoItem("a", True),)
    assert state.status_message == "State loaded."
    assert state.selected_index == 0


def test_setup_logging_writes_file(tmp_path):
    log_path = tmp_path / "log.txt"
    handler = setup_logging(log_path)
    try:
        logging.getLogger("tuitodo.test").info("hello log")
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()
    content = log_path.read_text(encoding="utf-8")
    assert "--- Log Start ---" in content
    assert "hello log" in content