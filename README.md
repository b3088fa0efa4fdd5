# tuitodo

A small to-do list manager that runs in your terminal. It is driven from the
keyboard. The list is saved as plain JSON. Every change to the list goes
through a single store and reducer, so the application state is always an
immutable value that you can inspect and test on its own.

## Installation

```
pip install .
```

No third-party packages are needed at run time. The interface is drawn with
the standard library's `curses` module, so it needs a Python build that
includes `curses`, as on Linux and macOS.

## Running

```
tuitodo
```

The command takes no options apart from `--help`.

At start-up the saved list is loaded if one exists. Otherwise you begin with
an empty list. The status line at the bottom tells you which of the two
happened: "State loaded." or "Ready (new list).".

## Keys

In the main view:

| Key            | Action                                   |
|----------------|------------------------------------------|
| `a`            | Open the input line to add a new item    |
| `r` / Delete   | Remove the selected item                 |
| `t` / Space    | Toggle the selected item done / not done |
| Up / Down      | Move the selection                       |
| `s`            | Save the list                            |
| `l`            | Reload the list from disk                |
| `q`            | Quit                                     |

With the mouse:

- Clicking an item selects it.
- Clicking the same item twice within half a second toggles it.

While the input line is open:

- Type the text of the item. Up to 255 characters are accepted.
- Backspace deletes a character.
- Enter adds the item. An empty input is not added, and the status line
  reports "Input is empty.".
- Esc closes the input line without adding anything.

Items are shown as `[ ] text` when open and `[x] text` when done. The
selected item is marked with `>`.

## Where data is kept

The list is stored as `todos.json` in a per-user application directory:

- Linux and other Unix systems: `$XDG_CONFIG_HOME/TuiTodo/`, or
  `~/.config/TuiTodo/` when that variable is not set
- macOS: `~/Library/Application Support/TuiTodo/`
- Windows: `%APPDATA%\TuiTodo\`

If that directory cannot be created, the current working directory is used
instead. A log file, `tui_todo_log.txt`, is written to the same directory.
It is started afresh on each run.

The file format is a JSON object that holds only the items. It is written
with keys sorted and an indent of four spaces:

```json
{
    "todos": [
        {
            "done": false,
            "text": "Buy milk"
        }
    ]
}
```

A file without a `todos` array loads as an empty list. Loading fails and
reports an error in the status line if:

- the file is missing,
- it is not valid JSON, or
- it holds an item without a string `text` and a boolean `done`.

## Using the pieces from Python

You can use the state model, reducer, store and persistence functions
without the terminal interface:

```python
from tuitodo.models import AppState, SetInputTextAction, AddTodoAction
from tuitodo.reducer import reducer
from tuitodo.store import Store

store = Store(AppState(), reducer)
unwatch = store.watch(lambda state: print(state.status_message))
store.dispatch(SetInputTextAction("Write report"))
store.dispatch(AddTodoAction())
print(store.state.todos)
unwatch()
```

### `tuitodo.models`

This module holds the frozen dataclasses `TodoItem` and `AppState`, and one
dataclass for each action:

- `SetInputTextAction`
- `AddTodoAction`
- `RemoveSelectedTodoAction`
- `ToggleSelectedTodoAction`
- `SelectTodoAction`
- `RequestSaveAction`
- `RequestLoadAction`
- `LoadCompleteAction`
- `SetStatusAction`
- `QuitAction`

### `tuitodo.reducer`

- `reducer(state, action)` returns the next state and an effect, or `None`.
- Save and load requests return effects built by `save_effect` and
  `load_effect`.
- Effects read and write the file set with `initialize_persistence_path`.

### `tuitodo.store`

`Store` holds the current state in `store.state` and applies each dispatched
action in order:

- Watchers are called when the state changes.
- Effects are run with the store's `dispatch`.

### `tuitodo.persistence`

- `save_state` writes the file and raises `OSError` on failure.
- `load_state` returns `None` when the file is missing or cannot be read.
- `state_to_dict` converts a state to its JSON form.
- `state_from_dict` builds a state from that form. It raises
  `StateFormatError` for a malformed item.
- `get_default_data_path` returns the default file path.

### `tuitodo.app`

- `TodoApp` maps key names to actions and renders the screen lines.
- `setup_logging` and `load_initial_state` are the start-up helpers.
- `main` runs the interface.

## Limitations

The package does not provide:

- a way to edit the text of an existing item,
- a way to reorder items,
- a way to choose a different data file from the command line.

Saving happens only when you press `s`; quitting does not save.

## Running the tests

```
pip install ".[test]"
pytest
```