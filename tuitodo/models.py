"""Immutable application state and the actions that change it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class TodoItem:
    """A single entry in the todo list."""

    text: str
    done: bool = False


@dataclass(frozen=True)
class AppState:
    """The whole state of the application at one moment."""

    todos: tuple[TodoItem, ...] = field(default_factory=tuple)
    current_input: str = ""
    selected_index: int = -1
    status_message: str = "Ready"
    exit_requested: bool = False


@dataclass(frozen=True)
class SetInputTextAction:
    """Replace the text typed for the next todo."""

    text: str


@dataclass(frozen=True)
class AddTodoAction:
    """Append the current input as a new todo."""


@dataclass(frozen=True)
class RemoveSelectedTodoAction:
    """Delete the selected todo."""


@dataclass(frozen=True)
class ToggleSelectedTodoAction:
    """Flip the done flag of the selected todo."""


@dataclass(frozen=True)
class SelectTodoAction:
    """Move the selection to the given index (-1 clears it)."""

    index: int


@dataclass(frozen=True)
class RequestSaveAction:
    """Ask for the todo list to be written to disk."""


@dataclass(frozen=True)
class RequestLoadAction:
    """Ask for the todo list to be read from disk."""


@dataclass(frozen=True)
class LoadCompleteAction:
    """Result of a load: the state read, if any, and a status message."""

    loaded_state: Optional[AppState]
    message: str


@dataclass(frozen=True)
class SetStatusAction:
    """Replace the status bar message."""

    message: str


@dataclass(frozen=True)
class QuitAction:
    """Ask the application to exit."""


Action = Union[
    SetInputTextAction,
    AddTodoAction,
    RemoveSelectedTodoAction,
    ToggleSelectedTodoAction,
    SelectTodoAction,
    RequestSaveAction,
    RequestLoadAction,
    LoadCompleteAction,
    SetStatusAction,
    QuitAction,
]