"""The reducer that computes each next state, and the disk effects it starts."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Union

from .models import (
    Action,
    AddTodoAction,
    AppState,
    LoadCompleteAction,
    QuitAction,
    RemoveSelectedTodoAction,
    RequestLoadAction,
    RequestSaveAction,
    SelectTodoAction,
    SetInputTextAction,
    SetStatusAction,
    ToggleSelectedTodoAction,
)
from .persistence import load_state, save_state

logger = logging.getLogger(__name__)

Dispatch = Callable[[Action], None]
Effect = Callable[[Dispatch], None]

_data_path: Optional[Path] = None


def initialize_persistence_path(path: Union[str, os.PathLike[str], None]) -> None:
    """Set the file that save and load effects use; ``None`` unsets it."""
    global _data_path
    if path is None or os.fspath(path) == "":
        _data_path = None
    else:
        _data_path = Path(path)
    logger.debug("Persistence path initialized: %s", _data_path)


def save_effect(state_to_save: AppState) -> Effect:
    """Return an effect that writes *state_to_save* and reports the outcome."""

    def run(dispatch: Dispatch) -> None:
        path = _data_path
        if path is None:
            logger.error("Save effect failed: Data path not initialized!")
            dispatch(SetStatusAction("ERROR: Save path not configured."))
            return
        logger.debug("Executing save effect to %s", path)
        try:
            save_state(path, state_to_save)
        except (OSError, ValueError):
            logger.error("Save failed.")
            dispatch(SetStatusAction("ERROR saving state!"))
        else:
            logger.info("Save successful.")
            dispatch(SetStatusAction("State saved successfully."))

    return run


def load_effect() -> Effect:
    """Return an effect that reads the saved state and dispatches the result."""

    def run(dispatch: Dispatch) -> None:
        path = _data_path
        if path is None:
            logger.error("Load effect failed: Data path not initialized!")
            dispatch(LoadCompleteAction(None, "ERROR: Load path not configured."))
            return
        logger.debug("Executing load effect from %s", path)
        loaded = load_state(path)
        if loaded is not None:
            message = "State loaded successfully."
            logger.info("Load successful.")
        else:
            message = "ERROR loading state or file not found."
            logger.warning("Load failed or file not found.")
        dispatch(LoadCompleteAction(loaded, message))

    return run


def _has_selection(state: AppState) -> bool:
    return 0 <= state.selected_index < len(state.todos)


def reducer(current_state: AppState, action: Action) -> tuple[AppState, Optional[Effect]]:
    """Return the state that follows *action*, and an effect to run or ``None``."""
    match action:
        case SetInputTextAction(text=text):
            return replace(current_state, current_input=text), None

        case AddTodoAction():
            if not current_state.current_input:
                return replace(current_state, status_message="Input is empty."), None
            from .models import TodoItem

            todos = current_state.todos + (TodoItem(current_state.current_input, False),)
            return (
                replace(
                    current_state,
                    todos=todos,
                    current_input="",
                    selected_index=len(todos) - 1,
                    status_message="Todo added.",
                ),
                None,
            )

        case RemoveSelectedTodoAction():
            if not _has_selection(current_state):
                return (
                    replace(current_state, status_message="No item selected to remove."),
                    None,
                )
            index = current_state.selected_index
            todos = current_state.todos[:index] + current_state.todos[index + 1 :]
            if not todos:
                selected = -1
            else:
                selected = min(index, len(todos) - 1)
            return (
                replace(
                    current_state,
                    todos=todos,
                    selected_index=selected,
                    status_message="Todo removed.",
                ),
                None,
            )

        case ToggleSelectedTodoAction():
            if not _has_selection(current_state):
                return (
                    replace(current_state, status_message="No item selected to toggle."),
                    None,
                )
            index = current_state.selected_index
            item = current_state.todos[index]
            todos = (
                current_state.todos[:index]
                + (replace(item, done=not item.done),)
                + current_state.todos[index + 1 :]
            )
            return replace(current_state, todos=todos, status_message="Todo toggled."), None

        case SelectTodoAction(index=index):
            if -1 <= index < len(current_state.todos):
                return replace(current_state, selected_index=index), None
            return current_state, None

        case RequestSaveAction():
            return (
                replace(current_state, status_message="Saving..."),
                save_effect(current_state),
            )

        case RequestLoadAction():
            return replace(current_state, status_message="Loading..."), load_effect()

        case LoadCompleteAction(loaded_state=loaded, message=message):
            next_state = current_state
            if loaded is not None:
                next_state = replace(
                    next_state,
                    todos=loaded.todos,
                    selected_index=0 if loaded.todos else -1,
                )
            return replace(next_state, status_message=message), None

        case SetStatusAction(message=message):
            return replace(current_state, status_message=message), None

        case QuitAction():
            return (
                replace(current_state, exit_requested=True, status_message="Exiting..."),
                None,
            )

    raise TypeError(f"unknown action: {action!r}")