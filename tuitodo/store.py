"""A small store that holds the state, runs the reducer and its effects."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Generic, Optional, TypeVar

S = TypeVar("S")
A = TypeVar("A")

Dispatch = Callable[[Any], None]
Effect = Callable[[Dispatch], None]


class Store(Generic[S, A]):
    """Holds the current state and applies dispatched actions in order.

    Actions dispatched while another is being handled (from a watcher or an
    effect) are queued and handled once the current one is done.
    """

    def __init__(
        self,
        initial_state: S,
        reducer: Callable[[S, A], tuple[S, Optional[Effect]]],
    ) -> None:
        self._state = initial_state
        self._reducer = reducer
        self._watchers: list[Callable[[S], None]] = []
        self._queue: deque[A] = deque()
        self._dispatching = False

    @property
    def state(self) -> S:
        """The current state."""
        return self._state

    def dispatch(self, action: A) -> None:
        """Apply *action*, notify watchers of a change and run any effect."""
        self._queue.append(action)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._process(self._queue.popleft())
        except BaseException:
            self._queue.clear()
            raise
        finally:
            self._dispatching = False

    def _process(self, action: A) -> None:
        new_state, effect = self._reducer(self._state, action)
        if new_state != self._state:
            self._state = new_state
            for watcher in list(self._watchers):
                watcher(new_state)
        if effect is not None:
            effect(self.dispatch)

    def watch(self, callback: Callable[[S], None]) -> Callable[[], None]:
        """Call *callback* with each new state; return a function that stops it."""
        self._watchers.append(callback)

        def unwatch() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unwatch