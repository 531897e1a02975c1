from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any


Reducer = Callable[[Any, Any], Any]
Handler = Callable[[Any], Any]
Middleware = Callable[[Handler], Handler]
Listener = Callable[[], None]


class Store:
    """Minimal host state container: middleware chain -> reducer -> subscribers.

    This is the shape `Router.middleware` expects (`dispatch` + `get_state`).
    Middlewares are applied in order; the first one sees events first.
    """

    def __init__(
        self,
        reducer: Reducer,
        *,
        middlewares: Sequence[Callable[["Store"], Middleware]] = (),
        initial_state: Any = None,
    ) -> None:
        self._reducer = reducer
        self._state = reducer(initial_state, {"type": "@@litecsp/INIT"})
        self._listeners: list[Listener] = []

        handler: Handler = self._reduce
        for factory in reversed(middlewares):
            handler = factory(self)(handler)
        self._handler = handler

    def get_state(self) -> Any:
        return self._state

    def dispatch(self, event: Any) -> Any:
        return self._handler(event)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _reduce(self, event: Any) -> Any:
        previous = self._state
        self._state = self._reducer(previous, event)
        if self._state is not previous:
            for listener in list(self._listeners):
                listener()
        return event


def combine_reducers(**reducers: Reducer) -> Reducer:
    """Reducer over a dict of named slices; keeps identity if no slice changed."""

    def reducer(state: dict[str, Any] | None, event: Any) -> dict[str, Any]:
        state = state or {}
        changed = False
        next_state: dict[str, Any] = {}
        for key, slice_reducer in reducers.items():
            before = state.get(key)
            after = slice_reducer(before, event)
            next_state[key] = after
            changed = changed or after is not before
        if not changed and len(state) == len(next_state):
            return state
        return next_state

    return reducer
