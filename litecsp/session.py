from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from litecsp.core.events import event_payload, event_type

Reducer = Callable[[Any, Any], Any]


def make_versioned_reducer(
    event_type_: str,
    initial_fields: Mapping[str, Any],
    *,
    version_key: str = "_tick",
) -> Reducer:
    """Reducer that merges matching payloads into a versioned snapshot.

    The returned dict looks immutable, but nested lists/dicts are shared, not copied.
    Non-matching events return the very same state object.
    """

    initial_state = {**initial_fields, version_key: 0}

    def reducer(state: dict[str, Any] | None, event: Any) -> dict[str, Any]:
        if state is None:
            state = initial_state
        if event_type(event) != event_type_:
            return state
        return {**state, **event_payload(event), version_key: state.get(version_key, 0) + 1}

    return reducer
