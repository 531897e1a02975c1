from __future__ import annotations

from typing import Any

from litecsp.router import Router


class RecordingSink:
    """Dispatch sink that records every emitted value, optionally forwarding it.

    With `forward_to` set it behaves like a host whose dispatch goes straight
    back into the router, so emitted events can resume other tasks.
    """

    def __init__(self) -> None:
        self.events: list[Any] = []
        self.forward_to: Router | None = None

    def __call__(self, event: Any) -> Any:
        self.events.append(event)
        if self.forward_to is not None:
            return self.forward_to.dispatch(event)
        return None

    @property
    def types(self) -> list[str]:
        return [e["type"] if isinstance(e, dict) else e.type for e in self.events]
