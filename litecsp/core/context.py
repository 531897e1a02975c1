from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from litecsp.routines import Emit, Wait

if TYPE_CHECKING:
    from litecsp.router import Router


@dataclass(slots=True)
class TaskContext:
    """What a task factory receives.

    `declare_interest` and `emit` build the steps a routine yields:

        def login(ctx):
            yield ctx.declare_interest("LOGIN_REQUEST")
            yield ctx.emit({"type": "LOGIN_OK"})
            yield ctx.declare_interest("LOGOUT")

    The router shortcuts and `bindings` are the host-provided auxiliaries.
    `stop_reason` is set before a forced stop so cleanup code can read it.
    """

    name: str
    router: Router | None = None
    store: Any = None
    bindings: dict[str, Any] = field(default_factory=dict)
    seed: Any = None
    stop_reason: Any = None
    stopped: bool = False

    def declare_interest(self, keys: str | Iterable[str]) -> Wait:
        return Wait.on(keys)

    def emit(self, value: Any) -> Emit:
        return Emit(value)

    def get_state(self) -> Any:
        if self.store is None:
            return None
        return self.store.get_state()

    def dispatch(self, event: Any) -> bool:
        return self._require_router().dispatch(event)

    def start_task(self, name: str, seed: Any = None) -> bool:
        return self._require_router().start(name, seed=seed)

    def stop_task(self, name: str, reason: Any = None) -> None:
        self._require_router().stop(name, reason=reason)

    def start_all(self) -> None:
        self._require_router().start_all()

    def register_entry(self, event_type: str, handler: Callable[[Any, Any], bool]) -> None:
        self._require_router().register_entry(event_type, handler)

    def register_task(self, name: str, factory: Callable[["TaskContext"], Any]) -> None:
        self._require_router().register_task(name, factory)

    def _require_router(self) -> Router:
        if self.router is None:
            raise RuntimeError(f"Task '{self.name}' is not attached to a router")
        return self.router
