"""Router: the single medium between the host and its tasks.

Mental structure:

    host store
      Router.middleware
        entries (plain functions, first refusal)
        Task (suspend/resume wrapper)
          routine (your generator) { declare_interest, emit }
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from litecsp.config import RouterSettings
from litecsp.core.context import TaskContext
from litecsp.core.events import event_type
from litecsp.fsm import TaskOutcome
from litecsp.routines import as_routine
from litecsp.task import Sink, Task

logger = logging.getLogger(__name__)
trace = logging.getLogger("litecsp.trace")

EntryHandler = Callable[[Any, Any], bool]
TaskFactory = Callable[[TaskContext], Any]
Handler = Callable[[Any], Any]


class Router:
    def __init__(
        self,
        sink: Sink | None = None,
        *,
        store: Any = None,
        bindings: Mapping[str, Any] | None = None,
        settings: RouterSettings | None = None,
    ) -> None:
        self.settings = settings or RouterSettings()
        self.sink = sink
        self.store = store
        self.bindings: dict[str, Any] = dict(bindings or {})

        self._entries: dict[str, EntryHandler] = {}
        self._factories: dict[str, TaskFactory] = {}
        self._live: dict[str, Task] = {}

    def __repr__(self) -> str:
        return f"Router(name={self.settings.name!r}, live={list(self._live)!r})"

    # -- configuration -----------------------------------------------------

    def set_sink(self, sink: Sink | None) -> None:
        self.sink = sink

    def set_store(self, store: Any) -> None:
        self.store = store

    def middleware(self, store: Any) -> Callable[[Handler], Handler]:
        """Hook the router in front of a store's reducers.

        Events consumed by an entry or a task never reach `next_handler`.
        """

        self.set_store(store)
        self.set_sink(store.dispatch)

        def wrap(next_handler: Handler) -> Handler:
            def handle(event: Any) -> Any:
                if self.dispatch(event):
                    return True
                return next_handler(event)

            return handle

        return wrap

    def register_entry(self, event_type: str, handler: EntryHandler) -> None:
        if event_type in self._entries:
            logger.warning("[%s] possible unexpected entry overwrite: %s", self.settings.name, event_type)
        self._entries[event_type] = handler

    def register_task(self, name: str, factory: TaskFactory) -> None:
        if name in self._factories:
            logger.warning("[%s] possible unexpected task overwrite: %s", self.settings.name, name)
        self._factories[name] = factory

    # -- read helpers ------------------------------------------------------

    @property
    def live_tasks(self) -> Mapping[str, Task]:
        return MappingProxyType(self._live)

    @property
    def task_names(self) -> list[str]:
        return list(self._factories)

    @property
    def entry_types(self) -> list[str]:
        return list(self._entries)

    def is_live(self, name: str) -> bool:
        return name in self._live

    def current_state(self) -> Any:
        if self.store is None:
            return None
        return self.store.get_state()

    # -- lifecycle ---------------------------------------------------------

    def start(self, name: str, seed: Any = None) -> bool:
        factory = self._factories.get(name)
        if factory is None:
            logger.warning("[%s] task not found: %s", self.settings.name, name)
            return False
        if name in self._live:
            logger.warning("[%s] task already started: %s", self.settings.name, name)
            return False
        if self.sink is None:
            logger.warning("[%s] starting task %s before a dispatch sink is configured", self.settings.name, name)

        ctx = TaskContext(name=name, router=self, store=self.store, bindings=self.bindings, seed=seed)
        built = factory(ctx)
        try:
            routine = as_routine(built)
        except TypeError:
            logger.warning(
                "[%s] task factory for %s returned %s; expected a generator or a Routine",
                self.settings.name,
                name,
                type(built).__name__,
            )
            return False

        task = Task(
            name,
            routine,
            self._forward,
            context=ctx,
            trace_enabled=self.settings.trace,
        )
        task.start(seed)
        if not task.is_active:
            logger.warning("[%s] task failed to start: %s", self.settings.name, name)
            return False

        self._live[name] = task
        logger.info("[%s] task started: %s", self.settings.name, name)
        return True

    def start_all(self) -> None:
        for name in list(self._factories):
            if name not in self._live:
                self.start(name)

    def stop(self, name: str, reason: Any = None) -> None:
        task = self._live.get(name)
        if task is None:
            return
        try:
            task.stop(reason)
        finally:
            self._drop(name, task)
        logger.info("[%s] task stopped: %s", self.settings.name, name)

    def shutdown(self, reason: Any = None) -> None:
        for name in list(self._live):
            self.stop(name, reason)

    # -- events ------------------------------------------------------------

    def dispatch(self, event: Any) -> bool:
        """Route one event. True means consumed: later handlers must not see it."""

        if self.sink is None:
            logger.warning("[%s] caught event before dispatch sink configured: %r", self.settings.name, event)

        key = event_type(event)
        if key is None:
            logger.warning("[%s] ignoring event without a type: %r", self.settings.name, event)
            return False

        entry = self._entries.get(key)
        if entry is not None:
            if self.settings.trace:
                trace.debug("ENTRY %s", key)
            if entry(self.current_state(), event):
                return True

        for name, task in list(self._live.items()):
            try:
                accepted = task.deliver(key, event)
            finally:
                if not task.is_active:
                    self._drop(name, task)
            if accepted:
                if task.outcome is TaskOutcome.completed:
                    logger.info("[%s] task completed: %s", self.settings.name, name)
                return True

        return False

    def _forward(self, output: Any) -> Any:
        # Resolved per call so `set_sink` applies to tasks started earlier.
        if self.sink is None:
            logger.warning("[%s] dropping task output, no dispatch sink configured: %r", self.settings.name, output)
            return None
        return self.sink(output)

    def _drop(self, name: str, task: Task) -> None:
        if self._live.get(name) is task:
            del self._live[name]
