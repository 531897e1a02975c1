from __future__ import annotations


class LiteCSPError(Exception):
    """Base class for errors raised by litecsp."""


class ReentrancyError(LiteCSPError, RuntimeError):
    """A task was asked to resume while it is already mid-resumption.

    This means business logic routed a task's own output back into it before
    its current cycle finished. The task state is left untouched.
    """

    def __init__(self, task_name: str, event_type: str) -> None:
        self.task_name = task_name
        self.event_type = event_type
        super().__init__(f"Unexpected re-entry of task '{task_name}' (event type: {event_type})")
