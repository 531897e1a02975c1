"""A lite CSP task scheduler.

Long-lived routines declare which event types they wait for, suspend, and emit
events back through a single shared router. Everything runs interleaved on one
thread of control.
"""
from __future__ import annotations

from litecsp.config import RouterSettings, configure_logging, settings_from_env
from litecsp.core.context import TaskContext
from litecsp.core.events import Event, as_event, event_type
from litecsp.errors import LiteCSPError, ReentrancyError
from litecsp.fsm import TaskOutcome, TaskPhase
from litecsp.router import Router
from litecsp.routines import Done, Emit, GeneratorRoutine, Routine, Wait
from litecsp.session import make_versioned_reducer
from litecsp.store import Store, combine_reducers
from litecsp.task import Task

__all__ = [
    "Done",
    "Emit",
    "Event",
    "GeneratorRoutine",
    "LiteCSPError",
    "ReentrancyError",
    "Routine",
    "Router",
    "RouterSettings",
    "Store",
    "Task",
    "TaskContext",
    "TaskOutcome",
    "TaskPhase",
    "Wait",
    "as_event",
    "combine_reducers",
    "configure_logging",
    "event_type",
    "make_versioned_reducer",
    "settings_from_env",
]
