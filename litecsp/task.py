from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from litecsp.errors import ReentrancyError
from litecsp.fsm import TaskFSM, TaskOutcome, TaskPhase
from litecsp.routines import Done, Emit, Routine, Wait

if TYPE_CHECKING:
    from litecsp.core.context import TaskContext

logger = logging.getLogger(__name__)
trace = logging.getLogger("litecsp.trace")

Sink = Callable[[Any], Any]


class Task:
    """Suspend/resume wrapper around one cooperative routine.

    Between one request (wait-set) and the next, a routine may emit any number
    of outputs. Outputs and the next request are linear: each output is handed to
    the sink before the routine runs again, and the task never resumes itself on
    top of its own stack.

    Outcomes once inactive: "completed" (routine finished), "stopped" (forced
    via `stop`) or "failed" (an exception escaped a resumption cycle).
    """

    def __init__(
        self,
        name: str,
        routine: Routine,
        sink: Sink | None = None,
        *,
        context: TaskContext | None = None,
        trace_enabled: bool = False,
    ) -> None:
        self.name = name
        self.routine = routine
        self.sink = sink
        self.context = context
        self.fsm = TaskFSM(name)
        self.wait_set: frozenset[str] = frozenset()
        self.pending_output: Emit | None = None
        self.outcome: TaskOutcome | None = None
        self.result: Any = None

        self._trace = trace_enabled
        self._entered = False
        self._stepping = False
        self._close_after_step = False
        self._close_reason: Any = None

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, phase={self.phase.value!r}, wait_set={sorted(self.wait_set)!r})"

    @property
    def phase(self) -> TaskPhase:
        return self.fsm.phase

    @property
    def is_active(self) -> bool:
        return self.fsm.is_active

    @property
    def in_cycle(self) -> bool:
        return self._entered

    def start(self, seed: Any = None) -> None:
        if self.phase is not TaskPhase.idle:
            return
        self.fsm.launch()
        self._cycle(seed)

    def deliver(self, event_type: str, value: Any) -> bool:
        """Offer one event. True if the task accepted (and ran) it."""

        if not self.is_active or event_type not in self.wait_set:
            return False
        if self._entered:
            raise ReentrancyError(self.name, event_type)

        if self._trace:
            trace.debug("DELIVER %s <- %s", self.name, event_type)
        self.fsm.resume()
        self._cycle(value)
        return True

    def stop(self, reason: Any = None) -> None:
        if not self.is_active:
            return

        if self.context is not None:
            self.context.stop_reason = reason
            self.context.stopped = True
        self._terminate(TaskOutcome.stopped)

        if self._stepping:
            # The routine is executing right now; close it once its step returns.
            self._close_after_step = True
            self._close_reason = reason
        else:
            self.routine.close(reason)
        logger.debug("task %s stopped (reason=%r)", self.name, reason)

    def _cycle(self, value: Any) -> None:
        self._entered = True
        try:
            self.pending_output = None
            self._step(value)
            while self.is_active and self.pending_output is not None:
                output = self.pending_output.value
                if self._trace:
                    trace.debug("RES %s -> %r", self.name, output)
                if self.sink is None:
                    logger.warning("task %s emitted %r but no dispatch sink is configured", self.name, output)
                else:
                    self.sink(output)
                self.pending_output = None
                if self.is_active:
                    self._step(value)
        except BaseException:
            if self.is_active:
                self._terminate(TaskOutcome.failed)
                self.routine.close(None)
                logger.warning("task %s failed during its resumption cycle", self.name)
            raise
        finally:
            self._entered = False

    def _step(self, value: Any) -> None:
        self._stepping = True
        try:
            step = self.routine.resume(value)
        finally:
            self._stepping = False

        if self._close_after_step:
            self._close_after_step = False
            self.routine.close(self._close_reason)
            return

        if isinstance(step, Emit):
            self.pending_output = step
        elif isinstance(step, Wait):
            if self._trace:
                trace.debug("REQ %s waits on %s", self.name, sorted(step.keys))
            self.wait_set = step.keys
            self.fsm.suspend()
        elif isinstance(step, Done):
            self.result = step.value
            self._terminate(TaskOutcome.completed)
            logger.debug("task %s completed", self.name)
        else:
            raise TypeError(f"Task '{self.name}' routine returned {step!r}; expected Emit, Wait or Done")

    def _terminate(self, outcome: TaskOutcome) -> None:
        self.outcome = outcome
        self.wait_set = frozenset()
        self.pending_output = None
        self.fsm.finish()
