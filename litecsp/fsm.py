from __future__ import annotations

import logging
from enum import StrEnum

from statemachine import State, StateMachine

logger = logging.getLogger(__name__)


class TaskPhase(StrEnum):
    idle = "idle"
    running = "running"
    waiting = "waiting"
    terminated = "terminated"


class TaskOutcome(StrEnum):
    completed = "completed"
    stopped = "stopped"
    failed = "failed"


class TaskFSM(StateMachine):
    """Lifecycle of one task.

    - idle: created, never started
    - running: inside a resumption cycle (or emitting)
    - waiting: suspended on a wait-set
    - terminated: completed or stopped; final

    The task drives transitions; the FSM only guards them.
    """

    idle = State(TaskPhase.idle.value, value=TaskPhase.idle.value, initial=True)
    running = State(TaskPhase.running.value, value=TaskPhase.running.value)
    waiting = State(TaskPhase.waiting.value, value=TaskPhase.waiting.value)
    terminated = State(TaskPhase.terminated.value, value=TaskPhase.terminated.value, final=True)

    launch = idle.to(running)
    suspend = running.to(waiting)
    resume = waiting.to(running)
    finish = running.to(terminated) | waiting.to(terminated) | idle.to(terminated)

    def __init__(self, task_name: str):
        self.task_name = task_name
        super().__init__()

    @property
    def phase(self) -> TaskPhase:
        return TaskPhase(str(self.current_state_value))

    @property
    def is_active(self) -> bool:
        return self.phase in (TaskPhase.running, TaskPhase.waiting)

    def on_enter_terminated(self) -> None:
        logger.debug("task %s terminated", self.task_name)
