"""Cooperative routines and the step results the task interpreter inspects.

A routine is resumed with an input value and answers with exactly one step:

- `Emit(value)`: an output to forward to the dispatch sink before resuming again,
- `Wait(keys)`: a new wait-set; the routine suspends until a matching event,
- `Done(value)`: the routine finished.

Most routines are written as generators that yield `ctx.emit(...)` and
`ctx.declare_interest(...)`; `GeneratorRoutine` adapts those.
"""
from __future__ import annotations

import inspect
from collections.abc import Generator, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable


@dataclass(frozen=True, slots=True)
class Emit:
    value: Any


@dataclass(frozen=True, slots=True)
class Wait:
    keys: frozenset[str]

    @staticmethod
    def on(keys: str | Iterable[str]) -> "Wait":
        if isinstance(keys, str):
            return Wait(keys=frozenset((keys,)))
        return Wait(keys=frozenset(keys))


@dataclass(frozen=True, slots=True)
class Done:
    value: Any = None


Step = Union[Emit, Wait, Done]


@runtime_checkable
class Routine(Protocol):
    def resume(self, value: Any) -> Step:  # pragma: no cover
        ...

    def close(self, reason: Any = None) -> None:  # pragma: no cover
        ...


class GeneratorRoutine:
    """Drive a generator as a Routine.

    The first `resume` primes the generator (its input is ignored, as with any
    fresh generator); later inputs become the value of the pending `yield`.
    """

    def __init__(self, generator: Generator[Step, Any, Any]) -> None:
        self._gen = generator
        self._primed = False

    def resume(self, value: Any) -> Step:
        try:
            if self._primed:
                step = self._gen.send(value)
            else:
                self._primed = True
                step = next(self._gen)
        except StopIteration as stop:
            return Done(stop.value)

        if not isinstance(step, (Emit, Wait)):
            self._gen.close()
            raise TypeError(f"Routine yielded {step!r}; expected ctx.emit(...) or ctx.declare_interest(...)")
        return step

    def close(self, reason: Any = None) -> None:
        # The reason travels on the task context; generators only see GeneratorExit.
        self._gen.close()


def as_routine(obj: Any) -> Routine:
    """Accept what a task factory returned and make it a Routine."""

    if inspect.isgenerator(obj):
        return GeneratorRoutine(obj)
    if isinstance(obj, Routine):
        return obj
    raise TypeError(f"Task factory returned {type(obj).__name__}; expected a generator or a Routine")
