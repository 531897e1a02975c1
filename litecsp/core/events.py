from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """A typed message: `type` is the only dispatch key, `payload` is free-form.

    Extra top-level fields are kept so hosts can attach metadata (e.g. `meta`).
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: str = Field(..., min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)

    @staticmethod
    def of(type: str, **payload: Any) -> "Event":
        return Event(type=type, payload=payload)


def event_type(event: Any) -> str | None:
    """Read the dispatch key from an Event, a mapping, or any object with `.type`.

    Returns None when the value carries no usable type.
    """

    if isinstance(event, Mapping):
        value = event.get("type")
    else:
        value = getattr(event, "type", None)
    if isinstance(value, str) and value:
        return value
    return None


def event_payload(event: Any) -> Mapping[str, Any]:
    if isinstance(event, Mapping):
        payload = event.get("payload")
    else:
        payload = getattr(event, "payload", None)
    return payload if isinstance(payload, Mapping) else {}


def as_event(event: Event | Mapping[str, Any]) -> Event:
    """Validate a raw `{type, payload}` mapping into an Event.

    Raises `pydantic.ValidationError` for malformed input.
    """

    if isinstance(event, Event):
        return event
    return Event.model_validate(event)
