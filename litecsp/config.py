from __future__ import annotations

import logging
import os
from dataclasses import dataclass

ENV_PREFIX = "LITECSP"

_TRUTHY = {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class RouterSettings:
    # Label used in diagnostics when several routers share a process.
    name: str = "default"
    # Log REQ/RES/DELIVER lines on the `litecsp.trace` logger.
    trace: bool = False
    log_level: str = "INFO"


def settings_from_env(*, default_name: str = "default") -> RouterSettings:
    return RouterSettings(
        name=os.environ.get(f"{ENV_PREFIX}_ROUTER_NAME", default_name),
        trace=os.environ.get(f"{ENV_PREFIX}_TRACE", "").strip().lower() in _TRUTHY,
        log_level=os.environ.get(f"{ENV_PREFIX}_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(settings: RouterSettings) -> None:
    """Application-level logging setup; libraries embedding a router should not call this."""

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.log_level}")

    logging.basicConfig(level=level)
    logging.getLogger("litecsp").setLevel(level)
    if settings.trace:
        logging.getLogger("litecsp.trace").setLevel(logging.DEBUG)
