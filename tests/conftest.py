from __future__ import annotations

import os
from pathlib import Path

import pytest

from litecsp.router import Router

from .fakes import RecordingSink


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (e.g. LITECSP_TRACE=1 while debugging).

    In CI we don't auto-load `.env`, so the environment stays hermetic.
    """

    if os.environ.get("CI"):
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def router(sink: RecordingSink) -> Router:
    """Router whose sink records and then re-dispatches into the same router."""

    r = Router(sink)
    sink.forward_to = r
    return r
