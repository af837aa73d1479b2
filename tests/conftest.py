"""Pytest configuration and shared fixtures for resilient_fetch tests."""

from collections.abc import Callable
from typing import Any

import pytest

from resilient_fetch.core.logging import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _logging():
    """Configure logfire once so library log calls have somewhere to go."""
    configure_logging(enable_console=False)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class ScriptedTransport:
    """Transport replaying a per-URL script of payloads and exceptions.

    The last step of a script repeats forever, so ``[error]`` means the URL
    always fails.
    """

    def __init__(self, script: dict[str, list[Any]]) -> None:
        self._script = {url: list(steps) for url, steps in script.items()}
        self.calls: list[str] = []

    def calls_for(self, url: str) -> int:
        return self.calls.count(url)

    async def get(self, url: str) -> Any:
        self.calls.append(url)
        steps = self._script[url]
        step = steps.pop(0) if len(steps) > 1 else steps[0]
        if isinstance(step, BaseException):
            raise step
        return step


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def scripted_transport() -> Callable[[dict[str, list[Any]]], ScriptedTransport]:
    """Factory for scripted transports."""
    return ScriptedTransport
