"""Progress reporting side channel for fetch orchestration."""

from collections.abc import Callable

import logfire

ProgressSink = Callable[[str], None]
"""Receives human-readable progress lines; delivery is best effort."""


def log_progress(message: str) -> None:
    """Default sink: forward progress lines to logfire."""
    logfire.info("{progress}", progress=message)


def emit_progress(sink: ProgressSink | None, message: str) -> None:
    """Deliver ``message`` to ``sink`` without letting the sink break the caller."""
    if sink is None:
        return
    try:
        sink(message)
    except Exception as exc:
        logfire.warning("Progress sink failed", error=str(exc))
