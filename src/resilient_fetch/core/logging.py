"""Process-wide logfire setup for resilient_fetch.

Library code logs straight through ``logfire``; applications embedding the
library call :func:`configure_logging` once at their entry point:

    from resilient_fetch.core.logging import configure_logging
    configure_logging()

Nothing is shipped to the Logfire backend unless a token is present in the
environment.
"""

import sys
import threading

import logfire

from .config import settings

SERVICE_NAME = "resilient-fetch"

_configured = False
_config_lock = threading.Lock()


def configure_logging(enable_console: bool | None = None) -> None:
    """Configure logfire once per process.

    Args:
        enable_console: Print records to the console. Falls back to the
            ``log_console`` setting when None.
    """
    global _configured

    if _configured:
        return

    with _config_lock:
        if _configured:
            return
        console_enabled = settings.log_console if enable_console is None else enable_console
        try:
            logfire.configure(
                service_name=SERVICE_NAME,
                send_to_logfire="if-token-present",
                console=logfire.ConsoleOptions() if console_enabled else False,
                min_level=settings.log_level,
            )
            _configured = True
        except Exception as e:
            # logfire is not usable yet, so stderr is the only channel left
            print(f"Failed to configure logfire: {e}", file=sys.stderr)


def is_configured() -> bool:
    """Return True once logfire has been configured."""
    return _configured
