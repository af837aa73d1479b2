"""Tenacity-powered bounded retry for single-resource fetches."""

from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from numbers import Real
from typing import Generic, TypeVar

import logfire
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)
from tenacity.retry import retry_base
from tenacity.stop import stop_base
from tenacity.wait import wait_base

from ...models.fetch import FetchRequest
from ..config import FetchSettings, settings
from ..exceptions import InvalidConfigurationError, RetryExhaustedError
from ..progress import ProgressSink, emit_progress

T = TypeVar("T")

Transport = Callable[[str], Awaitable[T]]
Sleep = Callable[[float], Awaitable[None]]


def retry_any_error(error: BaseException) -> bool:
    """Retry every ordinary exception; cancellation and exits pass through."""
    return isinstance(error, Exception)


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay, fixed-cap retry policy.

    Subclass and override the ``*_strategy`` methods to change how attempts
    are stopped, spaced or filtered without touching :class:`RetryingFetcher`.
    """

    max_attempts: int = 3
    """Total attempts, including the first one."""

    delay_seconds: float = 1.0
    """Pause between two consecutive attempts; never applied after the last."""

    retry_on: Callable[[BaseException], bool] = retry_any_error
    """Decides whether a failed attempt may be retried."""

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            raise InvalidConfigurationError(
                "max_attempts must be an integer", max_attempts=repr(self.max_attempts)
            )
        if self.max_attempts < 1:
            raise InvalidConfigurationError(
                "max_attempts must be at least 1", max_attempts=self.max_attempts
            )
        if (
            isinstance(self.delay_seconds, bool)
            or not isinstance(self.delay_seconds, Real)
            or not math.isfinite(self.delay_seconds)
        ):
            raise InvalidConfigurationError(
                "delay_seconds must be a finite number", delay_seconds=repr(self.delay_seconds)
            )
        if self.delay_seconds < 0:
            raise InvalidConfigurationError(
                "delay_seconds must not be negative", delay_seconds=self.delay_seconds
            )

    @classmethod
    def from_settings(cls, fetch_settings: FetchSettings | None = None) -> RetryPolicy:
        """Build a policy from configuration (global settings by default)."""
        cfg = fetch_settings or settings
        return cls(max_attempts=cfg.max_attempts, delay_seconds=cfg.retry_delay_seconds)

    def stop_strategy(self) -> stop_base:
        return stop_after_attempt(self.max_attempts)

    def wait_strategy(self) -> wait_base:
        return wait_fixed(self.delay_seconds)

    def retry_strategy(self) -> retry_base:
        return retry_if_exception(self.retry_on)


class RetryingFetcher(Generic[T]):
    """Fetch one resource through a transport, retrying failed attempts.

    The transport is any ``async get(url) -> payload`` callable. Every attempt
    is reported to the progress sink; the sink never influences the outcome.

    Examples:
        async with HttpxTransport() as transport:
            fetcher = RetryingFetcher(transport.get, RetryPolicy(max_attempts=3))
            payload = await fetcher.fetch(FetchRequest(url="https://example.com/users/1"))
    """

    def __init__(
        self,
        get: Transport[T],
        policy: RetryPolicy | None = None,
        *,
        progress: ProgressSink | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the fetcher.

        Args:
            get: Transport callable performing one GET
            policy: Retry policy; built from settings when omitted
            progress: Optional sink for human-readable attempt lines
            sleep: Coroutine used for inter-attempt delays
        """
        self._get = get
        self.policy = policy or RetryPolicy.from_settings()
        self.progress = progress
        self._sleep = sleep

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=self.policy.stop_strategy(),
            wait=self.policy.wait_strategy(),
            retry=self.policy.retry_strategy(),
            sleep=self._sleep,
            reraise=False,
        )

    async def fetch(self, request: FetchRequest | str) -> T:
        """Fetch ``request`` and return its payload.

        Raises:
            RetryExhaustedError: If every allowed attempt failed.
        """
        url = request.url if isinstance(request, FetchRequest) else request
        max_attempts = self.policy.max_attempts

        try:
            async for attempt in self._retrying():
                with attempt:
                    number = attempt.retry_state.attempt_number
                    emit_progress(self.progress, f"Attempt {number}/{max_attempts} for {url}")
                    logfire.debug(
                        "Fetch attempt", url=url, attempt=number, max_attempts=max_attempts
                    )
                    try:
                        return await self._get(url)
                    except Exception as exc:
                        emit_progress(self.progress, f"Attempt {number} failed: {exc}")
                        logfire.warning(
                            "Fetch attempt failed",
                            url=url,
                            attempt=number,
                            max_attempts=max_attempts,
                            error=str(exc),
                        )
                        raise
        except RetryError as exc:
            last_error = exc.last_attempt.exception()
            attempts = exc.last_attempt.attempt_number
            logfire.error("Fetch retries exhausted", url=url, attempts=attempts, error=str(last_error))
            raise RetryExhaustedError(
                attempts=attempts, last_error=last_error, url=url
            ) from last_error

        raise AssertionError("RetryingFetcher exhausted without result")  # pragma: no cover


async def fetch_with_retry(
    get: Transport[T],
    request: FetchRequest | str,
    max_attempts: int | None = None,
    *,
    delay_seconds: float | None = None,
    progress: ProgressSink | None = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Fetch a single resource with a fixed-delay retry policy.

    ``max_attempts`` and ``delay_seconds`` left as None are taken from
    ``settings``, the same defaults :class:`RetryingFetcher` uses.
    """

    policy = RetryPolicy(
        max_attempts=settings.max_attempts if max_attempts is None else max_attempts,
        delay_seconds=settings.retry_delay_seconds if delay_seconds is None else delay_seconds,
    )
    fetcher = RetryingFetcher(get, policy, progress=progress, sleep=sleep)
    return await fetcher.fetch(request)
