"""Settle-all fan-out of independent fetch operations."""

import asyncio
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

import logfire

from ..core.config import settings
from ..core.exceptions import InvalidConfigurationError
from ..core.progress import ProgressSink, emit_progress
from ..models.fetch import BatchResult, FetchFailure, FetchOutcome, FetchSuccess, describe_request

R = TypeVar("R")
T = TypeVar("T")


class BatchOrchestrator(Generic[R, T]):
    """Run a batch of fetches concurrently and collect every outcome.

    One failing request never cancels or hides its siblings: the orchestrator
    waits for all of them to settle, then partitions the outcomes in the order
    the requests were supplied. Retrying is up to ``fetch_one``.
    """

    def __init__(
        self,
        fetch_one: Callable[[R], Awaitable[T]],
        *,
        progress: ProgressSink | None = None,
        max_concurrency: int | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            fetch_one: Coroutine function fetching a single request
            progress: Optional sink for per-request success/failure lines
            max_concurrency: Upper bound on in-flight fetches; None falls back
                to ``settings.max_concurrency``, and an unset setting starts
                every fetch immediately
        """
        if max_concurrency is None:
            max_concurrency = settings.max_concurrency
        if max_concurrency is not None and (
            isinstance(max_concurrency, bool)
            or not isinstance(max_concurrency, int)
            or max_concurrency < 1
        ):
            raise InvalidConfigurationError(
                "max_concurrency must be a positive integer or None",
                max_concurrency=repr(max_concurrency),
            )
        self.fetch_one = fetch_one
        self.progress = progress
        self.max_concurrency = max_concurrency

    async def run(self, requests: Iterable[R]) -> BatchResult[R, T]:
        """Fetch every request and return the partitioned outcomes.

        Args:
            requests: Ordered requests; consumed once

        Returns:
            Batch result whose sequences follow submission order

        Raises:
            InvalidConfigurationError: If ``requests`` is None, a single
                string/bytes/mapping value, or not iterable
        """
        if requests is None:
            raise InvalidConfigurationError("requests must not be None")
        # A bare URL or a mapping iterates as characters/keys, never as requests
        if isinstance(requests, str | bytes | bytearray | Mapping):
            raise InvalidConfigurationError(
                "requests must be a sequence of requests, not a single value",
                requests_type=type(requests).__name__,
            )
        try:
            pending = list(requests)
        except TypeError as e:
            raise InvalidConfigurationError(
                "requests must be an iterable of requests", requests_type=type(requests).__name__
            ) from e

        if not pending:
            return BatchResult()

        start_time = time.time()
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        async def settle(request: R) -> T:
            if semaphore is None:
                return await self.fetch_one(request)
            async with semaphore:
                return await self.fetch_one(request)

        settled = await asyncio.gather(*[settle(r) for r in pending], return_exceptions=True)

        outcomes: list[FetchOutcome[R, T]] = []
        for request, result in zip(pending, settled, strict=True):
            target = describe_request(request)
            if isinstance(result, Exception):
                emit_progress(self.progress, f"✗ Failed: {target}")
                logfire.warning("Batch request failed", target=target, error=str(result))
                outcomes.append(FetchFailure(request=request, error=result))
            elif isinstance(result, BaseException):
                # Cancellation and interpreter exits are not request failures
                raise result
            else:
                emit_progress(self.progress, f"✓ Success: {target}")
                outcomes.append(FetchSuccess(request=request, payload=cast(T, result)))

        batch = BatchResult.from_outcomes(outcomes)
        logfire.info(
            "Batch completed",
            duration_seconds=round(time.time() - start_time, 3),
            **batch.summary(),
        )
        return batch


async def run_batch(
    requests: Iterable[R],
    fetch_one: Callable[[R], Awaitable[T]],
    *,
    progress: ProgressSink | None = None,
    max_concurrency: int | None = None,
) -> BatchResult[R, T]:
    """Fetch ``requests`` concurrently with settle-all semantics."""
    orchestrator: BatchOrchestrator[Any, Any] = BatchOrchestrator(
        fetch_one, progress=progress, max_concurrency=max_concurrency
    )
    return await orchestrator.run(requests)
