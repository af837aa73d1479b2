"""Resilient Fetch - bounded retry and settle-all batching for async fetches."""

# Note: Environment variables are loaded by core/__init__.py before settings are read

from .core.exceptions import (
    InvalidConfigurationError,
    ResilientFetchError,
    RetryExhaustedError,
    TransportError,
)
from .core.progress import ProgressSink, log_progress
from .core.resilience import RetryingFetcher, RetryPolicy, fetch_with_retry
from .models.fetch import BatchResult, FetchFailure, FetchOutcome, FetchRequest, FetchSuccess
from .services.batch_orchestrator import BatchOrchestrator, run_batch
from .services.transport import HttpxTransport

__version__ = "1.0.0"
__all__ = [
    "BatchOrchestrator",
    "BatchResult",
    "FetchFailure",
    "FetchOutcome",
    "FetchRequest",
    "FetchSuccess",
    "HttpxTransport",
    "InvalidConfigurationError",
    "ProgressSink",
    "ResilientFetchError",
    "RetryExhaustedError",
    "RetryPolicy",
    "RetryingFetcher",
    "TransportError",
    "fetch_with_retry",
    "log_progress",
    "run_batch",
]
