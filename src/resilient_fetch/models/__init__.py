"""Data models for fetch requests and their outcomes."""

from .fetch import (
    BatchResult,
    FetchFailure,
    FetchOutcome,
    FetchRequest,
    FetchSuccess,
    describe_request,
)

__all__ = [
    "BatchResult",
    "FetchFailure",
    "FetchOutcome",
    "FetchRequest",
    "FetchSuccess",
    "describe_request",
]
