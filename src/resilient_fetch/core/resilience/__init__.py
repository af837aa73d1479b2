"""Resilience utilities for bounded retries."""

from .retry import RetryingFetcher, RetryPolicy, fetch_with_retry, retry_any_error

__all__ = ["RetryingFetcher", "RetryPolicy", "fetch_with_retry", "retry_any_error"]
