"""Batch orchestration and transport services."""

from .batch_orchestrator import BatchOrchestrator, run_batch
from .transport import HttpxTransport

__all__ = ["BatchOrchestrator", "HttpxTransport", "run_batch"]
