"""Request descriptors and outcome types shared by the fetcher and orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.exceptions import InvalidConfigurationError

R = TypeVar("R")
T = TypeVar("T")


class FetchRequest(BaseModel):
    """Immutable descriptor of one unit of fetch work."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    url: str = Field(description="Target URL passed to the transport")
    label: str | None = Field(default=None, description="Optional name used in progress output")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Reject empty URLs."""
        if not v:
            raise ValueError("url must not be empty")
        return v

    @classmethod
    def for_resource(
        cls, base_url: str, collection: str, resource_id: Any, label: str | None = None
    ) -> FetchRequest:
        """Build a request for ``{base_url}/{collection}/{resource_id}``.

        Raises:
            InvalidConfigurationError: If ``resource_id`` is not an integer.
        """
        # bool is an int subclass but never a valid identifier
        if isinstance(resource_id, bool) or not isinstance(resource_id, int):
            raise InvalidConfigurationError(
                "Invalid resource id - must be a number",
                resource_id=repr(resource_id),
            )
        url = f"{base_url.rstrip('/')}/{collection.strip('/')}/{resource_id}"
        return cls(url=url, label=label)

    @property
    def target(self) -> str:
        """Name shown in progress output."""
        return self.label or self.url


def describe_request(request: Any) -> str:
    """Return a printable identifier for any request object."""
    if isinstance(request, FetchRequest):
        return request.target
    return str(request)


@dataclass(frozen=True)
class FetchSuccess(Generic[R, T]):
    """Terminal outcome of a fetch that produced a payload."""

    request: R
    payload: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure(Generic[R]):
    """Terminal outcome of a fetch that raised."""

    request: R
    error: BaseException

    @property
    def ok(self) -> bool:
        return False


FetchOutcome = FetchSuccess[R, T] | FetchFailure[R]


@dataclass
class BatchResult(Generic[R, T]):
    """Outcomes of a batch, partitioned in submission order."""

    successful: list[T] = field(default_factory=list)
    failed: list[FetchFailure[R]] = field(default_factory=list)
    outcomes: list[FetchOutcome[R, T]] = field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: list[FetchOutcome[R, T]]) -> BatchResult[R, T]:
        """Partition ``outcomes`` without reordering them."""
        result: BatchResult[R, T] = cls(outcomes=list(outcomes))
        for outcome in outcomes:
            if isinstance(outcome, FetchSuccess):
                result.successful.append(outcome.payload)
            else:
                result.failed.append(outcome)
        return result

    @property
    def total(self) -> int:
        return len(self.successful) + len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

    def summary(self) -> dict[str, int]:
        """Counts per terminal state."""
        return {
            "total": self.total,
            "successful": len(self.successful),
            "failed": len(self.failed),
        }
