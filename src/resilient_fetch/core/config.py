"""Configuration management for fetch orchestration."""

import os

from pydantic import BaseModel, ConfigDict, Field

# Note: .env file is loaded in core/__init__.py before this module is imported

_ENV_PREFIX = "RESILIENT_FETCH_"


def _env(name: str) -> str | None:
    """Get a prefixed environment variable, returning None if empty or unset."""
    v = os.getenv(_ENV_PREFIX + name)
    if v is None:
        return None
    v = v.strip()
    return v or None


def _env_flag(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from environment variables.

    Accepts: "1", "true", "TRUE", "True" as True.
    """
    v = _env(name)
    if v is None:
        return default
    return v in {"1", "true", "TRUE", "True"}


def _env_int_default(name: str, default: int | None) -> int | None:
    v = _env(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_float_default(name: str, default: float) -> float:
    v = _env(name)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError:
        return default


class FetchSettings(BaseModel):
    """Retry, timeout and logging settings with validation."""

    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True, extra="forbid")

    max_attempts: int = Field(
        default_factory=lambda: _env_int_default("MAX_ATTEMPTS", 3),
        ge=1,
        description="Attempts per fetch, including the first one",
    )
    retry_delay_seconds: float = Field(
        default_factory=lambda: _env_float_default("RETRY_DELAY_SECONDS", 1.0),
        ge=0.0,
        description="Fixed delay between two attempts of the same fetch",
    )
    timeout_seconds: float = Field(
        default_factory=lambda: _env_float_default("TIMEOUT_SECONDS", 30.0),
        gt=0.0,
        description="Per-request timeout used by the HTTP transport",
    )
    max_concurrency: int | None = Field(
        default_factory=lambda: _env_int_default("MAX_CONCURRENCY", None),
        ge=1,
        description="Upper bound on in-flight batch requests; unset means unbounded",
    )
    log_level: str = Field(
        default_factory=lambda: _env("LOG_LEVEL") or "info",
        description="Minimum logfire level",
    )
    log_console: bool = Field(
        default_factory=lambda: _env_flag("LOG_CONSOLE", False),
        description="Print log records to the console",
    )


# Global configuration instance
settings = FetchSettings()
