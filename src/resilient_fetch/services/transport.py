"""httpx-backed transport performing a single GET per call."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx
import logfire

from ..core.config import settings
from ..core.exceptions import TransportError


class HttpxTransport:
    """Async GET transport; every failure surfaces as :class:`TransportError`.

    The payload is the decoded JSON body for JSON responses and the text body
    otherwise. No retries happen here.
    """

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.timeout = timeout if timeout is not None else settings.timeout_seconds
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers=headers,
        )

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def get(self, url: str) -> Any:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logfire.debug("HTTP error status", url=url, status_code=status)
            raise TransportError(f"HTTP {status}", url=url, status_code=status, cause=e) from e
        except httpx.HTTPError as e:
            message = str(e) or type(e).__name__
            logfire.debug("HTTP transport failure", url=url, error=message)
            raise TransportError(message, url=url, cause=e) from e

        content_type = response.headers.get("content-type", "").lower()
        if "json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise TransportError(
                    "Invalid JSON body", url=url, status_code=response.status_code, cause=e
                ) from e
        return response.text
