"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from weatherscore.exceptions import (
    SourceAPIError,
    SourceConnectionError,
    SourceParseError,
    SourceTimeoutError,
)

DEFAULT_TIMEOUT = 30.0


def _handle_response(response: httpx.Response) -> dict[str, Any]:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 400:
        raise SourceAPIError(
            status_code=response.status_code,
            message=response.text,
        )
    try:
        data = response.json()
    except ValueError as exc:
        raise SourceParseError(f"Invalid JSON from {response.url}: {exc}") from exc
    if not isinstance(data, dict):
        raise SourceParseError(
            f"Expected JSON object from {response.url}, got {type(data).__name__}"
        )
    return data


class AsyncTransport:
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def get(self, endpoint: str, params: list[tuple[str, str]]) -> dict[str, Any]:
        """Perform an async GET request and return parsed JSON."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.ConnectError as exc:
            raise SourceConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise SourceTimeoutError(str(exc)) from exc
        except httpx.TransportError as exc:
            raise SourceConnectionError(str(exc)) from exc
        return _handle_response(response)

    async def close(self) -> None:
        await self._client.aclose()
