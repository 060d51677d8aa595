"""Async HTTP access to the register API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)
GENERIC_ERROR = "Something went wrong. Please try again."


class ApiError(Exception):
    """A request failed; ``message`` is safe to show to the user."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def error_message(response: httpx.Response, fallback: str = GENERIC_ERROR) -> str:
    """Pick the user-facing text out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return fallback


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` that raises :class:`ApiError`.

    ``sent`` records every request issued, as ``(method, path)`` pairs.
    """

    def __init__(
        self,
        base_url: str = "http://esms.local",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self.sent: List[Tuple[str, str]] = []

    async def _request(self, method: str, path: str, fallback: str, **kwargs: Any) -> Any:
        self.sent.append((method, path))
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(0, fallback) from exc
        if response.is_error:
            message = error_message(response, fallback)
            logger.warning("%s %s returned %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        if not response.content:
            return None
        return response.json()

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, "Failed to load data", params=params)

    async def post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        return await self._request("POST", path, GENERIC_ERROR, json=payload)

    async def put_json(self, path: str, payload: Dict[str, Any]) -> Any:
        return await self._request("PUT", path, GENERIC_ERROR, json=payload)

    async def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> None:
        await self._request("DELETE", path, "Failed to delete record", params=params)

    async def upload(self, path: str, filename: str, content: bytes, content_type: str = "application/octet-stream") -> str:
        body = await self._request(
            "POST",
            path,
            "Failed to upload file",
            files={"file": (filename, content, content_type)},
        )
        return body["file_url"]

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
