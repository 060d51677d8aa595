"""Cancellation for work started by a form that may be closed mid-flight."""

from __future__ import annotations

from typing import Any, Awaitable


class OperationCancelled(Exception):
    """The owning form was closed while the awaited call was in flight."""


class CancelToken:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelled()

    async def guard(self, awaitable: Awaitable[Any]) -> Any:
        """Await ``awaitable``; raise :class:`OperationCancelled` if cancelled meanwhile.

        A failure that resolves after cancellation is reported as a cancellation too.
        """
        try:
            result = await awaitable
        except Exception:
            if self.cancelled:
                raise OperationCancelled() from None
            raise
        self.raise_if_cancelled()
        return result
