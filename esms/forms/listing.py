"""Searchable, paginated record lists with confirmed deletion."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .client import ApiClient, ApiError
from .notify import Notifier

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Mapping):
        return " ".join(_text(v) for k, v in value.items() if k != "id")
    if isinstance(value, (list, tuple)):
        return " ".join(_text(v) for v in value)
    return str(value)


class RecordList:
    def __init__(
        self,
        resource: str,
        client: ApiClient,
        notifier: Optional[Notifier] = None,
        *,
        search_fields: Sequence[str] = (),
        page_size: int = PAGE_SIZE,
        noun: str = "Record",
    ) -> None:
        self.resource = resource
        self.client = client
        self.notifier = notifier or Notifier()
        self.search_fields = tuple(search_fields)
        self.page_size = page_size
        self.noun = noun
        self.rows: List[Dict[str, Any]] = []
        self.query = ""
        self.page = 1
        self.loading = False
        self.deleting = False
        self.pending_delete: Optional[int] = None

    @property
    def path(self) -> str:
        return f"/api/{self.resource}"

    async def load(self) -> None:
        self.loading = True
        try:
            self.rows = list(await self.client.get_json(self.path) or [])
        except ApiError as exc:
            self.rows = []
            self.notifier.error(exc.message)
        finally:
            self.loading = False
        self.set_page(self.page)

    async def refresh(self) -> None:
        await self.load()

    def search(self, text: str) -> None:
        self.query = text or ""
        self.page = 1

    @property
    def filtered(self) -> List[Dict[str, Any]]:
        needle = self.query.strip().lower()
        if not needle:
            return list(self.rows)
        fields = self.search_fields
        return [
            row
            for row in self.rows
            if any(needle in _text(row.get(name)).lower() for name in (fields or row.keys()))
        ]

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self.filtered) / self.page_size))

    def set_page(self, page: int) -> None:
        self.page = min(max(1, page), self.page_count)

    @property
    def page_rows(self) -> List[Dict[str, Any]]:
        start = (self.page - 1) * self.page_size
        return self.filtered[start:start + self.page_size]

    def request_delete(self, record_id: int) -> None:
        self.pending_delete = record_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    async def confirm_delete(self) -> bool:
        if self.pending_delete is None or self.deleting:
            return False
        record_id = self.pending_delete
        self.deleting = True
        try:
            await self.client.delete(f"{self.path}/{record_id}")
        except ApiError as exc:
            self.notifier.error(exc.message)
            return False
        finally:
            self.deleting = False
            self.pending_delete = None
        self.notifier.success(f"{self.noun} deleted")
        logger.info("Deleted %s %s", self.resource, record_id)
        await self.load()
        return True
