from __future__ import annotations

import asyncio

import httpx

from esms.forms.client import ApiClient
from esms.forms.listing import RecordList

ROWS = [
    {"id": i, "number": f"RC-{i:03d}", "department": {"id": 1, "name": "Ambiente" if i % 2 else "Obras"}}
    for i in range(1, 24)
]


class Backend:
    def __init__(self, rows, delete_status=204):
        self.rows = list(rows)
        self.delete_status = delete_status
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        if request.method == "GET":
            return httpx.Response(200, json=self.rows)
        record_id = int(request.url.path.rsplit("/", 1)[-1])
        if self.delete_status != 204:
            return httpx.Response(self.delete_status, json={"error": "Cannot delete complaint"})
        self.rows = [row for row in self.rows if row["id"] != record_id]
        return httpx.Response(204)


def _listing(backend):
    return RecordList(
        "complaints",
        ApiClient(transport=httpx.MockTransport(backend)),
        search_fields=("number", "department"),
        noun="Complaint",
    )


def test_pagination_is_one_based():
    listing = _listing(Backend(ROWS))
    asyncio.run(listing.load())
    assert listing.page == 1
    assert listing.page_count == 3
    assert [row["id"] for row in listing.page_rows] == list(range(1, 11))
    listing.set_page(3)
    assert [row["id"] for row in listing.page_rows] == [21, 22, 23]
    listing.set_page(99)
    assert listing.page == 3


def test_search_is_case_insensitive_and_resets_page():
    listing = _listing(Backend(ROWS))
    asyncio.run(listing.load())
    listing.set_page(2)
    listing.search("OBRAS")
    assert listing.page == 1
    assert all(row["id"] % 2 == 0 for row in listing.filtered)
    assert len(listing.filtered) == 11
    listing.search("rc-007")
    assert [row["id"] for row in listing.filtered] == [7]


def test_delete_requires_confirmation_then_refreshes():
    backend = Backend(ROWS[:3])
    listing = _listing(backend)

    async def scenario():
        await listing.load()
        listing.request_delete(2)
        listing.cancel_delete()
        assert await listing.confirm_delete() is False
        listing.request_delete(2)
        return await listing.confirm_delete()

    assert asyncio.run(scenario()) is True
    assert [row["id"] for row in listing.rows] == [1, 3]
    assert ("DELETE", "/api/complaints/2") in backend.calls
    assert backend.calls.count(("DELETE", "/api/complaints/2")) == 1
    assert listing.notifier.last.message == "Complaint deleted"
    assert listing.pending_delete is None


def test_failed_delete_notifies_and_keeps_rows():
    backend = Backend(ROWS[:2], delete_status=409)
    listing = _listing(backend)

    async def scenario():
        await listing.load()
        listing.request_delete(1)
        return await listing.confirm_delete()

    assert asyncio.run(scenario()) is False
    assert len(listing.rows) == 2
    assert listing.notifier.texts() == ["Cannot delete complaint"]
