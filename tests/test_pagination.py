"""Tests for payos_sdk.pagination."""

from __future__ import annotations

import pytest

from payos_sdk import PayOSError
from payos_sdk.pagination import Pagination, extract_items

from .conftest import envelope


def payout(index: int) -> dict:
    return {
        "id": f"po_{index}",
        "referenceId": f"ref_{index}",
        "transactions": [],
        "approvalState": "COMPLETED",
        "createdAt": "2024-01-01T10:00:00+07:00",
    }


def page_response(offset: int, count: int, total: int, limit: int = 2) -> dict:
    return {
        "pagination": {
            "limit": limit,
            "offset": offset,
            "total": total,
            "count": count,
            "hasMore": offset + count < total,
        },
        "payouts": [payout(i) for i in range(offset, offset + count)],
    }


class TestPagination:
    def test_from_response(self):
        info = Pagination.from_response(page_response(2, 2, 5))
        assert info == Pagination(limit=2, offset=2, total=5, count=2, has_more=True)

    def test_missing_pagination(self):
        assert Pagination.from_response({}) == Pagination()

    def test_extract_items_skips_pagination_key(self):
        assert extract_items({"pagination": {}, "payouts": [1, 2]}) == [1, 2]
        assert extract_items({"pagination": {}}) == []


class TestAsyncPage:
    async def test_walk_pages(self, client, server):
        server.add(
            envelope(page_response(0, 2, 5)),
            envelope(page_response(2, 2, 5)),
            envelope(page_response(4, 1, 5)),
        )

        page = await client.payouts.list(limit=2)
        ids = [item.id async for item in page]

        assert ids == ["po_0", "po_1", "po_2", "po_3", "po_4"]
        offsets = [request.url.params["offset"] for request in server.requests]
        assert offsets == ["0", "2", "4"]
        assert all(request.url.params["limit"] == "2" for request in server.requests)

    async def test_next_and_previous(self, client, server):
        server.add(
            envelope(page_response(2, 2, 5)),
            envelope(page_response(4, 1, 5)),
            envelope(page_response(2, 2, 5)),
        )

        page = await client.payouts.list(limit=2, offset=2)
        assert page.has_previous_page()
        assert page.has_next_page()

        last = await page.get_next_page()
        assert not last.has_next_page()
        with pytest.raises(PayOSError):
            await last.get_next_page()

        previous = await last.get_previous_page()
        assert [item.id for item in previous.data] == ["po_2", "po_3"]
        assert server.last_request.url.params["offset"] == "2"

    async def test_first_page_has_no_previous(self, client, server):
        server.add(envelope(page_response(0, 2, 2)))

        page = await client.payouts.list(limit=2)

        assert not page.has_previous_page()
        with pytest.raises(PayOSError):
            await page.get_previous_page()

    async def test_to_list(self, client, server):
        server.add(envelope(page_response(0, 2, 3)), envelope(page_response(2, 1, 3)))

        page = await client.payouts.list(limit=2)

        assert len(await page.to_list()) == 3


class TestSyncPage:
    def test_iterate_all_pages(self, sync_client, server):
        server.add(envelope(page_response(0, 2, 3)), envelope(page_response(2, 1, 3)))

        page = sync_client.payouts.list(limit=2)

        assert len(page) == 2
        assert page[0].id == "po_0"
        assert [item.id for item in page.to_list()] == ["po_0", "po_1", "po_2"]

    def test_follow_up_keeps_filters(self, sync_client, server):
        server.add(envelope(page_response(0, 2, 3)), envelope(page_response(2, 1, 3)))

        page = sync_client.payouts.list(limit=2, approval_state="COMPLETED")
        page.get_next_page()

        assert server.last_request.url.params["approvalState"] == "COMPLETED"
        assert server.last_request.url.params["offset"] == "2"
