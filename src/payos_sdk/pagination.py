"""
Pagination utilities for the payOS SDK.

List endpoints return offset pagination:

    {"pagination": {"limit", "offset", "total", "count", "hasMore"}, "<items>": [...]}

``Page`` and ``AsyncPage`` wrap one such response and know how to fetch the
neighbouring pages by re-issuing the first request with a new offset.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import (
    TYPE_CHECKING,
    Any,
    AsyncIterator,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Mapping,
    TypeVar,
)

from .errors import PayOSError
from .options import RequestOptions

if TYPE_CHECKING:
    from .client import AsyncPayOS, PayOS

T = TypeVar("T")


@dataclass
class Pagination:
    """Pagination metadata of a list response.

    Attributes:
        limit: Page size requested
        offset: Offset of the first item
        total: Total number of items
        count: Number of items on this page
        has_more: Whether more items follow
    """

    limit: int = 0
    offset: int = 0
    total: int = 0
    count: int = 0
    has_more: bool = False

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "Pagination":
        pagination = data.get("pagination") or {}
        return cls(
            limit=int(pagination.get("limit") or 0),
            offset=int(pagination.get("offset") or 0),
            total=int(pagination.get("total") or 0),
            count=int(pagination.get("count") or 0),
            has_more=bool(pagination.get("hasMore", False)),
        )


def extract_items(data: Mapping[str, Any]) -> List[Any]:
    """Items live under the first key that is not ``pagination``."""
    for key, value in data.items():
        if key != "pagination":
            return list(value or [])
    return []


class _BasePage(Generic[T]):
    def __init__(
        self,
        client: Any,
        options: RequestOptions,
        response: Mapping[str, Any],
        parse_item: Callable[[Any], T],
    ) -> None:
        self._client = client
        self._options = options
        self._parse_item = parse_item
        self.raw_response = response
        self.pagination = Pagination.from_response(response)
        self.data: List[T] = [parse_item(item) for item in extract_items(response)]

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> T:
        return self.data[index]

    def has_next_page(self) -> bool:
        return self.pagination.has_more

    def has_previous_page(self) -> bool:
        return self.pagination.offset > 0

    def _page_options(self, offset: int) -> RequestOptions:
        query: Dict[str, Any] = dict(self._options.query or {})
        query["offset"] = offset
        query["limit"] = self.pagination.limit or query.get("limit")
        return replace(self._options, query=query)

    def _next_options(self) -> RequestOptions:
        if not self.has_next_page():
            raise PayOSError("No more pages available")
        return self._page_options(self.pagination.offset + self.pagination.count)

    def _previous_options(self) -> RequestOptions:
        if not self.has_previous_page():
            raise PayOSError("No previous pages available")
        return self._page_options(max(0, self.pagination.offset - self.pagination.limit))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(data={self.data!r}, pagination={self.pagination!r})"


class Page(_BasePage[T]):
    """A page of results fetched with the sync client.

    Example:
        ```python
        page = client.payouts.list(limit=20)
        for payout in page:  # walks every following page
            print(payout.reference_id)
        ```
    """

    _client: "PayOS"

    def get_next_page(self) -> "Page[T]":
        options = self._next_options()
        return Page(self._client, options, self._client.request(options), self._parse_item)

    def get_previous_page(self) -> "Page[T]":
        options = self._previous_options()
        return Page(self._client, options, self._client.request(options), self._parse_item)

    def iter_pages(self) -> Iterator["Page[T]"]:
        """Iterate from this page to the last one."""
        page: Page[T] = self
        yield page
        while page.has_next_page():
            page = page.get_next_page()
            yield page

    def __iter__(self) -> Iterator[T]:
        for page in self.iter_pages():
            yield from page.data

    def to_list(self) -> List[T]:
        """Collect the items of this and all following pages."""
        return list(self)


class AsyncPage(_BasePage[T]):
    """A page of results fetched with the async client.

    Example:
        ```python
        page = await client.payouts.list(limit=20)
        async for payout in page:
            print(payout.reference_id)
        ```
    """

    _client: "AsyncPayOS"

    async def get_next_page(self) -> "AsyncPage[T]":
        options = self._next_options()
        return AsyncPage(self._client, options, await self._client.request(options), self._parse_item)

    async def get_previous_page(self) -> "AsyncPage[T]":
        options = self._previous_options()
        return AsyncPage(self._client, options, await self._client.request(options), self._parse_item)

    async def iter_pages(self) -> AsyncIterator["AsyncPage[T]"]:
        """Iterate from this page to the last one."""
        page: AsyncPage[T] = self
        yield page
        while page.has_next_page():
            page = await page.get_next_page()
            yield page

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.iter_pages():
            for item in page.data:
                yield item

    async def to_list(self) -> List[T]:
        """Collect the items of this and all following pages."""
        return [item async for item in self]


__all__ = [
    "Pagination",
    "Page",
    "AsyncPage",
    "extract_items",
]
