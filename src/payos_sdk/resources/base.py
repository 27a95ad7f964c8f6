"""
Base resource classes for the payOS SDK.

Resources translate typed method calls into request descriptors and hand
them to the client, supporting both the sync and the async client.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from ..options import FileDownload, HTTPMethod, RequestOptions, SignatureOptions

if TYPE_CHECKING:
    from ..client import AsyncPayOS, PayOS

# Per-call overrides accepted by every resource method.
CALL_OPTIONS = frozenset({"timeout", "max_retries", "signal", "headers"})


def build_options(
    method: HTTPMethod,
    path: str,
    *,
    query: Optional[Mapping[str, Any]] = None,
    body: Any = None,
    signature: Optional[SignatureOptions] = None,
    headers: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> RequestOptions:
    """Merge resource-defined request parts with caller overrides.

    Headers required by the endpoint win over caller headers; the signing
    modes are always the endpoint's.
    """
    overrides = dict(overrides or {})
    unknown = set(overrides) - CALL_OPTIONS
    if unknown:
        raise TypeError(f"Unexpected request options: {sorted(unknown)}")
    merged: Dict[str, str] = {**(overrides.pop("headers", None) or {}), **(headers or {})}
    return RequestOptions(
        method=method,
        path=path,
        query=query,
        body=body,
        headers=merged or None,
        signature=signature,
        **overrides,
    )


class AsyncBaseResource:
    """Base class for async API resources.

    Attributes:
        _client: The async client instance
    """

    def __init__(self, client: "AsyncPayOS") -> None:
        self._client = client

    async def _request(self, method: HTTPMethod, path: str, **kwargs: Any) -> Any:
        return await self._client.request(build_options(method, path, **kwargs))

    async def _get(self, path: str, **kwargs: Any) -> Any:
        return await self._request("GET", path, **kwargs)

    async def _post(self, path: str, **kwargs: Any) -> Any:
        return await self._request("POST", path, **kwargs)

    async def _download(self, path: str, **kwargs: Any) -> FileDownload:
        return await self._client.download_file(build_options("GET", path, **kwargs))


class SyncBaseResource:
    """Base class for sync API resources.

    Attributes:
        _client: The sync client instance
    """

    def __init__(self, client: "PayOS") -> None:
        self._client = client

    def _request(self, method: HTTPMethod, path: str, **kwargs: Any) -> Any:
        return self._client.request(build_options(method, path, **kwargs))

    def _get(self, path: str, **kwargs: Any) -> Any:
        return self._request("GET", path, **kwargs)

    def _post(self, path: str, **kwargs: Any) -> Any:
        return self._request("POST", path, **kwargs)

    def _download(self, path: str, **kwargs: Any) -> FileDownload:
        return self._client.download_file(build_options("GET", path, **kwargs))


def as_body(data: Any) -> Dict[str, Any]:
    """Wire dictionary of a request model or mapping."""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    return dict(data)


__all__ = [
    "AsyncBaseResource",
    "SyncBaseResource",
    "build_options",
    "as_body",
]
