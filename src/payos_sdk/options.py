"""Request descriptors shared by the clients and resources."""
from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

CancelSignal = Union[asyncio.Event, threading.Event]


class RequestSignatureMode(str, Enum):
    """How an outgoing request body is signed."""

    BODY = "body"
    HEADER = "header"
    CREATE_PAYMENT_LINK = "create-payment-link"


class ResponseSignatureMode(str, Enum):
    """Where the signature of a response payload is read from."""

    BODY = "body"
    HEADER = "header"


@dataclass(frozen=True)
class SignatureOptions:
    """Signing modes for a single call.

    Attributes:
        request: Signing mode applied to the request body
        response: Verification mode applied to the response data
    """

    request: Optional[Union[RequestSignatureMode, str]] = None
    response: Optional[Union[ResponseSignatureMode, str]] = None


@dataclass(frozen=True)
class RequestOptions:
    """A logical API call.

    Immutable; retries reuse the same descriptor.

    Attributes:
        method: HTTP method
        path: Endpoint path, e.g. ``/v2/payment-requests``
        query: Query parameters
        body: JSON-serializable body, or raw ``bytes``/``str`` content
        headers: Headers that override the client defaults
        signature: Request/response signing modes
        timeout: Per-request timeout in seconds
        max_retries: Per-request retry budget
        signal: Cancellation signal (``asyncio.Event`` for the async client,
            ``threading.Event`` for the sync client)
    """

    method: HTTPMethod = "GET"
    path: str = "/"
    query: Optional[Mapping[str, Any]] = None
    body: Any = None
    headers: Optional[Mapping[str, str]] = None
    signature: Optional[SignatureOptions] = None
    timeout: Optional[float] = None
    max_retries: Optional[int] = None
    signal: Optional[CancelSignal] = None


@dataclass(frozen=True)
class FileDownload:
    """A downloaded file.

    Attributes:
        content_type: Value of the ``content-type`` header
        data: Raw file bytes
        filename: Filename from ``content-disposition``, if any
        size: Value of ``content-length``, if any
    """

    content_type: str
    data: bytes
    filename: Optional[str] = None
    size: Optional[int] = None


__all__ = [
    "HTTPMethod",
    "CancelSignal",
    "RequestSignatureMode",
    "ResponseSignatureMode",
    "SignatureOptions",
    "RequestOptions",
    "FileDownload",
]
