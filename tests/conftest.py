"""
Pytest configuration and fixtures for payOS SDK tests.
"""
from __future__ import annotations

import json
from typing import Any, Callable, List, Optional, Union

import httpx
import pytest

from payos_sdk import AsyncPayOS, PayOS
from payos_sdk.crypto import HmacCryptoProvider

CLIENT_ID = "test-client-id"
API_KEY = "test-api-key"
CHECKSUM_KEY = "test-checksum-key"
BASE_URL = "https://api.payos.test"

_crypto = HmacCryptoProvider()


def sign_body(data: dict) -> str:
    """Signature the server puts in the response envelope."""
    return _crypto.create_signature_from_obj(data, CHECKSUM_KEY)


def sign_header(data: dict) -> str:
    """Signature the server puts in the ``x-signature`` header."""
    return _crypto.create_signature(CHECKSUM_KEY, data)


def envelope(
    data: Any,
    *,
    status: int = 200,
    code: str = "00",
    desc: str = "success",
    signature: Optional[str] = None,
    headers: Optional[dict] = None,
) -> httpx.Response:
    body = {"code": code, "desc": desc, "data": data}
    if signature is not None:
        body["signature"] = signature
    return httpx.Response(status, json=body, headers=headers)


Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class MockServer:
    """Queue of canned replies served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._replies: List[Reply] = []

    def add(self, *replies: Reply) -> None:
        self._replies.extend(replies)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        return reply

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from PAYOS_* variables of the host."""
    for name in (
        "PAYOS_CLIENT_ID",
        "PAYOS_API_KEY",
        "PAYOS_CHECKSUM_KEY",
        "PAYOS_PARTNER_CODE",
        "PAYOS_BASE_URL",
        "PAYOS_TIMEOUT",
        "PAYOS_MAX_RETRIES",
        "PAYOS_LOG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials():
    return {
        "client_id": CLIENT_ID,
        "api_key": API_KEY,
        "checksum_key": CHECKSUM_KEY,
        "base_url": BASE_URL,
    }


@pytest.fixture
def server():
    return MockServer()


@pytest.fixture
def sleeps():
    """Backoff delays requested by the client, in seconds."""
    return []


@pytest.fixture
async def client(server, sleeps, credentials):
    """Async client wired to the mock server, with instant backoff."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(server.handler))
    payos = AsyncPayOS(http_client=http_client, **credentials)

    async def fake_sleep(seconds, signal):
        sleeps.append(seconds)

    payos._sleep = fake_sleep
    yield payos
    await http_client.aclose()


@pytest.fixture
def sync_client(server, sleeps, credentials):
    """Sync client wired to the mock server, with instant backoff."""
    http_client = httpx.Client(transport=httpx.MockTransport(server.handler))
    payos = PayOS(http_client=http_client, **credentials)

    def fake_sleep(seconds, signal):
        sleeps.append(seconds)

    payos._sleep = fake_sleep
    yield payos
    http_client.close()
