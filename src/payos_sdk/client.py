"""
payOS Python SDK client.

Example usage:
    ```python
    from payos_sdk import AsyncPayOS, CreatePaymentLinkRequest

    async with AsyncPayOS(
        client_id="your-client-id",
        api_key="your-api-key",
        checksum_key="your-checksum-key",
    ) as client:
        link = await client.payment_requests.create(
            CreatePaymentLinkRequest(
                order_code=123,
                amount=2000,
                description="Order 123",
                cancel_url="https://example.com/cancel",
                return_url="https://example.com/return",
            )
        )
        print(link.checkout_url)
    ```

Each call goes through the same pipeline: sign the request body if the
endpoint requires it, send it, classify the outcome, retry transient
failures with backoff, then verify the response signature before handing
back the ``data`` payload of the response envelope.
"""
from __future__ import annotations

import asyncio
import hmac
import json
import logging
import math
import re
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import urlencode

import httpx

from ._version import __version__
from .config import load_settings
from .crypto import CryptoProvider, create_crypto_provider
from .crypto.provider import render_value
from .errors import (
    APIConnectionError,
    APIError,
    ConnectionTimeoutError,
    InvalidArgumentError,
    InvalidSignatureError,
    UserAbortError,
)
from .logging import (
    configure_log_level,
    format_request_detail,
    get_logger,
    new_log_id,
    parse_log_level,
)
from .options import (
    CancelSignal,
    FileDownload,
    RequestOptions,
    RequestSignatureMode,
    ResponseSignatureMode,
)
from .resources.payment_requests import AsyncPaymentRequestsResource, PaymentRequestsResource
from .resources.payouts import AsyncPayoutsResource, PayoutsResource
from .resources.payouts_account import AsyncPayoutsAccountResource, PayoutsAccountResource
from .resources.webhooks import AsyncWebhooksResource, WebhooksResource
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, should_retry_status

logger = get_logger(__name__)

SUCCESS_CODE = "00"

_FILENAME_RE = re.compile(r"""filename[^;=\n]*=((['"]).*?\2|[^;\n]*)""")

R = TypeVar("R")


def validate_timeout(timeout: Any) -> float:
    """Timeouts must be non-negative numbers of seconds."""
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or math.isnan(timeout):
        raise InvalidArgumentError(f"timeout must be a number of seconds, got {timeout!r}")
    if timeout < 0:
        raise InvalidArgumentError(f"timeout must be non-negative, got {timeout!r}")
    return float(timeout)


class BaseClient:
    """Configuration, request building and response handling shared by the
    sync and async clients.

    Args:
        client_id: Client ID (default: ``PAYOS_CLIENT_ID``)
        api_key: API key (default: ``PAYOS_API_KEY``)
        checksum_key: Checksum key used for signatures (default: ``PAYOS_CHECKSUM_KEY``)
        partner_code: Optional partner code (default: ``PAYOS_PARTNER_CODE``)
        base_url: API base URL (default: ``PAYOS_BASE_URL`` or the production host)
        timeout: Request timeout in seconds (default: 60)
        max_retries: Maximum number of retries for transient failures (default: 2)
        log_level: ``off``, ``error``, ``warn``, ``info`` or ``debug``
            (default: ``PAYOS_LOG``)
        crypto_provider: ``"native"``, ``"portable"`` or a ``CryptoProvider``
        retry_policy: Backoff configuration
    """

    _signal_type: Type[Any] = object

    def __init__(
        self,
        *,
        client_id: Optional[str] = None,
        api_key: Optional[str] = None,
        checksum_key: Optional[str] = None,
        partner_code: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        log_level: Optional[str] = None,
        crypto_provider: Union[str, CryptoProvider, None] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        if timeout is not None:
            validate_timeout(timeout)
        settings = load_settings(
            client_id=client_id,
            api_key=api_key,
            checksum_key=checksum_key,
            partner_code=partner_code,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            log=log_level,
        )
        self.client_id: str = settings.client_id  # type: ignore[assignment]
        self.api_key: str = settings.api_key  # type: ignore[assignment]
        self.checksum_key: str = settings.checksum_key  # type: ignore[assignment]
        self.partner_code = settings.partner_code
        self._base_url = settings.base_url
        self.timeout = settings.timeout
        self.max_retries = settings.max_retries
        self._retry_policy = retry_policy or DEFAULT_RETRY_POLICY

        if isinstance(crypto_provider, CryptoProvider):
            self.crypto = crypto_provider
        else:
            self.crypto = create_crypto_provider(crypto_provider)  # type: ignore[arg-type]

        configure_log_level(parse_log_level(settings.log, "log_level / PAYOS_LOG"))

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        return f"PayOS/Python {__version__}"

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def _build_headers(self, extra: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        headers = httpx.Headers(
            {
                "x-client-id": self.client_id,
                "x-api-key": self.api_key,
                "Content-Type": "application/json",
                "User-Agent": self.user_agent,
            }
        )
        if self.partner_code:
            headers["x-partner-code"] = self.partner_code
        for key, value in (extra or {}).items():
            headers[key] = value
        return headers

    def _build_url(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        url = f"{self._base_url}/{path.lstrip('/')}"
        if query:
            # Lists and objects are sent as JSON, None as an empty value.
            qs = urlencode([(key, render_value(value)) for key, value in query.items()])
            if qs:
                url = f"{url}?{qs}"
        return url

    @staticmethod
    def _serialize_body(body: Any) -> Optional[Union[bytes, str]]:
        if body is None or isinstance(body, (bytes, bytearray, str)):
            return body
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False, default=str).encode("utf-8")

    def _sign_request(self, options: RequestOptions) -> Tuple[Any, Dict[str, str]]:
        body = options.body
        headers = dict(options.headers or {})
        mode = options.signature.request if options.signature else None
        if mode is None or body is None:
            return body, headers

        try:
            mode = RequestSignatureMode(mode)
        except ValueError:
            raise InvalidSignatureError("Invalid signature request type") from None
        if not isinstance(body, Mapping):
            raise InvalidSignatureError("Only object bodies can be signed")

        if mode is RequestSignatureMode.CREATE_PAYMENT_LINK:
            signature = self.crypto.create_signature_of_payment_request(body, self.checksum_key)
            if not signature:
                raise InvalidSignatureError("Failed to create payment signature")
            body = {**body, "signature": signature}
        elif mode is RequestSignatureMode.BODY:
            signature = self.crypto.create_signature_from_obj(body, self.checksum_key)
            if not signature:
                raise InvalidSignatureError("Failed to create body signature")
            body = {**body, "signature": signature}
        elif mode is RequestSignatureMode.HEADER:
            headers["x-signature"] = self.crypto.create_signature(self.checksum_key, body)
        return body, headers

    def _prepare(self, options: RequestOptions) -> Tuple[int, float]:
        """Validate a descriptor and resolve its retry budget and timeout."""
        if options.timeout is not None:
            validate_timeout(options.timeout)
        if options.max_retries is not None and (
            isinstance(options.max_retries, bool)
            or not isinstance(options.max_retries, int)
            or options.max_retries < 0
        ):
            raise InvalidArgumentError(
                f"max_retries must be a non-negative integer, got {options.max_retries!r}"
            )
        if options.signal is not None and not isinstance(options.signal, self._signal_type):
            raise InvalidArgumentError(
                f"{type(self).__name__} expects a {self._signal_type.__module__}."
                f"{self._signal_type.__name__} as cancellation signal"
            )
        retries = self.max_retries if options.max_retries is None else options.max_retries
        timeout = self.timeout if options.timeout is None else float(options.timeout)
        return retries, timeout

    def _build_request(
        self,
        http_client: Union[httpx.Client, httpx.AsyncClient],
        options: RequestOptions,
        timeout: float,
        sign: bool = True,
    ) -> httpx.Request:
        if sign:
            body, extra_headers = self._sign_request(options)
        else:
            body, extra_headers = options.body, dict(options.headers or {})
        return http_client.build_request(
            options.method,
            self._build_url(options.path, options.query),
            headers=self._build_headers(extra_headers),
            content=self._serialize_body(body),
            timeout=timeout,
        )

    def _retry_delay(
        self,
        options: RequestOptions,
        retries_remaining: int,
        headers: Optional[Mapping[str, str]] = None,
    ) -> float:
        budget = self.max_retries if options.max_retries is None else options.max_retries
        return self._retry_policy.retry_delay(budget - retries_remaining, headers)

    # ------------------------------------------------------------------
    # Response handling
    # ------------------------------------------------------------------

    @staticmethod
    def _make_status_error(response: httpx.Response) -> APIError:
        text = response.text
        try:
            payload = json.loads(text)
        except ValueError:
            payload = None
        message = None if payload is not None else text
        return APIError.generate(response.status_code, payload, message, response.headers)

    def _process_response(self, options: RequestOptions, response: httpx.Response) -> Any:
        try:
            envelope = response.json()
        except ValueError:
            envelope = None
        if not isinstance(envelope, Mapping):
            raise APIError.generate(
                response.status_code, None, "Invalid response envelope", response.headers
            )

        data = envelope.get("data")
        code = envelope.get("code")
        desc = envelope.get("desc")
        signature = envelope.get("signature")

        # HTTP success can still carry an application-level failure.
        if code != SUCCESS_CODE or data is None:
            raise APIError.generate(
                response.status_code,
                {"code": code, "desc": desc, "data": data, "signature": signature},
                desc,
                response.headers,
            )

        self._verify_response(options, data, signature, response.headers)
        return data

    def _verify_response(
        self,
        options: RequestOptions,
        data: Any,
        envelope_signature: Optional[str],
        headers: Mapping[str, str],
    ) -> None:
        mode = options.signature.response if options.signature else None
        if mode is None:
            return
        try:
            mode = ResponseSignatureMode(mode)
        except ValueError:
            raise InvalidSignatureError("Invalid signature response type") from None

        if mode is ResponseSignatureMode.BODY:
            received = envelope_signature
        else:
            received = headers.get("x-signature")
        if not received:
            return
        if not isinstance(data, Mapping):
            raise InvalidSignatureError("Data integrity check failed")

        if mode is ResponseSignatureMode.BODY:
            expected = self.crypto.create_signature_from_obj(data, self.checksum_key)
        else:
            expected = self.crypto.create_signature(self.checksum_key, data)

        if not expected or not hmac.compare_digest(expected.encode(), str(received).encode()):
            raise InvalidSignatureError("Data integrity check failed")

    def _process_download(self, options: RequestOptions, response: httpx.Response) -> FileDownload:
        content_type = response.headers.get("content-type")
        if content_type and "application/json" in content_type:
            try:
                envelope = response.json()
            except ValueError:
                envelope = None
            if not isinstance(envelope, Mapping):
                envelope = {}
            desc = envelope.get("desc")
            raise APIError.generate(
                response.status_code,
                {"code": envelope.get("code"), "desc": desc},
                desc,
                response.headers,
            )

        filename: Optional[str] = None
        disposition = response.headers.get("content-disposition")
        if disposition:
            match = _FILENAME_RE.search(disposition)
            if match:
                filename = re.sub(r"['\"]", "", match.group(1))

        content_length = response.headers.get("content-length")
        return FileDownload(
            content_type=content_type or "application/octet-stream",
            data=response.content,
            filename=filename,
            size=int(content_length) if content_length and content_length.isdigit() else None,
        )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @staticmethod
    def _log_request(log_id: str, request: httpx.Request, retry_of: Optional[str]) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[%s] sending request %s",
                log_id,
                format_request_detail(
                    url=str(request.url),
                    method=request.method,
                    headers=dict(request.headers),
                    retry_of=retry_of,
                ),
            )

    @staticmethod
    def _retry_after_connection_error(
        exc: APIConnectionError,
        log_id: str,
        retry_of: Optional[str],
        retries_remaining: int,
        started: float,
    ) -> bool:
        kind = "timeout" if isinstance(exc, ConnectionTimeoutError) else "failed"
        detail = format_request_detail(
            message=str(exc.__cause__ or exc),
            duration_ms=int((time.monotonic() - started) * 1000),
            retry_of=retry_of,
        )
        if retries_remaining > 0:
            logger.info(
                "[%s] connection %s - retrying, %d attempts remaining", log_id, kind, retries_remaining
            )
            logger.debug("[%s] connection %s %s", log_id, kind, detail)
            return True
        logger.info("[%s] connection %s - error; no more retries left", log_id, kind)
        logger.debug("[%s] connection %s %s", log_id, kind, detail)
        return False

    @staticmethod
    def _retry_after_response(
        response: httpx.Response,
        log_id: str,
        retry_of: Optional[str],
        retries_remaining: int,
        started: float,
    ) -> bool:
        request = response.request
        retry_str = f", retry of: {retry_of}" if retry_of else ""
        info = (
            f"[{log_id}{retry_str}] {request.method} {request.url} failed with status "
            f"{response.status_code} in {int((time.monotonic() - started) * 1000)}ms"
        )
        retryable = should_retry_status(response.status_code)
        if retryable and retries_remaining > 0:
            logger.info("%s - retrying, %d attempts remaining", info, retries_remaining)
            logger.debug(
                "[%s] response error %s",
                log_id,
                format_request_detail(status=response.status_code, headers=dict(response.headers)),
            )
            return True
        logger.info("%s - %s", info, "error; no more retries left" if retryable else "error; cannot retry")
        return False

    @staticmethod
    def _log_success(log_id: str, retry_of: Optional[str], response: httpx.Response, started: float) -> None:
        retry_str = f", retry of: {retry_of}" if retry_of else ""
        logger.info(
            "[%s%s] %s %s succeeded with status %d in %dms",
            log_id,
            retry_str,
            response.request.method,
            response.request.url,
            response.status_code,
            int((time.monotonic() - started) * 1000),
        )


class AsyncPayOS(BaseClient):
    """Async payOS API client.

    Provides access to all payOS API resources:
    - payment_requests: Create, retrieve and cancel payment links; invoices
    - payouts: Create, retrieve, list and estimate payouts; batch payouts
    - payouts_account: Payout account balance
    - webhooks: Confirm webhook URLs and verify webhook payloads

    Accepts the arguments of :class:`BaseClient`, plus ``http_client`` to
    supply a preconfigured ``httpx.AsyncClient``. Cancellation signals are
    ``asyncio.Event`` instances.
    """

    _signal_type = asyncio.Event

    def __init__(self, *, http_client: Optional[httpx.AsyncClient] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client = http_client
        self._owns_client = http_client is None

        self.payment_requests = AsyncPaymentRequestsResource(self)
        self.payouts = AsyncPayoutsResource(self)
        self.payouts_account = AsyncPayoutsAccountResource(self)
        self.webhooks = AsyncWebhooksResource(self)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def request(self, options: RequestOptions) -> Any:
        """Execute a call and return the ``data`` of the response envelope."""
        return await self._execute(options, self._process_response)

    async def download_file(self, options: RequestOptions) -> FileDownload:
        """Execute a call whose successful response is a file."""
        return await self._execute(options, self._process_download, sign=False)

    async def get(self, path: str, **options: Any) -> Any:
        return await self.request(RequestOptions(method="GET", path=path, **options))

    async def post(self, path: str, **options: Any) -> Any:
        return await self.request(RequestOptions(method="POST", path=path, **options))

    async def put(self, path: str, **options: Any) -> Any:
        return await self.request(RequestOptions(method="PUT", path=path, **options))

    async def patch(self, path: str, **options: Any) -> Any:
        return await self.request(RequestOptions(method="PATCH", path=path, **options))

    async def delete(self, path: str, **options: Any) -> Any:
        return await self.request(RequestOptions(method="DELETE", path=path, **options))

    async def _execute(
        self,
        options: RequestOptions,
        handler: Callable[[RequestOptions, httpx.Response], R],
        sign: bool = True,
    ) -> R:
        retries_remaining, timeout = self._prepare(options)
        retry_of: Optional[str] = None

        while True:
            request = self._build_request(self._get_client(), options, timeout, sign=sign)
            log_id = new_log_id()
            self._log_request(log_id, request, retry_of)
            started = time.monotonic()

            try:
                response = await self._send(request, timeout, options.signal)
            except UserAbortError:
                raise
            except APIConnectionError as exc:
                if not self._retry_after_connection_error(exc, log_id, retry_of, retries_remaining, started):
                    raise
                await self._sleep(self._retry_delay(options, retries_remaining), options.signal)
            else:
                if response.is_success:
                    self._log_success(log_id, retry_of, response, started)
                    return handler(options, response)
                if not self._retry_after_response(response, log_id, retry_of, retries_remaining, started):
                    raise self._make_status_error(response)
                await self._sleep(
                    self._retry_delay(options, retries_remaining, response.headers), options.signal
                )

            retries_remaining -= 1
            retry_of = retry_of or log_id

    async def _send(
        self,
        request: httpx.Request,
        timeout: float,
        signal: Optional[CancelSignal],
    ) -> httpx.Response:
        """Send one attempt, racing it against the timeout and the caller's signal."""
        if signal is not None and signal.is_set():
            raise UserAbortError()

        send_task = asyncio.ensure_future(self._get_client().send(request))
        waiters = {send_task}
        if signal is not None:
            waiters.add(asyncio.ensure_future(signal.wait()))  # type: ignore[arg-type]
        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [task for task in waiters if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        if send_task in done and send_task.exception() is None:
            return send_task.result()
        if signal is not None and signal.is_set():
            raise UserAbortError()
        if send_task not in done:
            raise ConnectionTimeoutError()

        exc = send_task.exception()
        if isinstance(exc, httpx.TimeoutException):
            raise ConnectionTimeoutError() from exc
        if isinstance(exc, httpx.RequestError):
            raise APIConnectionError() from exc
        raise exc  # type: ignore[misc]

    async def _sleep(self, seconds: float, signal: Optional[CancelSignal]) -> None:
        """Backoff delay; a fired signal interrupts it with ``UserAbortError``."""
        if signal is None:
            await asyncio.sleep(seconds)
            return
        try:
            await asyncio.wait_for(signal.wait(), timeout=seconds)  # type: ignore[arg-type]
        except asyncio.TimeoutError:
            return
        raise UserAbortError()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncPayOS":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class PayOS(BaseClient):
    """Synchronous payOS API client.

    Same surface as :class:`AsyncPayOS` with blocking calls. Cancellation
    signals are ``threading.Event`` instances; a signal is honoured before
    each attempt, during backoff and when an attempt fails, but cannot
    interrupt a blocking read.

    The timeout bounds each phase of an attempt inside httpx (connect, read,
    write, pool) and the attempt as a whole: a response that arrives after
    the deadline is discarded with ``ConnectionTimeoutError``.
    """

    _signal_type = threading.Event

    def __init__(self, *, http_client: Optional[httpx.Client] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client = http_client
        self._owns_client = http_client is None

        self.payment_requests = PaymentRequestsResource(self)
        self.payouts = PayoutsResource(self)
        self.payouts_account = PayoutsAccountResource(self)
        self.webhooks = WebhooksResource(self)

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def request(self, options: RequestOptions) -> Any:
        """Execute a call and return the ``data`` of the response envelope."""
        return self._execute(options, self._process_response)

    def download_file(self, options: RequestOptions) -> FileDownload:
        """Execute a call whose successful response is a file."""
        return self._execute(options, self._process_download, sign=False)

    def get(self, path: str, **options: Any) -> Any:
        return self.request(RequestOptions(method="GET", path=path, **options))

    def post(self, path: str, **options: Any) -> Any:
        return self.request(RequestOptions(method="POST", path=path, **options))

    def put(self, path: str, **options: Any) -> Any:
        return self.request(RequestOptions(method="PUT", path=path, **options))

    def patch(self, path: str, **options: Any) -> Any:
        return self.request(RequestOptions(method="PATCH", path=path, **options))

    def delete(self, path: str, **options: Any) -> Any:
        return self.request(RequestOptions(method="DELETE", path=path, **options))

    def _execute(
        self,
        options: RequestOptions,
        handler: Callable[[RequestOptions, httpx.Response], R],
        sign: bool = True,
    ) -> R:
        retries_remaining, timeout = self._prepare(options)
        retry_of: Optional[str] = None

        while True:
            request = self._build_request(self._get_client(), options, timeout, sign=sign)
            log_id = new_log_id()
            self._log_request(log_id, request, retry_of)
            started = time.monotonic()

            try:
                response = self._send(request, timeout, options.signal)
            except UserAbortError:
                raise
            except APIConnectionError as exc:
                if not self._retry_after_connection_error(exc, log_id, retry_of, retries_remaining, started):
                    raise
                self._sleep(self._retry_delay(options, retries_remaining), options.signal)
            else:
                if response.is_success:
                    self._log_success(log_id, retry_of, response, started)
                    return handler(options, response)
                if not self._retry_after_response(response, log_id, retry_of, retries_remaining, started):
                    raise self._make_status_error(response)
                self._sleep(self._retry_delay(options, retries_remaining, response.headers), options.signal)

            retries_remaining -= 1
            retry_of = retry_of or log_id

    def _send(
        self,
        request: httpx.Request,
        timeout: float,
        signal: Optional[CancelSignal],
    ) -> httpx.Response:
        """Send one attempt; an attempt that outlives ``timeout`` as a whole times out."""
        if signal is not None and signal.is_set():
            raise UserAbortError()
        started = time.monotonic()
        try:
            response = self._get_client().send(request)
        except httpx.TimeoutException as exc:
            if signal is not None and signal.is_set():
                raise UserAbortError() from exc
            raise ConnectionTimeoutError() from exc
        except httpx.RequestError as exc:
            if signal is not None and signal.is_set():
                raise UserAbortError() from exc
            raise APIConnectionError() from exc

        if time.monotonic() - started > timeout:
            response.close()
            if signal is not None and signal.is_set():
                raise UserAbortError()
            raise ConnectionTimeoutError()
        return response

    def _sleep(self, seconds: float, signal: Optional[CancelSignal]) -> None:
        """Backoff delay; a fired signal interrupts it with ``UserAbortError``."""
        if signal is None:
            time.sleep(seconds)
            return
        if signal.wait(seconds):  # type: ignore[union-attr]
            raise UserAbortError()

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> "PayOS":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "BaseClient",
    "AsyncPayOS",
    "PayOS",
    "SUCCESS_CODE",
    "validate_timeout",
]
