"""Error taxonomy for the payOS SDK.

Every failure surfaced by the client is a ``PayOSError``. HTTP failures are
``APIError`` instances classified by status code through
``APIError.generate``; transport failures (connection refused, timeout,
caller cancellation) are ``APIError`` subclasses without status or headers.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

RETRYABLE_STATUS_CODES = frozenset({408, 429})


class PayOSError(Exception):
    """Base exception for the payOS SDK."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "")
        self.message = message or ""

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "type": type(self).__name__,
                "message": self.message,
            }
        }


class ConfigurationError(PayOSError):
    """Missing or invalid client configuration."""


class InvalidArgumentError(PayOSError, ValueError):
    """Invalid argument supplied to a client call."""


class InvalidSignatureError(PayOSError):
    """A request could not be signed or a response signature did not match."""


class WebhookError(PayOSError):
    """Malformed, forged or rejected webhook."""


class APIError(PayOSError):
    """Error from an API call.

    Attributes:
        status: HTTP status code, ``None`` for transport failures
        headers: Response headers, ``None`` for transport failures
        error: Parsed error payload, if any
        code: Application-level error code from the payload
        desc: Application-level error description from the payload
    """

    def __init__(
        self,
        status: Optional[int],
        error: Any,
        message: Optional[str],
        headers: Optional[Mapping[str, str]],
    ) -> None:
        super().__init__(self._make_message(status, error, message))
        self.status = status
        self.headers = headers
        self.error = error

        payload = error if isinstance(error, Mapping) else {}
        self.code: Optional[str] = payload.get("code")
        self.desc: Optional[str] = payload.get("desc")

    @property
    def status_code(self) -> Optional[int]:
        return self.status

    @property
    def retryable(self) -> bool:
        """Whether the failure is transient and may be retried."""
        if self.status is None:
            return False
        return self.status in RETRYABLE_STATUS_CODES or self.status >= 500

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["error"].update(
            {
                "status": self.status,
                "code": self.code,
                "desc": self.desc,
            }
        )
        return data

    @staticmethod
    def _make_message(status: Optional[int], error: Any, message: Optional[str]) -> str:
        if isinstance(error, Mapping) and not any(v is not None for v in error.values()):
            error = None

        msg: Optional[str]
        if isinstance(error, Mapping) and error.get("code") and error.get("desc"):
            msg = f"{error['desc']} (code: {error['code']})"
        elif isinstance(error, Mapping) and error.get("message"):
            raw = error["message"]
            msg = raw if isinstance(raw, str) else json.dumps(raw, default=str)
        elif error:
            msg = json.dumps(error, default=str)
        else:
            msg = message

        if status and msg:
            return f"HTTP {status}, {msg}"
        if status:
            return f"HTTP {status}"
        if msg:
            return msg
        return "No status code or body"

    @classmethod
    def generate(
        cls,
        status: Optional[int],
        payload: Any,
        message: Optional[str],
        headers: Optional[Mapping[str, str]],
    ) -> "APIError":
        """Classify an HTTP failure into the matching error type."""
        if not status or headers is None:
            return APIConnectionError(message)

        if isinstance(payload, Mapping):
            error = payload.get("error") or {
                "code": payload.get("code"),
                "desc": payload.get("desc"),
            }
        else:
            error = payload

        error_cls = _STATUS_ERRORS.get(status)
        if error_cls is None:
            error_cls = InternalServerError if status >= 500 else APIError
        return error_cls(status, error, message, headers)


class BadRequestError(APIError):
    """HTTP 400."""


class UnauthorizedError(APIError):
    """HTTP 401."""


class ForbiddenError(APIError):
    """HTTP 403."""


class NotFoundError(APIError):
    """HTTP 404."""


class RateLimitError(APIError):
    """HTTP 429."""


class InternalServerError(APIError):
    """HTTP 5xx."""


class APIConnectionError(APIError):
    """The request never produced an HTTP response."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(None, None, message or "Connection error.", None)

    @property
    def retryable(self) -> bool:
        return True


class ConnectionTimeoutError(APIConnectionError):
    """The request timed out."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "Request timed out.")


class UserAbortError(APIError):
    """The caller cancelled the request."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(None, None, message or "Request was aborted.", None)


_STATUS_ERRORS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
}


__all__ = [
    "PayOSError",
    "ConfigurationError",
    "InvalidArgumentError",
    "InvalidSignatureError",
    "WebhookError",
    "APIError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "InternalServerError",
    "APIConnectionError",
    "ConnectionTimeoutError",
    "UserAbortError",
]
