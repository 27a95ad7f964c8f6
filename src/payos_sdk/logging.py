"""
Logging helpers for the payOS SDK.

The SDK logs through the standard ``logging`` module under the ``payos_sdk``
logger. Nothing is emitted unless the application configures handlers; the
level can be set with the ``log_level`` client option or ``PAYOS_LOG``.

Credentials never reach the logs: header values for ``x-client-id``,
``x-api-key`` and the usual authentication headers are masked.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, Mapping, Optional

SDK_LOGGER_NAME = "payos_sdk"

MASK_PATTERN = "***"

SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "x-client-id",
        "x-api-key",
    }
)

LOG_LEVELS: Dict[str, int] = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the SDK root logger."""
    if name == SDK_LOGGER_NAME or name.startswith(SDK_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{SDK_LOGGER_NAME}.{name}")


def parse_log_level(value: Optional[str], source: str) -> Optional[int]:
    """Translate a level name into a ``logging`` level.

    Unknown names are reported and ignored.
    """
    if not value:
        return None
    level = LOG_LEVELS.get(value.lower())
    if level is None:
        get_logger(SDK_LOGGER_NAME).warning(
            "%s was set to %r, expected one of %s", source, value, list(LOG_LEVELS)
        )
    return level


def configure_log_level(level: Optional[int]) -> None:
    """Apply ``level`` to the SDK root logger."""
    if level is not None:
        logging.getLogger(SDK_LOGGER_NAME).setLevel(level)


def mask_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Mask sensitive HTTP headers.

    Args:
        headers: HTTP headers

    Returns:
        Copy of the headers with credentials replaced by ``***``
    """
    if not headers:
        return {}
    return {
        key: MASK_PATTERN if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def new_log_id() -> str:
    """Local identifier used to correlate log lines of one attempt.

    Not an API request ID.
    """
    return "log_" + format(random.getrandbits(24), "06x")


def format_request_detail(**detail: Any) -> Dict[str, Any]:
    """Build a log-safe detail mapping, dropping empty entries."""
    if "headers" in detail:
        detail["headers"] = mask_headers(detail["headers"])
    return {key: value for key, value in detail.items() if value is not None}


__all__ = [
    "SDK_LOGGER_NAME",
    "LOG_LEVELS",
    "get_logger",
    "parse_log_level",
    "configure_log_level",
    "mask_headers",
    "new_log_id",
    "format_request_detail",
]
