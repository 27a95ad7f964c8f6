"""
Signature provider interface and canonicalization rules.

Two canonical forms coexist and must stay distinct:

- ``create_signature_from_obj`` sorts keys at every level, keeps array order
  and joins ``key=value`` pairs without encoding. Used for body-mode
  signatures and webhooks.
- ``create_signature`` deep-sorts keys (optionally array elements too),
  percent-encodes keys and values, and supports several digest algorithms.
  Used for header-mode signatures.

``create_signature_of_payment_request`` signs the fixed five-field string the
payment link endpoint expects and nothing else.

Values are rendered the way the server renders them: ``true``/``false`` for
booleans, integral floats without a fractional part, compact JSON for lists
and objects.

When array elements are sorted they are compared by code point of their
rendered form, not by locale collation, so the order does not depend on the
host locale. Mixed-case and non-ASCII strings therefore sort uppercase
before lowercase and by Unicode value.
"""
from __future__ import annotations

import functools
import json
import math
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional
from urllib.parse import quote

from ..errors import InvalidArgumentError

SUPPORTED_ALGORITHMS = ("sha256", "sha1", "sha512", "md5")

PAYMENT_REQUEST_FIELDS = ("amount", "cancelUrl", "description", "orderCode", "returnUrl")

# Characters left alone by encodeURIComponent.
_URI_SAFE = "-_.!~*'()"


def _normalize(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def to_json(value: Any) -> str:
    """Compact JSON rendering, key order preserved."""
    return json.dumps(_normalize(value), separators=(",", ":"), ensure_ascii=False, default=str)


def render_value(value: Any) -> str:
    """Render a scalar the way it appears in a canonical string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        value = _normalize(value)
        return repr(value) if isinstance(value, float) else str(value)
    if isinstance(value, (Mapping, list, tuple)):
        return to_json(value)
    return str(value)


def sort_obj_by_key(obj: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``obj`` with top-level keys in ascending order."""
    return {key: obj[key] for key in sorted(obj)}


def _is_composite(value: Any) -> bool:
    return value is None or isinstance(value, (Mapping, list, tuple))


def _compare_items(a: Any, b: Any) -> int:
    if not _is_composite(a) and not _is_composite(b):
        left, right = render_value(a), render_value(b)
    else:
        left, right = to_json(a), to_json(b)
    return (left > right) - (left < right)


def _deep_sort_value(value: Any, sort_arrays: bool) -> Any:
    if isinstance(value, Mapping):
        return deep_sort_obj(value, sort_arrays)
    if isinstance(value, (list, tuple)):
        items = [_deep_sort_value(item, sort_arrays) for item in value]
        if sort_arrays:
            items.sort(key=functools.cmp_to_key(_compare_items))
        return items
    return value


def deep_sort_obj(obj: Mapping[str, Any], sort_arrays: bool = False) -> dict[str, Any]:
    """Sort keys at every nesting level.

    Args:
        obj: Object to sort
        sort_arrays: Also sort array elements (primitives by their string
            form, objects by their JSON form); otherwise array order is kept
            and only objects inside arrays are sorted

    Returns:
        A new, sorted dictionary
    """
    return {key: _deep_sort_value(obj[key], sort_arrays) for key in sorted(obj)}


def object_to_query_string(obj: Mapping[str, Any]) -> str:
    """Canonical string for ``create_signature_from_obj``."""
    parts = []
    for key, value in sort_obj_by_key(obj).items():
        if isinstance(value, (Mapping, list, tuple)):
            value = to_json(_deep_sort_value(value, False))
        elif value is None or value in ("undefined", "null"):
            value = ""
        else:
            value = render_value(value)
        parts.append(f"{key}={value}")
    return "&".join(parts)


def payment_request_string(data: Mapping[str, Any]) -> str:
    """Canonical string for ``create_signature_of_payment_request``."""

    def field(name: str) -> str:
        if name not in data:
            return "undefined"
        value = data[name]
        return "null" if value is None else render_value(value)

    return "&".join(f"{name}={field(name)}" for name in PAYMENT_REQUEST_FIELDS)


def signature_query_string(data: Mapping[str, Any], encode_uri: bool, sort_arrays: bool) -> str:
    """Canonical string for ``create_signature``."""
    parts = []
    for key, value in deep_sort_obj(data, sort_arrays).items():
        rendered = to_json(value) if isinstance(value, (Mapping, list)) else render_value(value)
        if encode_uri:
            parts.append(f"{quote(key, safe=_URI_SAFE)}={quote(rendered, safe=_URI_SAFE)}")
        else:
            parts.append(f"{key}={rendered}")
    return "&".join(parts)


class CryptoProvider(ABC):
    """HMAC signing primitives used by the client.

    Subclasses only supply the raw HMAC and UUID primitives; canonicalization
    is shared so every provider produces identical digests.
    """

    name: str = "abstract"

    @abstractmethod
    def hmac_hex(self, algorithm: str, key: str, message: str) -> str:
        """Return the lowercase hex HMAC of ``message`` under ``key``."""

    @abstractmethod
    def create_uuid4(self) -> str:
        """Generate a random UUID4 string."""

    @staticmethod
    def _check_algorithm(algorithm: str) -> str:
        normalized = algorithm.lower().replace("-", "")
        if normalized not in SUPPORTED_ALGORITHMS:
            raise InvalidArgumentError(
                f"Unsupported signature algorithm {algorithm!r}, "
                f"expected one of {list(SUPPORTED_ALGORITHMS)}"
            )
        return normalized

    def create_signature_from_obj(self, data: Optional[Mapping[str, Any]], key: str) -> Optional[str]:
        """Sign an object with keys sorted at every level (SHA-256).

        Returns ``None`` when ``data`` is missing or ``key`` is empty.
        """
        if data is None or not key:
            return None
        return self.hmac_hex("sha256", key, object_to_query_string(data))

    def create_signature_of_payment_request(
        self,
        data: Optional[Mapping[str, Any]],
        key: str,
    ) -> Optional[str]:
        """Sign the ``amount``, ``cancelUrl``, ``description``, ``orderCode``
        and ``returnUrl`` fields of a payment link request (SHA-256).

        Returns ``None`` when ``data`` is missing or ``key`` is empty.
        """
        if data is None or not key:
            return None
        return self.hmac_hex("sha256", key, payment_request_string(data))

    def create_signature(
        self,
        key: str,
        data: Mapping[str, Any],
        *,
        encode_uri: bool = True,
        sort_arrays: bool = False,
        algorithm: str = "sha256",
    ) -> str:
        """Sign deep-sorted data in query string form."""
        algorithm = self._check_algorithm(algorithm)
        message = signature_query_string(data, encode_uri=encode_uri, sort_arrays=sort_arrays)
        return self.hmac_hex(algorithm, key, message)


__all__ = [
    "CryptoProvider",
    "SUPPORTED_ALGORITHMS",
    "PAYMENT_REQUEST_FIELDS",
    "deep_sort_obj",
    "sort_obj_by_key",
    "object_to_query_string",
    "payment_request_string",
    "signature_query_string",
    "render_value",
    "to_json",
]
