"""Signature provider backed by the standard library ``hmac`` module."""
from __future__ import annotations

import hashlib
import hmac
import uuid

from .provider import CryptoProvider


class HmacCryptoProvider(CryptoProvider):
    """Native provider using ``hmac``/``hashlib``."""

    name = "native"

    def hmac_hex(self, algorithm: str, key: str, message: str) -> str:
        digestmod = getattr(hashlib, self._check_algorithm(algorithm))
        return hmac.new(key.encode("utf-8"), message.encode("utf-8"), digestmod).hexdigest()

    def create_uuid4(self) -> str:
        return str(uuid.uuid4())
