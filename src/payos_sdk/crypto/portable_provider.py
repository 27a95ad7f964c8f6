"""Signature provider backed by the ``cryptography`` package.

Produces the same digests as :class:`HmacCryptoProvider`; use it where the
OpenSSL-backed primitives of ``cryptography`` are preferred or mandated.
"""
from __future__ import annotations

import secrets
import uuid

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from .provider import CryptoProvider

_HASHES = {
    "sha256": hashes.SHA256,
    "sha1": hashes.SHA1,
    "sha512": hashes.SHA512,
    "md5": hashes.MD5,
}


class PortableCryptoProvider(CryptoProvider):
    """Portable provider using ``cryptography.hazmat`` HMAC."""

    name = "portable"

    def hmac_hex(self, algorithm: str, key: str, message: str) -> str:
        algorithm_cls = _HASHES[self._check_algorithm(algorithm)]
        signer = crypto_hmac.HMAC(key.encode("utf-8"), algorithm_cls())
        signer.update(message.encode("utf-8"))
        return signer.finalize().hex()

    def create_uuid4(self) -> str:
        return str(uuid.UUID(bytes=secrets.token_bytes(16), version=4))
