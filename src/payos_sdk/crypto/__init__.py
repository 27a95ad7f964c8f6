"""Signature providers for request signing and response verification."""
from __future__ import annotations

from typing import Literal, Optional

from ..errors import InvalidArgumentError
from .hmac_provider import HmacCryptoProvider
from .portable_provider import PortableCryptoProvider
from .provider import CryptoProvider

ProviderName = Literal["native", "portable"]


def create_crypto_provider(provider: Optional[ProviderName] = None) -> CryptoProvider:
    """Create a signature provider.

    Args:
        provider: ``"native"`` (``hmac``/``hashlib``, the default) or
            ``"portable"`` (``cryptography``)

    Returns:
        CryptoProvider instance
    """
    if provider is None or provider == "native":
        return HmacCryptoProvider()
    if provider == "portable":
        return PortableCryptoProvider()
    raise InvalidArgumentError(f"Unknown crypto provider {provider!r}")


__all__ = [
    "CryptoProvider",
    "HmacCryptoProvider",
    "PortableCryptoProvider",
    "create_crypto_provider",
]
