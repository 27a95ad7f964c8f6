"""Client configuration loaded from arguments and ``PAYOS_*`` environment variables."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api-merchant.payos.vn"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_RETRIES = 2

_REQUIRED = {
    "client_id": "PAYOS_CLIENT_ID",
    "api_key": "PAYOS_API_KEY",
    "checksum_key": "PAYOS_CHECKSUM_KEY",
}


class PayOSSettings(BaseSettings):
    """payOS client settings.

    Every field can be provided through the environment with the ``PAYOS_``
    prefix, e.g. ``PAYOS_CLIENT_ID`` or ``PAYOS_BASE_URL``.
    """

    client_id: Optional[str] = None
    api_key: Optional[str] = None
    checksum_key: Optional[str] = None
    partner_code: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    log: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="PAYOS_",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def non_negative_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError("timeout must be non-negative")
        return v

    @field_validator("max_retries")
    @classmethod
    def non_negative_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retries must be non-negative")
        return v

    def require_credentials(self) -> "PayOSSettings":
        """Raise ``ConfigurationError`` if a credential is missing."""
        for field_name, env_name in _REQUIRED.items():
            if not getattr(self, field_name):
                raise ConfigurationError(
                    f"The {env_name} environment variable is missing or empty; either provide it, "
                    f"or instantiate the client with a {field_name} option."
                )
        return self


def load_settings(**overrides: Any) -> PayOSSettings:
    """Merge explicit options over environment values.

    ``None`` overrides are ignored so the environment still applies.

    Raises:
        ConfigurationError: If a value is invalid or a credential is missing
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = PayOSSettings(**explicit)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid payOS configuration: {exc}") from exc
    return settings.require_credentials()


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_MAX_RETRIES",
    "PayOSSettings",
    "load_settings",
]
