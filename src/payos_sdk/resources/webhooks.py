"""
Webhooks resource for payOS SDK.

``confirm`` registers the merchant's webhook URL with payOS; ``verify``
checks the signature of an incoming webhook payload locally.
"""
from __future__ import annotations

import hmac
from typing import TYPE_CHECKING, Any, Mapping, Union

from pydantic import ValidationError

from ..errors import PayOSError, WebhookError
from ..models.webhook import ConfirmWebhookResponse, Webhook, WebhookData
from .base import AsyncBaseResource, SyncBaseResource

if TYPE_CHECKING:
    from ..client import BaseClient


def verify_webhook(client: "BaseClient", payload: Union[Webhook, Mapping[str, Any]]) -> WebhookData:
    """Verify a webhook payload against the client's checksum key.

    Args:
        client: Client holding the checksum key and crypto provider
        payload: Parsed webhook body

    Returns:
        The verified webhook data

    Raises:
        WebhookError: If the payload is malformed, data or signature is missing,
            the signature does not match or the data lacks required fields
    """
    if isinstance(payload, Webhook):
        data, signature = payload.data, payload.signature
    elif isinstance(payload, Mapping):
        data, signature = payload.get("data"), payload.get("signature")
    else:
        raise WebhookError("Invalid webhook data")

    if not data or not isinstance(data, Mapping):
        raise WebhookError("Invalid webhook data")
    if not signature:
        raise WebhookError("Invalid signature")

    expected = client.crypto.create_signature_from_obj(data, client.checksum_key)
    if not expected or not hmac.compare_digest(expected.encode(), str(signature).encode()):
        raise WebhookError("Data not integrity")
    try:
        return WebhookData.model_validate(data)
    except ValidationError as exc:
        raise WebhookError(f"Invalid webhook data: {exc.error_count()} invalid field(s)") from exc


class AsyncWebhooksResource(AsyncBaseResource):
    """Async resource for webhooks.

    Example:
        ```python
        await client.webhooks.confirm("https://example.com/payos/webhook")

        # In the webhook handler
        data = client.webhooks.verify(await request.json())
        ```
    """

    async def confirm(self, webhook_url: str, **options: Any) -> ConfirmWebhookResponse:
        """Register and validate a webhook URL.

        Args:
            webhook_url: Publicly reachable URL that receives payment notifications

        Returns:
            The confirmed webhook registration

        Raises:
            WebhookError: If the URL is empty or payOS rejects it
        """
        if not webhook_url:
            raise WebhookError("Webhook URL invalid.")
        try:
            result = await self._post("/confirm-webhook", body={"webhookUrl": webhook_url}, overrides=options)
        except PayOSError as exc:
            raise WebhookError(f"Webhook validation failed: {exc.message}") from exc
        return ConfirmWebhookResponse.model_validate(result)

    def verify(self, payload: Union[Webhook, Mapping[str, Any]]) -> WebhookData:
        """Verify an incoming webhook payload. Does not perform I/O."""
        return verify_webhook(self._client, payload)


class WebhooksResource(SyncBaseResource):
    """Sync resource for webhooks."""

    def confirm(self, webhook_url: str, **options: Any) -> ConfirmWebhookResponse:
        """Register and validate a webhook URL."""
        if not webhook_url:
            raise WebhookError("Webhook URL invalid.")
        try:
            result = self._post("/confirm-webhook", body={"webhookUrl": webhook_url}, overrides=options)
        except PayOSError as exc:
            raise WebhookError(f"Webhook validation failed: {exc.message}") from exc
        return ConfirmWebhookResponse.model_validate(result)

    def verify(self, payload: Union[Webhook, Mapping[str, Any]]) -> WebhookData:
        """Verify an incoming webhook payload."""
        return verify_webhook(self._client, payload)
