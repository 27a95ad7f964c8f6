"""
Payment requests resource for payOS SDK.

This module provides both async and sync interfaces for payment link
operations.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from ..models.payment_request import CreatePaymentLinkRequest, CreatePaymentLinkResponse, PaymentLink
from ..options import RequestSignatureMode, ResponseSignatureMode, SignatureOptions
from .base import AsyncBaseResource, SyncBaseResource, as_body
from .invoices import AsyncInvoicesResource, InvoicesResource

if TYPE_CHECKING:
    from ..client import AsyncPayOS, PayOS

_CREATE_SIGNATURE = SignatureOptions(
    request=RequestSignatureMode.CREATE_PAYMENT_LINK,
    response=ResponseSignatureMode.BODY,
)
_VERIFY_BODY = SignatureOptions(response=ResponseSignatureMode.BODY)


def _cancel_body(cancellation_reason: Optional[str]) -> Optional[dict]:
    return {"cancellationReason": cancellation_reason} if cancellation_reason else None


class AsyncPaymentRequestsResource(AsyncBaseResource):
    """Async resource for payment links.

    Example:
        ```python
        async with AsyncPayOS() as client:
            link = await client.payment_requests.create(request)
            info = await client.payment_requests.get(link.order_code)
            await client.payment_requests.cancel(link.order_code, "Out of stock")
        ```
    """

    def __init__(self, client: "AsyncPayOS") -> None:
        super().__init__(client)
        self.invoices = AsyncInvoicesResource(client)

    async def create(
        self,
        data: Union[CreatePaymentLinkRequest, Mapping[str, Any]],
        **options: Any,
    ) -> CreatePaymentLinkResponse:
        """Create a payment link.

        The request is signed over ``amount``, ``cancelUrl``, ``description``,
        ``orderCode`` and ``returnUrl``; any signature in ``data`` is replaced.

        Args:
            data: Payment link request
            **options: Per-call ``timeout``, ``max_retries``, ``signal``, ``headers``

        Returns:
            The created payment link with checkout URL and QR code
        """
        result = await self._post(
            "/v2/payment-requests", body=as_body(data), signature=_CREATE_SIGNATURE, overrides=options
        )
        return CreatePaymentLinkResponse.model_validate(result)

    async def get(self, id: Union[str, int], **options: Any) -> PaymentLink:
        """Get a payment link.

        Args:
            id: Payment link ID or order code

        Returns:
            The payment link
        """
        result = await self._get(f"/v2/payment-requests/{id}", signature=_VERIFY_BODY, overrides=options)
        return PaymentLink.model_validate(result)

    async def cancel(
        self,
        id: Union[str, int],
        cancellation_reason: Optional[str] = None,
        **options: Any,
    ) -> PaymentLink:
        """Cancel a payment link.

        Args:
            id: Payment link ID or order code
            cancellation_reason: Optional reason shown to the buyer

        Returns:
            The cancelled payment link
        """
        result = await self._post(
            f"/v2/payment-requests/{id}/cancel",
            body=_cancel_body(cancellation_reason),
            signature=_VERIFY_BODY,
            overrides=options,
        )
        return PaymentLink.model_validate(result)


class PaymentRequestsResource(SyncBaseResource):
    """Sync resource for payment links."""

    def __init__(self, client: "PayOS") -> None:
        super().__init__(client)
        self.invoices = InvoicesResource(client)

    def create(
        self,
        data: Union[CreatePaymentLinkRequest, Mapping[str, Any]],
        **options: Any,
    ) -> CreatePaymentLinkResponse:
        """Create a payment link."""
        result = self._post(
            "/v2/payment-requests", body=as_body(data), signature=_CREATE_SIGNATURE, overrides=options
        )
        return CreatePaymentLinkResponse.model_validate(result)

    def get(self, id: Union[str, int], **options: Any) -> PaymentLink:
        """Get a payment link by ID or order code."""
        result = self._get(f"/v2/payment-requests/{id}", signature=_VERIFY_BODY, overrides=options)
        return PaymentLink.model_validate(result)

    def cancel(
        self,
        id: Union[str, int],
        cancellation_reason: Optional[str] = None,
        **options: Any,
    ) -> PaymentLink:
        """Cancel a payment link."""
        result = self._post(
            f"/v2/payment-requests/{id}/cancel",
            body=_cancel_body(cancellation_reason),
            signature=_VERIFY_BODY,
            overrides=options,
        )
        return PaymentLink.model_validate(result)
