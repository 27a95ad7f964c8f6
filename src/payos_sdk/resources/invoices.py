"""
Invoices resource for payOS SDK.

Invoices belong to a payment link and are reached through
``client.payment_requests.invoices``.
"""
from __future__ import annotations

from typing import Any, Union

from ..models.invoice import InvoicesInfo
from ..options import FileDownload, ResponseSignatureMode, SignatureOptions
from .base import AsyncBaseResource, SyncBaseResource

_VERIFY_BODY = SignatureOptions(response=ResponseSignatureMode.BODY)


class AsyncInvoicesResource(AsyncBaseResource):
    """Async resource for payment link invoices."""

    async def get(self, id: Union[str, int], **options: Any) -> InvoicesInfo:
        """Get the invoices of a payment link.

        Args:
            id: Payment link ID or order code
            **options: Per-call ``timeout``, ``max_retries``, ``signal``, ``headers``

        Returns:
            The invoices
        """
        data = await self._get(
            f"/v2/payment-requests/{id}/invoices", signature=_VERIFY_BODY, overrides=options
        )
        return InvoicesInfo.model_validate(data)

    async def download(self, invoice_id: str, id: Union[str, int], **options: Any) -> FileDownload:
        """Download an invoice file.

        Args:
            invoice_id: Invoice ID
            id: Payment link ID or order code
            **options: Per-call ``timeout``, ``max_retries``, ``signal``, ``headers``

        Returns:
            The file content and metadata
        """
        return await self._download(
            f"/v2/payment-requests/{id}/invoices/{invoice_id}/download", overrides=options
        )


class InvoicesResource(SyncBaseResource):
    """Sync resource for payment link invoices."""

    def get(self, id: Union[str, int], **options: Any) -> InvoicesInfo:
        """Get the invoices of a payment link."""
        data = self._get(
            f"/v2/payment-requests/{id}/invoices", signature=_VERIFY_BODY, overrides=options
        )
        return InvoicesInfo.model_validate(data)

    def download(self, invoice_id: str, id: Union[str, int], **options: Any) -> FileDownload:
        """Download an invoice file."""
        return self._download(
            f"/v2/payment-requests/{id}/invoices/{invoice_id}/download", overrides=options
        )
