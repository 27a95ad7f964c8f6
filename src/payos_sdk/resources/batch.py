"""Batch payouts resource for payOS SDK."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..models.payout import Payout, PayoutBatchRequest
from ..options import RequestSignatureMode, ResponseSignatureMode, SignatureOptions
from .base import AsyncBaseResource, SyncBaseResource, as_body

_SIGN_HEADER = SignatureOptions(
    request=RequestSignatureMode.HEADER,
    response=ResponseSignatureMode.HEADER,
)


class AsyncBatchResource(AsyncBaseResource):
    """Async resource for batch payouts."""

    async def create(
        self,
        data: Union[PayoutBatchRequest, Mapping[str, Any]],
        idempotency_key: Optional[str] = None,
        **options: Any,
    ) -> Payout:
        """Create a batch payout.

        Args:
            data: Batch payout request
            idempotency_key: Key for safe retries (default: a new UUID4)
            **options: Per-call ``timeout``, ``max_retries``, ``signal``, ``headers``

        Returns:
            The created payout
        """
        result = await self._post(
            "/v1/payouts/batch",
            body=as_body(data),
            headers={"x-idempotency-key": idempotency_key or self._client.crypto.create_uuid4()},
            signature=_SIGN_HEADER,
            overrides=options,
        )
        return Payout.model_validate(result)


class BatchResource(SyncBaseResource):
    """Sync resource for batch payouts."""

    def create(
        self,
        data: Union[PayoutBatchRequest, Mapping[str, Any]],
        idempotency_key: Optional[str] = None,
        **options: Any,
    ) -> Payout:
        """Create a batch payout."""
        result = self._post(
            "/v1/payouts/batch",
            body=as_body(data),
            headers={"x-idempotency-key": idempotency_key or self._client.crypto.create_uuid4()},
            signature=_SIGN_HEADER,
            overrides=options,
        )
        return Payout.model_validate(result)
