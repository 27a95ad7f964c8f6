"""Payouts account resource for payOS SDK."""
from __future__ import annotations

from typing import Any

from ..models.payout import PayoutAccountInfo
from ..options import ResponseSignatureMode, SignatureOptions
from .base import AsyncBaseResource, SyncBaseResource

_VERIFY_HEADER = SignatureOptions(response=ResponseSignatureMode.HEADER)


class AsyncPayoutsAccountResource(AsyncBaseResource):
    """Async resource for the payout account."""

    async def balance(self, **options: Any) -> PayoutAccountInfo:
        """Get the payout account balance."""
        result = await self._get("/v1/payouts-account/balance", signature=_VERIFY_HEADER, overrides=options)
        return PayoutAccountInfo.model_validate(result)


class PayoutsAccountResource(SyncBaseResource):
    """Sync resource for the payout account."""

    def balance(self, **options: Any) -> PayoutAccountInfo:
        """Get the payout account balance."""
        result = self._get("/v1/payouts-account/balance", signature=_VERIFY_HEADER, overrides=options)
        return PayoutAccountInfo.model_validate(result)
