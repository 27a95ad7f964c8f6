"""
Payouts resource for payOS SDK.

This module provides both async and sync interfaces for payout operations.
Payout requests are signed in the ``x-signature`` header and responses are
verified against the ``x-signature`` response header.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Union

from ..models.payout import EstimateCredit, Payout, PayoutApprovalState, PayoutRequest, payout_list_query
from ..options import RequestSignatureMode, ResponseSignatureMode, SignatureOptions
from ..pagination import AsyncPage, Page
from .base import AsyncBaseResource, SyncBaseResource, as_body, build_options
from .batch import AsyncBatchResource, BatchResource

if TYPE_CHECKING:
    from ..client import AsyncPayOS, PayOS

_SIGN_HEADER = SignatureOptions(
    request=RequestSignatureMode.HEADER,
    response=ResponseSignatureMode.HEADER,
)
_SIGN_REQUEST = SignatureOptions(request=RequestSignatureMode.HEADER)
_VERIFY_HEADER = SignatureOptions(response=ResponseSignatureMode.HEADER)


class AsyncPayoutsResource(AsyncBaseResource):
    """Async resource for payouts.

    Example:
        ```python
        async with AsyncPayOS() as client:
            payout = await client.payouts.create(
                PayoutRequest(
                    reference_id="payout_1",
                    amount=2000,
                    description="Refund",
                    to_bin="970422",
                    to_account_number="0123456789",
                )
            )
            page = await client.payouts.list(approval_state="COMPLETED")
            async for item in page:
                print(item.id)
        ```
    """

    def __init__(self, client: "AsyncPayOS") -> None:
        super().__init__(client)
        self.batch = AsyncBatchResource(client)

    async def create(
        self,
        data: Union[PayoutRequest, Mapping[str, Any]],
        idempotency_key: Optional[str] = None,
        **options: Any,
    ) -> Payout:
        """Create a payout.

        Args:
            data: Payout request
            idempotency_key: Key for safe retries (default: a new UUID4)
            **options: Per-call ``timeout``, ``max_retries``, ``signal``, ``headers``

        Returns:
            The created payout
        """
        result = await self._post(
            "/v1/payouts",
            body=as_body(data),
            headers={"x-idempotency-key": idempotency_key or self._client.crypto.create_uuid4()},
            signature=_SIGN_HEADER,
            overrides=options,
        )
        return Payout.model_validate(result)

    async def get(self, payout_id: str, **options: Any) -> Payout:
        """Get a payout by ID."""
        result = await self._get(f"/v1/payouts/{payout_id}", signature=_VERIFY_HEADER, overrides=options)
        return Payout.model_validate(result)

    async def estimate_credit(
        self,
        data: Union[PayoutRequest, Mapping[str, Any]],
        **options: Any,
    ) -> EstimateCredit:
        """Estimate the credit a payout or batch payout will consume."""
        result = await self._post(
            "/v1/payouts/estimate-credit", body=as_body(data), signature=_SIGN_REQUEST, overrides=options
        )
        return EstimateCredit.model_validate(result)

    async def list(
        self,
        *,
        reference_id: Optional[str] = None,
        approval_state: Optional[Union[PayoutApprovalState, str]] = None,
        category: Optional[List[str]] = None,
        from_date: Optional[Union[datetime, str]] = None,
        to_date: Optional[Union[datetime, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **options: Any,
    ) -> AsyncPage[Payout]:
        """List payouts.

        Args:
            reference_id: Filter by reference ID
            approval_state: Filter by approval state
            category: Filter by categories
            from_date: Created at or after
            to_date: Created at or before
            limit: Page size (default: 10)
            offset: Offset of the first item (default: 0)

        Returns:
            First page of matching payouts; iterate it to walk every page
        """
        request = build_options(
            "GET",
            "/v1/payouts",
            query=payout_list_query(
                reference_id=reference_id,
                approval_state=approval_state,
                category=category,
                from_date=from_date,
                to_date=to_date,
                limit=limit,
                offset=offset,
            ),
            signature=_VERIFY_HEADER,
            overrides=options,
        )
        return AsyncPage(self._client, request, await self._client.request(request), Payout.model_validate)


class PayoutsResource(SyncBaseResource):
    """Sync resource for payouts."""

    def __init__(self, client: "PayOS") -> None:
        super().__init__(client)
        self.batch = BatchResource(client)

    def create(
        self,
        data: Union[PayoutRequest, Mapping[str, Any]],
        idempotency_key: Optional[str] = None,
        **options: Any,
    ) -> Payout:
        """Create a payout."""
        result = self._post(
            "/v1/payouts",
            body=as_body(data),
            headers={"x-idempotency-key": idempotency_key or self._client.crypto.create_uuid4()},
            signature=_SIGN_HEADER,
            overrides=options,
        )
        return Payout.model_validate(result)

    def get(self, payout_id: str, **options: Any) -> Payout:
        """Get a payout by ID."""
        result = self._get(f"/v1/payouts/{payout_id}", signature=_VERIFY_HEADER, overrides=options)
        return Payout.model_validate(result)

    def estimate_credit(
        self,
        data: Union[PayoutRequest, Mapping[str, Any]],
        **options: Any,
    ) -> EstimateCredit:
        """Estimate the credit a payout or batch payout will consume."""
        result = self._post(
            "/v1/payouts/estimate-credit", body=as_body(data), signature=_SIGN_REQUEST, overrides=options
        )
        return EstimateCredit.model_validate(result)

    def list(
        self,
        *,
        reference_id: Optional[str] = None,
        approval_state: Optional[Union[PayoutApprovalState, str]] = None,
        category: Optional[List[str]] = None,
        from_date: Optional[Union[datetime, str]] = None,
        to_date: Optional[Union[datetime, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        **options: Any,
    ) -> Page[Payout]:
        """List payouts. See :meth:`AsyncPayoutsResource.list`."""
        request = build_options(
            "GET",
            "/v1/payouts",
            query=payout_list_query(
                reference_id=reference_id,
                approval_state=approval_state,
                category=category,
                from_date=from_date,
                to_date=to_date,
                limit=limit,
                offset=offset,
            ),
            signature=_VERIFY_HEADER,
            overrides=options,
        )
        return Page(self._client, request, self._client.request(request), Payout.model_validate)
