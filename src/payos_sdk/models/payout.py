"""Payout models for payOS SDK.

Payout requests are snake_case on the wire, payout responses camelCase.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from .base import PayOSModel


class PayoutTransactionState(str, Enum):
    """State of a single payout transfer."""

    RECEIVED = "RECEIVED"
    PROCESSING = "PROCESSING"
    CANCELLED = "CANCELLED"
    SUCCEEDED = "SUCCEEDED"
    ON_HOLD = "ON_HOLD"
    REVERSED = "REVERSED"
    FAILED = "FAILED"


class PayoutApprovalState(str, Enum):
    """Approval state of a payout."""

    DRAFTING = "DRAFTING"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    SCHEDULED = "SCHEDULED"
    PROCESSING = "PROCESSING"
    FAILED = "FAILED"
    PARTIAL_COMPLETED = "PARTIAL_COMPLETED"
    COMPLETED = "COMPLETED"


class _SnakeCaseModel(PayOSModel):
    model_config = ConfigDict(alias_generator=None)


class PayoutRequest(_SnakeCaseModel):
    """Request to create a single payout."""

    reference_id: str
    amount: int = Field(gt=0)
    description: str
    to_bin: str
    to_account_number: str
    category: Optional[List[str]] = None


class PayoutBatchItem(_SnakeCaseModel):
    """One transfer of a batch payout."""

    reference_id: str
    amount: int = Field(gt=0)
    description: str
    to_bin: str
    to_account_number: str


class PayoutBatchRequest(_SnakeCaseModel):
    """Request to create a batch payout."""

    reference_id: str
    validate_destination: Optional[bool] = None
    category: Optional[List[str]] = None
    payouts: List[PayoutBatchItem]


class PayoutTransaction(PayOSModel):
    """A transfer belonging to a payout."""

    id: str
    reference_id: str
    amount: int
    description: str
    to_bin: str
    to_account_number: str
    to_account_name: Optional[str] = None
    reference: Optional[str] = None
    transaction_datetime: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    state: PayoutTransactionState


class Payout(PayOSModel):
    """Payout information."""

    id: str
    reference_id: str
    transactions: List[PayoutTransaction] = Field(default_factory=list)
    category: Optional[List[str]] = None
    approval_state: PayoutApprovalState
    created_at: str


class EstimateCredit(PayOSModel):
    estimate_credit: int


class PayoutAccountInfo(PayOSModel):
    """Balance of the payout account."""

    account_number: str
    account_name: str
    currency: str
    balance: str


def payout_list_query(
    *,
    reference_id: Optional[str] = None,
    approval_state: Optional[str] = None,
    category: Optional[List[str]] = None,
    from_date: Any = None,
    to_date: Any = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> dict[str, Any]:
    """Build the query of ``GET /v1/payouts``.

    Datetimes are sent as ISO 8601, categories comma-joined and empty
    filters dropped.
    """
    raw = {
        "referenceId": reference_id,
        "approvalState": approval_state.value if isinstance(approval_state, Enum) else approval_state,
        "category": ",".join(category) if category else None,
        "fromDate": from_date.isoformat() if hasattr(from_date, "isoformat") else from_date,
        "toDate": to_date.isoformat() if hasattr(to_date, "isoformat") else to_date,
        "limit": 10 if limit is None else limit,
        "offset": 0 if offset is None else offset,
    }
    return {key: value for key, value in raw.items() if value or key == "offset"}
