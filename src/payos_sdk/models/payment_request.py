"""Payment link models for payOS SDK."""
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from .base import PayOSModel

TaxPercentage = Literal[-2, -1, 0, 5, 10]


class PaymentLinkStatus(str, Enum):
    """Payment link status."""

    PENDING = "PENDING"
    CANCELLED = "CANCELLED"
    UNDERPAID = "UNDERPAID"
    PAID = "PAID"
    EXPIRED = "EXPIRED"
    PROCESSING = "PROCESSING"
    FAILED = "FAILED"


class PaymentLinkItem(PayOSModel):
    """A line item shown on the checkout page."""

    name: str
    quantity: int
    price: int
    unit: Optional[str] = None
    tax_percentage: Optional[TaxPercentage] = None


class InvoiceRequest(PayOSModel):
    """Invoice options of a payment link."""

    buyer_not_get_invoice: Optional[bool] = None
    tax_percentage: Optional[TaxPercentage] = None


class CreatePaymentLinkRequest(PayOSModel):
    """Request to create a payment link.

    ``signature`` is computed by the client when omitted.
    """

    order_code: int
    amount: int = Field(ge=0)
    description: str
    cancel_url: str
    return_url: str
    signature: Optional[str] = None
    items: Optional[List[PaymentLinkItem]] = None
    buyer_name: Optional[str] = None
    buyer_company_name: Optional[str] = None
    buyer_tax_code: Optional[str] = None
    buyer_email: Optional[str] = None
    buyer_phone: Optional[str] = None
    buyer_address: Optional[str] = None
    invoice: Optional[InvoiceRequest] = None
    expired_at: Optional[int] = None


class CreatePaymentLinkResponse(PayOSModel):
    """A newly created payment link."""

    bin: str
    account_number: str
    account_name: str
    amount: int
    description: str
    order_code: int
    currency: str
    payment_link_id: str
    status: PaymentLinkStatus
    expired_at: Optional[int] = None
    checkout_url: str
    qr_code: str


class Transaction(PayOSModel):
    """A bank transaction paid into a payment link."""

    reference: str
    amount: int
    account_number: str
    description: str
    transaction_date_time: str
    virtual_account_name: Optional[str] = None
    virtual_account_number: Optional[str] = None
    counter_account_bank_id: Optional[str] = None
    counter_account_bank_name: Optional[str] = None
    counter_account_name: Optional[str] = None
    counter_account_number: Optional[str] = None


class PaymentLink(PayOSModel):
    """Payment link information."""

    id: str
    order_code: int
    amount: int
    amount_paid: int
    amount_remaining: int
    status: PaymentLinkStatus
    created_at: str
    transactions: List[Transaction] = Field(default_factory=list)
    cancellation_reason: Optional[str] = None
    canceled_at: Optional[str] = None
