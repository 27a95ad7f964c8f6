"""Webhook models for payOS SDK."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import ConfigDict

from .base import PayOSModel


class ConfirmWebhookResponse(PayOSModel):
    """Result of registering a webhook URL."""

    webhook_url: str
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    name: Optional[str] = None
    short_name: Optional[str] = None


class WebhookData(PayOSModel):
    """Payment notification delivered to the webhook URL.

    Unknown fields are kept so that the payload can be re-signed exactly
    as received.
    """

    model_config = ConfigDict(extra="allow")

    order_code: int
    amount: int
    description: str
    account_number: str
    reference: str
    transaction_date_time: str
    currency: str
    payment_link_id: str
    code: str
    desc: str
    counter_account_bank_id: Optional[str] = None
    counter_account_bank_name: Optional[str] = None
    counter_account_name: Optional[str] = None
    counter_account_number: Optional[str] = None
    virtual_account_name: Optional[str] = None
    virtual_account_number: Optional[str] = None


class Webhook(PayOSModel):
    """Webhook payload as posted by payOS."""

    code: str
    desc: str
    success: bool
    data: dict[str, Any]
    signature: str
