"""Invoice models for payOS SDK."""
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .base import PayOSModel


class Invoice(PayOSModel):
    """An electronic invoice issued for a payment link."""

    invoice_id: str
    invoice_number: Optional[str] = None
    issued_timestamp: Optional[int] = None
    issued_datetime: Optional[str] = None
    transaction_id: Optional[str] = None
    reservation_code: Optional[str] = None
    code_of_tax: Optional[str] = None


class InvoicesInfo(PayOSModel):
    invoices: List[Invoice] = Field(default_factory=list)
