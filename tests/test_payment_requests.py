"""
Tests for PaymentRequestsResource and InvoicesResource
"""
import httpx
import pytest

from payos_sdk import (
    CreatePaymentLinkRequest,
    InvalidSignatureError,
    NotFoundError,
    PaymentLinkItem,
    PaymentLinkStatus,
)

from .conftest import BASE_URL, envelope, sign_body

CREATED_LINK = {
    "bin": "970422",
    "accountNumber": "113366668888",
    "accountName": "QUY VAC XIN PHONG CHONG COVID",
    "amount": 2000,
    "description": "Order 123",
    "orderCode": 123,
    "currency": "VND",
    "paymentLinkId": "0a2b3c4d",
    "status": "PENDING",
    "expiredAt": 1735689600,
    "checkoutUrl": "https://pay.payos.vn/web/0a2b3c4d",
    "qrCode": "00020101021238570010A000000727",
}

PAYMENT_LINK = {
    "id": "0a2b3c4d",
    "orderCode": 123,
    "amount": 2000,
    "amountPaid": 2000,
    "amountRemaining": 0,
    "status": "PAID",
    "createdAt": "2024-01-01T10:00:00+07:00",
    "transactions": [
        {
            "reference": "FT24001",
            "amount": 2000,
            "accountNumber": "113366668888",
            "description": "Order 123",
            "transactionDateTime": "2024-01-01 10:05:00",
            "counterAccountName": "NGUYEN VAN A",
        }
    ],
    "cancellationReason": None,
    "canceledAt": None,
}


def make_request(**overrides):
    fields = dict(
        order_code=123,
        amount=2000,
        description="Order 123",
        cancel_url="https://example.com/cancel",
        return_url="https://example.com/return",
    )
    fields.update(overrides)
    return CreatePaymentLinkRequest(**fields)


class TestCreatePaymentLink:
    """Tests for payment link creation."""

    async def test_create_payment_link(self, client, server):
        """Should sign the request and parse the created link."""
        server.add(envelope(CREATED_LINK, signature=sign_body(CREATED_LINK)))

        link = await client.payment_requests.create(
            make_request(items=[PaymentLinkItem(name="Noodles", quantity=1, price=2000)])
        )

        assert link.checkout_url == "https://pay.payos.vn/web/0a2b3c4d"
        assert link.status == PaymentLinkStatus.PENDING.value
        assert link.payment_link_id == "0a2b3c4d"

        request = server.last_request
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/v2/payment-requests"
        body = server.last_json()
        assert body["orderCode"] == 123
        assert body["cancelUrl"] == "https://example.com/cancel"
        assert body["items"] == [{"name": "Noodles", "quantity": 1, "price": 2000}]
        assert "buyerName" not in body
        assert body["signature"] == "e17c9addc808550be145107e8be30e1cf0d8a077a09d57516d9ddbfa2f185761"

    async def test_create_from_dict(self, client, server):
        """Should accept a wire dictionary."""
        server.add(envelope(CREATED_LINK))

        await client.payment_requests.create(make_request().to_dict())

        assert server.last_json()["signature"]

    async def test_reject_forged_response(self, client, server):
        """Should reject a response whose signature does not match."""
        server.add(envelope(CREATED_LINK, signature="f" * 64))

        with pytest.raises(InvalidSignatureError):
            await client.payment_requests.create(make_request())

    def test_validate_amount(self):
        """Should reject negative amounts."""
        with pytest.raises(ValueError):
            make_request(amount=-1)


class TestGetPaymentLink:
    """Tests for getting a payment link."""

    async def test_get_by_order_code(self, client, server):
        server.add(envelope(PAYMENT_LINK, signature=sign_body(PAYMENT_LINK)))

        link = await client.payment_requests.get(123)

        assert str(server.last_request.url) == f"{BASE_URL}/v2/payment-requests/123"
        assert link.status == "PAID"
        assert link.amount_paid == 2000
        assert link.transactions[0].counter_account_name == "NGUYEN VAN A"

    async def test_not_found(self, client, server):
        server.add(httpx.Response(404, json={"code": "101", "desc": "Payment link not found"}))

        with pytest.raises(NotFoundError, match="Payment link not found"):
            await client.payment_requests.get("missing")

    def test_sync_get(self, sync_client, server):
        server.add(envelope(PAYMENT_LINK))

        link = sync_client.payment_requests.get("0a2b3c4d")

        assert link.id == "0a2b3c4d"


class TestCancelPaymentLink:
    """Tests for cancelling a payment link."""

    async def test_cancel_with_reason(self, client, server):
        cancelled = {**PAYMENT_LINK, "status": "CANCELLED", "cancellationReason": "Out of stock"}
        server.add(envelope(cancelled))

        link = await client.payment_requests.cancel(123, "Out of stock")

        assert str(server.last_request.url) == f"{BASE_URL}/v2/payment-requests/123/cancel"
        assert server.last_request.method == "POST"
        assert server.last_json() == {"cancellationReason": "Out of stock"}
        assert link.cancellation_reason == "Out of stock"

    async def test_cancel_without_reason(self, client, server):
        server.add(envelope({**PAYMENT_LINK, "status": "CANCELLED"}))

        await client.payment_requests.cancel(123)

        assert server.last_request.content == b""

    def test_sync_cancel(self, sync_client, server):
        server.add(envelope({**PAYMENT_LINK, "status": "CANCELLED"}))

        link = sync_client.payment_requests.cancel(123, "Duplicate")

        assert link.status == "CANCELLED"


class TestInvoices:
    """Tests for payment link invoices."""

    async def test_get_invoices(self, client, server):
        data = {
            "invoices": [
                {
                    "invoiceId": "inv_1",
                    "invoiceNumber": "0000001",
                    "issuedTimestamp": 1704078300,
                    "issuedDatetime": "2024-01-01 10:05:00",
                    "transactionId": "FT24001",
                    "reservationCode": "R1",
                    "codeOfTax": "ABC123",
                }
            ]
        }
        server.add(envelope(data, signature=sign_body(data)))

        info = await client.payment_requests.invoices.get(123)

        assert str(server.last_request.url) == f"{BASE_URL}/v2/payment-requests/123/invoices"
        assert info.invoices[0].invoice_id == "inv_1"
        assert info.invoices[0].code_of_tax == "ABC123"

    async def test_download_invoice(self, client, server):
        server.add(
            httpx.Response(
                200,
                content=b"%PDF",
                headers={
                    "content-type": "application/pdf",
                    "content-disposition": "attachment; filename=inv_1.pdf",
                },
            )
        )

        file = await client.payment_requests.invoices.download("inv_1", 123)

        assert str(server.last_request.url) == (
            f"{BASE_URL}/v2/payment-requests/123/invoices/inv_1/download"
        )
        assert file.filename == "inv_1.pdf"
        assert file.data == b"%PDF"

    def test_sync_download_invoice(self, sync_client, server):
        server.add(httpx.Response(200, content=b"%PDF", headers={"content-type": "application/pdf"}))

        file = sync_client.payment_requests.invoices.download("inv_1", "0a2b3c4d")

        assert file.content_type == "application/pdf"
