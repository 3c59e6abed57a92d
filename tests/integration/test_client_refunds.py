"""Integration tests for refund creation."""

import pytest

from src.models.payment import Payment
from src.payments_api.errors import ApiError


pytestmark = pytest.mark.integration


class TestCreateRefund:
    """PaymentsApiClient.create_refund() against the mock API."""

    def test_posts_full_amount_in_original_currency(self, client, mock_api, payment_factory):
        data = payment_factory.payload(id="tr_refundme", value="42.10", currency="EUR", status="paid")
        mock_api.set_payments([data])

        refund = client.create_refund(Payment.from_api(data))

        posts = mock_api.get_requests("POST")
        assert len(posts) == 1
        assert posts[0]["path"] == "/v2/payments/tr_refundme/refunds"
        assert posts[0]["body"] == {"amount": {"currency": "EUR", "value": "42.10"}}
        assert posts[0]["headers"]["Content-Type"] == "application/json"
        assert refund["resource"] == "refund"
        assert refund["paymentId"] == "tr_refundme"

    def test_server_side_status_changes_after_refund(self, client, mock_api, payment_factory):
        data = payment_factory.payload(id="tr_x", status="paid")
        mock_api.set_payments([data])

        client.create_refund(Payment.from_api(data))

        assert mock_api.get_payment("tr_x")["status"] == "refunded"

    def test_error_detail_preferred(self, client, mock_api, payment_factory):
        mock_api.set_refund_response(422, {"status": 422, "title": "Unprocessable Entity", "detail": "insufficient balance"})

        with pytest.raises(ApiError) as exc_info:
            client.create_refund(payment_factory.create(status="paid"))

        assert exc_info.value.status_code == 422
        assert exc_info.value.message == "insufficient balance"

    def test_error_title_when_no_detail(self, client, mock_api, payment_factory):
        mock_api.set_refund_response(409, {"status": 409, "title": "Conflict"})
        with pytest.raises(ApiError) as exc_info:
            client.create_refund(payment_factory.create(status="paid"))
        assert exc_info.value.message == "Conflict"

    def test_non_json_error_body(self, client, mock_api, payment_factory):
        mock_api.set_refund_response(500, "<html>oops</html>")
        with pytest.raises(ApiError) as exc_info:
            client.create_refund(payment_factory.create(status="paid"))
        assert exc_info.value.message == "HTTP error! Status: 500"

    def test_unknown_payment(self, client, payment_factory):
        with pytest.raises(ApiError) as exc_info:
            client.create_refund(payment_factory.create(id="tr_missing", status="paid"))
        assert exc_info.value.status_code == 404
