"""Integration tests for listing payments."""

import pytest

from src.payments_api.client import PaymentsApiClient
from src.payments_api.errors import ApiError, FetchFailure, TransportError


pytestmark = pytest.mark.integration


class TestListPayments:
    """PaymentsApiClient.list_payments() against the mock API."""

    def test_returns_parsed_payments_in_api_order(self, client, mock_api, payment_factory):
        mock_api.set_payments([
            payment_factory.payload(id="tr_new", status="paid"),
            payment_factory.payload(id="tr_old", status="open"),
        ])

        payments = client.list_payments()

        assert [p.id for p in payments] == ["tr_new", "tr_old"]
        assert payments[1].status == "open"

    def test_sends_bearer_token_and_limit(self, client, mock_api, access_token):
        client.list_payments()

        request = mock_api.get_requests("GET", "/v2/payments")[0]
        assert request["headers"]["Authorization"] == f"Bearer {access_token}"
        assert request["path"] == "/v2/payments?limit=250"

    def test_custom_limit(self, mock_api, access_token):
        client = PaymentsApiClient(access_token, base_url=mock_api.base_url, payment_limit=20)
        client.list_payments()
        assert mock_api.get_requests("GET")[0]["path"] == "/v2/payments?limit=20"

    def test_empty_account(self, client):
        assert client.list_payments() == ()

    def test_missing_embedded_envelope_is_empty(self, client, mock_api):
        mock_api.set_payments_response(200, {"count": 0})
        assert client.list_payments() == ()

    @pytest.mark.parametrize("embedded", [["tr_1"], "payments", None])
    def test_non_object_embedded_envelope_is_empty(self, client, mock_api, embedded):
        mock_api.set_payments_response(200, {"count": 1, "_embedded": embedded})
        assert client.list_payments() == ()

    def test_wrong_token_raises_api_error_with_detail(self, mock_api):
        client = PaymentsApiClient("test_wrong", base_url=mock_api.base_url, timeout_seconds=5)

        with pytest.raises(ApiError) as exc_info:
            client.list_payments()

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "Missing authentication, or failed to authenticate"

    def test_malformed_record_raises_fetch_failure(self, client, mock_api):
        mock_api.set_payments_response(200, {"_embedded": {"payments": [{"id": "tr_broken"}]}})
        with pytest.raises(FetchFailure):
            client.list_payments()

    def test_server_error_without_body(self, client, mock_api):
        mock_api.set_payments_response(502)
        with pytest.raises(ApiError) as exc_info:
            client.list_payments()
        assert str(exc_info.value) == "HTTP error! Status: 502"

    def test_unreachable_server_raises_transport_error(self, access_token):
        client = PaymentsApiClient(access_token, base_url="http://127.0.0.1:1/v2", timeout_seconds=2)
        with pytest.raises(TransportError) as exc_info:
            client.list_payments()
        assert exc_info.value.status_code is None

    def test_timeout_raises_transport_error(self, mock_api, access_token):
        mock_api.set_response_delay(1.0)
        client = PaymentsApiClient(access_token, base_url=mock_api.base_url, timeout_seconds=0.2)
        with pytest.raises(TransportError) as exc_info:
            client.list_payments()
        assert str(exc_info.value) == "Request timed out"
