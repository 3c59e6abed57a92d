"""Integration tests for the next-settlement endpoint."""

from datetime import date

import pytest

from src.models.payment import Amount
from src.payments_api.errors import ApiError


pytestmark = pytest.mark.integration


class TestNextSettlement:
    """PaymentsApiClient.next_settlement() against the mock API."""

    def test_returns_settlement(self, client, mock_api, settlement_factory):
        mock_api.set_settlement(settlement_factory.payload(value="431.75", settlement_date="2026-10-21"))

        settlement = client.next_settlement()

        assert settlement.amount == Amount("431.75", "EUR")
        assert settlement.settlement_date == date(2026, 10, 21)

    def test_not_found_means_no_settlement(self, client):
        assert client.next_settlement() is None

    def test_no_content_means_no_settlement(self, client, mock_api):
        mock_api.set_settlement_response(204)
        assert client.next_settlement() is None

    def test_record_without_amount_means_no_settlement(self, client, mock_api):
        mock_api.set_settlement_response(200, {"resource": "settlement", "id": "next"})
        assert client.next_settlement() is None

    def test_server_error_still_raises(self, client, mock_api):
        mock_api.set_settlement_response(500, {"status": 500, "title": "Internal Server Error"})
        with pytest.raises(ApiError) as exc_info:
            client.next_settlement()
        assert str(exc_info.value) == "Internal Server Error"

    def test_uses_same_auth_header(self, client, mock_api, access_token):
        client.next_settlement()
        request = mock_api.get_requests("GET", "/v2/settlements/next")[0]
        assert request["headers"]["Authorization"] == f"Bearer {access_token}"
