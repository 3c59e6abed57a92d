import logging

import requests

from src.config import DEFAULT_API_BASE_URL, DEFAULT_PAYMENT_LIMIT, Settings
from src.models.payment import Payment
from src.models.settlement import Settlement
from src.payments_api.errors import ApiError, FetchFailure, TransportError

logger = logging.getLogger(__name__)


class PaymentsApiClient:
    """Thin client for the three Mollie endpoints the dashboard needs."""

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        payment_limit: int = DEFAULT_PAYMENT_LIMIT,
        timeout_seconds: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.payment_limit = payment_limit
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers["Authorization"] = f"Bearer {access_token}"

    @classmethod
    def from_settings(cls, access_token: str, settings: Settings) -> "PaymentsApiClient":
        return cls(
            access_token,
            base_url=settings.api_base_url,
            payment_limit=settings.payment_limit,
            timeout_seconds=settings.request_timeout,
        )

    def list_payments(self) -> tuple[Payment, ...]:
        """Fetch the most recent page of payments, newest first as the API returns them."""
        resp = self._request("GET", "/payments", params={"limit": self.payment_limit})
        body = _json_or_none(resp)
        if not isinstance(body, dict):
            body = {}
        embedded = body.get("_embedded")
        if not isinstance(embedded, dict):
            embedded = {}
        records = embedded.get("payments") or []
        try:
            payments = tuple(Payment.from_api(record) for record in records)
        except (KeyError, TypeError, ValueError) as e:
            raise FetchFailure(f"Malformed payment record: {e}") from e
        logger.info("Fetched %d payments", len(payments))
        return payments

    def next_settlement(self) -> Settlement | None:
        """Fetch the upcoming settlement. None means nothing is scheduled."""
        try:
            resp = self._request("GET", "/settlements/next")
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise
        try:
            return Settlement.from_api(_json_or_none(resp))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise FetchFailure(f"Malformed settlement: {e}") from e

    def create_refund(self, payment: Payment) -> dict:
        """Refund the full amount of a payment in its original currency."""
        resp = self._request(
            "POST",
            f"/payments/{payment.id}/refunds",
            json={"amount": payment.amount.to_api()},
        )
        return _json_or_none(resp) or {}

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self._session.request(method, url, timeout=self.timeout_seconds, **kwargs)
        except requests.exceptions.Timeout:
            raise TransportError("Request timed out") from None
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e)) from e

        if not 200 <= resp.status_code < 300:
            body = _json_or_none(resp)
            if not isinstance(body, dict):
                body = {}
            raise ApiError(resp.status_code, detail=body.get("detail"), title=body.get("title"))
        return resp


def _json_or_none(resp: requests.Response):
    if resp.status_code == 204 or not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None
