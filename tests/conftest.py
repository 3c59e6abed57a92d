from datetime import datetime, timedelta, timezone

import pytest

from src.config import Settings
from src.mock_api.server import MockPaymentsApiServer
from src.payments_api.client import PaymentsApiClient
from src.payments_api.errors import ApiError
from src.session.bootstrap import StaticTokenSource
from src.utils.events import EventBus
from src.utils.factories import PaymentFactory, SettlementFactory


ACCESS_TOKEN = "test_dHar4XY7LxsDOtmnkVtjNVWXLSlXsM"

# Amsterdam summer time, fixed so tests do not depend on the machine's zone.
CEST = timezone(timedelta(hours=2))
NOW = datetime(2026, 10, 18, 14, 30, tzinfo=CEST)


class RecordingPresenter:
    """PresentationPort fake that records everything the core asks the host to do."""

    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.lists = []
        self.menu_bars = []
        self.notifications = []
        self.prompts = []

    def render_list(self, view) -> None:
        self.lists.append(view)

    def render_menu_bar(self, view) -> None:
        self.menu_bars.append(view)

    def notify(self, kind, title, message=None) -> None:
        self.notifications.append((kind, title, message))

    def confirm(self, prompt) -> bool:
        self.prompts.append(prompt)
        return self.confirm_answer


class FakeApiClient:
    """In-memory client; `refund_error` makes create_refund raise it."""

    def __init__(self, payments=(), settlement=None, refund_error: Exception | None = None):
        self.payments = tuple(payments)
        self.settlement = settlement
        self.refund_error = refund_error
        self.list_calls = 0
        self.settlement_calls = 0
        self.refund_calls = []

    def list_payments(self):
        self.list_calls += 1
        return self.payments

    def next_settlement(self):
        self.settlement_calls += 1
        return self.settlement

    def create_refund(self, payment):
        self.refund_calls.append(payment)
        if self.refund_error is not None:
            raise self.refund_error
        return {"resource": "refund", "id": "re_fake", "paymentId": payment.id}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def access_token():
    return ACCESS_TOKEN


@pytest.fixture
def token_source():
    return StaticTokenSource(ACCESS_TOKEN)


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def declining_presenter():
    return RecordingPresenter(confirm_answer=False)


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def fake_client_factory():
    return FakeApiClient


@pytest.fixture
def insufficient_balance_error():
    return ApiError(422, detail="insufficient balance", title="Unprocessable Entity")


@pytest.fixture
def mock_api():
    server = MockPaymentsApiServer(access_token=ACCESS_TOKEN)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def client(mock_api):
    return PaymentsApiClient(ACCESS_TOKEN, base_url=mock_api.base_url, timeout_seconds=5)


@pytest.fixture
def settings(mock_api):
    return Settings(api_base_url=mock_api.base_url, request_timeout=5, access_token=ACCESS_TOKEN)


@pytest.fixture
def payment_factory():
    return PaymentFactory


@pytest.fixture
def settlement_factory():
    return SettlementFactory
