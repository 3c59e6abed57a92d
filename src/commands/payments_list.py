import logging
from datetime import datetime
from typing import Callable

from src.config import Settings
from src.dashboard.filtering import ALL_STATUSES, PaymentFilter
from src.dashboard.resources import PaymentResource
from src.dashboard.views import ListView, auth_failed_list_view, build_list_view
from src.models.payment import Payment, PaymentStatus
from src.payments_api.client import PaymentsApiClient
from src.ports import PresentationPort, TokenSource
from src.refunds.workflow import RefundResult, RefundWorkflow
from src.session.bootstrap import SessionBootstrap, SessionStatus
from src.utils.events import EventBus

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, Settings], PaymentsApiClient]

VALID_SELECTORS = {ALL_STATUSES} | {s.value for s in PaymentStatus}


class PaymentsListCommand:
    """The searchable, filterable payments list with per-row refund."""

    def __init__(
        self,
        token_source: TokenSource,
        presenter: PresentationPort,
        settings: Settings | None = None,
        client_factory: ClientFactory = PaymentsApiClient.from_settings,
        now: Callable[[], datetime] | None = None,
    ):
        self.presenter = presenter
        self.settings = settings or Settings.from_env()
        self.session = SessionBootstrap(token_source, presenter)
        self.events = EventBus()
        self._client_factory = client_factory
        self._now = now
        self._filter = PaymentFilter()
        self.selector = ALL_STATUSES
        self.search_text = ""
        self.client: PaymentsApiClient | None = None
        self.payments: PaymentResource | None = None

    def run(self) -> ListView:
        self.presenter.render_list(ListView(is_loading=True))
        state = self.session.activate()
        if state.status is SessionStatus.FAILED:
            view = auth_failed_list_view(str(state.error))
            self.presenter.render_list(view)
            return view

        self.client = self._client_factory(state.token, self.settings)
        self.payments = PaymentResource(self.client, self.events, self.presenter)
        self.payments.add_listener(lambda _: self.render())
        self.payments.revalidate()
        return self.view()

    def view(self) -> ListView:
        if self.payments is None:
            if self.session.state.status is SessionStatus.FAILED:
                return auth_failed_list_view(str(self.session.state.error))
            return ListView(is_loading=True)
        return build_list_view(
            self.payments.payments,
            selector=self.selector,
            is_loading=self.payments.is_loading,
            search_text=self.search_text,
            now=self._now() if self._now else None,
            payment_filter=self._filter,
        )

    def render(self) -> ListView:
        view = self.view()
        self.presenter.render_list(view)
        return view

    def select_filter(self, selector: str) -> ListView:
        if selector not in VALID_SELECTORS:
            raise ValueError(f"Unknown status filter: {selector!r}")
        self.selector = selector
        return self.render()

    def search(self, text: str) -> ListView:
        self.search_text = text
        return self.render()

    def find_payment(self, payment_id: str) -> Payment:
        for payment in self.payments.payments if self.payments else ():
            if payment.id == payment_id:
                return payment
        raise LookupError(f"Payment {payment_id} is not in the current list")

    def refund(self, payment_id: str) -> RefundResult:
        """Refund intent from a row action. A new workflow runs for every request."""
        if self.client is None:
            raise RuntimeError("Cannot refund before the session is ready")
        payment = self.find_payment(payment_id)
        workflow = RefundWorkflow(self.client, self.presenter, self.events)
        return workflow.run(payment)
