from datetime import datetime
from typing import Callable

from src.config import Settings
from src.dashboard.resources import PaymentResource, SettlementResource
from src.dashboard.views import MenuBarView, auth_failed_menu_bar, build_menu_bar
from src.payments_api.client import PaymentsApiClient
from src.ports import PresentationPort, TokenSource
from src.session.bootstrap import SessionBootstrap, SessionStatus


class TransactionsMenuBarCommand:
    """Today's revenue and the next payout, shown in the menu bar."""

    def __init__(
        self,
        token_source: TokenSource,
        presenter: PresentationPort,
        settings: Settings | None = None,
        client_factory: Callable[[str, Settings], PaymentsApiClient] = PaymentsApiClient.from_settings,
        now: Callable[[], datetime] | None = None,
    ):
        self.presenter = presenter
        self.settings = settings or Settings.from_env()
        self.session = SessionBootstrap(token_source, presenter)
        self._client_factory = client_factory
        self._now = now
        self.payments: PaymentResource | None = None
        self.settlement: SettlementResource | None = None

    def run(self) -> MenuBarView:
        self.presenter.render_menu_bar(MenuBarView(title=None, is_loading=True))
        state = self.session.activate()
        if state.status is SessionStatus.FAILED:
            view = auth_failed_menu_bar()
            self.presenter.render_menu_bar(view)
            return view

        client = self._client_factory(state.token, self.settings)
        self.payments = PaymentResource(client, presenter=self.presenter)
        self.settlement = SettlementResource(client, presenter=self.presenter)
        for resource in (self.payments, self.settlement):
            resource.add_listener(lambda _: self.render())
        # Both fetches are independent; each only flips its own loading flag.
        self.settlement.is_loading = True
        self.payments.revalidate()
        self.settlement.revalidate()
        return self.view()

    def view(self) -> MenuBarView:
        if self.session.state.status is SessionStatus.FAILED:
            return auth_failed_menu_bar()
        if self.payments is None or self.settlement is None:
            return MenuBarView(title=None, is_loading=True)
        return build_menu_bar(
            self.payments.payments,
            self.settlement.data,
            self.settings.dashboard_url,
            payments_loading=self.payments.is_loading,
            settlement_loading=self.settlement.is_loading,
            now=self._now() if self._now else None,
        )

    def render(self) -> MenuBarView:
        view = self.view()
        self.presenter.render_menu_bar(view)
        return view
