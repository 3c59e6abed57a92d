import logging
from typing import Callable, Generic, TypeVar

from src.models.payment import Payment
from src.models.settlement import Settlement
from src.payments_api.client import PaymentsApiClient
from src.payments_api.errors import MollieError
from src.ports import NotificationKind, PresentationPort
from src.utils.events import REFUND_SUCCEEDED, EventBus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchedResource(Generic[T]):
    """Last fetched value of a remote resource plus its loading state.

    `data` stays at its previous value while a refresh is running and when a
    refresh fails; it is replaced wholesale only by a successful load.
    """

    def __init__(self, name: str, loader: Callable[[], T], presenter: PresentationPort | None = None):
        self.name = name
        self._loader = loader
        self._presenter = presenter
        self.data: T | None = None
        self.is_loading = False
        self.has_loaded = False
        self.error: MollieError | None = None
        self.load_count = 0
        self._listeners: list[Callable[["FetchedResource"], None]] = []

    def add_listener(self, callback: Callable[["FetchedResource"], None]) -> None:
        """Called whenever the loading flag or the data changes."""
        self._listeners.append(callback)

    def _changed(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def revalidate(self) -> T | None:
        self.is_loading = True
        self.load_count += 1
        self._changed()
        try:
            data = self._loader()
        except MollieError as e:
            self.error = e
            logger.warning("Fetching %s failed: %s", self.name, e)
            if self._presenter is not None:
                self._presenter.notify(NotificationKind.FAILURE, "Failed to fetch latest data", str(e))
        else:
            self.data = data
            self.error = None
            self.has_loaded = True
        finally:
            self.is_loading = False
        self._changed()
        return self.data


class PaymentResource(FetchedResource[tuple[Payment, ...]]):
    """The payment collection, re-fetched whenever a refund succeeds."""

    def __init__(self, client: PaymentsApiClient, events: EventBus | None = None, presenter: PresentationPort | None = None):
        super().__init__("payments", client.list_payments, presenter)
        if events is not None:
            events.subscribe(REFUND_SUCCEEDED, self._on_refund_succeeded)

    @property
    def payments(self) -> tuple[Payment, ...]:
        return self.data or ()

    def _on_refund_succeeded(self, payment) -> None:
        logger.info("Refund of %s succeeded, refreshing payments", getattr(payment, "id", payment))
        self.revalidate()


class SettlementResource(FetchedResource[Settlement | None]):
    def __init__(self, client: PaymentsApiClient, presenter: PresentationPort | None = None):
        super().__init__("settlement", client.next_settlement, presenter)
