import logging
from dataclasses import dataclass
from enum import Enum

from src.dashboard.formatting import format_currency
from src.models.payment import Payment
from src.payments_api.client import PaymentsApiClient
from src.payments_api.errors import MollieError, RefundNotAllowed
from src.ports import ConfirmationPrompt, NotificationKind, PresentationPort
from src.utils.events import REFUND_SUCCEEDED, EventBus

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class RefundState(Enum):
    IDLE = "IDLE"
    CONFIRMING = "CONFIRMING"
    PROCESSING = "PROCESSING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class RefundOutcome(Enum):
    CANCELLED = "CANCELLED"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass
class RefundResult:
    payment_id: str
    outcome: RefundOutcome
    message: str | None = None


def refund_prompt(payment: Payment) -> ConfirmationPrompt:
    amount = format_currency(payment.amount.value, payment.amount.currency)
    description = payment.description or "No description"
    return ConfirmationPrompt(
        title="Refund Payment",
        message=f'Are you sure you want to refund {amount} for "{description}"?',
        primary_action="Refund",
        destructive=True,
    )


class RefundWorkflow:
    """Confirm, request and report a full refund of one payment.

    The workflow never edits the payment; on success it emits
    `refund.succeeded` and whoever owns the payment list re-fetches it.
    """

    def __init__(self, client: PaymentsApiClient, presenter: PresentationPort, events: EventBus):
        self.client = client
        self.presenter = presenter
        self.events = events
        self.state = RefundState.IDLE
        self.history: list[RefundState] = []

    def _enter(self, state: RefundState) -> None:
        self.state = state
        self.history.append(state)

    def run(self, payment: Payment) -> RefundResult:
        if not payment.is_refundable:
            raise RefundNotAllowed(f"Payment {payment.id} has status {payment.status!r}; only paid payments can be refunded")

        try:
            return self._run(payment)
        finally:
            self._enter(RefundState.IDLE)

    def _run(self, payment: Payment) -> RefundResult:
        self._enter(RefundState.CONFIRMING)
        if not self.presenter.confirm(refund_prompt(payment)):
            logger.info("Refund of %s cancelled", payment.id)
            return RefundResult(payment.id, RefundOutcome.CANCELLED)

        self._enter(RefundState.PROCESSING)
        self.presenter.notify(NotificationKind.ANIMATED, "Processing refund...")
        amount = format_currency(payment.amount.value, payment.amount.currency)

        try:
            self.client.create_refund(payment)
        except MollieError as e:
            return self._fail(payment, str(e) or UNKNOWN_ERROR_MESSAGE)
        except Exception:
            logger.exception("Unexpected error refunding %s", payment.id)
            return self._fail(payment, UNKNOWN_ERROR_MESSAGE)

        self._enter(RefundState.SUCCEEDED)
        logger.info("Refunded %s %s for %s", payment.amount.value, payment.amount.currency, payment.id)
        self.presenter.notify(NotificationKind.SUCCESS, "Refund Successful", f"Refunded {amount}")
        self.events.emit(REFUND_SUCCEEDED, payment)
        return RefundResult(payment.id, RefundOutcome.SUCCEEDED, f"Refunded {amount}")

    def _fail(self, payment: Payment, message: str) -> RefundResult:
        self._enter(RefundState.FAILED)
        logger.warning("Refund of %s failed: %s", payment.id, message)
        self.presenter.notify(NotificationKind.FAILURE, "Refund Failed", message)
        return RefundResult(payment.id, RefundOutcome.FAILED, message)
