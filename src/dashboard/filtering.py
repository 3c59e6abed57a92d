from dataclasses import dataclass
from typing import Sequence

from src.dashboard.formatting import format_currency
from src.dashboard.presentation import Color, status_tag
from src.models.payment import Payment, PaymentStatus

ALL_STATUSES = "all"

# Order of the status section in the filter dropdown.
FILTER_STATUS_ORDER = [
    PaymentStatus.PAID,
    PaymentStatus.OPEN,
    PaymentStatus.PENDING,
    PaymentStatus.FAILED,
    PaymentStatus.REFUNDED,
    PaymentStatus.REFUND_PENDING,
    PaymentStatus.EXPIRED,
    PaymentStatus.CANCELED,
]


def filter_payments(payments: Sequence[Payment], selector: str) -> Sequence[Payment]:
    """Payments matching the selected status, in their original order.

    The "all" selector returns the input itself.
    """
    if selector == ALL_STATUSES:
        return payments
    return tuple(p for p in payments if p.status == selector)


def search_payments(payments: Sequence[Payment], query: str) -> Sequence[Payment]:
    """Case-insensitive match on description, id and formatted amount."""
    needle = query.strip().lower()
    if not needle:
        return payments
    return tuple(
        p for p in payments
        if needle in p.description.lower()
        or needle in p.id.lower()
        or needle in format_currency(p.amount.value, p.amount.currency).lower()
    )


class PaymentFilter:
    """Memoizes filter_payments on the identity of the collection and the selector."""

    def __init__(self):
        self._key: tuple[int, str] | None = None
        self._source: Sequence[Payment] | None = None
        self._result: Sequence[Payment] = ()

    def apply(self, payments: Sequence[Payment], selector: str) -> Sequence[Payment]:
        key = (id(payments), selector)
        # _source keeps the collection alive so its id() cannot be reused.
        if key != self._key or self._source is not payments:
            self._result = filter_payments(payments, selector)
            self._key = key
            self._source = payments
        return self._result


@dataclass(frozen=True)
class FilterOption:
    title: str
    value: str
    color: Color | None = None


def filter_options() -> list[FilterOption]:
    """Dropdown entries: "All Payments" followed by one entry per status."""
    options = [FilterOption("All Payments", ALL_STATUSES)]
    for status in FILTER_STATUS_ORDER:
        tag = status_tag(status.value)
        options.append(FilterOption(tag.label, status.value, tag.color))
    return options


def empty_state_message(selector: str) -> str:
    if selector == ALL_STATUSES:
        return "You don't have any payments yet."
    return f"No {selector} payments found. Try changing the filter."
