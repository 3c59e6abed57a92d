from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from src.dashboard.formatting import format_currency, format_date, start_of_day
from src.models.payment import DEFAULT_CURRENCY, Amount, Payment, PaymentStatus, minor_units
from src.models.settlement import Settlement


@dataclass(frozen=True)
class TodayRevenue:
    total: Amount
    count: int

    @property
    def formatted_total(self) -> str:
        return format_currency(self.total.value, self.total.currency)


def paid_since_midnight(payments: Sequence[Payment], now: datetime | None = None) -> list[Payment]:
    """Paid payments created at or after local midnight.

    There is no upper bound: a payment timestamped later than `now` still counts.
    """
    midnight = start_of_day(now)
    return [
        p for p in payments
        if p.status == PaymentStatus.PAID.value and p.created_at >= midnight
    ]


def aggregate_today(payments: Sequence[Payment], now: datetime | None = None) -> TodayRevenue:
    """Sum and count of today's paid payments.

    The currency is taken from the first qualifying payment; amounts in
    other currencies are added as-is and the total is rounded to that
    currency's minor unit.
    """
    todays = paid_since_midnight(payments, now)
    if not todays:
        return TodayRevenue(total=Amount("0.00", DEFAULT_CURRENCY), count=0)

    currency = todays[0].amount.currency
    total = sum((p.amount.decimal for p in todays), Decimal(0))
    total = total.quantize(Decimal(1).scaleb(-minor_units(currency)), rounding=ROUND_HALF_UP)
    return TodayRevenue(
        total=Amount(str(total), currency),
        count=len(todays),
    )


@dataclass(frozen=True)
class SettlementForecast:
    """What the summary shows about the next payout.

    `is_loading` and "nothing scheduled" are separate states: a forecast with
    `is_loading=True` has no title or lines at all.
    """

    is_loading: bool
    title: str | None = None
    lines: tuple[str, ...] = ()

    @property
    def has_settlement(self) -> bool:
        return self.title == "Estimated next payout"


NO_SETTLEMENT_MESSAGE = "No upcoming settlement"


def describe_settlement(settlement: Settlement | None, is_loading: bool = False) -> SettlementForecast:
    if settlement is not None:
        return SettlementForecast(
            is_loading=is_loading,
            title="Estimated next payout",
            lines=(
                format_currency(settlement.amount.value, settlement.amount.currency),
                format_date(settlement.settlement_date),
            ),
        )
    if is_loading:
        return SettlementForecast(is_loading=True)
    return SettlementForecast(is_loading=False, title="Next payout", lines=(NO_SETTLEMENT_MESSAGE,))
