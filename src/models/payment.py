from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

DEFAULT_CURRENCY = "EUR"

# ISO-4217 currencies whose minor unit is not two digits.
ZERO_DECIMAL_CURRENCIES = {"BIF", "CLP", "DJF", "GNF", "ISK", "JPY", "KMF", "KRW", "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF"}
THREE_DECIMAL_CURRENCIES = {"BHD", "IQD", "JOD", "KWD", "LYD", "OMR", "TND"}


def minor_units(currency: str) -> int:
    """Number of decimal digits used by a currency."""
    code = currency.upper()
    if code in ZERO_DECIMAL_CURRENCIES:
        return 0
    if code in THREE_DECIMAL_CURRENCIES:
        return 3
    return 2


class PaymentStatus(Enum):
    PAID = "paid"
    OPEN = "open"
    PENDING = "pending"
    FAILED = "failed"
    EXPIRED = "expired"
    CANCELED = "canceled"
    REFUNDED = "refunded"
    REFUND_PENDING = "refund-pending"


@dataclass(frozen=True)
class Amount:
    value: str
    currency: str

    def __post_init__(self):
        try:
            parsed = Decimal(self.value)
        except (InvalidOperation, TypeError, ValueError):
            raise ValueError(f"Invalid amount value: {self.value!r}") from None
        if not parsed.is_finite() or parsed < 0:
            raise ValueError(f"Amount must be a non-negative number: {self.value!r}")
        if -parsed.as_tuple().exponent > minor_units(self.currency):
            raise ValueError(
                f"Amount {self.value!r} exceeds {minor_units(self.currency)} decimals for {self.currency}"
            )

    @property
    def decimal(self) -> Decimal:
        return Decimal(self.value)

    @classmethod
    def from_api(cls, data: dict) -> "Amount":
        return cls(value=str(data["value"]), currency=data["currency"])

    def to_api(self) -> dict:
        return {"currency": self.currency, "value": self.value}


@dataclass(frozen=True)
class Payment:
    id: str
    amount: Amount
    description: str
    status: str  # a PaymentStatus value, or whatever unknown string the API sent
    method: str | None
    created_at: datetime
    dashboard_url: str

    @property
    def is_refundable(self) -> bool:
        """Refunds are only offered for paid payments."""
        return self.status == PaymentStatus.PAID.value

    @classmethod
    def from_api(cls, data: dict) -> "Payment":
        """Build a Payment from a record of the `/v2/payments` response."""
        links = data.get("_links") or {}
        dashboard = links.get("dashboard") or {}
        return cls(
            id=data["id"],
            amount=Amount.from_api(data["amount"]),
            description=data.get("description") or "",
            status=data["status"],
            method=data.get("method"),
            created_at=_parse_timestamp(data["createdAt"]),
            dashboard_url=dashboard.get("href", ""),
        )


def _parse_timestamp(value: str) -> datetime:
    """ISO-8601 to an aware datetime; strings without an offset are local time."""
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.astimezone()
