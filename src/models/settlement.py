from dataclasses import dataclass
from datetime import date

from src.models.payment import Amount


@dataclass(frozen=True)
class Settlement:
    """The next scheduled payout to the merchant."""

    amount: Amount
    settlement_date: date

    @classmethod
    def from_api(cls, data: dict | None) -> "Settlement | None":
        """Parse `/v2/settlements/next`. Returns None when there is nothing scheduled."""
        if not data or not data.get("amount") or not data.get("settlementDate"):
            return None
        return cls(
            amount=Amount.from_api(data["amount"]),
            settlement_date=date.fromisoformat(data["settlementDate"][:10]),
        )
