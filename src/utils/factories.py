import uuid
from datetime import date, datetime, timedelta, timezone

from src.models.payment import Payment
from src.models.settlement import Settlement


class PaymentFactory:
    """Factory for payment records shaped like the `/v2/payments` response."""

    @staticmethod
    def payload(**overrides) -> dict:
        payment_id = overrides.pop("id", f"tr_{uuid.uuid4().hex[:10]}")
        created_at = overrides.pop("created_at", datetime.now(timezone.utc))
        if isinstance(created_at, datetime):
            created_at = created_at.isoformat()

        data = {
            "resource": "payment",
            "id": payment_id,
            "mode": "test",
            "amount": {
                "value": str(overrides.pop("value", "10.00")),
                "currency": overrides.pop("currency", "EUR"),
            },
            "description": overrides.pop("description", f"Order {payment_id[-4:]}"),
            "status": overrides.pop("status", "paid"),
            "method": overrides.pop("method", "ideal"),
            "createdAt": created_at,
            "_links": {
                "dashboard": {
                    "href": f"https://my.mollie.com/dashboard/payments/{payment_id}",
                    "type": "text/html",
                },
            },
        }
        data.update(overrides)
        return data

    @staticmethod
    def create(**overrides) -> Payment:
        return Payment.from_api(PaymentFactory.payload(**overrides))

    @staticmethod
    def batch(count: int, **overrides) -> list[Payment]:
        """Payments one minute apart, newest first."""
        start = overrides.pop("created_at", datetime.now(timezone.utc))
        return [
            PaymentFactory.create(created_at=start - timedelta(minutes=i), **overrides)
            for i in range(count)
        ]


class SettlementFactory:
    """Factory for `/v2/settlements/next` bodies."""

    @staticmethod
    def payload(**overrides) -> dict:
        settlement_date = overrides.pop("settlement_date", date.today() + timedelta(days=2))
        if isinstance(settlement_date, date):
            settlement_date = settlement_date.isoformat()
        data = {
            "resource": "settlement",
            "id": overrides.pop("id", "next"),
            "status": "open",
            "amount": {
                "value": str(overrides.pop("value", "1250.00")),
                "currency": overrides.pop("currency", "EUR"),
            },
            "settlementDate": settlement_date,
        }
        data.update(overrides)
        return data

    @staticmethod
    def create(**overrides) -> Settlement:
        return Settlement.from_api(SettlementFactory.payload(**overrides))
