from .events import REFUND_SUCCEEDED, EventBus
from .factories import PaymentFactory, SettlementFactory

__all__ = [
    "REFUND_SUCCEEDED", "EventBus",
    "PaymentFactory", "SettlementFactory",
]
