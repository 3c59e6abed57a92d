from .payment import Amount, Payment, PaymentStatus, minor_units
from .settlement import Settlement

__all__ = [
    "Amount", "Payment", "PaymentStatus", "minor_units",
    "Settlement",
]
