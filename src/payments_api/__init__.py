from .client import PaymentsApiClient
from .errors import (
    ApiError,
    AuthFailure,
    FetchFailure,
    MollieError,
    RefundNotAllowed,
    TransportError,
)

__all__ = [
    "PaymentsApiClient",
    "ApiError",
    "AuthFailure",
    "FetchFailure",
    "MollieError",
    "RefundNotAllowed",
    "TransportError",
]
