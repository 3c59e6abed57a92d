from .filtering import ALL_STATUSES, PaymentFilter, filter_payments, search_payments
from .formatting import format_currency, format_date, format_timestamp
from .presentation import resolve_method_icon, status_tag
from .revenue import TodayRevenue, aggregate_today, describe_settlement

__all__ = [
    "ALL_STATUSES", "PaymentFilter", "filter_payments", "search_payments",
    "format_currency", "format_date", "format_timestamp",
    "resolve_method_icon", "status_tag",
    "TodayRevenue", "aggregate_today", "describe_settlement",
]
