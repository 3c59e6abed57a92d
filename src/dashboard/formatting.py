"""Display formatting in Dutch (nl-NL) conventions.

Everything here is a pure function of its arguments; "now" can be passed
explicitly and defaults to the local wall clock.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from src.models.payment import minor_units

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "US$",
    "GBP": "£",
    "JPY": "JP¥",
    "CAD": "C$",
    "AUD": "AU$",
}

DUTCH_MONTHS = ["jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep", "okt", "nov", "dec"]


def format_currency(value: str | Decimal | int, currency: str) -> str:
    """Format an amount like `€ 1.234,50`."""
    code = currency.upper()
    digits = minor_units(code)
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    rounded = amount.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)

    sign = "-" if rounded < 0 else ""
    integer, _, fraction = f"{abs(rounded):f}".partition(".")
    number = f"{int(integer):,}".replace(",", ".")
    if digits:
        number = f"{number},{fraction}"
    return f"{CURRENCY_SYMBOLS.get(code, code)} {sign}{number}"


def local_now(now: datetime | None = None) -> datetime:
    """An aware "now"; naive values are taken to be local time."""
    if now is None:
        return datetime.now().astimezone()
    return now if now.tzinfo else now.astimezone()


def start_of_day(now: datetime | None = None) -> datetime:
    """Local midnight of the day containing `now`."""
    return local_now(now).replace(hour=0, minute=0, second=0, microsecond=0)


def format_timestamp(ts: datetime, now: datetime | None = None) -> str:
    """Time of day for today's timestamps, `dd mon` for anything else."""
    current = local_now(now)
    local = ts.astimezone(current.tzinfo)
    if local.date() == current.date():
        return local.strftime("%H:%M")
    return f"{local.day:02d} {DUTCH_MONTHS[local.month - 1]}"


def format_date(d: date) -> str:
    """Numeric short date, `d-m-yyyy`."""
    return f"{d.day}-{d.month}-{d.year}"
