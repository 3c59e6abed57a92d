from dataclasses import dataclass
from enum import Enum

from src.models.payment import PaymentStatus


class Color(Enum):
    GREEN = "green"
    BLUE = "blue"
    ORANGE = "orange"
    RED = "red"
    PURPLE = "purple"
    MAGENTA = "magenta"
    SECONDARY = "secondary-text"


@dataclass(frozen=True)
class Icon:
    source: str
    builtin: bool = False  # True for host-provided icons, False for bundled assets


DEFAULT_METHOD_ICON = Icon("bank-note", builtin=True)

_METHOD_ASSETS = {
    "creditcard": "creditcard.png",
    "ideal": "ideal.png",
    "bancontact": "bancontact.png",
    "banktransfer": "banktransfer.png",
    "paypal": "paypal.png",
    "applepay": "applepay.png",
    "klarnapaylater": "klarna.png",
    "klarnasliceit": "klarna.png",
    "giftcard": "giftcard.png",
    "voucher": "voucher.png",
    "sofort": "sofort.png",
    "eps": "eps.png",
    "giropay": "giropay.png",
    "belfius": "belfius.png",
    "kbc": "kbc.png",
    "przelewy24": "przelewy24.png",
    "mybank": "mybank.png",
}


def resolve_method_icon(method: str | None) -> Icon:
    if not method:
        return DEFAULT_METHOD_ICON
    asset = _METHOD_ASSETS.get(method.lower())
    if asset is None:
        return DEFAULT_METHOD_ICON
    return Icon(f"payment-methods/{asset}")


@dataclass(frozen=True)
class StatusTag:
    label: str
    color: Color


_STATUS_TAGS = {
    PaymentStatus.PAID.value: StatusTag("Paid", Color.GREEN),
    PaymentStatus.OPEN.value: StatusTag("Open", Color.BLUE),
    PaymentStatus.PENDING.value: StatusTag("Pending", Color.ORANGE),
    PaymentStatus.FAILED.value: StatusTag("Failed", Color.RED),
    PaymentStatus.EXPIRED.value: StatusTag("Expired", Color.SECONDARY),
    PaymentStatus.CANCELED.value: StatusTag("Canceled", Color.SECONDARY),
    PaymentStatus.REFUNDED.value: StatusTag("Refunded", Color.PURPLE),
    PaymentStatus.REFUND_PENDING.value: StatusTag("Refund Pending", Color.MAGENTA),
}


def status_tag(status: str) -> StatusTag:
    """Label and colour for a status pill. Unknown statuses are shown as-is."""
    return _STATUS_TAGS.get(status, StatusTag(status, Color.SECONDARY))
