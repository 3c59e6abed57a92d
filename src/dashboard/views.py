"""View models handed to the host through PresentationPort."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Sequence

from src.dashboard.filtering import (
    ALL_STATUSES,
    FilterOption,
    PaymentFilter,
    empty_state_message,
    filter_options,
    filter_payments,
    search_payments,
)
from src.dashboard.formatting import format_currency, format_timestamp
from src.dashboard.presentation import DEFAULT_METHOD_ICON, Icon, StatusTag, resolve_method_icon, status_tag
from src.dashboard.revenue import aggregate_today, describe_settlement
from src.models.payment import Payment
from src.models.settlement import Settlement

WARNING_ICON = Icon("warning", builtin=True)
OPEN_EXTERNAL_ICON = Icon("arrow-ne", builtin=True)
REFUND_ICON = Icon("arrow-counter-clockwise", builtin=True)


class ActionKind(Enum):
    OPEN_URL = "open_url"
    REFUND = "refund"
    COPY = "copy"


@dataclass(frozen=True)
class RowAction:
    kind: ActionKind
    title: str
    value: str
    shortcut: str | None = None
    destructive: bool = False
    icon: Icon | None = None


@dataclass(frozen=True)
class ListItem:
    id: str
    icon: Icon
    title: str
    subtitle: str
    tag: StatusTag
    amount: str
    actions: tuple[RowAction, ...]


@dataclass(frozen=True)
class EmptyView:
    title: str
    description: str
    icon: Icon = DEFAULT_METHOD_ICON


@dataclass(frozen=True)
class ListView:
    is_loading: bool
    items: tuple[ListItem, ...] = ()
    empty_view: EmptyView | None = None
    filter_value: str = ALL_STATUSES
    filter_options: list[FilterOption] = field(default_factory=filter_options)
    search_text: str = ""
    search_placeholder: str = "Search payments..."


def row_actions(payment: Payment) -> tuple[RowAction, ...]:
    """Actions for one row. Refund is only offered for paid payments."""
    amount = format_currency(payment.amount.value, payment.amount.currency)
    actions = [RowAction(ActionKind.OPEN_URL, "Open in Mollie Dashboard", payment.dashboard_url)]
    if payment.is_refundable:
        actions.append(
            RowAction(ActionKind.REFUND, "Refund Payment", payment.id, shortcut="cmd+r", destructive=True, icon=REFUND_ICON)
        )
    actions.append(RowAction(ActionKind.COPY, "Copy Payment Id to Clipboard", payment.id))
    actions.append(RowAction(ActionKind.COPY, "Copy Amount to Clipboard", amount, shortcut="cmd+shift+c"))
    return tuple(actions)


def list_item(payment: Payment, now: datetime | None = None) -> ListItem:
    return ListItem(
        id=payment.id,
        icon=resolve_method_icon(payment.method),
        title=payment.description or "No description",
        subtitle=format_timestamp(payment.created_at, now),
        tag=status_tag(payment.status),
        amount=format_currency(payment.amount.value, payment.amount.currency),
        actions=row_actions(payment),
    )


def build_list_view(
    payments: Sequence[Payment],
    selector: str = ALL_STATUSES,
    is_loading: bool = False,
    search_text: str = "",
    now: datetime | None = None,
    payment_filter: PaymentFilter | None = None,
) -> ListView:
    if payment_filter is not None:
        visible = payment_filter.apply(payments, selector)
    else:
        visible = filter_payments(payments, selector)
    visible = search_payments(visible, search_text)

    empty_view = None
    if not is_loading and not visible:
        empty_view = EmptyView("No Payments Found", empty_state_message(selector))

    return ListView(
        is_loading=is_loading,
        items=tuple(list_item(p, now) for p in visible),
        empty_view=empty_view,
        filter_value=selector,
        search_text=search_text,
    )


def auth_failed_list_view(message: str) -> ListView:
    return ListView(is_loading=False, empty_view=EmptyView("Authorization Failed", message, WARNING_ICON))


@dataclass(frozen=True)
class MenuBarItem:
    title: str
    icon: Icon | None = None
    url: str | None = None


@dataclass(frozen=True)
class MenuBarSection:
    title: str | None
    items: tuple[MenuBarItem, ...]


@dataclass(frozen=True)
class MenuBarView:
    title: str | None
    is_loading: bool
    sections: tuple[MenuBarSection, ...] = ()
    icon: Icon | None = None


def build_menu_bar(
    payments: Sequence[Payment],
    settlement: Settlement | None,
    dashboard_url: str,
    payments_loading: bool = False,
    settlement_loading: bool = False,
    now: datetime | None = None,
) -> MenuBarView:
    revenue = aggregate_today(payments, now)
    total = revenue.formatted_total

    sections = [
        MenuBarSection(
            "Today's revenue",
            (MenuBarItem(f"Total: {total}"), MenuBarItem(f"Transactions: {revenue.count}")),
        )
    ]
    forecast = describe_settlement(settlement, settlement_loading)
    if forecast.title is not None:
        sections.append(MenuBarSection(forecast.title, tuple(MenuBarItem(line) for line in forecast.lines)))
    sections.append(MenuBarSection(None, (MenuBarItem("Open Mollie", icon=OPEN_EXTERNAL_ICON, url=dashboard_url),)))

    return MenuBarView(
        title=f"Today: {total}",
        is_loading=payments_loading or settlement_loading,
        sections=tuple(sections),
    )


def auth_failed_menu_bar() -> MenuBarView:
    return MenuBarView(title="Auth Failed", is_loading=False, icon=WARNING_ICON)
