from .menu_bar import TransactionsMenuBarCommand
from .payments_list import PaymentsListCommand

__all__ = [
    "PaymentsListCommand",
    "TransactionsMenuBarCommand",
]
