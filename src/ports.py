from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class NotificationKind(Enum):
    ANIMATED = "animated"  # an operation is in progress
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ConfirmationPrompt:
    title: str
    message: str
    primary_action: str
    destructive: bool = False


class PresentationPort(Protocol):
    """What the core needs from the host application's UI."""

    def render_list(self, view) -> None: ...

    def render_menu_bar(self, view) -> None: ...

    def notify(self, kind: NotificationKind, title: str, message: str | None = None) -> None: ...

    def confirm(self, prompt: ConfirmationPrompt) -> bool: ...


class TokenSource(Protocol):
    """Supplies a bearer token. Raises on failure."""

    def acquire(self) -> str: ...
