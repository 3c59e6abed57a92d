import logging
from dataclasses import dataclass
from enum import Enum

from src.payments_api.errors import AuthFailure
from src.ports import NotificationKind, PresentationPort, TokenSource

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    LOADING = "LOADING"
    READY = "READY"
    FAILED = "FAILED"


@dataclass
class SessionState:
    status: SessionStatus
    token: str | None = None
    error: AuthFailure | None = None


class StaticTokenSource:
    """Hands out a token known up front, e.g. from MOLLIE_ACCESS_TOKEN."""

    def __init__(self, token: str | None):
        self._token = token

    def acquire(self) -> str:
        if not self._token:
            raise AuthFailure("No access token configured. Set MOLLIE_ACCESS_TOKEN.")
        return self._token


class SessionBootstrap:
    """Acquires the access token once per activation.

    Nothing may be fetched until `state.status` is READY. A failed
    activation stays failed; retrying means creating a new session.
    """

    def __init__(self, token_source: TokenSource, presenter: PresentationPort | None = None):
        self._token_source = token_source
        self._presenter = presenter
        self.state = SessionState(SessionStatus.LOADING)
        self._activated = False

    @property
    def token(self) -> str | None:
        return self.state.token

    def activate(self) -> SessionState:
        if self._activated:
            return self.state
        self._activated = True

        try:
            token = self._token_source.acquire()
        except Exception as e:
            error = e if isinstance(e, AuthFailure) else AuthFailure(str(e) or type(e).__name__)
            logger.error("Authorization failed: %s", error)
            self.state = SessionState(SessionStatus.FAILED, error=error)
            if self._presenter is not None:
                self._presenter.notify(NotificationKind.FAILURE, "Authorization Failed", str(error))
            return self.state

        logger.info("Session ready")
        self.state = SessionState(SessionStatus.READY, token=token)
        return self.state
