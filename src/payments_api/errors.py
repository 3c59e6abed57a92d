class MollieError(Exception):
    """Base class for everything this package raises."""


class ApiError(MollieError):
    """A non-2xx response from the payments API.

    The message prefers the structured error envelope: `detail`, then
    `title`, then a generic status line.
    """

    def __init__(self, status_code: int | None, detail: str | None = None, title: str | None = None):
        self.status_code = status_code
        self.detail = detail
        self.title = title
        super().__init__(detail or title or f"HTTP error! Status: {status_code}")

    @property
    def message(self) -> str:
        return str(self)


class TransportError(ApiError):
    """The request never produced a response (connection error, timeout)."""

    def __init__(self, reason: str):
        super().__init__(status_code=None, detail=reason)


class AuthFailure(MollieError):
    """Access token acquisition failed."""


class FetchFailure(MollieError):
    """Payments or settlement data could not be retrieved or parsed."""


class RefundNotAllowed(MollieError):
    """A refund was attempted on a payment that is not paid."""
