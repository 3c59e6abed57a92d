import os
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "https://api.mollie.com/v2"
DEFAULT_DASHBOARD_URL = "https://my.mollie.com/dashboard/payments?period=today&status=paid"
DEFAULT_PAYMENT_LIMIT = 250


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    dashboard_url: str = DEFAULT_DASHBOARD_URL
    payment_limit: int = DEFAULT_PAYMENT_LIMIT
    request_timeout: float | None = None  # None waits indefinitely
    access_token: str | None = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        timeout = env.get("MOLLIE_REQUEST_TIMEOUT")
        return cls(
            api_base_url=env.get("MOLLIE_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            dashboard_url=env.get("MOLLIE_DASHBOARD_URL", DEFAULT_DASHBOARD_URL),
            payment_limit=int(env.get("MOLLIE_PAYMENT_LIMIT", DEFAULT_PAYMENT_LIMIT)),
            request_timeout=float(timeout) if timeout else None,
            access_token=env.get("MOLLIE_ACCESS_TOKEN") or None,
        )
