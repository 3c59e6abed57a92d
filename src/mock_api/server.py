import json
import re
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Self

_REFUND_PATH = re.compile(r"^/v2/payments/(?P<payment_id>[^/]+)/refunds$")

UNAUTHORIZED_BODY = {
    "status": 401,
    "title": "Unauthorized Request",
    "detail": "Missing authentication, or failed to authenticate",
}


class _PaymentsApiHandler(BaseHTTPRequestHandler):
    """Serves the list, settlement and refund endpoints from in-memory state."""

    def _send_json(self, code: int, body) -> None:
        self.send_response(code)
        self.send_header("Content-Type", "application/hal+json")
        self.end_headers()
        if body is not None:
            self.wfile.write(json.dumps(body).encode())

    def _record(self, body=None) -> dict:
        config = self.server.config  # type: ignore[attr-defined]
        request = {
            "method": self.command,
            "path": self.path,
            "headers": dict(self.headers),
            "body": body,
        }
        with config["lock"]:
            config["requests"].append(request)
        return config

    def _authorized(self, config: dict) -> bool:
        token = config["access_token"]
        if token and self.headers.get("Authorization", "") != f"Bearer {token}":
            self._send_json(401, UNAUTHORIZED_BODY)
            return False
        return True

    def do_GET(self):
        config = self._record()
        if config["response_delay"] > 0:
            time.sleep(config["response_delay"])
        if not self._authorized(config):
            return

        path = self.path.split("?", 1)[0]
        if path == "/v2/payments":
            if config["payments_response"] is not None:
                self._send_json(*config["payments_response"])
                return
            with config["lock"]:
                payments = [dict(p) for p in config["payments"]]
            self._send_json(200, {
                "count": len(payments),
                "_embedded": {"payments": payments},
                "_links": {"self": {"href": self.path}},
            })
        elif path == "/v2/settlements/next":
            if config["settlement_response"] is not None:
                self._send_json(*config["settlement_response"])
            elif config["settlement"] is None:
                self._send_json(404, {"status": 404, "title": "Not Found", "detail": "No next settlement"})
            else:
                self._send_json(200, config["settlement"])
        else:
            self._send_json(404, {"status": 404, "title": "Not Found", "detail": f"No route for {path}"})

    def do_POST(self):
        content_length = int(self.headers.get("Content-Length", 0))
        raw = self.rfile.read(content_length)
        try:
            body = json.loads(raw) if raw else None
        except (json.JSONDecodeError, ValueError):
            body = None
        config = self._record(body)
        if config["response_delay"] > 0:
            time.sleep(config["response_delay"])
        if not self._authorized(config):
            return

        match = _REFUND_PATH.match(self.path)
        if match is None:
            self._send_json(404, {"status": 404, "title": "Not Found", "detail": f"No route for {self.path}"})
            return
        if config["refund_response"] is not None:
            self._send_json(*config["refund_response"])
            return
        if not isinstance(body, dict) or "amount" not in body:
            self._send_json(422, {"status": 422, "title": "Unprocessable Entity", "detail": "The amount is required"})
            return

        payment_id = match.group("payment_id")
        with config["lock"]:
            payment = next((p for p in config["payments"] if p["id"] == payment_id), None)
            if payment is None:
                self._send_json(404, {"status": 404, "title": "Not Found", "detail": "No payment exists with token " + payment_id})
                return
            if payment["status"] != "paid":
                self._send_json(422, {"status": 422, "title": "Unprocessable Entity", "detail": "The payment cannot be refunded"})
                return
            payment["status"] = "refunded"
            config["refund_counter"] += 1
            refund_id = f"re_mock{config['refund_counter']:04d}"

        self._send_json(201, {
            "resource": "refund",
            "id": refund_id,
            "paymentId": payment_id,
            "amount": body["amount"],
            "status": "pending",
        })

    def log_message(self, format, *args):
        """Suppress default request logging."""
        pass


class MockPaymentsApiServer:
    """Local stand-in for the payments API with scriptable responses."""

    def __init__(self, host: str = "127.0.0.1", port: int = 0, access_token: str | None = None):
        self._host = host
        self._port = port
        self._config = {
            "access_token": access_token,
            "payments": [],
            "settlement": None,
            "payments_response": None,
            "settlement_response": None,
            "refund_response": None,
            "response_delay": 0,
            "refund_counter": 0,
            "requests": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def set_payments(self, payments: list[dict]) -> Self:
        with self._config["lock"]:
            self._config["payments"] = [dict(p) for p in payments]
        return self

    def set_settlement(self, settlement: dict | None) -> Self:
        self._config["settlement"] = settlement
        return self

    def set_payments_response(self, code: int, body=None) -> Self:
        """Answer every payments listing with a fixed response."""
        self._config["payments_response"] = (code, body)
        return self

    def set_settlement_response(self, code: int, body=None) -> Self:
        self._config["settlement_response"] = (code, body)
        return self

    def set_refund_response(self, code: int, body=None) -> Self:
        """Answer every refund request with a fixed response instead of refunding."""
        self._config["refund_response"] = (code, body)
        return self

    def set_response_delay(self, seconds: float) -> Self:
        self._config["response_delay"] = seconds
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer((self._host, self._port), _PaymentsApiHandler)
        self._server.config = self._config  # type: ignore[attr-defined]
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}/v2"

    @property
    def port(self) -> int:
        return self._port

    def get_requests(self, method: str | None = None, path_prefix: str | None = None) -> list[dict]:
        with self._config["lock"]:
            requests = list(self._config["requests"])
        if method is not None:
            requests = [r for r in requests if r["method"] == method]
        if path_prefix is not None:
            requests = [r for r in requests if r["path"].startswith(path_prefix)]
        return requests

    def get_payment(self, payment_id: str) -> dict | None:
        with self._config["lock"]:
            for payment in self._config["payments"]:
                if payment["id"] == payment_id:
                    return dict(payment)
        return None

    def clear_requests(self) -> None:
        with self._config["lock"]:
            self._config["requests"].clear()
