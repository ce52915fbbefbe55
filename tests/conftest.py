import json

import pytest
import requests

from xpay_payments import ClientConfig, XPayClient


API_KEY = "sk_sandbox_test_key_12345"
MERCHANT_ID = "merchant_123"
WEBHOOK_SECRET = "whsec_test_secret"


class FakeResponse:
    """Just enough of ``requests.Response`` for the transport."""

    def __init__(self, status_code=200, body=None, reason="OK", text=None):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Records requests and replays queued responses or exceptions."""

    def __init__(self):
        self.calls = []
        self._queue = []
        self.closed = False

    def queue(self, item):
        self._queue.append(item)
        return self

    def reply(self, body, status_code=200, reason="OK"):
        return self.queue(FakeResponse(status_code, body, reason))

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._queue:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    return ClientConfig(api_key=API_KEY, merchant_id=MERCHANT_ID)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(config, session):
    return XPayClient(config, session=session)


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def payment_body():
    def build(status="pending", **overrides):
        body = {
            "id": "pay_123",
            "status": status,
            "amount": "10.00",
            "currency": "GHS",
            "payment_method": "momo",
            "reference_id": "ref_abc",
            "metadata": {"order": "42"},
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        }
        body.update(overrides)
        return body

    return build


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def timeout_error():
    return requests.exceptions.ReadTimeout("read timed out")


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")
