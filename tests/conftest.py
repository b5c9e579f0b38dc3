import json
import os
import sys
import time

import pytest

# Ensure project root is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from flask_app import create_app  # noqa: E402

CARRIER_URL = "https://carrier.test/rates"

CARRIER_CONFIG = {
    "CONCEPT_USERNAME": "quote-user",
    "CONCEPT_PASSWORD": "quote-pass",
    "CONCEPT_AUTH_TOKEN": "quote-token",
    "CONCEPT_API_URL": CARRIER_URL,
    "CARRIER_TIMEOUT_SECONDS": 30.0,
    "VALIDATE_ZIP_CODES": True,
    "DEFAULT_MARKUP": 50.0,
}


class FakeResponse:
    """Just enough of ``requests.Response`` for the carrier client."""

    def __init__(self, status_code=200, payload=None, text=None, delay=0.0):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)
        self.delay = delay
        self.closed = False

    def iter_content(self, chunk_size=1):
        data = self.text.encode("utf-8")
        # A delayed response trickles in one byte at a time.
        step = 1 if self.delay else chunk_size
        for start in range(0, len(data), step):
            if self.delay:
                time.sleep(self.delay)
            yield data[start:start + step]

    def close(self):
        self.closed = True


class StubCarrier:
    """Records outbound rate requests and replays a canned answer."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(200, [])

    def respond(self, payload=None, status_code=200, text=None, delay=0.0):
        self.response = FakeResponse(status_code, payload, text, delay)

    def fail(self, exc):
        self.response = exc

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def carrier(monkeypatch):
    stub = StubCarrier()
    monkeypatch.setattr("quote.client.requests.post", stub.post)
    return stub


@pytest.fixture
def carrier_config():
    return dict(CARRIER_CONFIG)


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    app.config.update(CARRIER_CONFIG)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
