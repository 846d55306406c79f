"""Shared fakes for the HTTP transport."""

import json

import pytest

from Tokbox import Tokbox

API_KEY = "100"
PARTNER_SECRET = "s3cr3t-partner"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, url=""):
        self.status_code = status_code
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text
        self.content = text.encode("utf-8")
        self.url = url

    def json(self):
        return json.loads(self.text)


class FakeHttpSession:
    """Records requests and replays queued responses."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, status_code=200, payload=None, text=None):
        self.responses.append(FakeResponse(status_code, payload, text))

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0) if self.responses else FakeResponse()
        response.url = url
        return response


@pytest.fixture
def http_session():
    return FakeHttpSession()


@pytest.fixture
def client(http_session):
    return Tokbox(API_KEY, PARTNER_SECRET, api_host="https://api.example.test", http_session=http_session)
