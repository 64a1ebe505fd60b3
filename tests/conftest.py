import json
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # This repo uses a src/ layout, so when running tests without an editable
    # install, we add <repo>/src to sys.path.
    repo_root = Path(__file__).resolve().parents[1]
    src_path = str(repo_root / "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


class FakeResponse:
    """Just enough of ``requests.Response`` for the provider layer."""

    def __init__(self, status_code=200, payload=None, headers=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeHTTP:
    """Records every ``requests.request`` call and replays queued responses."""

    def __init__(self):
        self.calls: list[dict] = []
        self._queue: list = []

    def queue(self, *responses):
        self._queue.extend(responses)

    def reply(self, payload=None, status_code=200, headers=None):
        self.queue(FakeResponse(status_code, payload, headers))

    def __call__(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._queue:
            raise AssertionError(f"unexpected request: {method} {url}")
        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_http(monkeypatch):
    import requests

    fake = FakeHTTP()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture
def api_keys(monkeypatch):
    monkeypatch.setenv("API_KEY_OPENAI", "sk-openai")
    monkeypatch.setenv("API_KEY_ANTHROPIC", "sk-anthropic")
    monkeypatch.setenv("API_KEY_XAI", "sk-xai")


@pytest.fixture
def no_api_keys(monkeypatch):
    for key in ("API_KEY_OPENAI", "API_KEY_ANTHROPIC", "API_KEY_XAI"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_response():
    return FakeResponse
