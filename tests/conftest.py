from __future__ import annotations

import json
from typing import List, Optional

import pytest
import requests


def make_response(status_code: int, payload=None, text: Optional[str] = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    r.url = "http://example.test"
    r.encoding = "utf-8"
    if text is None:
        text = json.dumps(payload if payload is not None else {})
    r._content = text.encode("utf-8")  # type: ignore[attr-defined]
    r.headers["Content-Type"] = "application/json"
    return r


class FakeServer:
    """Replays a scripted list of responses for requests.request.

    Items may be status codes, requests.Response objects or exceptions to
    raise. The last item repeats once the script runs out.
    """

    def __init__(self, script):
        self.script = list(script)
        self.calls: List[dict] = []

    def __call__(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, int):
            return make_response(item, {"status": item})
        return item


@pytest.fixture
def fake_server(monkeypatch):
    def _install(*script) -> FakeServer:
        server = FakeServer(script)
        monkeypatch.setattr(requests, "request", server)
        return server

    return _install


@pytest.fixture
def sleeps() -> List[float]:
    return []
