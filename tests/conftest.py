"""
Shared fixtures for client tests.

The network is replaced by httpx.MockTransport; every request the clients
send is recorded so tests can assert on paths, forms and call counts.
"""

import json
from typing import Callable, List, Optional
from urllib.parse import parse_qsl

import httpx
import pytest

BASE_URL = "https://spoo.me"

STATS_BODY = {
    "short_code": "ga",
    "url": "https://google.com",
    "total-clicks": 1520,
    "total_unique_clicks": 873,
    "creation-date": "2024-01-15",
    "expired": False,
    "last-click": "2024-06-01 10:11:12",
    "last-click-browser": "Chrome",
    "last-click-os": "Windows",
    "max-clicks": None,
    "block-bots": True,
    "browser": {"Chrome": 1000, "Firefox": 520},
    "country": {"India": 900, "Germany": 620},
    "counter": {"2024-06-01": 20, "2024-06-02": 31},
    "unique_browser": {"Chrome": 600, "Firefox": 273},
    "unique_referrer": {"github.com": 12},
    "average_daily_clicks": 3.5,
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def last_request(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None

    def last_form(self) -> dict:
        return dict(parse_qsl(self.last_request.content.decode()))


def shorten_handler(request: httpx.Request) -> httpx.Response:
    """Answer shorten/emoji requests like the service does."""
    form = dict(parse_qsl(request.content.decode()))
    slug = form.get("alias") or form.get("emojies") or "abc123"
    return httpx.Response(
        200,
        json={
            "short_url": f"{BASE_URL}/{slug}",
            "domain": "spoo.me",
            "original_url": form["url"],
        },
    )


def stats_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=STATS_BODY)


def status_handler(status_code: int, body=None, text: str = None, headers=None):
    """Build a handler answering every request with a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if body is not None:
            return httpx.Response(status_code, content=json.dumps(body), headers=headers)
        return httpx.Response(status_code, text=text or "", headers=headers)

    return handler


@pytest.fixture
def make_transport():
    """Factory fixture returning a RecordingTransport for a handler."""
    return RecordingTransport
