"""
Pytest configuration and shared fixtures.

The upstream APOD API is never contacted: every test wires an ApodService to
an httpx.MockTransport, and TTL behavior is driven by a fake clock.
"""

import os

# ── Must be set BEFORE any app imports ────────────────────────────────────────
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("NASA_API_KEY", "test-key")
os.environ.setdefault("GIT_SHA", "abc1234")

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from services.apod import ApodService
from services.cache import TTLCache

BASE_URL = "https://apod.test/planetary/apod"

IMAGE_PAYLOAD = {
    "date": "2020-07-14",
    "title": "Comet NEOWISE over Stonehenge",
    "explanation": "A comet rises over an ancient monument.",
    "media_type": "image",
    "url": "https://apod.nasa.gov/apod/image/2007/neowise_1024.jpg",
    "hdurl": "https://apod.nasa.gov/apod/image/2007/neowise_2048.jpg",
    "copyright": "Jane Doe",
}

VIDEO_PAYLOAD = {
    "date": "2021-02-19",
    "title": "Perseverance Landing",
    "explanation": "Footage from the descent stage.",
    "media_type": "video",
    "url": "https://www.youtube.com/embed/4czjS9h4Fpg",
}


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Scripted APOD upstream that records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: dict | str = IMAGE_PAYLOAD
        self.error: Exception | None = None

    def respond(self, body, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def service(clock, upstream):
    return ApodService(
        api_key="test-key",
        cache=TTLCache(ttl_seconds=3600, clock=clock),
        base_url=BASE_URL,
        transport=httpx.MockTransport(upstream.handler),
    )


@pytest.fixture
def client(service):
    """TestClient backed by the fake upstream."""
    with TestClient(create_app(Settings(), apod_service=service), raise_server_exceptions=False) as c:
        yield c
