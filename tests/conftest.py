"""
Shared fixtures: call-counting WHOIS stubs, fake clocks, app/client factories.
No test here talks to a real WHOIS server.
"""

import threading
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from domain_age.cache import ResultCache
from domain_age.checkers.whois_checker import WHOISChecker
from domain_age.config import Settings
from domain_age.main import create_app

NOW = datetime(2025, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeTimer:
    """Monotonic stand-in for TTLCache; advance() moves time forward."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubWhois:
    """Fetch/parse pair that counts fetch calls and serves canned records."""

    def __init__(self, creation_date="2024-01-15T00:00:00Z", fetch_error=None, parse_error=None):
        self.creation_date = creation_date
        self.fetch_error = fetch_error
        self.parse_error = parse_error
        self.calls = []
        self._lock = threading.Lock()

    def fetch(self, domain: str) -> str:
        with self._lock:
            self.calls.append(domain)
        if self.fetch_error is not None:
            raise self.fetch_error
        return f"Domain Name: {domain.upper()}\n"

    def parse(self, domain: str, text: str) -> dict:
        if self.parse_error is not None:
            raise self.parse_error
        return {"domain_name": domain, "creation_date": self.creation_date}


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def stub():
    return StubWhois()


@pytest.fixture
def settings():
    return Settings(cache_ttl_seconds=3600, cache_sweep_seconds=60)


@pytest.fixture
def make_checker(timer):
    def _make(stub, settings=None, clock=lambda: NOW):
        settings = settings or Settings(cache_ttl_seconds=3600)
        cache = ResultCache(ttl=settings.cache_ttl_seconds, maxsize=settings.cache_maxsize, timer=timer)
        return WHOISChecker(
            cache,
            fetch=stub.fetch,
            parse=stub.parse,
            cache_failures=settings.cache_failed_lookups,
            normalize=settings.normalize_domains,
            clock=clock,
        )
    return _make


@pytest.fixture
def make_client(make_checker, settings):
    def _make(stub, settings=settings):
        app = create_app(settings=settings, checker=make_checker(stub, settings))
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, stub):
    return make_client(stub)
