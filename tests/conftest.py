"""Shared fixtures — fake collaborators so no database or network is touched."""
from datetime import datetime

import pytest

from olomouc_mcp.config import MapySettings, PostgresSettings, Settings
from olomouc_mcp.context import ToolContext, resolve_timezone
from olomouc_mcp.tools import build_registry


class FakeDatabase:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []
        self.disposed = False

    async def query(self, sql, params=None):
        self.calls.append((sql, dict(params or {})))
        if self.error:
            raise self.error
        return list(self.rows)

    async def dispose(self):
        self.disposed = True


class FakeHttp:
    def __init__(self, status=200, body="{}", error=None):
        self.status = status
        self.body = body
        self.error = error
        self.calls = []

    async def get(self, url, params=None, headers=None, timeout=10.0):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.status, self.body


class FixedClock:
    def __init__(self, moment=(2025, 11, 11, 14, 30, 5)):
        self.moment = moment

    def now(self, timezone="UTC"):
        return datetime(*self.moment, tzinfo=resolve_timezone(timezone))


class FakeRandom:
    """Deterministic: bytes count up, randint returns the low bound, choice the first item."""

    def __init__(self):
        self._next = 0

    def bytes(self, n):
        data = bytes((self._next + i) % 256 for i in range(n))
        self._next += n
        return data

    def randint(self, a, b):
        return a

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def settings():
    return Settings(
        postgres=PostgresSettings(host="db.local", database="olomouc", username="reader", password="secret"),
        mapy=MapySettings(api_key="test-mapy-key"),
    )


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def ctx(settings, fake_db, fake_http):
    return ToolContext(
        settings=settings,
        db=fake_db,
        http=fake_http,
        clock=FixedClock(),
        random=FakeRandom(),
    )


@pytest.fixture(scope="session")
def registry():
    return build_registry()
