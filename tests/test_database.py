"""Tests for database.py — configuration checks and error mapping (no live server)."""
import pytest
from sqlalchemy.exc import OperationalError

from olomouc_mcp.config import PostgresSettings
from olomouc_mcp.database import MISSING_CONFIG, Database, database_url
from olomouc_mcp.tools.errors import QueryError


class _FailingConnection:
    def __init__(self, error):
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, statement, params=None):
        raise self.error


class _FailingEngine:
    def __init__(self, error):
        self.error = error
        self.disposed = False

    def connect(self):
        return _FailingConnection(self.error)

    async def dispose(self):
        self.disposed = True


def test_database_url():
    url = database_url(PostgresSettings(host="db", port=5433, database="olomouc", username="u", password="p@ss"))
    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "db"
    assert url.port == 5433
    assert url.database == "olomouc"
    assert url.password == "p@ss"


def test_empty_password_omitted():
    url = database_url(PostgresSettings(host="db", database="olomouc", username="u"))
    assert url.password is None


@pytest.mark.asyncio
async def test_unconfigured_query_fails_fast():
    db = Database(PostgresSettings(host="db"))
    with pytest.raises(QueryError) as exc:
        await db.query("SELECT 1")
    assert exc.value.message == MISSING_CONFIG


@pytest.mark.asyncio
async def test_driver_error_mapped():
    db = Database(PostgresSettings(host="db", database="d", username="u"))
    db._engine = _FailingEngine(OperationalError("SELECT 1", {}, Exception("connection refused")))
    with pytest.raises(QueryError) as exc:
        await db.query("SELECT 1")
    assert exc.value.message == "Database Error: connection refused"


@pytest.mark.asyncio
async def test_socket_error_mapped():
    db = Database(PostgresSettings(host="db", database="d", username="u"))
    db._engine = _FailingEngine(ConnectionRefusedError("refused"))
    with pytest.raises(QueryError) as exc:
        await db.query("SELECT 1")
    assert "refused" in exc.value.message


@pytest.mark.asyncio
async def test_dispose_releases_engine():
    db = Database(PostgresSettings(host="db", database="d", username="u"))
    engine = _FailingEngine(None)
    db._engine = engine
    await db.dispose()
    assert engine.disposed
    assert db._engine is None
    # disposing twice is a no-op
    await db.dispose()
