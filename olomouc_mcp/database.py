"""Async PostgreSQL access: lazily created engine, raw SQL queries returning dict rows."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .config import PostgresSettings
from .tools.errors import QueryError

logger = logging.getLogger(__name__)

MISSING_CONFIG = (
    "Missing required environment variables "
    "(POSTGRES_HOST, POSTGRES_DATABASE, POSTGRES_USERNAME)"
)


def database_url(settings: PostgresSettings) -> URL:
    return URL.create(
        "postgresql+asyncpg",
        username=settings.username,
        password=settings.password or None,
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )


class Database:
    """Read-only query access. The engine (and its pool) is created on first use."""

    def __init__(self, settings: PostgresSettings):
        self.settings = settings
        self._engine: Optional[AsyncEngine] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            if not self.settings.is_configured:
                raise QueryError(MISSING_CONFIG)
            self._engine = create_async_engine(
                database_url(self.settings),
                echo=False,
                pool_pre_ping=True,
            )
            logger.info(
                f"Database engine created for {self.settings.host}:{self.settings.port}/{self.settings.database}"
            )
        return self._engine

    async def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Run one statement and return its rows as column→value dicts."""
        engine = self.engine
        try:
            async with engine.connect() as conn:
                result = await conn.execute(text(sql), dict(params or {}))
                rows = [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            orig = getattr(e, "orig", None) or e
            logger.error(f"Query failed: {orig}")
            raise QueryError(f"Database Error: {orig}", details={"sql": sql}) from e
        except OSError as e:
            logger.error(f"Database unreachable: {e}")
            raise QueryError(f"Database Error: {e}") from e
        logger.debug(f"Query returned {len(rows)} rows")
        return rows

    async def dispose(self):
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
