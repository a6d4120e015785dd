"""Server configuration: loaded once from the environment (and .env)."""
import logging
import os
from datetime import date
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Env vars take precedence over .env entries
load_dotenv(override=False)


class PostgresSettings(BaseModel):
    host: str = ""
    port: int = 5432
    database: str = ""
    username: str = ""
    password: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.database and self.username)


class MapySettings(BaseModel):
    api_key: str = ""
    base_url: str = "https://api.mapy.com/v1"
    timeout_s: float = 10.0


class Settings(BaseModel):
    app_name: str = "olomouc-mcp-server"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # HTTP transport
    http_host: str = "127.0.0.1"
    http_port: int = 8080

    postgres: PostgresSettings = Field(default_factory=PostgresSettings)
    mapy: MapySettings = Field(default_factory=MapySettings)

    # Snapshot day for meteo readings; None means today (UTC)
    meteo_data_date: Optional[date] = None


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Config: {key}={raw!r} is not an integer, using {default}")
        return default


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables."""
    env = os.environ if env is None else env
    return Settings(
        app_name=env.get("APP_NAME", "olomouc-mcp-server"),
        app_version=env.get("APP_VERSION", "1.0.0"),
        log_level=env.get("MCP_LOG_LEVEL", "INFO").upper(),
        http_host=env.get("MCP_HTTP_HOST", "127.0.0.1"),
        http_port=_int(env, "MCP_HTTP_PORT", 8080),
        postgres=PostgresSettings(
            host=env.get("POSTGRES_HOST", ""),
            port=_int(env, "POSTGRES_PORT", 5432),
            database=env.get("POSTGRES_DATABASE", ""),
            username=env.get("POSTGRES_USERNAME", ""),
            password=env.get("POSTGRES_PASSWORD", ""),
        ),
        mapy=MapySettings(api_key=env.get("MAPY_API_KEY", "")),
        meteo_data_date=env.get("METEO_DATA_DATE") or None,
    )


def describe(settings: Settings) -> str:
    """One-line config summary with secrets masked."""
    pg = settings.postgres
    pg_desc = f"{pg.username}@{pg.host}:{pg.port}/{pg.database}" if pg.is_configured else "NOT CONFIGURED"
    key = settings.mapy.api_key
    mapy_key = "***" + key[-4:] if len(key) > 4 else ("EMPTY" if not key else "***")
    return f"Config: postgres={pg_desc}, mapy key={mapy_key}, log_level={settings.log_level}"
