"""Collaborators handed to tool executors: clock, randomness, database and HTTP."""
import random
import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import Settings
from .database import Database
from .http_client import HttpClient

T = TypeVar("T")


class Clock:
    """Wall clock. Tests swap in a fixed clock."""

    def now(self, timezone: str = "UTC") -> datetime:
        return datetime.now(resolve_timezone(timezone))


def resolve_timezone(name: str):
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown or bad timezone ({name})") from None


class RandomSource:
    """Cryptographic randomness for UUIDs plus helpers for simulated data."""

    def __init__(self):
        self._rng = random.SystemRandom()

    def bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)


@dataclass
class ToolContext:
    settings: Settings
    db: Database
    http: HttpClient
    clock: Clock = field(default_factory=Clock)
    random: RandomSource = field(default_factory=RandomSource)


def build_context(settings: Settings, db: Optional[Database] = None, http: Optional[HttpClient] = None) -> ToolContext:
    return ToolContext(
        settings=settings,
        db=db or Database(settings.postgres),
        http=http or HttpClient(),
    )
