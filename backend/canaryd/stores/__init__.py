"""Score store backends."""
from .base import ScoreStore
from .memory_store import InMemoryScoreStore
from .redis_store import RedisScoreStore
from .sql_store import SQLScoreStore

REDIS_SCHEMES = ("redis://", "rediss://", "unix://")
SQL_SCHEMES = ("sqlite+aiosqlite://", "postgresql+asyncpg://")


def create_score_store(url: str, timeout: float = 5.0) -> ScoreStore:
    """Build the score store for a (normalized) storage URL."""
    if url.startswith(REDIS_SCHEMES):
        return RedisScoreStore(url, timeout=timeout)
    if url.startswith(SQL_SCHEMES):
        return SQLScoreStore(url, timeout=timeout)
    if url.startswith("memory://"):
        return InMemoryScoreStore()
    raise ValueError(f"Unsupported storage URL: {url}")


__all__ = [
    "ScoreStore",
    "InMemoryScoreStore",
    "RedisScoreStore",
    "SQLScoreStore",
    "create_score_store",
]
