"""Application configuration from environment variables."""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # HTTP server bind address and port
    host: str = "0.0.0.0"
    port: int = 5000

    # Score store URL
    # redis://host:port/db, sqlite+aiosqlite:///path, postgresql+asyncpg://..., memory://
    storage_url: str = Field(
        default="redis://localhost:6379",
        validation_alias=AliasChoices("storage_url", "redis_url"),
    )

    # Seconds of measurements kept per check (trimmed on every write)
    retention: int = 60

    # Query window in seconds when the client sends no range
    default_range: int = 10

    # Upper bound for a single score store call, in seconds
    storage_timeout: float = 5.0

    # Skip stored entries that no longer decode instead of failing the query
    skip_malformed_entries: bool = True

    # Terminate the process on storage failures (for supervised restarts)
    exit_on_storage_error: bool = False

    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        case_sensitive = False
        populate_by_name = True


settings = Settings()


def get_storage_url(config: Settings | None = None) -> str:
    """Get the score store URL.

    Normalizes URLs to the async drivers SQLAlchemy needs:
    1. Heroku-style postgres:// and postgresql:// -> postgresql+asyncpg://
    2. Plain sqlite:// -> sqlite+aiosqlite://
    Redis and memory URLs are returned unchanged.
    """
    url = (config or settings).storage_url
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://"):
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url
