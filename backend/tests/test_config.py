"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from canaryd.config import Settings, get_storage_url


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in ("PORT", "STORAGE_URL", "REDIS_URL", "RETENTION"):
            monkeypatch.delenv(name, raising=False)
        s = Settings()
        assert s.port == 5000
        assert s.storage_url == "redis://localhost:6379"
        assert s.retention == 60
        assert s.default_range == 10
        assert s.skip_malformed_entries is True
        assert s.exit_on_storage_error is False

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("RETENTION", "3600")
        monkeypatch.setenv("STORAGE_URL", "memory://")
        s = Settings()
        assert s.port == 8080
        assert s.retention == 3600
        assert s.storage_url == "memory://"

    def test_redis_url_alias(self, monkeypatch) -> None:
        monkeypatch.delenv("STORAGE_URL", raising=False)
        monkeypatch.setenv("REDIS_URL", "redis://cache:6380/1")
        assert Settings().storage_url == "redis://cache:6380/1"


class TestStorageUrl:
    @pytest.mark.parametrize("url, expected", [
        ("postgres://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("postgresql://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("postgresql+asyncpg://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("sqlite:///data/canaryd.db", "sqlite+aiosqlite:///data/canaryd.db"),
        ("redis://localhost:6379", "redis://localhost:6379"),
        ("memory://", "memory://"),
    ])
    def test_normalization(self, url, expected) -> None:
        assert get_storage_url(Settings(storage_url=url)) == expected
