"""Tests for the ingestion service."""

from __future__ import annotations

import logging

import pytest

from canaryd.exceptions import StorageError
from canaryd.services.ingestion import IngestionService
from canaryd.services.repository import MeasurementRepository
from canaryd.stores import InMemoryScoreStore

from conftest import make_measurement


class FailingStore(InMemoryScoreStore):
    """Fails every add after the first ``fail_after`` successful ones."""

    def __init__(self, fail_after: int) -> None:
        super().__init__()
        self.fail_after = fail_after
        self.adds = 0

    async def add(self, key, member, score):
        if self.adds >= self.fail_after:
            raise StorageError("add", key, "connection refused")
        self.adds += 1
        await super().add(key, member, score)


class TestIngest:
    @pytest.mark.asyncio
    async def test_records_every_measurement(self, repository) -> None:
        service = IngestionService(repository, retention=60)
        batch = [make_measurement("c1", 1000), make_measurement("c2", 1001)]

        count = await service.ingest(batch)

        assert count == 2
        assert len(await repository.query_range("c1", 10)) == 1
        assert len(await repository.query_range("c2", 10)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("batch", [None, []])
    async def test_empty_batch(self, repository, batch) -> None:
        service = IngestionService(repository, retention=60)
        assert await service.ingest(batch) == 0

    @pytest.mark.asyncio
    async def test_write_trims_same_check_only(self, repository, clock) -> None:
        service = IngestionService(repository, retention=60)
        clock.now = 1005
        await service.ingest([make_measurement("c1", 1000), make_measurement("c2", 1000)])

        clock.now = 1100
        await service.ingest([make_measurement("c1", 1099)])

        assert [m.t for m in await repository.query_range("c1", 1000)] == [1099]
        # c2 received no write, so nothing trimmed it
        assert [m.t for m in await repository.query_range("c2", 1000)] == [1000]

    @pytest.mark.asyncio
    async def test_measurement_older_than_retention_is_trimmed_by_own_write(self, repository, clock) -> None:
        service = IngestionService(repository, retention=60)
        clock.now = 1005

        await service.ingest([make_measurement("c1", 900)])

        assert await repository.query_range("c1", 1000) == []

    @pytest.mark.asyncio
    async def test_partial_batch_survives_failure(self, clock) -> None:
        store = FailingStore(fail_after=1)
        repository = MeasurementRepository(store, clock=clock)
        service = IngestionService(repository, retention=60)

        with pytest.raises(StorageError):
            await service.ingest([make_measurement("c1", 1000), make_measurement("c1", 1001)])

        assert [m.t for m in await repository.query_range("c1", 10)] == [1000]

    @pytest.mark.asyncio
    async def test_logs_summary(self, repository, caplog) -> None:
        service = IngestionService(repository, retention=60)

        with caplog.at_level(logging.INFO, logger="canaryd.services.ingestion"):
            await service.ingest([make_measurement("c1", 1000)])

        assert "fn=post_measurements count=1" in caplog.text
