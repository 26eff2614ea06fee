"""Measurement repository - per-check time series on top of a score store.

Each check owns one sorted set, keyed by ``measurements:<check_id>``, whose
members are serialized measurements scored by their ``t`` timestamp.
Retention is lazy: entries are only trimmed when a caller asks for it,
which the ingestion path does after every write.
"""
import asyncio
import logging
import time
from typing import Awaitable, Callable, List, TypeVar

from pydantic import ValidationError

from ..exceptions import MalformedEntryError, StorageError
from ..schemas.measurement import INT64_MAX, INT64_MIN, Measurement
from ..stores.base import ScoreStore

logger = logging.getLogger(__name__)

T = TypeVar('T')

KEY_PREFIX = "measurements:"


def redis_key(check_id: str) -> str:
    """Storage key for a check's measurements.

    The fixed prefix keeps the mapping injective: distinct check ids never
    share a key.
    """
    return KEY_PREFIX + check_id


def clamp_score(score: int) -> int:
    """Keep a computed score bound inside the signed 64-bit range stores accept."""
    return max(INT64_MIN, min(INT64_MAX, score))


class MeasurementRepository:
    """Records, trims and queries measurements in the score store."""

    def __init__(
        self,
        store: ScoreStore,
        timeout: float = 5.0,
        skip_malformed: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.timeout = timeout
        self.skip_malformed = skip_malformed
        self.clock = clock
        # Stored entries skipped because they no longer decode
        self.decode_errors = 0

    def now(self) -> int:
        """Current time in whole epoch seconds."""
        return int(self.clock())

    async def _call(self, operation: str, key: str, coro: Awaitable[T]) -> T:
        """Run a store call bounded by the configured timeout."""
        try:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise StorageError(operation, key, f"timed out after {self.timeout}s") from e

    async def record(self, measurement: Measurement) -> None:
        """Store a measurement in its check's sorted set, scored by ``t``."""
        key = redis_key(measurement.check.id)
        await self._call("record", key, self.store.add(key, measurement.to_member(), measurement.t))

    async def trim(self, check_id: str, retention_seconds: int) -> int:
        """Delete a check's measurements with ``t <= now - retention_seconds``.

        Returns:
            Number of measurements removed.
        """
        key = redis_key(check_id)
        cutoff = clamp_score(self.now() - retention_seconds)
        removed = await self._call("trim", key, self.store.remove_by_score(key, cutoff))
        if removed:
            logger.debug(f"fn=trim check_id={check_id} cutoff={cutoff} removed={removed}")
        return removed

    async def query_range(self, check_id: str, window_seconds: int) -> List[Measurement]:
        """Measurements of a check with ``t >= now - window_seconds``, newest first.

        Entries that fail to decode are skipped and counted in
        ``decode_errors``, or raise MalformedEntryError when
        ``skip_malformed`` is off.
        """
        key = redis_key(check_id)
        since = clamp_score(self.now() - window_seconds)
        members = await self._call("query", key, self.store.range_by_score_desc(key, since))

        measurements = []
        for member in members:
            try:
                measurements.append(Measurement.from_member(member))
            except ValidationError as e:
                if not self.skip_malformed:
                    raise MalformedEntryError(key, member) from e
                self.decode_errors += 1
                logger.warning(f"Skipping malformed entry in {key}: {e.error_count()} error(s)")
        return measurements
