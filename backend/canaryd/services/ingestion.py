"""Ingestion service - persists measurement batches."""
import logging
from typing import Iterable, Optional

from ..schemas.measurement import Measurement
from .repository import MeasurementRepository

logger = logging.getLogger(__name__)


class IngestionService:
    """Records each measurement and trims its check to the retention horizon."""

    def __init__(self, repository: MeasurementRepository, retention: int):
        self.repository = repository
        self.retention = retention

    async def ingest(self, measurements: Optional[Iterable[Measurement]]) -> int:
        """Record then trim, one measurement at a time in list order.

        There is no transaction across the batch. A StorageError partway
        through propagates and leaves the earlier measurements stored.

        Returns:
            Number of measurements processed.
        """
        count = 0
        for measurement in measurements or []:
            await self.repository.record(measurement)
            await self.repository.trim(measurement.check.id, self.retention)
            count += 1

        logger.info(f"fn=post_measurements count={count}")
        return count
