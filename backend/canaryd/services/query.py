"""Query service - time-window lookups for a check."""
import re
from typing import List, Optional

from ..exceptions import InvalidRangeError
from ..schemas.measurement import INT64_MAX, INT64_MIN, Measurement
from .repository import MeasurementRepository

DEFAULT_RANGE_SECONDS = 10

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_range(value: Optional[str], default: int = DEFAULT_RANGE_SECONDS) -> int:
    """Parse the ``range`` query parameter as base-10 seconds.

    A missing or empty value gives ``default``. Values outside the signed
    64-bit range are rejected like non-integers.
    """
    if value is None or value == "":
        return default
    if not _INTEGER.fullmatch(value):
        raise InvalidRangeError(value)
    seconds = int(value)
    if not INT64_MIN <= seconds <= INT64_MAX:
        raise InvalidRangeError(value)
    return seconds


class QueryService:
    """Resolves a check id and time window into measurements, newest first."""

    def __init__(self, repository: MeasurementRepository, default_range: int = DEFAULT_RANGE_SECONDS):
        self.repository = repository
        self.default_range = default_range

    async def measurements(self, check_id: str, range_value: Optional[str] = None) -> List[Measurement]:
        window = parse_range(range_value, self.default_range)
        return await self.repository.query_range(check_id, window)
