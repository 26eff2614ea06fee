"""Services for recording and querying measurements."""
from .repository import MeasurementRepository, redis_key
from .ingestion import IngestionService
from .query import QueryService, parse_range

__all__ = ["MeasurementRepository", "redis_key", "IngestionService", "QueryService", "parse_range"]
