"""FastAPI dependencies resolving the per-process services."""
from fastapi import Request

from .services.ingestion import IngestionService
from .services.query import QueryService
from .services.repository import MeasurementRepository


def get_repository(request: Request) -> MeasurementRepository:
    """Dependency to get the measurement repository."""
    return request.app.state.repository


def get_ingestion_service(request: Request) -> IngestionService:
    """Dependency to get the ingestion service."""
    return request.app.state.ingestion


def get_query_service(request: Request) -> QueryService:
    """Dependency to get the query service."""
    return request.app.state.query
