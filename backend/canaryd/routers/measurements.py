"""Measurement ingestion and query API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..dependencies import get_ingestion_service, get_query_service
from ..exceptions import InvalidRangeError
from ..schemas.measurement import Measurement
from ..services.ingestion import IngestionService
from ..services.query import QueryService

router = APIRouter(tags=["measurements"])


@router.post("/measurements")
async def post_measurements(
    measurements: Optional[List[Measurement]] = Body(None),
    ingestion: IngestionService = Depends(get_ingestion_service),
):
    """Record a batch of measurements.

    Each measurement is stored and its check trimmed to the retention
    horizon, in list order. An empty body or ``null`` records nothing.
    """
    received = await ingestion.ingest(measurements)
    return {"status": "ok", "received": received}


@router.get("/checks/{check_id}/measurements")
async def get_measurements(
    check_id: str,
    range_value: Optional[str] = Query(None, alias="range"),
    query: QueryService = Depends(get_query_service),
):
    """Measurements of a check from the last ``range`` seconds, newest first."""
    try:
        measurements = await query.measurements(check_id, range_value)
    except InvalidRangeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return [m.to_wire() for m in measurements]
