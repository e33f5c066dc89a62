"""District metrics endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_metrics_service
from app.services.city_metrics import CityMetricsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/districts/{district_id:path}/metrics/environmental")
async def get_environmental_metrics(
    district_id: str,
    metrics: CityMetricsService = Depends(get_metrics_service),
):
    """
    Environmental metrics for a district.

    Values are simulated and identical for every district.
    """
    try:
        data = metrics.get_environmental_metrics(district_id)
        return data.model_dump(by_alias=True)
    except Exception as e:
        logger.error(f"Environmental metrics failed for district={district_id}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch environmental metrics"},
        )
