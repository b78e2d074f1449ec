from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_aggregator, get_settings
from app.config import Settings
from app.domain.models import CacheState
from app.services.dashboard import DashboardAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cachedebug", tags=["cache"])


@router.get("/all")
async def get_all_cache_statuses(
    aggregator: Optional[DashboardAggregator] = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    if aggregator is None:
        logger.error("Cache statuses requested but OPENWEATHER_API_KEY is not set")
        return JSONResponse(status_code=500, content={"error": "Weather provider not configured"})
    try:
        statuses = await asyncio.wait_for(aggregator.cache_statuses(), timeout=settings.dashboard_timeout_s)
    except Exception:
        logger.exception("Error checking cache statuses for all cities")
        return JSONResponse(
            status_code=500,
            content={"error": "An error occurred while checking cache statuses"},
        )
    logger.info("Cache status check for %d cities", len(statuses))
    return [{"cityId": city_id, "status": status.value} for city_id, status in statuses.items()]


@router.get("/{city_id}")
def get_cache_status(city_id: int, aggregator: Optional[DashboardAggregator] = Depends(get_aggregator)):
    # Nothing can have been cached without a provider.
    status = CacheState.MISS if aggregator is None else aggregator.weather_service.cache.status(city_id)
    logger.info("Cache status for city %s: %s", city_id, status.value)
    return {"cityId": city_id, "status": status.value}
