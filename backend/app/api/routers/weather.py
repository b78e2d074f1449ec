from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_aggregator, get_settings
from app.config import Settings
from app.domain.models import DashboardCity
from app.services.dashboard import DashboardAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("/dashboard")
async def get_dashboard(
    aggregator: Optional[DashboardAggregator] = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    if aggregator is None:
        logger.error("Dashboard requested but OPENWEATHER_API_KEY is not set")
        return JSONResponse(status_code=500, content={"error": "Weather provider not configured"})
    try:
        cities = await asyncio.wait_for(aggregator.get_dashboard(), timeout=settings.dashboard_timeout_s)
    except Exception:
        logger.exception("Error fetching dashboard data")
        return JSONResponse(
            status_code=500,
            content={"error": "An error occurred while fetching dashboard data"},
        )
    return [serialize_city(city) for city in cities]


def serialize_city(city: DashboardCity) -> dict:
    return {
        "cityId": city.city_id,
        "cityName": city.city_name,
        "description": city.description,
        "temperature": city.temperature_c,
        "comfortIndex": city.comfort_index,
        "rank": city.rank,
    }
