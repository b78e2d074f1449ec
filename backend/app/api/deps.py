from __future__ import annotations

from typing import Optional

from fastapi import Request

from app.config import Settings
from app.services.dashboard import DashboardAggregator


def get_aggregator(request: Request) -> Optional[DashboardAggregator]:
    # None when no OpenWeatherMap key is configured; routes answer for themselves.
    return getattr(request.app.state, "aggregator", None)


def get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or Settings()
