from __future__ import annotations

from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers import cache_debug, weather
from app.config import Settings, configure_logging
from app.infra.city_catalog import CityCatalog
from app.providers.weather.base import WeatherProvider
from app.services.dashboard import build_aggregator


def create_app(
    settings: Optional[Settings] = None,
    *,
    provider: Optional[WeatherProvider] = None,
    catalog: Optional[CityCatalog] = None,
    clock: Optional[Callable[[], float]] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    app = FastAPI(title="Weather Comfort API", version="0.1.0")
    app.state.settings = settings
    app.state.aggregator = build_aggregator(settings, provider=provider, catalog=catalog, clock=clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(weather.router, prefix="/api")
    app.include_router(cache_debug.router, prefix="/api")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
