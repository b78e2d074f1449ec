from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from app.config import Settings
from app.domain import ranking, scoring
from app.domain.models import CacheState, ComfortScore, DashboardCity, NormalizedWeather, RankedCity
from app.infra.city_catalog import CityCatalog
from app.infra.weather.openweather_client import OpenWeatherClient
from app.providers.weather.base import WeatherProvider
from app.providers.weather.openweather import OpenWeatherProvider

from .weather_cache import WeatherCache
from .weather_service import WeatherService

logger = logging.getLogger(__name__)

Scorer = Callable[[Iterable[NormalizedWeather]], List[ComfortScore]]
Ranker = Callable[[Iterable[ComfortScore]], List[RankedCity]]


class DashboardAggregator:
    def __init__(
        self,
        weather_service: WeatherService,
        *,
        scorer: Scorer = scoring.score_all,
        ranker: Ranker = ranking.rank,
    ) -> None:
        self.weather_service = weather_service
        self._score_all = scorer
        self._rank = ranker

    async def get_dashboard(self) -> List[DashboardCity]:
        """Weather, comfort index and rank for every city that could be fetched.

        Cities whose fetch failed are left out. Only a failure to load the city
        catalog propagates.
        """
        logger.info("Building dashboard for all cities")
        weather = await self.weather_service.get_weather_for_all_cities()
        if not weather:
            logger.info("No weather data available")
            return []

        scores = self._score_all(weather)
        if not scores:
            logger.warning("No comfort scores computed from %d readings", len(weather))
            return []

        ranked = self._rank(scores)
        if not ranked:
            logger.warning("No ranked cities returned for %d scores", len(scores))
            return []

        by_city = {item.city_id: item for item in weather}
        dashboard = [_to_dashboard_city(item, by_city.get(item.city_id)) for item in ranked]
        logger.info("Prepared dashboard for %d cities", len(dashboard))
        return dashboard

    async def cache_statuses(self) -> Dict[int, CacheState]:
        weather = await self.weather_service.get_weather_for_all_cities()
        cache = self.weather_service.cache
        statuses: Dict[int, CacheState] = {}
        for item in weather:
            statuses.setdefault(item.city_id, cache.status(item.city_id))
        return statuses


def _to_dashboard_city(item: RankedCity, weather: Optional[NormalizedWeather]) -> DashboardCity:
    return DashboardCity(
        city_id=item.city_id,
        city_name=item.city_name or "",
        description=weather.description if weather is not None else "",
        temperature_c=weather.temperature_c if weather is not None else 0.0,
        comfort_index=item.score,
        rank=item.rank,
    )


def build_aggregator(
    settings: Settings,
    *,
    provider: Optional[WeatherProvider] = None,
    catalog: Optional[CityCatalog] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Optional[DashboardAggregator]:
    """Wire catalog, provider, cache and service from settings.

    Returns None when no provider is given and no API key is configured.
    """
    if provider is None:
        if not settings.openweather_api_key:
            return None
        client = OpenWeatherClient(
            settings.openweather_api_key,
            base_url=settings.openweather_base_url,
            timeout=settings.openweather_timeout_s,
        )
        provider = OpenWeatherProvider(client)
    cache_kwargs = {"clock": clock} if clock is not None else {}
    cache = WeatherCache(provider, ttl=settings.cache_ttl_s, **cache_kwargs)
    service = WeatherService(
        catalog or CityCatalog(settings.cities_file),
        cache,
        max_concurrency=settings.max_concurrency,
    )
    return DashboardAggregator(service)
