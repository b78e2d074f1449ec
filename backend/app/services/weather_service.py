from __future__ import annotations

import asyncio
import logging
from typing import List

from app.domain.models import City, FetchOutcome, NormalizedWeather
from app.infra.city_catalog import CityCatalog

from .weather_cache import WeatherCache

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 8


class WeatherService:
    """Fetches current weather for every catalog city through the cache."""

    def __init__(
        self,
        catalog: CityCatalog,
        cache: WeatherCache,
        *,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.catalog = catalog
        self.cache = cache
        self.max_concurrency = max_concurrency

    async def fetch_city(self, city: City) -> FetchOutcome:
        try:
            weather = await self.cache.get_or_fetch(city.id, city.name)
        except Exception as exc:
            logger.warning("Failed to retrieve weather for city %s (%s): %s", city.id, city.name, exc)
            return FetchOutcome(city=city, error=exc)
        return FetchOutcome(city=city, weather=weather)

    async def fetch_all(self) -> List[FetchOutcome]:
        cities = self.catalog.get_cities()
        logger.info("Retrieving weather for %d cities", len(cities))
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(city: City) -> FetchOutcome:
            async with semaphore:
                return await self.fetch_city(city)

        outcomes = await asyncio.gather(*(bounded(city) for city in cities))
        succeeded = sum(1 for outcome in outcomes if outcome.ok)
        logger.info("Retrieved weather for %d out of %d cities", succeeded, len(cities))
        return list(outcomes)

    async def get_weather_for_all_cities(self) -> List[NormalizedWeather]:
        return [outcome.weather for outcome in await self.fetch_all() if outcome.ok]
