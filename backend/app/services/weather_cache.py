from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from app.domain.models import CacheState, NormalizedWeather
from app.providers.weather.base import RawWeather, WeatherProvider

logger = logging.getLogger(__name__)

KELVIN_OFFSET = 273.15
DEFAULT_TTL_S = 5 * 60


@dataclass(frozen=True)
class CacheEntry:
    key: int
    value: NormalizedWeather
    inserted_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.inserted_at <= self.ttl


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - KELVIN_OFFSET


def normalize(raw: RawWeather, city_id: int, city_name: str) -> NormalizedWeather:
    return NormalizedWeather(
        city_id=city_id,
        city_name=city_name,
        temperature_c=kelvin_to_celsius(raw.temp_k),
        feels_like_c=kelvin_to_celsius(raw.feels_like_k),
        humidity_pct=raw.humidity,
        wind_speed_ms=raw.wind_speed,
        cloudiness_pct=raw.cloudiness,
        description=raw.description or "",
    )


class WeatherCache:
    """Per-city TTL cache in front of a weather provider.

    Entries are keyed by city id and written only after a successful fetch, so
    failed or cancelled fetches leave the previous state untouched. Concurrent
    misses for the same city may both reach the provider; the last write wins.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        *,
        ttl: float = DEFAULT_TTL_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.provider = provider
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[int, CacheEntry] = {}

    async def get_or_fetch(self, city_id: int, city_name: str = "Unknown") -> Optional[NormalizedWeather]:
        entry = self._live_entry(city_id)
        if entry is not None:
            logger.info("Cache HIT for city %s", city_id)
            return entry.value

        logger.info("Cache MISS for city %s, fetching from provider", city_id)
        raw = await self.provider.fetch_current(city_id)
        if raw is None or raw.description is None:
            logger.warning("Incomplete weather data received for city %s", city_id)
            return None

        weather = normalize(raw, city_id, city_name)
        self.put(weather)
        logger.info("Cached weather for city %s for %ss", city_id, self.ttl)
        return weather

    def status(self, city_id: int) -> CacheState:
        return CacheState.HIT if self._live_entry(city_id) is not None else CacheState.MISS

    def put(self, weather: NormalizedWeather) -> None:
        self._entries[weather.city_id] = CacheEntry(
            key=weather.city_id,
            value=weather,
            inserted_at=self._clock(),
            ttl=self.ttl,
        )

    def invalidate(self, city_id: int) -> None:
        self._entries.pop(city_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _live_entry(self, city_id: int) -> Optional[CacheEntry]:
        entry = self._entries.get(city_id)
        if entry is None or not entry.is_fresh(self._clock()):
            return None
        return entry
