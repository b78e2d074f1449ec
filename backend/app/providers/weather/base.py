from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class RawWeather:
    """Provider reading before normalization; temperatures are in Kelvin."""

    temp_k: float
    feels_like_k: float
    humidity: int
    wind_speed: float = 0.0
    cloudiness: int = 0
    description: Optional[str] = None


class WeatherProvider(Protocol):
    """Contract for current-weather providers."""

    async def fetch_current(self, city_id: int) -> RawWeather:
        raise NotImplementedError
