from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class City:
    id: int
    name: str
    country_code: str = ""


@dataclass(frozen=True)
class NormalizedWeather:
    """Current conditions for one city, temperatures in Celsius."""

    city_id: int
    city_name: str
    temperature_c: float
    feels_like_c: float
    humidity_pct: int
    wind_speed_ms: float
    cloudiness_pct: int
    description: str


@dataclass(frozen=True)
class ComfortScore:
    city_id: int
    city_name: str
    score: float
    temperature_penalty: float = 0.0
    humidity_penalty: float = 0.0
    wind_penalty: float = 0.0
    cloudiness_penalty: float = 0.0


@dataclass(frozen=True)
class RankedCity:
    rank: int
    city_id: int
    city_name: str
    score: float
    temperature_penalty: float = 0.0
    humidity_penalty: float = 0.0
    wind_penalty: float = 0.0
    cloudiness_penalty: float = 0.0


@dataclass(frozen=True)
class DashboardCity:
    city_id: int
    city_name: str
    description: str
    temperature_c: float
    comfort_index: float
    rank: int


class CacheState(str, Enum):
    HIT = "HIT"
    MISS = "MISS"


@dataclass(frozen=True)
class FetchOutcome:
    """Result of fetching one city: either a reading or the error that prevented it.

    A missing reading with no error means the provider answered without usable data.
    """

    city: City
    weather: Optional[NormalizedWeather] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.weather is not None
