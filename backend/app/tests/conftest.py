from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.domain.models import NormalizedWeather
from app.infra.city_catalog import CityCatalog
from app.providers.weather.base import RawWeather

CITY_NAMES = [
    "Colombo",
    "Tokyo",
    "Liverpool",
    "Paris",
    "Sydney",
    "Boston",
    "Shanghai",
    "Oslo",
    "London",
    "New York",
    "Berlin",
    "Madrid",
]


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Serves canned readings per city id; exceptions in the map are raised."""

    def __init__(self, readings: dict | None = None, default: RawWeather | None = None) -> None:
        self.readings = dict(readings or {})
        self.default = default
        self.calls: list[int] = []

    async def fetch_current(self, city_id: int) -> RawWeather:
        self.calls.append(city_id)
        result = self.readings.get(city_id, self.default)
        if isinstance(result, Exception):
            raise result
        return result


def raw_weather(celsius: float = 22.0, **overrides) -> RawWeather:
    payload = {
        "temp_k": celsius + 273.15,
        "feels_like_k": celsius + 273.15,
        "humidity": 50,
        "wind_speed": 3.0,
        "cloudiness": 20,
        "description": "clear sky",
    }
    payload.update(overrides)
    return RawWeather(**payload)


def normalized(city_id: int = 1, **overrides) -> NormalizedWeather:
    payload = {
        "city_id": city_id,
        "city_name": f"City {city_id}",
        "temperature_c": 22.0,
        "feels_like_c": 22.0,
        "humidity_pct": 50,
        "wind_speed_ms": 5.0,
        "cloudiness_pct": 30,
        "description": "clear sky",
    }
    payload.update(overrides)
    return NormalizedWeather(**payload)


def write_cities(path: Path, count: int) -> Path:
    payload = [
        {"id": idx + 1, "name": CITY_NAMES[idx % len(CITY_NAMES)], "countryCode": "XX"}
        for idx in range(count)
    ]
    path.write_text(json.dumps(payload))
    return path


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_provider():
    return FakeProvider


@pytest.fixture()
def make_raw():
    return raw_weather


@pytest.fixture()
def make_weather():
    return normalized


@pytest.fixture()
def cities_file(tmp_path) -> Path:
    return write_cities(tmp_path / "cities.json", 12)


@pytest.fixture()
def catalog(cities_file) -> CityCatalog:
    return CityCatalog(cities_file)


@pytest.fixture()
def write_catalog(tmp_path):
    def _write(count: int) -> Path:
        return write_cities(tmp_path / f"cities_{count}.json", count)

    return _write
