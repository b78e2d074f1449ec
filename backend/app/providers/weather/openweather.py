from __future__ import annotations

from typing import Optional

from app.domain.errors import MalformedDataError
from app.infra.weather.openweather_client import OpenWeatherClient

from .base import RawWeather, WeatherProvider


class OpenWeatherProvider(WeatherProvider):
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    async def fetch_current(self, city_id: int) -> RawWeather:
        payload = await self.client.fetch_current(city_id)
        return parse_current(payload, city_id)


def parse_current(payload: dict, city_id: int) -> RawWeather:
    main = payload.get("main")
    if not isinstance(main, dict):
        raise MalformedDataError(f"Weather response for city {city_id} has no 'main' block")
    wind = _optional_block(payload, "wind", city_id)
    clouds = _optional_block(payload, "clouds", city_id)
    try:
        return RawWeather(
            temp_k=float(main["temp"]),
            feels_like_k=float(main.get("feels_like", main["temp"])),
            humidity=int(main.get("humidity", 0)),
            wind_speed=float(wind.get("speed") or 0.0),
            cloudiness=int(clouds.get("all") or 0),
            description=_first_description(payload.get("weather")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedDataError(f"Invalid weather values for city {city_id}: {exc}") from exc


def _optional_block(payload: dict, key: str, city_id: int) -> dict:
    block = payload.get(key)
    if block is None:
        return {}
    if not isinstance(block, dict):
        raise MalformedDataError(f"Weather response for city {city_id} has an invalid '{key}' block")
    return block


def _first_description(items) -> Optional[str]:
    if not isinstance(items, list) or not items:
        return None
    first = items[0]
    if not isinstance(first, dict):
        return None
    return first.get("description") or ""
