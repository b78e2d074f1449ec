from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from app.domain.errors import MalformedDataError, NetworkError, UpstreamStatusError

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise RuntimeError("OPENWEATHER_API_KEY is required to query OpenWeatherMap")
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self._transport = transport

    async def fetch_current(self, city_id: int) -> dict:
        """Return the decoded "current weather" payload for an OpenWeatherMap city id."""
        params = {"id": city_id, "appid": self.api_key}
        logger.info("Fetching current weather for city %s", city_id)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as exc:
            logger.error("Timeout fetching weather for city %s", city_id)
            raise NetworkError(f"Timeout fetching weather for city {city_id}") from exc
        except httpx.TransportError as exc:
            logger.error("Transport error fetching weather for city %s: %s", city_id, exc)
            raise NetworkError(f"Could not reach provider for city {city_id}") from exc

        if not resp.is_success:
            logger.error(
                "Provider returned %s for city %s: %s", resp.status_code, city_id, resp.text
            )
            raise UpstreamStatusError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Unparsable weather payload for city %s", city_id)
            raise MalformedDataError(f"Invalid JSON in weather response for city {city_id}") from exc
        if not isinstance(data, dict):
            logger.error("Unexpected weather payload for city %s: %r", city_id, data)
            raise MalformedDataError(f"Empty weather response for city {city_id}")
        return data
