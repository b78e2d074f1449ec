from __future__ import annotations

from typing import Optional


class WeatherDashboardError(Exception):
    """Base class for failures raised by the dashboard pipeline."""


class NotFoundError(WeatherDashboardError):
    """A required resource (configuration file, city) does not exist."""


class MalformedDataError(WeatherDashboardError):
    """A payload could not be parsed or is missing required fields."""


class ValidationError(WeatherDashboardError):
    """A payload parsed fine but breaks a business rule."""


class NetworkError(WeatherDashboardError):
    """Transport failure or timeout while talking to the provider."""


class UpstreamStatusError(WeatherDashboardError):
    def __init__(self, status_code: int, body: Optional[str] = None) -> None:
        super().__init__(f"Provider returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body
