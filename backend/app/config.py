from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_CITIES_FILE = Path(__file__).resolve().parents[2] / "data" / "cities.json"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    openweather_api_key: Optional[str] = None
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    openweather_timeout_s: float = 30.0
    cities_file: Path = DEFAULT_CITIES_FILE
    cache_ttl_s: float = 5 * 60
    max_concurrency: int = 8
    dashboard_timeout_s: float = 60.0
    frontend_origin: str = "http://localhost:4200"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY") or None,
            openweather_base_url=os.getenv("OPENWEATHER_BASE_URL", cls.openweather_base_url),
            openweather_timeout_s=float(os.getenv("OPENWEATHER_TIMEOUT_S", "30")),
            cities_file=Path(os.getenv("CITIES_FILE", str(DEFAULT_CITIES_FILE))),
            cache_ttl_s=float(os.getenv("WEATHER_CACHE_TTL_S", "300")),
            max_concurrency=int(os.getenv("WEATHER_MAX_CONCURRENCY", "8")),
            dashboard_timeout_s=float(os.getenv("DASHBOARD_TIMEOUT_S", "60")),
            frontend_origin=os.getenv("FRONTEND_ORIGIN", cls.frontend_origin),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
