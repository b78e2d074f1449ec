from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Tuple

from .models import ComfortScore, NormalizedWeather

logger = logging.getLogger(__name__)

# Ideal conditions
IDEAL_TEMPERATURE_C = 22.0
IDEAL_HUMIDITY_MIN = 40
IDEAL_HUMIDITY_MAX = 60
IDEAL_WIND_SPEED_MS = 5.0
IDEAL_CLOUDINESS_PCT = 30

# Points lost per unit of deviation
TEMPERATURE_WEIGHT = 1.5
HUMIDITY_WEIGHT = 0.5
WIND_WEIGHT = 2.0
CLOUDINESS_WEIGHT = 0.3

BASE_SCORE = 100.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0

UNKNOWN_CITY = "Unknown"


def temperature_penalty(temperature_c: float) -> float:
    return abs(temperature_c - IDEAL_TEMPERATURE_C) * TEMPERATURE_WEIGHT


def humidity_penalty(humidity_pct: float) -> float:
    if IDEAL_HUMIDITY_MIN <= humidity_pct <= IDEAL_HUMIDITY_MAX:
        return 0.0
    if humidity_pct < IDEAL_HUMIDITY_MIN:
        deviation = IDEAL_HUMIDITY_MIN - humidity_pct
    else:
        deviation = humidity_pct - IDEAL_HUMIDITY_MAX
    return deviation * HUMIDITY_WEIGHT


def wind_penalty(wind_speed_ms: float) -> float:
    if wind_speed_ms <= IDEAL_WIND_SPEED_MS:
        return 0.0
    return (wind_speed_ms - IDEAL_WIND_SPEED_MS) * WIND_WEIGHT


def cloudiness_penalty(cloudiness_pct: float) -> float:
    if cloudiness_pct <= IDEAL_CLOUDINESS_PCT:
        return 0.0
    return (cloudiness_pct - IDEAL_CLOUDINESS_PCT) * CLOUDINESS_WEIGHT


def _clean_temperature(value: float) -> float:
    if not math.isfinite(value):
        logger.warning("Invalid temperature %s, using %s", value, IDEAL_TEMPERATURE_C)
        return IDEAL_TEMPERATURE_C
    return value


def _clean_percentage(value: float, label: str, ideal: float) -> float:
    if math.isnan(value):
        logger.warning("Invalid %s NaN, using %s", label, ideal)
        return ideal
    if value < 0 or value > 100:
        logger.warning("Invalid %s %s, clamping to [0, 100]", label, value)
        return max(0.0, min(100.0, value))
    return value


def _clean_wind(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        logger.warning("Invalid wind speed %s, using 0", value)
        return 0.0
    return value


def _default_score(city_id: int, city_name: str) -> ComfortScore:
    return ComfortScore(city_id=city_id, city_name=city_name, score=0.0)


def _city_label(weather) -> Tuple[int, str]:
    try:
        return weather.city_id, weather.city_name
    except Exception:
        return 0, UNKNOWN_CITY


def _score(weather: Optional[NormalizedWeather]) -> ComfortScore:
    if weather is None:
        logger.warning("No weather data provided for comfort scoring")
        return _default_score(0, UNKNOWN_CITY)

    temperature = _clean_temperature(float(weather.temperature_c))
    humidity = _clean_percentage(float(weather.humidity_pct), "humidity", IDEAL_HUMIDITY_MIN)
    wind = _clean_wind(float(weather.wind_speed_ms))
    cloudiness = _clean_percentage(float(weather.cloudiness_pct), "cloudiness", IDEAL_CLOUDINESS_PCT)

    penalties = (
        temperature_penalty(temperature),
        humidity_penalty(humidity),
        wind_penalty(wind),
        cloudiness_penalty(cloudiness),
    )
    total = max(MIN_SCORE, min(MAX_SCORE, BASE_SCORE - sum(penalties)))
    return ComfortScore(
        city_id=weather.city_id,
        city_name=weather.city_name,
        score=round(total, 2),
        temperature_penalty=round(penalties[0], 2),
        humidity_penalty=round(penalties[1], 2),
        wind_penalty=round(penalties[2], 2),
        cloudiness_penalty=round(penalties[3], 2),
    )


def score(weather: Optional[NormalizedWeather]) -> ComfortScore:
    """Compute the 0-100 comfort index of a reading.

    Each factor subtracts a penalty from 100 once it leaves its ideal range.
    Invalid inputs are cleaned rather than rejected, and any unexpected failure
    yields a zero score for the city instead of an exception.
    """
    try:
        return _score(weather)
    except Exception:
        city_id, city_name = _city_label(weather)
        logger.exception("Error scoring city %s (%s)", city_id, city_name)
        return _default_score(city_id, city_name)


def score_all(weathers: Optional[Iterable[Optional[NormalizedWeather]]]) -> List[ComfortScore]:
    if not weathers:
        logger.warning("Empty weather list provided for comfort scoring")
        return []

    results: List[ComfortScore] = []
    for weather in weathers:
        try:
            results.append(_score(weather))
        except Exception:
            city_id, city_name = _city_label(weather)
            logger.warning("Failed to score city %s (%s), skipping", city_id, city_name, exc_info=True)
    return results
