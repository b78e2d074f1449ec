from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from app.domain.errors import MalformedDataError, NotFoundError, ValidationError
from app.domain.models import City

logger = logging.getLogger(__name__)

MIN_CITIES = 10


class CityCatalog:
    """Fixed list of cities read from a JSON array of ``{id, name, countryCode}`` objects."""

    def __init__(self, path: Path, *, min_cities: int = MIN_CITIES):
        self.path = Path(path)
        self.min_cities = min_cities
        self._cities: Optional[List[City]] = None

    def get_cities(self) -> List[City]:
        if self._cities is None:
            self._cities = self._load()
            logger.info("Loaded %d cities from %s", len(self._cities), self.path)
        return list(self._cities)

    def _load(self) -> List[City]:
        if not self.path.exists():
            logger.error("Cities file not found at %s", self.path)
            raise NotFoundError(f"Cities configuration file not found at: {self.path}")
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Invalid JSON in %s: %s", self.path, exc)
            raise MalformedDataError(f"Invalid JSON format in {self.path.name}: {exc}") from exc
        if not isinstance(payload, list):
            raise MalformedDataError(f"{self.path.name} must contain a JSON array of cities")

        cities = [_parse_city(item, idx) for idx, item in enumerate(payload)]
        if len(cities) < self.min_cities:
            logger.error(
                "Cities file contains %d cities, at least %d are required", len(cities), self.min_cities
            )
            raise ValidationError(
                f"Cities file must contain at least {self.min_cities} cities. Found {len(cities)} cities."
            )
        return cities


def _parse_city(item, idx: int) -> City:
    if not isinstance(item, dict):
        raise MalformedDataError(f"City entry #{idx} is not an object")
    fields = {str(key).lower().replace("_", ""): value for key, value in item.items()}
    try:
        return City(
            id=int(fields["id"]),
            name=str(fields["name"]),
            country_code=str(fields.get("countrycode") or ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedDataError(f"City entry #{idx} is missing a valid id or name") from exc
