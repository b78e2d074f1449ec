from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional

from .models import ComfortScore, RankedCity

logger = logging.getLogger(__name__)


def _is_rankable(item) -> bool:
    if not isinstance(item, ComfortScore):
        return False
    return isinstance(item.score, (int, float)) and not isinstance(item.score, bool)


def _sort_key(item: ComfortScore) -> float:
    value = item.score
    # NaN never compares equal, keep it at the bottom of the table.
    if math.isnan(value):
        return -math.inf
    return value


def _ranked(item: ComfortScore, rank: int) -> RankedCity:
    return RankedCity(
        rank=rank,
        city_id=item.city_id,
        city_name=item.city_name,
        score=item.score,
        temperature_penalty=item.temperature_penalty,
        humidity_penalty=item.humidity_penalty,
        wind_penalty=item.wind_penalty,
        cloudiness_penalty=item.cloudiness_penalty,
    )


def rank(scores: Optional[Iterable[Optional[ComfortScore]]]) -> List[RankedCity]:
    """Competition ranking ("1224") by descending score.

    Tied scores share the position of the first member of the group and the
    next group skips ahead by the group size. Ties are exact float equality and
    keep their input order.
    """
    if scores is None:
        logger.warning("No comfort scores provided for ranking")
        return []

    items = []
    for item in scores:
        if not _is_rankable(item):
            logger.warning("Skipping malformed comfort score entry %r", item)
            continue
        items.append(item)
    if not items:
        logger.info("Empty comfort score list provided for ranking")
        return []

    try:
        ordered = sorted(items, key=_sort_key, reverse=True)
        ranked: List[RankedCity] = []
        current_rank = 1
        previous_key: Optional[float] = None
        for position, item in enumerate(ordered, start=1):
            key = _sort_key(item)
            if previous_key is None or key != previous_key:
                current_rank = position
            ranked.append(_ranked(item, current_rank))
            previous_key = key
    except Exception:
        logger.exception("Error ranking cities")
        return []

    logger.info("Ranked %d cities", len(ranked))
    return ranked
