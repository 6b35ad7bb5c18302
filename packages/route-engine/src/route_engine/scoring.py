from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable

from route_engine.exceptions import ProviderError
from route_engine.models import Coordinate, RouteGeometry, SafetyCategory
from route_engine.providers import PoiProvider
from route_engine.retry import call_provider

logger = logging.getLogger(__name__)

SAMPLE_COUNT = 5
SAMPLE_RADII: dict[SafetyCategory, float] = {
    SafetyCategory.POLICE: 500.0,
    SafetyCategory.HOSPITAL: 500.0,
    SafetyCategory.FIRE_STATION: 500.0,
    SafetyCategory.STREET_LAMP: 800.0,
}


def sample_indices(point_count: int, sample_count: int = SAMPLE_COUNT) -> list[int]:
    return [math.floor(point_count / sample_count * i) for i in range(sample_count)]


class RouteSafetyScorer:
    """Counts safety POIs around evenly spaced samples of a route."""

    def __init__(
        self,
        poi_provider: PoiProvider,
        call_timeout_seconds: float = 10.0,
        retries: int = 1,
        on_failure: Callable[[str], None] | None = None,
    ) -> None:
        self._poi_provider = poi_provider
        self._call_timeout_seconds = call_timeout_seconds
        self._retries = retries
        self._on_failure = on_failure

    async def score(self, geometry: RouteGeometry) -> int:
        samples = [geometry.points[index] for index in sample_indices(len(geometry.points))]
        counts = await asyncio.gather(*(self._sample(index, point) for index, point in enumerate(samples)))
        total = sum(counts)
        logger.debug("route_scored", extra={"score": total, "sample_counts": counts})
        return total

    async def _sample(self, sample_number: int, point: Coordinate) -> int:
        try:
            elements = await call_provider(
                lambda: self._poi_provider.search(point, SAMPLE_RADII),
                timeout_seconds=self._call_timeout_seconds,
                retries=self._retries,
            )
        except ProviderError as exc:
            logger.warning(
                "provider_sample_failed",
                extra={"sample": sample_number, "lat": point.lat, "lng": point.lng, "reason": str(exc)},
            )
            if self._on_failure:
                self._on_failure("provider_sample_failed")
            return 0
        return len(elements)
