from __future__ import annotations

import logging
from collections.abc import Callable

from route_engine.distance import haversine_distance_meters
from route_engine.exceptions import ProviderError
from route_engine.models import UNKNOWN_LOCATION, Coordinate, SafetyCategory, SafetyPoint
from route_engine.providers import PoiProvider
from route_engine.retry import call_provider

logger = logging.getLogger(__name__)

SUMMARY_RADIUS_METERS = 1500.0
SUMMARY_LIMIT = 5
SUMMARY_CATEGORIES = (
    SafetyCategory.POLICE,
    SafetyCategory.HOSPITAL,
    SafetyCategory.FIRE_STATION,
    SafetyCategory.BUS_STATION,
    SafetyCategory.SCHOOL,
)
STREET_LIGHT_RADIUS_METERS = 1000.0


class NearbySafetySummary:
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

    async def summarize(self, point: Coordinate, limit: int = SUMMARY_LIMIT) -> list[SafetyPoint]:
        if limit <= 0:
            raise ValueError("limit must be > 0")
        radii = {category: SUMMARY_RADIUS_METERS for category in SUMMARY_CATEGORIES}
        try:
            elements = await call_provider(
                lambda: self._poi_provider.search(point, radii),
                timeout_seconds=self._call_timeout_seconds,
                retries=self._retries,
            )
        except ProviderError as exc:
            logger.warning("nearby_safety_unavailable", extra={"reason": str(exc)})
            self._report("nearby_safety_unavailable")
            return []

        safety_points = [
            SafetyPoint(
                category=element.category,
                name=element.name or UNKNOWN_LOCATION,
                distance_meters=haversine_distance_meters(point, element.coordinate),
                coordinate=element.coordinate,
            )
            for element in elements
        ]
        safety_points.sort(key=lambda item: item.distance_meters)
        return safety_points[:limit]

    async def street_lights(self, point: Coordinate) -> list[Coordinate]:
        radii = {SafetyCategory.STREET_LAMP: STREET_LIGHT_RADIUS_METERS}
        try:
            elements = await call_provider(
                lambda: self._poi_provider.search(point, radii),
                timeout_seconds=self._call_timeout_seconds,
                retries=self._retries,
            )
        except ProviderError as exc:
            logger.warning("street_lights_unavailable", extra={"reason": str(exc)})
            self._report("street_lights_unavailable")
            return []
        return [element.coordinate for element in elements]

    def _report(self, event: str) -> None:
        if self._on_failure:
            self._on_failure(event)
