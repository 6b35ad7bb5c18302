from __future__ import annotations

import asyncio
import logging

from route_engine.exceptions import NavigationSupersededError, ProviderError
from route_engine.models import Coordinate, GeocodedPlace, WeatherReport
from route_engine.nearby import NearbySafetySummary
from route_engine.providers import Geocoder, HistoryRepository, WeatherProvider
from route_engine.retry import attempt_or_none, call_provider
from route_engine.route_set import RouteSetBuilder

from navigator_api.schemas.navigation import (
    HistoryItem,
    HistoryResult,
    NavigationResult,
    NearbySafetyResult,
    PlaceItem,
    SafetyPointItem,
    WeatherResult,
    route_items,
)

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"


class NavigationService:
    def __init__(
        self,
        geocoder: Geocoder,
        route_set_builder: RouteSetBuilder,
        nearby_summary: NearbySafetySummary,
        weather_provider: WeatherProvider,
        history_repository: HistoryRepository,
        call_timeout_seconds: float = 10.0,
        retries: int = 1,
    ) -> None:
        self._geocoder = geocoder
        self._route_set_builder = route_set_builder
        self._nearby_summary = nearby_summary
        self._weather_provider = weather_provider
        self._history_repository = history_repository
        self._call_timeout_seconds = call_timeout_seconds
        self._retries = retries
        self._inflight: dict[str, asyncio.Task[NavigationResult]] = {}

    async def navigate(self, user_id: str | None, source: str, destination: str) -> NavigationResult:
        """Run a navigation, cancelling any run still in flight for the same user.

        Without a user id there is no caller to match, so the run is never superseded
        and its history goes to the shared anonymous bucket.
        """
        if user_id is None:
            return await self._navigate(ANONYMOUS_USER, source, destination)

        previous = self._inflight.get(user_id)
        if previous is not None and not previous.done():
            previous.cancel()
            logger.info("navigation_superseded", extra={"user_id": user_id})

        task = asyncio.create_task(self._navigate(user_id, source, destination))
        self._inflight[user_id] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._inflight.get(user_id) is not task:
                raise NavigationSupersededError("A newer navigation request replaced this one") from None
            raise
        finally:
            if self._inflight.get(user_id) is task:
                del self._inflight[user_id]

    async def _navigate(self, user_id: str, source: str, destination: str) -> NavigationResult:
        source_place, destination_place = await asyncio.gather(
            self._geocode(source),
            self._geocode(destination),
        )
        selection = await self._route_set_builder.build(source_place.coordinate, destination_place.coordinate)

        target = destination_place.coordinate
        weather, nearby, lights = await asyncio.gather(
            self._weather(target),
            self._nearby_summary.summarize(target),
            self._nearby_summary.street_lights(target),
        )
        await self._record_history(user_id, source_place.display_name, destination_place.display_name)
        logger.info(
            "navigation_completed",
            extra={
                "user_id": user_id,
                "route_count": len(selection.routes),
                "selected_index": selection.selected_index,
            },
        )
        return NavigationResult(
            source=PlaceItem.from_place(source_place),
            destination=PlaceItem.from_place(destination_place),
            routes=route_items(selection),
            selected_index=selection.selected_index,
            weather=WeatherResult.from_report(weather) if weather else None,
            nearby_safety=[SafetyPointItem.from_point(point) for point in nearby],
            street_light_count=len(lights),
        )

    async def nearby_safety(self, lat: float, lng: float) -> NearbySafetyResult:
        points = await self._nearby_summary.summarize(Coordinate(lat=lat, lng=lng))
        return NearbySafetyResult(items=[SafetyPointItem.from_point(point) for point in points])

    async def current_weather(self, lat: float, lng: float) -> WeatherResult | None:
        report = await self._weather(Coordinate(lat=lat, lng=lng))
        return WeatherResult.from_report(report) if report else None

    async def history(self, user_id: str) -> HistoryResult:
        entries = await self._history_repository.list_for_user(user_id)
        return HistoryResult(items=[HistoryItem.from_entry(entry) for entry in entries])

    async def _geocode(self, address: str) -> GeocodedPlace:
        return await call_provider(
            lambda: self._geocoder.geocode(address),
            timeout_seconds=self._call_timeout_seconds,
            retries=self._retries,
        )

    async def _weather(self, point: Coordinate) -> WeatherReport | None:
        return await attempt_or_none(
            lambda: self._weather_provider.current_weather(point),
            timeout_seconds=self._call_timeout_seconds,
            retries=self._retries,
            label="weather",
        )

    async def _record_history(self, user_id: str, source: str, destination: str) -> None:
        try:
            await self._history_repository.record(user_id, source, destination)
        except (ProviderError, ValueError) as exc:
            logger.warning("history_record_failed", extra={"user_id": user_id, "reason": str(exc)})
