from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from route_engine.models import (
    Coordinate,
    GeocodedPlace,
    HistoryEntry,
    PoiElement,
    RouteGeometry,
    SafetyCategory,
    WeatherReport,
)


class RouteProvider(Protocol):
    async def route(self, waypoints: Sequence[Coordinate]) -> RouteGeometry | None: ...


class PoiProvider(Protocol):
    async def search(
        self,
        center: Coordinate,
        radii: Mapping[SafetyCategory, float],
    ) -> list[PoiElement]: ...


class Geocoder(Protocol):
    async def geocode(self, address: str) -> GeocodedPlace: ...


class WeatherProvider(Protocol):
    async def current_weather(self, coordinate: Coordinate) -> WeatherReport: ...


class HistoryRepository(Protocol):
    async def record(self, user_id: str, source: str, destination: str) -> HistoryEntry: ...

    async def list_for_user(self, user_id: str) -> list[HistoryEntry]: ...
