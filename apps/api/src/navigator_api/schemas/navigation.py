from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from route_engine.models import (
    GeocodedPlace,
    HistoryEntry,
    RouteSelection,
    SafetyPoint,
    WeatherReport,
)


class NavigationRequest(BaseModel):
    source: str = Field(min_length=1, max_length=300)
    destination: str = Field(min_length=1, max_length=300)


class PlaceItem(BaseModel):
    display_name: str
    lat: float
    lng: float

    @classmethod
    def from_place(cls, place: GeocodedPlace) -> PlaceItem:
        return cls(display_name=place.display_name, lat=place.coordinate.lat, lng=place.coordinate.lng)


class RouteItem(BaseModel):
    label: str
    is_safest: bool
    rank: int
    distance_km: str
    duration_min: int
    safety_score: int
    coordinates: list[tuple[float, float]]


class SafetyPointItem(BaseModel):
    category: str
    label: str
    name: str
    distance_meters: float
    distance_km: str
    lat: float
    lng: float

    @classmethod
    def from_point(cls, point: SafetyPoint) -> SafetyPointItem:
        return cls(
            category=point.category.value,
            label=point.category.label,
            name=point.name,
            distance_meters=round(point.distance_meters, 2),
            distance_km=f"{point.distance_meters / 1000:.2f}",
            lat=point.coordinate.lat,
            lng=point.coordinate.lng,
        )


class WeatherResult(BaseModel):
    temperature_c: int
    condition: str

    @classmethod
    def from_report(cls, report: WeatherReport) -> WeatherResult:
        return cls(temperature_c=report.temperature_c, condition=report.condition)


class NavigationResult(BaseModel):
    source: PlaceItem
    destination: PlaceItem
    routes: list[RouteItem]
    selected_index: int
    weather: WeatherResult | None
    nearby_safety: list[SafetyPointItem]
    street_light_count: int


class NearbySafetyResult(BaseModel):
    items: list[SafetyPointItem]


class HistoryItem(BaseModel):
    source: str
    destination: str
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> HistoryItem:
        return cls(source=entry.source, destination=entry.destination, created_at=entry.created_at)


class HistoryResult(BaseModel):
    items: list[HistoryItem]


def route_items(selection: RouteSelection) -> list[RouteItem]:
    return [
        RouteItem(
            label=f"Route {index + 1}",
            is_safest=index == selection.selected_index,
            rank=route.rank,
            distance_km=route.formatted_distance_km,
            duration_min=route.duration_min,
            safety_score=route.safety_score,
            coordinates=[(point.lat, point.lng) for point in route.geometry.points],
        )
        for index, route in enumerate(selection.routes)
    ]
