from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

UNKNOWN_LOCATION = "Unknown Location"


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"lat must be between -90 and 90, got {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"lng must be between -180 and 180, got {self.lng}")


@dataclass(frozen=True)
class GeocodedPlace:
    coordinate: Coordinate
    display_name: str


@dataclass(frozen=True)
class RouteGeometry:
    """Ordered polyline returned by a routing engine."""

    points: tuple[Coordinate, ...]
    distance_meters: float
    duration_seconds: float

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError("route geometry needs at least 2 points")
        if self.distance_meters < 0:
            raise ValueError("distance_meters must be >= 0")
        if self.duration_seconds < 0:
            raise ValueError("duration_seconds must be >= 0")


class SafetyCategory(str, Enum):
    POLICE = "police"
    HOSPITAL = "hospital"
    FIRE_STATION = "fire_station"
    BUS_STATION = "bus_station"
    SCHOOL = "school"
    STREET_LAMP = "street_lamp"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class PoiElement:
    category: SafetyCategory
    coordinate: Coordinate
    name: str | None = None


@dataclass(frozen=True)
class SafetyPoint:
    category: SafetyCategory
    distance_meters: float
    coordinate: Coordinate
    name: str = UNKNOWN_LOCATION

    def __post_init__(self) -> None:
        if self.distance_meters < 0:
            raise ValueError("distance_meters must be >= 0")


@dataclass(frozen=True)
class ScoredRoute:
    geometry: RouteGeometry
    safety_score: int
    distance_km: float
    duration_min: int
    rank: int = 1

    def __post_init__(self) -> None:
        if self.safety_score < 0:
            raise ValueError("safety_score must be >= 0")

    @property
    def formatted_distance_km(self) -> str:
        return f"{self.distance_km:.2f}"


@dataclass(frozen=True)
class RouteSelection:
    routes: tuple[ScoredRoute, ...]
    selected_index: int

    def __post_init__(self) -> None:
        if not 0 <= self.selected_index < len(self.routes):
            raise ValueError("selected_index must point at one of the routes")

    @property
    def selected(self) -> ScoredRoute:
        return self.routes[self.selected_index]


@dataclass(frozen=True)
class WeatherReport:
    temperature_c: int
    condition: str


@dataclass(frozen=True)
class HistoryEntry:
    user_id: str
    source: str
    destination: str
    created_at: datetime
