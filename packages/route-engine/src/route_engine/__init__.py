"""Safety-aware route generation and selection."""

from route_engine.distance import haversine_distance_meters
from route_engine.exceptions import (
    AddressNotFoundError,
    NavigationError,
    NavigationSupersededError,
    NoRouteFoundError,
    ProviderError,
)
from route_engine.models import (
    Coordinate,
    GeocodedPlace,
    HistoryEntry,
    PoiElement,
    RouteGeometry,
    RouteSelection,
    SafetyCategory,
    SafetyPoint,
    ScoredRoute,
    WeatherReport,
)
from route_engine.nearby import NearbySafetySummary
from route_engine.route_set import RouteSetBuilder, RouteSetStage, rank_scores, select_safest_index
from route_engine.scoring import RouteSafetyScorer
from route_engine.waypoints import offset_waypoints

__all__ = [
    "AddressNotFoundError",
    "Coordinate",
    "GeocodedPlace",
    "HistoryEntry",
    "NavigationError",
    "NavigationSupersededError",
    "NearbySafetySummary",
    "NoRouteFoundError",
    "PoiElement",
    "ProviderError",
    "RouteGeometry",
    "RouteSafetyScorer",
    "RouteSelection",
    "RouteSetBuilder",
    "RouteSetStage",
    "SafetyCategory",
    "SafetyPoint",
    "ScoredRoute",
    "WeatherReport",
    "haversine_distance_meters",
    "offset_waypoints",
    "rank_scores",
    "select_safest_index",
]
