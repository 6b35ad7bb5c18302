from __future__ import annotations

from devkit.config import load_settings
from route_engine.nearby import NearbySafetySummary
from route_engine.route_set import RouteSetBuilder
from route_engine.scoring import RouteSafetyScorer

from navigator_api.clients.nominatim_client import NominatimGeocoder
from navigator_api.clients.open_meteo_client import OpenMeteoWeatherClient
from navigator_api.clients.osrm_client import OsrmRouteClient
from navigator_api.clients.overpass_client import OverpassPoiClient
from navigator_api.observability import RecoveredFailureMetrics
from navigator_api.repositories.history_repository import InMemoryHistoryRepository
from navigator_api.services.navigation_service import NavigationService

settings = load_settings("safe-journey-navigator")
_timeout = settings.PROVIDER_TIMEOUT_SECONDS
_retries = settings.PROVIDER_RETRIES

_poi_client = OverpassPoiClient(base_url=settings.OVERPASS_URL, timeout_seconds=_timeout)
_route_client = OsrmRouteClient(base_url=settings.OSRM_BASE_URL, timeout_seconds=_timeout)
_geocoder = NominatimGeocoder(
    base_url=settings.NOMINATIM_BASE_URL,
    timeout_seconds=_timeout,
    headers={"User-Agent": settings.NOMINATIM_USER_AGENT},
)
_weather_client = OpenMeteoWeatherClient(base_url=settings.OPEN_METEO_BASE_URL, timeout_seconds=_timeout)
_history_repository = InMemoryHistoryRepository()
recovered_failures = RecoveredFailureMetrics()

_scorer = RouteSafetyScorer(
    _poi_client,
    call_timeout_seconds=_timeout,
    retries=_retries,
    on_failure=recovered_failures.record,
)
_route_set_builder = RouteSetBuilder(
    _route_client,
    _scorer,
    call_timeout_seconds=_timeout,
    retries=_retries,
    on_failure=recovered_failures.record,
)
_nearby_summary = NearbySafetySummary(
    _poi_client,
    call_timeout_seconds=_timeout,
    retries=_retries,
    on_failure=recovered_failures.record,
)
_navigation_service = NavigationService(
    geocoder=_geocoder,
    route_set_builder=_route_set_builder,
    nearby_summary=_nearby_summary,
    weather_provider=_weather_client,
    history_repository=_history_repository,
    call_timeout_seconds=_timeout,
    retries=_retries,
)


def get_navigation_service() -> NavigationService:
    return _navigation_service
