from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from route_engine.exceptions import ProviderError
from route_engine.models import Coordinate, RouteGeometry

from navigator_api.clients.base import JsonProviderClient


class OsrmRouteClient(JsonProviderClient):
    """Driving routes from an OSRM server, geometry as GeoJSON."""

    provider_name = "osrm"

    def __init__(self, *args: Any, profile: str = "driving", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._profile = profile

    async def route(self, waypoints: Sequence[Coordinate]) -> RouteGeometry | None:
        if len(waypoints) < 2:
            raise ValueError("at least two waypoints are required")
        # OSRM expects lng,lat pairs separated by ';'
        path = ";".join(f"{point.lng},{point.lat}" for point in waypoints)
        payload = await self._request_json(
            "GET",
            f"/route/v1/{self._profile}/{path}",
            params={"overview": "full", "geometries": "geojson"},
        )
        return self._to_geometry(payload)

    def _to_geometry(self, payload: Any) -> RouteGeometry | None:
        if not isinstance(payload, dict):
            raise ProviderError("osrm returned an unexpected payload")
        if payload.get("code") != "Ok" or not payload.get("routes"):
            return None
        first_route = payload["routes"][0]
        try:
            points = tuple(
                Coordinate(lat=float(lat), lng=float(lng))
                for lng, lat in first_route["geometry"]["coordinates"]
            )
            distance_meters = float(first_route["distance"])
            duration_seconds = float(first_route["duration"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError("osrm returned an unexpected route shape") from exc
        if len(points) < 2:
            return None
        return RouteGeometry(
            points=points,
            distance_meters=distance_meters,
            duration_seconds=duration_seconds,
        )
