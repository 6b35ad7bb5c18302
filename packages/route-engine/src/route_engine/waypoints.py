from __future__ import annotations

from route_engine.models import Coordinate

MIDPOINT_RATIO = 0.5
PERPENDICULAR_RATIO = 0.1


def offset_waypoints(source: Coordinate, destination: Coordinate) -> tuple[Coordinate, Coordinate]:
    """Midpoint of source->destination pushed sideways in both directions.

    The two points steer a routing engine onto different roads. Nothing
    guarantees the resulting routes actually differ.
    """
    lat_diff = destination.lat - source.lat
    lng_diff = destination.lng - source.lng
    mid_lat = source.lat + MIDPOINT_RATIO * lat_diff
    mid_lng = source.lng + MIDPOINT_RATIO * lng_diff

    first = _bounded(
        mid_lat + PERPENDICULAR_RATIO * lng_diff,
        mid_lng - PERPENDICULAR_RATIO * lat_diff,
    )
    second = _bounded(
        mid_lat - PERPENDICULAR_RATIO * lng_diff,
        mid_lng + PERPENDICULAR_RATIO * lat_diff,
    )
    return first, second


def _bounded(lat: float, lng: float) -> Coordinate:
    lat = max(-90.0, min(90.0, lat))
    if lng < -180.0 or lng > 180.0:
        lng = ((lng + 180.0) % 360.0) - 180.0
    return Coordinate(lat=lat, lng=lng)
