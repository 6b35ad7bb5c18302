from __future__ import annotations

from route_engine.exceptions import AddressNotFoundError, ProviderError
from route_engine.models import Coordinate, GeocodedPlace

from navigator_api.clients.base import JsonProviderClient


class NominatimGeocoder(JsonProviderClient):
    provider_name = "nominatim"

    async def geocode(self, address: str) -> GeocodedPlace:
        rows = await self._request_json(
            "GET",
            "/search",
            params={"format": "json", "q": address, "limit": 1},
        )
        if not isinstance(rows, list):
            raise ProviderError("nominatim returned an unexpected payload")
        if not rows:
            raise AddressNotFoundError(address)
        first = rows[0]
        try:
            coordinate = Coordinate(lat=float(first["lat"]), lng=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError("nominatim returned an invalid position") from exc
        return GeocodedPlace(coordinate=coordinate, display_name=str(first.get("display_name") or address))
